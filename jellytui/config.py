# jellytui/config.py

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .errors import ConfigError
from .models import SessionProfile

logger = logging.getLogger(__name__)

# define paths for configuration file
config_dir = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / "jellyfin-tui"
config_file = config_dir / "config"

def default_profile() -> SessionProfile:
    return SessionProfile()

def read_profile(path: Optional[Path] = None) -> SessionProfile:
    """reads the profile from disk, raising ConfigError if it is missing or unparsable."""
    path = path or config_file
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"could not read {path}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"could not parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} does not hold a json object")
    try:
        return SessionProfile.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid profile in {path}: {e}") from e

def save_profile(profile: SessionProfile, path: Optional[Path] = None):
    """writes the profile atomically: a temp file in the same directory replaces the old one."""
    path = path or config_file
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(profile.model_dump(), f, indent=2)
                f.write("\n")
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
    except OSError as e:
        raise ConfigError(f"could not write {path}: {e}") from e
    logger.info("saved profile for %s to %s", profile.server_url, path)

def load_profile(path: Optional[Path] = None) -> SessionProfile:
    """loads the profile, falling back to the placeholder profile and persisting it.

    the fallback never surfaces as an error: if even the placeholder cannot be
    written the in-memory profile is still returned.
    """
    path = path or config_file
    try:
        return read_profile(path)
    except ConfigError as e:
        logger.warning("%s; using the default profile", e)

    profile = default_profile()
    try:
        save_profile(profile, path)
    except ConfigError as e:
        logger.warning("%s", e)
    return profile
