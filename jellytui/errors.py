# jellytui/errors.py


class JellyTUIError(Exception):
    """Base class for every error the shell reports to the user."""


# --- catalog client ---
class CatalogError(JellyTUIError):
    pass

class NetworkError(CatalogError):
    """The request never got a response (connection, dns, bad url)."""

class ServerError(CatalogError):
    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"api request failed with status: {status_code} {reason}".rstrip())

class DecodeError(CatalogError):
    """The response body is not the item list we asked for."""


# --- local side effects ---
class ConfigError(JellyTUIError):
    pass

class ExecError(JellyTUIError):
    pass
