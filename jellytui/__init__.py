"""A terminal browser for a Jellyfin media server."""

__version__ = "0.1.0"
