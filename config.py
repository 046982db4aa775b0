"""Configuration constants for the static asset server."""

HOST: str = "127.0.0.1"
PORT: int = 8080
SERVER_NAME: str = "static-resolver/1.0"
STATIC_DIR: str = "static"
STATIC_ALIAS: str | None = None
MOUNT_PATH: str = "/"
INDEX_FILE_NAME: str = "index.html"
FAVICON_PATH: str = "static/favicon.ico"
FAVICON_MAX_AGE_SECS: int = 255
FAVICON_MAX_AGE_LIMIT: int = 255
LOG_FORMAT: str = "plain"


class StaticConfigError(ValueError):
    """Raised when a resolver is configured with an unusable value."""
