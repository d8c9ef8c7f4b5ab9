"""Static asset server: path resolution, request handling and HTTP listener."""

from .config import ServerConfigurationError, StaticServerConfig
from .handler import StaticRequestHandler
from .service import StaticServer
from .static_files import (
    ForbiddenPathError,
    StaticContent,
    StaticFileError,
    StaticFileNotFoundError,
    StaticFileReadError,
    guess_content_type,
    load_static_file,
    resolve_static_file,
)

__all__ = [
    "ForbiddenPathError",
    "ServerConfigurationError",
    "StaticContent",
    "StaticFileError",
    "StaticFileNotFoundError",
    "StaticFileReadError",
    "StaticRequestHandler",
    "StaticServer",
    "StaticServerConfig",
    "guess_content_type",
    "load_static_file",
    "resolve_static_file",
]
