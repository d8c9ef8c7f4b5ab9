"""Safe static-file resolution, loading and content-type helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

StrPath = Union[str, os.PathLike]

DEFAULT_DOCUMENT = "fireworks.html"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
_CONTENT_TYPES = {
    ".html": "text/html; charset=UTF-8",
    ".js": "application/javascript; charset=UTF-8",
    ".css": "text/css; charset=UTF-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
}
_LEADING_SEPARATORS = "/" + os.sep


class StaticFileError(Exception):
    """Terminal outcome of a static-file lookup, mapped to an HTTP status."""

    status_code = 500
    reason_phrase = "Internal Server Error"
    body = b"Server Error"


class ForbiddenPathError(StaticFileError):
    """Raised when a request path normalizes to a location outside the root."""

    status_code = 403
    reason_phrase = "Forbidden"
    body = b"Forbidden"


class StaticFileNotFoundError(StaticFileError):
    """Raised when the resolved path does not exist."""

    status_code = 404
    reason_phrase = "Not Found"
    body = b"Not Found"


class StaticFileReadError(StaticFileError):
    """Raised when the resolved path exists but cannot be read as a file."""


@dataclass(frozen=True)
class StaticContent:
    body: bytes
    content_type: str


def resolve_static_file(
    root: StrPath,
    request_path: str,
    default_document: str = DEFAULT_DOCUMENT,
) -> Path:
    """Map a decoded request path to an absolute path contained in ``root``.

    ``/`` and the empty path map to ``default_document`` directly under the
    root. Any other path is taken relative to the root and lexically
    normalized; the result must equal the root or sit below it on a
    separator boundary, otherwise ``ForbiddenPathError`` is raised.
    """
    base = os.path.abspath(os.fspath(root))
    if is_default_request(request_path):
        return Path(base, default_document)

    relative = request_path.lstrip(_LEADING_SEPARATORS)
    candidate = os.path.normpath(os.path.join(base, relative))
    if not is_contained(base, candidate):
        raise ForbiddenPathError(request_path)
    return Path(candidate)


def is_default_request(request_path: str) -> bool:
    return not request_path or request_path == "/"


def is_contained(root: str, candidate: str) -> bool:
    """Return True when ``candidate`` is ``root`` or lies beneath it."""
    if candidate == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return candidate.startswith(prefix)


def load_static_file(path: StrPath) -> StaticContent:
    """Read a resolved file fully into memory with its inferred content type."""
    try:
        body = Path(path).read_bytes()
    except FileNotFoundError as error:
        raise StaticFileNotFoundError(os.fspath(path)) from error
    except (OSError, ValueError) as error:
        # Directories, permission faults and embedded NUL bytes land here.
        raise StaticFileReadError(os.fspath(path)) from error
    return StaticContent(body=body, content_type=guess_content_type(path))


def guess_content_type(path: StrPath) -> str:
    """Map the lowercased file extension to a fixed HTTP content type."""
    _, extension = os.path.splitext(os.fspath(path))
    return _CONTENT_TYPES.get(extension.lower(), DEFAULT_CONTENT_TYPE)
