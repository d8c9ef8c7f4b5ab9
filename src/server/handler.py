"""HTTP request handling for static assets served under a fixed root."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional
from urllib.parse import unquote, urlsplit

from websockets.datastructures import Headers
from websockets.http11 import Response

from .static_files import (
    DEFAULT_DOCUMENT,
    StaticFileError,
    StrPath,
    is_default_request,
    load_static_file,
    resolve_static_file,
)

PLAIN_TEXT = "text/plain"
DEFAULT_DOCUMENT_TYPE = "text/html; charset=UTF-8"


class StaticRequestHandler:
    """Turns a request method and target into a complete HTTP response.

    The handler keeps no per-request state; ``root`` and
    ``default_document`` are fixed at construction and shared by every
    concurrent call. Lookup ignores the method. ``HEAD`` gets the headers
    a ``GET`` would get, with an empty body.
    """

    def __init__(
        self,
        root: StrPath,
        default_document: str = DEFAULT_DOCUMENT,
        logger: Optional[logging.Logger] = None,
    ):
        self._root = root
        self._default_document = default_document
        self._logger = logger or logging.getLogger("static_server")

    async def handle(self, target: str, method: str = "GET") -> Response:
        path = request_path_from_target(target)
        head_only = method.upper() == "HEAD"
        try:
            resolved = resolve_static_file(self._root, path, self._default_document)
            content = await asyncio.to_thread(load_static_file, resolved)
        except StaticFileError as error:
            self._logger.debug(
                "Rejected %s %r with %d %s",
                method,
                path,
                error.status_code,
                error.reason_phrase,
            )
            return make_response(
                error.status_code,
                error.reason_phrase,
                error.body,
                PLAIN_TEXT,
                head_only=head_only,
            )

        content_type = content.content_type
        if is_default_request(path):
            content_type = DEFAULT_DOCUMENT_TYPE
        return make_response(200, "OK", content.body, content_type, head_only=head_only)


def request_path_from_target(target: str) -> str:
    """Return the percent-decoded path component of a request target."""
    return unquote(urlsplit(target).path)


def make_response(
    status_code: int,
    reason_phrase: str,
    body: bytes,
    content_type: str,
    *,
    head_only: bool = False,
) -> Response:
    headers = Headers()
    headers["Content-Type"] = content_type
    headers["Content-Length"] = str(len(body))
    headers["Cache-Control"] = "no-store"
    # The transport closes the connection after one response.
    headers["Connection"] = "close"
    return Response(status_code, reason_phrase, headers, b"" if head_only else body)
