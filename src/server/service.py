from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from typing import Optional

from websockets.asyncio.server import Server, ServerConnection, serve
from websockets.http11 import Request, Response

from .config import StaticServerConfig
from .handler import StaticRequestHandler


class StaticServer:
    """HTTP listener answering every request from a static root.

    The asyncio loop runs in a daemon thread so callers can block on their
    own shutdown signal. Each connection is closed after one response.
    """

    def __init__(
        self,
        config: StaticServerConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("static_server")
        self._handler = StaticRequestHandler(
            config.root,
            config.default_document,
            logger=self._logger,
        )
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._shutdown: Optional[asyncio.Event] = None
        self._ready = threading.Event()
        self._error: Optional[Exception] = None
        self._bound_port: Optional[int] = None

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        if self._bound_port is not None:
            return self._bound_port
        return self._config.port

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/{self._config.default_document}"

    @property
    def is_running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and self._error is None
        )

    def start(self, timeout_seconds: float = 5.0) -> None:
        """Bind the listener and return once it accepts connections."""
        if self.is_running:
            self._logger.warning("Static server is already running")
            return

        self._error = None
        self._ready.clear()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="static-server",
        )
        self._thread.start()

        if not self._ready.wait(timeout_seconds):
            raise RuntimeError(
                f"Static server did not start within {timeout_seconds:.1f}s"
            )
        if self._error is not None:
            raise RuntimeError(
                f"Static server startup failed: {self._error}"
            ) from self._error

    def stop(self, timeout_seconds: float = 5.0) -> None:
        thread, self._thread = self._thread, None
        if thread is None:
            return

        if self._loop is not None and self._shutdown is not None:
            # The loop is already closed when startup failed.
            with contextlib.suppress(RuntimeError):
                self._loop.call_soon_threadsafe(self._shutdown.set)

        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.error(
                "Static server thread did not stop within %.1fs",
                timeout_seconds,
            )
        self._loop = None
        self._shutdown = None
        self._bound_port = None

    def _run(self) -> None:
        try:
            asyncio.run(self._serve())
        except Exception as error:
            self._error = error
            self._logger.error("Static server failed: %s", error, exc_info=True)
        finally:
            self._ready.set()

    async def _serve(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._shutdown = asyncio.Event()
        async with serve(
            self._reject_websocket,
            host=self._config.host,
            port=self._config.port,
            process_request=self._process_request,
            logger=self._logger.getChild("transport"),
        ) as server:
            self._bound_port = _bound_port(server)
            self._logger.info("Static server running at %s", self.url)
            self._ready.set()
            await self._shutdown.wait()

    async def _process_request(
        self,
        connection: ServerConnection,
        request: Request,
    ) -> Response:
        del connection  # Unused in static routing.
        return await self._handler.handle(request.path, request.method)

    @staticmethod
    async def _reject_websocket(websocket: ServerConnection) -> None:
        # Every request is answered in _process_request, so no upgrade completes.
        await websocket.close(code=1008, reason="Websocket connections are not served")


def _bound_port(server: Server) -> Optional[int]:
    for sock in server.sockets:
        return sock.getsockname()[1]
    return None
