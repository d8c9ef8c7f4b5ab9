"""Standalone launcher for the static asset server."""

import logging
import signal
import sys
import time
from pathlib import Path

if __package__ is None or __package__ == "":
    sys.path.insert(0, str(Path(__file__).resolve().parent))

from app_config import AppConfigurationError, load_app_config
from server import ServerConfigurationError, StaticServer, StaticServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # The transport reports every non-upgrade response as a rejected handshake.
    logging.getLogger("static_server.transport").setLevel(logging.WARNING)
    return logging.getLogger("static_server")


def main() -> int:
    """Run the static server process until interrupted."""
    logger = setup_logging(level=logging.INFO)

    try:
        settings = load_app_config()
        config = StaticServerConfig.from_settings(settings)
    except (AppConfigurationError, ServerConfigurationError) as error:
        logger.error("Static server configuration error: %s", error)
        return 1

    server = StaticServer(config=config, logger=logger)

    try:
        server.start()
    except RuntimeError as error:
        logger.error("%s", error)
        return 1

    shutdown = False

    def handle_signal(signum, frame) -> None:
        del frame
        nonlocal shutdown
        logger.info("Signal %s received, stopping.", signal.Signals(signum).name)
        shutdown = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        while not shutdown:
            time.sleep(0.2)
    except KeyboardInterrupt:
        logger.info("Stopping by user request.")
    finally:
        server.stop()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
