"""Configuration model for the static asset server runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .static_files import DEFAULT_DOCUMENT


class ServerConfigurationError(Exception):
    """Raised when static server configuration is invalid."""


@dataclass(frozen=True)
class StaticServerConfig:
    """Validated static server configuration derived from app settings."""
    root: str
    host: str = "127.0.0.1"
    port: int = 8082
    default_document: str = DEFAULT_DOCUMENT

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ServerConfigurationError("STATIC_SERVER_HOST cannot be empty")

        # Port 0 asks the OS for an ephemeral port.
        if not 0 <= self.port <= 65535:
            raise ServerConfigurationError(
                f"STATIC_SERVER_PORT must be in [0, 65535], got: {self.port}"
            )

        if not self.root:
            raise ServerConfigurationError("STATIC_SERVER_ROOT cannot be empty")

        root_path = Path(self.root)
        if not root_path.is_absolute():
            raise ServerConfigurationError(
                f"Static root must be an absolute path: {root_path}"
            )
        if not root_path.exists():
            raise ServerConfigurationError(f"Static root not found: {root_path}")
        if not root_path.is_dir():
            raise ServerConfigurationError(
                f"Static root is not a directory: {root_path}"
            )

        document = self.default_document
        if (
            not document
            or document in (".", "..")
            or "/" in document
            or os.sep in document
        ):
            raise ServerConfigurationError(
                "STATIC_SERVER_DEFAULT_DOCUMENT must be a plain file name, "
                f"got: {document!r}"
            )

    @classmethod
    def from_settings(cls, settings) -> "StaticServerConfig":
        root = settings.root.strip() if settings.root else ""
        return cls(
            root=os.path.abspath(root) if root else "",
            host=settings.host,
            port=settings.port,
            default_document=settings.default_document,
        )
