"""Runtime settings for the static asset server, read from the environment."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8082
DEFAULT_DOCUMENT = "fireworks.html"
DEFAULT_ROOT_DIR = "public"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class StaticServerSettings:
    """Static server settings from `STATIC_SERVER_*` environment variables."""
    root: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    default_document: str = DEFAULT_DOCUMENT


def default_root() -> Path:
    """Return the bundled asset directory shipped next to the sources."""
    base_dir = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parents[1]))
    return base_dir / DEFAULT_ROOT_DIR


def load_app_config(
    *,
    environ: Mapping[str, str] | None = None,
) -> StaticServerSettings:
    env = environ if environ is not None else os.environ

    root = _as_str(env.get("STATIC_SERVER_ROOT"), "STATIC_SERVER_ROOT")
    host = _as_str(env.get("STATIC_SERVER_HOST"), "STATIC_SERVER_HOST")
    port = _as_str(env.get("STATIC_SERVER_PORT"), "STATIC_SERVER_PORT")
    document = _as_str(
        env.get("STATIC_SERVER_DEFAULT_DOCUMENT"),
        "STATIC_SERVER_DEFAULT_DOCUMENT",
    )

    return StaticServerSettings(
        root=_resolve_path(Path.cwd(), root) if root else str(default_root()),
        host=host or DEFAULT_HOST,
        port=_as_int(port, "STATIC_SERVER_PORT") if port else DEFAULT_PORT,
        default_document=document or DEFAULT_DOCUMENT,
    )


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _resolve_path(base_dir: Path, raw: str) -> str:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return os.path.abspath(path)
