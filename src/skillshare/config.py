"""Server settings."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Settings for one server. Frozen; derive variants with ``dataclasses.replace``.

    ::

        config = AppConfig(port=3000, static_dir=None)
    """

    host: str = "127.0.0.1"
    port: int = 8000

    # directory tried when no route matches; None turns static files off
    static_dir: str | Path | None = "public"

    # ceiling on the honoured ``Prefer: wait=N``; None honours N as sent
    max_wait: int | None = None

    log_level: str = "info"
