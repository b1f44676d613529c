"""Environment-driven settings for the task board service."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional


class ConfigError(RuntimeError):
    """Raised when a required setting is missing or invalid."""


def _parse_bool(value: Optional[str]) -> bool:
    return str(value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str
    database_ssl: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000


def load_cors_origins(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Parse the comma-separated ``CORS_ORIGINS`` list; any origin by default."""
    env = os.environ if environ is None else environ
    origins = [
        origin.strip()
        for origin in env.get("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]
    return origins or ["*"]


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from environment variables.

    ``DATABASE_URL`` is required. ``PGSSL=true`` turns on encrypted transport
    to the store without certificate verification, which is only meant for
    development databases.
    """
    env = os.environ if environ is None else environ

    database_url = env.get("DATABASE_URL", "").strip()
    if not database_url:
        raise ConfigError("DATABASE_URL is not set")

    port_raw = env.get("PORT", "3000")
    try:
        port = int(port_raw)
    except ValueError as exc:
        raise ConfigError(f"PORT must be an integer, got {port_raw!r}") from exc

    return Settings(
        database_url=database_url,
        database_ssl=_parse_bool(env.get("PGSSL")),
        cors_origins=load_cors_origins(env),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        host=env.get("HOST", "0.0.0.0"),
        port=port,
    )
