from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(s.strip() for s in raw.split(",") if s.strip())


# Log level names accepted by the original server's --loglevel option.
LOG_LEVELS = {
    "silent": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "verbose": logging.DEBUG,
    "debug": logging.DEBUG,
    "silly": logging.DEBUG,
}


@dataclass(frozen=True)
class Settings:
    # App
    name: str

    # Paths
    public_dir: Path
    data_dir: Path

    # Persistence (in-memory store when true)
    in_memory: bool

    # Logging
    loglevel: str

    # CORS
    cors_allow_origins: tuple[str, ...]


def get_settings() -> Settings:
    name = os.getenv("APP_NAME", "my-hoodie-app").strip() or "my-hoodie-app"

    public_dir = Path(os.getenv("PUBLIC_DIR", "public")).expanduser()
    data_dir = Path(os.getenv("DATA_DIR", ".hoodie")).expanduser()

    in_memory = _env_bool("IN_MEMORY", False)

    loglevel = os.getenv("LOGLEVEL", "warn").strip().lower()
    if loglevel not in LOG_LEVELS:
        loglevel = "warn"

    cors_allow_origins = _env_list("CORS_ALLOW_ORIGINS", "*")

    return Settings(
        name=name,
        public_dir=public_dir,
        data_dir=data_dir,
        in_memory=in_memory,
        loglevel=loglevel,
        cors_allow_origins=cors_allow_origins,
    )


def configure_logging(loglevel: str) -> None:
    level = LOG_LEVELS.get(loglevel.strip().lower(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)
