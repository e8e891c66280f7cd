"""Profile-based configuration loader for the guestbook backend."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_DATABASE_URL = "sqlite+pysqlite:///guestbook.db"
DEFAULT_STORE_BACKEND = "sql"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DEFAULT_PROFILE_DICT: dict[str, Any] = {
    "environment": DEFAULT_ENVIRONMENT,
    "database": {"url": DEFAULT_DATABASE_URL},
    "store": {"backend": DEFAULT_STORE_BACKEND, "fallback_to_memory": False},
    "logging": {"level": DEFAULT_LOG_LEVEL, "format": DEFAULT_LOG_FORMAT},
}
CONFIG_PROFILE_ENV = "GUESTBOOK_CONFIG_PROFILE"
CONFIG_DIR_ENV = "GUESTBOOK_CONFIG_DIR"
DEFAULT_PROFILE = "dev"
DEFAULT_CONFIG_ROOT = Path(__file__).resolve().parents[3] / "config" / "profiles"
CONFIG_EXTENSIONS = (".yaml", ".yml")


@dataclass
class StoreConfig:
    backend: str = DEFAULT_STORE_BACKEND
    fallback_to_memory: bool = False


@dataclass
class LoggingConfig:
    level: str = DEFAULT_LOG_LEVEL
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class Settings:
    environment: str = DEFAULT_ENVIRONMENT
    database_url: str = DEFAULT_DATABASE_URL
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    raw: dict[str, Any] = field(default_factory=dict)


def load_settings(
    profile: str | None = None, config_dir: str | Path | None = None
) -> Settings:
    """Load settings from the requested profile or fall back to defaults."""

    profile_name = profile or os.getenv(CONFIG_PROFILE_ENV, DEFAULT_PROFILE)
    config_root = Path(
        config_dir or os.getenv(CONFIG_DIR_ENV, DEFAULT_CONFIG_ROOT)
    ).expanduser()
    config_data = _load_profile_dict(profile_name, config_root)
    if not config_data:
        config_data = copy.deepcopy(DEFAULT_PROFILE_DICT)

    database_cfg = config_data.get("database") or {}
    database_url = os.getenv(
        "DATABASE_URL", database_cfg.get("url", DEFAULT_DATABASE_URL)
    )

    return Settings(
        environment=str(config_data.get("environment", DEFAULT_ENVIRONMENT)),
        database_url=str(database_url),
        store=_build_store_config(config_data.get("store")),
        logging=_build_logging_config(config_data.get("logging")),
        raw=config_data,
    )


def _load_profile_dict(profile_name: str, config_root: Path) -> dict[str, Any]:
    """Load the YAML profile if available, otherwise return an empty dict."""

    if not config_root.exists():
        return {}

    for extension in CONFIG_EXTENSIONS:
        candidate = config_root / f"{profile_name}{extension}"
        if not candidate.exists():
            continue
        try:
            with candidate.open("r", encoding="utf-8") as handle:
                loaded = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise RuntimeError(
                f"Failed to parse config profile {candidate}: {exc}"
            ) from exc
        if not isinstance(loaded, dict):
            raise RuntimeError(
                f"Config profile {candidate} must be a mapping at the root"
            )
        return loaded

    return {}


def _build_store_config(store_cfg: dict[str, Any] | None) -> StoreConfig:
    store_cfg = store_cfg or {}
    return StoreConfig(
        backend=str(store_cfg.get("backend", DEFAULT_STORE_BACKEND)).lower(),
        fallback_to_memory=bool(store_cfg.get("fallback_to_memory", False)),
    )


def _build_logging_config(logging_cfg: dict[str, Any] | None) -> LoggingConfig:
    logging_cfg = logging_cfg or {}
    return LoggingConfig(
        level=str(logging_cfg.get("level", DEFAULT_LOG_LEVEL)).upper(),
        format=str(logging_cfg.get("format", DEFAULT_LOG_FORMAT)),
    )
