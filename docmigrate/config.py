"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from docmigrate.models.config import DocMigrateConfig, LedgerConfig, LogConfig, MongoConfig
from docmigrate.models.records import DEFAULT_COLLECTION


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"DOCMIGRATE_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_list(key: str) -> frozenset[str]:
    return frozenset(item.strip() for item in _env(key).split(",") if item.strip())


def _validate_database(value: str) -> str:
    if not value:
        raise ValueError("DOCMIGRATE_DATABASE must be set")
    if any(ch in value for ch in '/\\. "$'):
        raise ValueError(f"Invalid database name: {value}")
    return value


def _validate_collection(value: str) -> str:
    if not value or "$" in value or "\x00" in value or value.startswith("system."):
        raise ValueError(f"Invalid ledger collection name: {value!r}")
    return value


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    if value.lower() not in ("json", "console"):
        raise ValueError(f"Invalid log format: {value}. Must be json or console")
    return value.lower()


def load_config() -> DocMigrateConfig:
    """Load configuration from DOCMIGRATE_* environment variables."""
    return DocMigrateConfig(
        mongo=MongoConfig(
            uri=_env("MONGO_URI", "mongodb://localhost:27017"),
            database=_validate_database(_env("DATABASE", "")),
        ),
        ledger=LedgerConfig(
            collection=_validate_collection(_env("LEDGER_COLLECTION", DEFAULT_COLLECTION)),
            unique_index=_env_bool("LEDGER_UNIQUE_INDEX", False),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
        contexts=_env_list("CONTEXTS"),
    )
