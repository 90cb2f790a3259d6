"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

from docmigrate.models.records import DEFAULT_COLLECTION


@dataclass
class MongoConfig:
    """Target database connection settings."""

    uri: str = "mongodb://localhost:27017"
    database: str = ""


@dataclass
class LedgerConfig:
    """Execution ledger settings."""

    collection: str = DEFAULT_COLLECTION
    unique_index: bool = False


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class DocMigrateConfig:
    """Top-level docmigrate configuration."""

    mongo: MongoConfig = field(default_factory=MongoConfig)
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    log: LogConfig = field(default_factory=LogConfig)
    contexts: frozenset[str] = frozenset()
