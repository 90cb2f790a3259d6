"""Tests for DOCMIGRATE_* environment configuration loading."""

from __future__ import annotations

import inspect

import pytest

from docmigrate.config import load_config
from docmigrate.ledger.store import ExecutionLedger
from docmigrate.models.config import LedgerConfig
from docmigrate.models.records import DEFAULT_COLLECTION


@pytest.fixture
def env(monkeypatch):
    for key in (
        "MONGO_URI",
        "DATABASE",
        "LEDGER_COLLECTION",
        "LEDGER_UNIQUE_INDEX",
        "CONTEXTS",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(f"DOCMIGRATE_{key}", raising=False)
    monkeypatch.setenv("DOCMIGRATE_DATABASE", "app")
    return monkeypatch


class TestLoadConfig:
    def test_defaults(self, env) -> None:
        config = load_config()
        assert config.mongo.uri == "mongodb://localhost:27017"
        assert config.mongo.database == "app"
        assert config.ledger.collection == "mongeez"
        assert config.ledger.unique_index is False
        assert config.log.level == "info"
        assert config.log.format == "json"
        assert config.contexts == frozenset()

    def test_overrides(self, env) -> None:
        env.setenv("DOCMIGRATE_MONGO_URI", "mongodb://db.internal:27017/?replicaSet=rs0")
        env.setenv("DOCMIGRATE_LEDGER_COLLECTION", "changelog")
        env.setenv("DOCMIGRATE_LEDGER_UNIQUE_INDEX", "yes")
        env.setenv("DOCMIGRATE_CONTEXTS", "prod, eu ,")
        env.setenv("DOCMIGRATE_LOG_LEVEL", "DEBUG")
        env.setenv("DOCMIGRATE_LOG_FORMAT", "console")

        config = load_config()

        assert config.mongo.uri == "mongodb://db.internal:27017/?replicaSet=rs0"
        assert config.ledger.collection == "changelog"
        assert config.ledger.unique_index is True
        assert config.contexts == frozenset({"prod", "eu"})
        assert config.log.level == "debug"
        assert config.log.format == "console"

    def test_database_required(self, env) -> None:
        env.delenv("DOCMIGRATE_DATABASE")
        with pytest.raises(ValueError, match="DOCMIGRATE_DATABASE"):
            load_config()

    @pytest.mark.parametrize("name", ["", "system.indexes", "bad$name"])
    def test_invalid_collection(self, env, name: str) -> None:
        env.setenv("DOCMIGRATE_LEDGER_COLLECTION", name)
        with pytest.raises(ValueError):
            load_config()

    def test_invalid_log_level(self, env) -> None:
        env.setenv("DOCMIGRATE_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="Invalid log level"):
            load_config()

    def test_ledger_default_matches_store_default(self) -> None:
        assert LedgerConfig().collection == inspect.signature(ExecutionLedger).parameters["collection_name"].default == DEFAULT_COLLECTION
