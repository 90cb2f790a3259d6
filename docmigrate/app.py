"""Migration bootstrap for docmigrate.

Wires components in dependency order:
config → logging → client → ledger (upgrade, configuration, index) → engine.

The caller supplies the parsed changesets and, optionally, an already
authenticated client.  A client created here is closed when the run ends.
Logging is configured only when the configuration is loaded here; a host
that passes its own config keeps its own structlog setup.
"""

from __future__ import annotations

from collections.abc import Iterable

from pymongo import MongoClient

from docmigrate.config import load_config
from docmigrate.engine.runner import MigrationEngine, RunSummary, ScriptRunner
from docmigrate.engine.script import run_script
from docmigrate.ledger.store import ExecutionLedger
from docmigrate.models.changeset import ChangeSet
from docmigrate.models.config import DocMigrateConfig
from docmigrate.observability.logging import bind_run_context, get_logger, setup_logging


def run_migrations(
    changesets: Iterable[ChangeSet],
    *,
    config: DocMigrateConfig | None = None,
    client: MongoClient | None = None,
    script_runner: ScriptRunner = run_script,
) -> RunSummary:
    """Apply *changesets* to the configured database and return the run summary."""
    if config is None:
        config = load_config()
        setup_logging(config.log.level, json_output=config.log.format == "json")

    log = get_logger("app")

    owns_client = client is None
    if client is None:
        client = MongoClient(config.mongo.uri)

    try:
        with bind_run_context(config.mongo.database, config.ledger.collection):
            ledger = ExecutionLedger(
                client[config.mongo.database],
                config.ledger.collection,
                unique_index=config.ledger.unique_index,
            )
            ledger.configure()
            engine = MigrationEngine(ledger, contexts=config.contexts, script_runner=script_runner)
            log.info("migration_run_starting", contexts=sorted(config.contexts))
            return engine.process(changesets)
    finally:
        if owns_client:
            client.close()
