"""Execution ledger backed by a MongoDB collection."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import structlog
from pymongo import ASCENDING
from pymongo.database import Database

from docmigrate.errors import LedgerNotConfiguredError
from docmigrate.ledger.configuration import resolve_scheme
from docmigrate.ledger.indexes import LedgerIndexManager
from docmigrate.ledger.scheme import FingerprintScheme
from docmigrate.models.changeset import ChangeSet
from docmigrate.models.records import (
    DEFAULT_COLLECTION,
    ChangeSetExecution,
    LedgerRecord,
    RecordType,
    parse_record,
)

_log = structlog.get_logger(component="ledger.store")


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class ExecutionLedger:
    """Durable record of ledger configuration and applied changesets.

    ``configure()`` must run once before any query: it upgrades legacy
    records, resolves the fingerprint scheme and reconciles the index.
    The check in ``was_executed`` and the insert in ``log_changeset`` are
    separate round trips, so two concurrent runners can both apply and
    record the same changeset unless ``unique_index`` is enabled.
    """

    def __init__(
        self,
        database: Database,
        collection_name: str = DEFAULT_COLLECTION,
        *,
        unique_index: bool = False,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._database = database
        self._collection = database[collection_name]
        self._indexes = LedgerIndexManager(self._collection, unique=unique_index)
        self._clock = clock
        self._scheme: FingerprintScheme | None = None

    @property
    def database(self) -> Database:
        return self._database

    @property
    def scheme(self) -> FingerprintScheme:
        if self._scheme is None:
            raise LedgerNotConfiguredError("ExecutionLedger.configure() has not been called")
        return self._scheme

    def configure(self) -> FingerprintScheme:
        """Prepare the ledger for this run and return the active scheme."""
        scheme = resolve_scheme(self._collection)
        self._indexes.reconcile(scheme)
        self._scheme = scheme
        _log.info(
            "ledger_configured",
            collection=self._collection.name,
            support_resource_path=scheme.supports_resource_path,
        )
        return scheme

    def was_executed(self, changeset: ChangeSet) -> bool:
        """Return True if an execution record matches *changeset* under the active scheme."""
        return self._collection.count_documents(self.scheme.query(changeset), limit=1) > 0

    def log_changeset(self, changeset: ChangeSet) -> dict[str, Any]:
        """Append an execution record for *changeset*; no existence check is made."""
        document: dict[str, Any] = {
            "type": RecordType.CHANGE_SET_EXECUTION.value,
            **self.scheme.fingerprint(changeset),
            "date": self._clock().isoformat(timespec="seconds"),
        }
        self._collection.insert_one(document)
        _log.debug("changeset_logged", changeset=changeset.label)
        return document

    def records(self) -> list[LedgerRecord]:
        """Every ledger record narrowed to its variant, oldest first."""
        cursor = self._collection.find().sort("_id", ASCENDING)
        return [parse_record(document) for document in cursor]

    def executions(self) -> list[ChangeSetExecution]:
        return [record for record in self.records() if isinstance(record, ChangeSetExecution)]
