"""Exception hierarchy for docmigrate.

Nothing in the core catches these; they propagate to the caller, which
owns process-level reporting and exit codes.  pymongo errors raised by
index management and ledger writes are not wrapped.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from docmigrate.models.changeset import ChangeSet


class DocMigrateError(Exception):
    """Base class for all docmigrate errors."""


class LedgerNotConfiguredError(DocMigrateError):
    """Raised when the ledger is queried before ``configure()`` ran."""


class LedgerRecordError(DocMigrateError):
    """Raised when a ledger document cannot be narrowed to a known record type."""


class ScriptExecutionError(DocMigrateError):
    """Raised when the ``eval`` command reports a not-ok status."""

    def __init__(self, message: str, reply: Mapping[str, Any] | None = None) -> None:
        super().__init__(f"Failed executing script with error: {message}")
        self.error_message = message
        self.reply = dict(reply or {})


class ChangeSetExecutionError(DocMigrateError):
    """Raised when a changeset fails and the run must abort."""

    def __init__(self, changeset: ChangeSet, cause: ScriptExecutionError) -> None:
        super().__init__(f"ChangeSet '{changeset.label}' failed: {cause.error_message}")
        self.changeset = changeset
        self.cause = cause
