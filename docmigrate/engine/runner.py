"""Migration engine: apply each changeset once, in order.

For every changeset the engine checks the ledger, runs the scripts when the
changeset is new (or marked run-always) and appends a ledger record once
every script succeeded.  A failure aborts the run; records written for
earlier changesets are kept.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

import structlog
from pymongo.database import Database

from docmigrate.engine.script import ScriptResult, run_script
from docmigrate.errors import ChangeSetExecutionError, ScriptExecutionError
from docmigrate.ledger.store import ExecutionLedger
from docmigrate.models.changeset import ChangeSet
from docmigrate.observability.metrics import changesets_total

_log = structlog.get_logger(component="engine.runner")

ScriptRunner = Callable[[Database, str], ScriptResult]


@dataclass
class RunSummary:
    """Outcome of one engine run, as changeset labels in processing order."""

    applied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    filtered: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class MigrationEngine:
    """Sequential apply-then-record loop over a configured ExecutionLedger."""

    def __init__(
        self,
        ledger: ExecutionLedger,
        *,
        contexts: Iterable[str] = (),
        script_runner: ScriptRunner = run_script,
    ) -> None:
        self._ledger = ledger
        self._contexts = frozenset(contexts)
        self._run_script = script_runner

    def process(self, changesets: Iterable[ChangeSet]) -> RunSummary:
        """Apply *changesets* strictly in the given order.

        Raises:
            ChangeSetExecutionError: a changeset with ``fail_on_error`` failed.
        """
        summary = RunSummary()
        for changeset in changesets:
            self._process_one(changeset, summary)
        _log.info(
            "migration_run_complete",
            applied=len(summary.applied),
            skipped=len(summary.skipped),
            filtered=len(summary.filtered),
            failed=len(summary.failed),
        )
        return summary

    def _process_one(self, changeset: ChangeSet, summary: RunSummary) -> None:
        if not changeset.applies_in(self._contexts):
            _log.debug("changeset_filtered", changeset=changeset.label, contexts=sorted(changeset.contexts))
            changesets_total.labels(outcome="filtered").inc()
            summary.filtered.append(changeset.label)
            return

        executed = self._ledger.was_executed(changeset)
        if executed and not changeset.run_always:
            _log.debug("changeset_skipped", changeset=changeset.label)
            changesets_total.labels(outcome="skipped").inc()
            summary.skipped.append(changeset.label)
            return

        try:
            self._execute(changeset)
        except ScriptExecutionError as exc:
            changesets_total.labels(outcome="failed").inc()
            if changeset.fail_on_error:
                _log.error("changeset_failed", changeset=changeset.label, error=exc.error_message)
                raise ChangeSetExecutionError(changeset, exc) from exc
            _log.warning(
                "changeset_failed_ignored",
                changeset=changeset.label,
                error=exc.error_message,
            )
            summary.failed.append(changeset.label)
            return

        if not executed:
            self._ledger.log_changeset(changeset)
        _log.info("changeset_applied", changeset=changeset.label, run_always=changeset.run_always)
        changesets_total.labels(outcome="applied").inc()
        summary.applied.append(changeset.label)

    def _execute(self, changeset: ChangeSet) -> None:
        for code in changeset.scripts:
            self._run_script(self._ledger.database, code)
