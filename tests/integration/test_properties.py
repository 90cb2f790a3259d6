"""Property tests for ledger idempotency and changeset identity."""

from __future__ import annotations

import mongomock
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from docmigrate.engine.runner import MigrationEngine
from docmigrate.ledger.store import ExecutionLedger
from docmigrate.models.changeset import ChangeSet

from .conftest import FakeScriptRunner, fixed_clock

_names = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-_.", min_size=1, max_size=12)
_paths = st.none() | _names

_changesets = st.lists(
    st.builds(
        ChangeSet,
        change_id=_names,
        author=_names,
        file=_names,
        resource_path=_paths,
        scripts=st.tuples(_names),
    ),
    max_size=8,
    unique_by=lambda cs: (cs.file, cs.change_id, cs.author, cs.resource_path),
)


def _fresh_ledger(seed: list[dict] | None = None) -> ExecutionLedger:
    database = mongomock.MongoClient()["prop"]
    if seed:
        database["mongeez"].insert_many(seed)
    ledger = ExecutionLedger(database, clock=fixed_clock)
    ledger.configure()
    return ledger


def _ledger_state(ledger: ExecutionLedger) -> list[dict]:
    return list(ledger.database["mongeez"].find({}, {"_id": 0}).sort("_id", 1))


class TestIdempotentRerun:
    @given(changesets=_changesets)
    @settings(max_examples=40, suppress_health_check=[HealthCheck.too_slow])
    def test_second_run_changes_nothing(self, changesets: list[ChangeSet]) -> None:
        ledger = _fresh_ledger()
        MigrationEngine(ledger, script_runner=FakeScriptRunner()).process(changesets)
        after_first = _ledger_state(ledger)

        rerun = FakeScriptRunner()
        summary = MigrationEngine(ledger, script_runner=rerun).process(changesets)

        assert rerun.calls == []
        assert summary.applied == []
        assert _ledger_state(ledger) == after_first
        assert all(ledger.was_executed(cs) for cs in changesets)


class TestIdentityComparison:
    @given(change_id=_names, author=_names, file=_names, first=_paths, second=_paths)
    @settings(max_examples=40)
    def test_resource_path_ignored_on_legacy_ledger(
        self, change_id: str, author: str, file: str, first: str | None, second: str | None
    ) -> None:
        ledger = _fresh_ledger(seed=[{"type": "configuration", "supportResourcePath": False}])
        ledger.log_changeset(ChangeSet(change_id=change_id, author=author, file=file, resource_path=first))

        assert ledger.was_executed(ChangeSet(change_id=change_id, author=author, file=file, resource_path=second))

    @given(change_id=_names, author=_names, file=_names, first=_names, second=_names)
    @settings(max_examples=40)
    def test_resource_path_compared_on_fresh_ledger(
        self, change_id: str, author: str, file: str, first: str, second: str
    ) -> None:
        ledger = _fresh_ledger()
        ledger.log_changeset(ChangeSet(change_id=change_id, author=author, file=file, resource_path=first))

        same = ledger.was_executed(ChangeSet(change_id=change_id, author=author, file=file, resource_path=second))

        assert same == (first == second)
