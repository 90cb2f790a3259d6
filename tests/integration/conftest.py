"""Shared fixtures for docmigrate integration tests.

Ledger and engine run against an in-memory mongomock database; the
``eval`` boundary is replaced by a recording fake so tests control which
scripts fail.
"""

from __future__ import annotations

from datetime import UTC, datetime

import mongomock
import pytest

from docmigrate.engine.script import ScriptResult
from docmigrate.errors import ScriptExecutionError
from docmigrate.ledger.store import ExecutionLedger
from docmigrate.models.changeset import ChangeSet

_TS = datetime(2026, 2, 18, 12, 0, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return _TS


def make_changeset(
    change_id: str = "cs-1",
    author: str = "alice",
    file: str = "changelog.xml",
    resource_path: str | None = "db/changelog.xml",
    scripts: tuple[str, ...] | None = None,
    **kwargs,
) -> ChangeSet:
    """Create a ChangeSet with sensible defaults for testing."""
    return ChangeSet(
        change_id=change_id,
        author=author,
        file=file,
        resource_path=resource_path,
        scripts=scripts if scripts is not None else (f"db.{change_id}.insert({{}})",),
        **kwargs,
    )


class FakeScriptRunner:
    """Records every script it receives; scripts listed in *failing* fail."""

    def __init__(self, failing: dict[str, str] | None = None) -> None:
        self.failing = failing or {}
        self.calls: list[str] = []

    def __call__(self, database, code: str) -> ScriptResult:
        self.calls.append(code)
        if code in self.failing:
            raise ScriptExecutionError(self.failing[code], reply={"ok": 0.0, "errmsg": self.failing[code]})
        return ScriptResult(ok=True, reply={"ok": 1.0, "retval": None})


@pytest.fixture
def database():
    return mongomock.MongoClient()["migrations_test"]


@pytest.fixture
def collection(database):
    return database["mongeez"]


@pytest.fixture
def ledger(database) -> ExecutionLedger:
    return ExecutionLedger(database, clock=fixed_clock)


@pytest.fixture
def script_runner() -> FakeScriptRunner:
    return FakeScriptRunner()
