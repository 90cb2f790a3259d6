"""Script execution through the database ``eval`` command.

The reply carries an optional top-level ``ok`` and an optional nested
``retval`` document with its own ``ok``.  An explicit zero at either level
is a failure; its ``errmsg`` becomes the error message.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog
from pymongo.database import Database
from pymongo.errors import OperationFailure

from docmigrate.errors import ScriptExecutionError
from docmigrate.observability.metrics import scripts_total

_log = structlog.get_logger(component="engine.script")


@dataclass(frozen=True)
class ScriptResult:
    """Unified verdict for one ``eval`` reply."""

    ok: bool
    error_message: str = ""
    reply: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_reply(cls, reply: Mapping[str, Any]) -> ScriptResult:
        message = _failure_message(reply)
        if message is None:
            retval = reply.get("retval")
            if isinstance(retval, Mapping):
                message = _failure_message(retval)
        if message is not None:
            return cls(ok=False, error_message=message, reply=dict(reply))
        return cls(ok=True, reply=dict(reply))


def _failure_message(document: Mapping[str, Any]) -> str | None:
    status = document.get("ok")
    # bool is an int, so ok: false counts as an explicit zero
    if isinstance(status, (int, float)) and status == 0:
        return str(document.get("errmsg") or "unknown error")
    return None


def run_script(database: Database, code: str) -> ScriptResult:
    """Send *code* to ``eval`` on *database*.

    Raises:
        ScriptExecutionError: the command reported a not-ok status.
    """
    try:
        reply = database.command("eval", code)
    except OperationFailure as exc:
        # pymongo raises on a top-level ok: 0 before we see the reply
        details = exc.details or {}
        scripts_total.labels(success="false").inc()
        raise ScriptExecutionError(_failure_message(details) or str(exc), reply=details) from exc

    result = ScriptResult.from_reply(reply)
    if not result.ok:
        scripts_total.labels(success="false").inc()
        raise ScriptExecutionError(result.error_message, reply=result.reply)

    scripts_total.labels(success="true").inc()
    _log.info("script_executed", result=str(result.reply))
    return result
