"""Migration engine for docmigrate.

Exports:
    MigrationEngine -- Applies changesets in order against an ExecutionLedger.
    RunSummary      -- Applied / skipped / filtered / failed labels of a run.
    ScriptResult    -- Unified success verdict of an ``eval`` reply.
    run_script      -- Default script runner using the ``eval`` command.
"""

from docmigrate.engine.runner import MigrationEngine, RunSummary, ScriptRunner
from docmigrate.engine.script import ScriptResult, run_script

__all__ = ["MigrationEngine", "RunSummary", "ScriptResult", "ScriptRunner", "run_script"]
