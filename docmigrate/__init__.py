"""docmigrate: execution tracking for document-database schema migrations."""

from docmigrate.app import run_migrations
from docmigrate.engine import MigrationEngine, RunSummary
from docmigrate.ledger import ExecutionLedger, FingerprintScheme
from docmigrate.models import ChangeSet

__version__ = "0.1.0"

__all__ = [
    "ChangeSet",
    "ExecutionLedger",
    "FingerprintScheme",
    "MigrationEngine",
    "RunSummary",
    "run_migrations",
]
