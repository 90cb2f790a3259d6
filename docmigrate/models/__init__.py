"""Core data structures for docmigrate."""

from docmigrate.models.changeset import ChangeSet, ChangeSetAttribute
from docmigrate.models.config import DocMigrateConfig
from docmigrate.models.records import (
    ChangeSetExecution,
    ConfigurationRecord,
    LedgerRecord,
    RecordType,
    parse_record,
)

__all__ = [
    "ChangeSet",
    "ChangeSetAttribute",
    "ChangeSetExecution",
    "ConfigurationRecord",
    "DocMigrateConfig",
    "LedgerRecord",
    "RecordType",
    "parse_record",
]
