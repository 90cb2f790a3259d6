"""Ledger record variants.

The ledger is a single collection holding two record shapes told apart by
their ``type`` field.  Documents are narrowed to one of the dataclasses
below on read; writes go through the fingerprint scheme so that only the
active identity attributes are persisted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog

from docmigrate.errors import LedgerRecordError

_log = structlog.get_logger(component="models.records")

# Ledger collection name used by earlier tool generations.
DEFAULT_COLLECTION = "mongeez"


class RecordType(StrEnum):
    """Discriminator stored in every ledger document's ``type`` field."""

    CONFIGURATION = "configuration"
    CHANGE_SET_EXECUTION = "changeSetExecution"


@dataclass(frozen=True)
class ConfigurationRecord:
    """Singleton record deciding which fingerprint attributes are active."""

    support_resource_path: bool

    def to_document(self) -> dict[str, Any]:
        return {
            "type": RecordType.CONFIGURATION.value,
            "supportResourcePath": self.support_resource_path,
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> ConfigurationRecord:
        flag = document.get("supportResourcePath")
        if not isinstance(flag, bool):
            _log.warning("configuration_flag_malformed", support_resource_path=repr(flag))
        return cls(support_resource_path=flag is True)


@dataclass(frozen=True)
class ChangeSetExecution:
    """Append-only record of one successfully applied changeset."""

    file: str | None
    change_id: str | None
    author: str | None
    date: str | None
    resource_path: str | None = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> ChangeSetExecution:
        return cls(
            file=document.get("file"),
            change_id=document.get("changeId"),
            author=document.get("author"),
            date=document.get("date"),
            resource_path=document.get("resourcePath"),
        )


LedgerRecord = ConfigurationRecord | ChangeSetExecution


def parse_record(document: Mapping[str, Any]) -> LedgerRecord:
    """Narrow a raw ledger document to its record variant.

    Raises:
        LedgerRecordError: the document carries an unknown ``type``.
    """
    raw_type = document.get("type")
    if raw_type == RecordType.CONFIGURATION:
        return ConfigurationRecord.from_document(document)
    if raw_type == RecordType.CHANGE_SET_EXECUTION:
        return ChangeSetExecution.from_document(document)
    raise LedgerRecordError(f"Unknown ledger record type: {raw_type!r}")
