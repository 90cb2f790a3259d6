"""Ledger configuration: legacy record upgrade and scheme resolution.

Ledgers written before records were typed hold bare execution documents
without a ``type`` field.  They are reclassified on every start, before the
configuration record is looked up, because a missing configuration record
is created with a flag that depends on whether the ledger already holds
records.
"""

from __future__ import annotations

import structlog
from pymongo.collection import Collection

from docmigrate.ledger.scheme import FingerprintScheme
from docmigrate.models.records import ConfigurationRecord, RecordType

_log = structlog.get_logger(component="ledger.configuration")


def upgrade_untyped_records(collection: Collection) -> int:
    """Mark every record lacking ``type`` as a changeset execution.

    Returns the number of records modified (0 once the ledger is upgraded).
    """
    result = collection.update_many(
        {"type": {"$exists": False}},
        {"$set": {"type": RecordType.CHANGE_SET_EXECUTION.value}},
    )
    if result.modified_count:
        _log.info("untyped_records_upgraded", count=result.modified_count)
    return result.modified_count


def resolve_configuration(collection: Collection) -> ConfigurationRecord:
    """Load the configuration record, creating it on first use.

    A ledger that already holds records gets ``supportResourcePath=False``
    since its records cannot be assumed to carry ``resourcePath``.  An empty
    ledger starts with the full scheme.  An existing record is trusted as-is.
    """
    document = collection.find_one({"type": RecordType.CONFIGURATION.value})
    if document is not None:
        return ConfigurationRecord.from_document(document)

    has_records = collection.count_documents({}, limit=1) > 0
    record = ConfigurationRecord(support_resource_path=not has_records)
    collection.insert_one(record.to_document())
    _log.info(
        "configuration_record_created",
        support_resource_path=record.support_resource_path,
        legacy_ledger=has_records,
    )
    return record


def resolve_scheme(collection: Collection) -> FingerprintScheme:
    """Upgrade legacy records, then build the active scheme from configuration."""
    upgrade_untyped_records(collection)
    configuration = resolve_configuration(collection)
    scheme = FingerprintScheme.for_configuration(configuration)
    _log.debug("fingerprint_scheme_resolved", attributes=scheme.field_names)
    return scheme
