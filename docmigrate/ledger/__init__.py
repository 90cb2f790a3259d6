"""Execution ledger for docmigrate.

Tracks which changesets have been applied to a database.  The ledger is a
single collection holding one configuration record and one record per
applied changeset.

Submodules:
    scheme          -- Fingerprint scheme deciding changeset identity.
    configuration   -- Legacy record upgrade and configuration resolution.
    indexes         -- Compound index maintenance.
    store           -- ExecutionLedger query and record operations.
"""

from docmigrate.ledger.indexes import LEGACY_INDEX_NAME, LedgerIndexManager
from docmigrate.ledger.scheme import FingerprintScheme
from docmigrate.ledger.store import DEFAULT_COLLECTION, ExecutionLedger

__all__ = [
    "DEFAULT_COLLECTION",
    "ExecutionLedger",
    "FingerprintScheme",
    "LEGACY_INDEX_NAME",
    "LedgerIndexManager",
]
