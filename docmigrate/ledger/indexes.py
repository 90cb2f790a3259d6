"""Ledger index maintenance.

Exactly one compound index shaped ``{type, <scheme attributes...>}`` is kept
on the ledger.  Index errors are not caught here.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from pymongo.collection import Collection

from docmigrate.ledger.scheme import FingerprintScheme
from docmigrate.models.changeset import ChangeSetAttribute

_log = structlog.get_logger(component="ledger.indexes")

# Created by early releases with an explicit name and always including
# resourcePath; that shape is rejected by MongoDB 2.4+.
LEGACY_INDEX_NAME = "type_changeSetExecution_file_1_changeId_1_author_1_resourcePath_1"

_FINGERPRINT_FIELDS = frozenset(attribute.value for attribute in ChangeSetAttribute)


class LedgerIndexManager:
    """Drops superseded ledger indices and ensures the active one exists."""

    def __init__(self, collection: Collection, *, unique: bool = False) -> None:
        self._collection = collection
        self._unique = unique

    def drop_obsolete(self, scheme: FingerprintScheme) -> list[str]:
        """Drop every ledger-shaped index that ``ensure`` would not create as-is.

        That covers the legacy-named index, indices built for another scheme
        or with other key directions, and an active-key index whose name or
        ``unique`` option differs from the one configured now.
        """
        dropped: list[str] = []
        active_keys = scheme.index_keys()
        active_name = scheme.index_name()
        for index in list(self._collection.list_indexes()):
            name = index.get("name")
            if name == LEGACY_INDEX_NAME or self._is_obsolete(index, active_keys, active_name):
                self._collection.drop_index(name)
                dropped.append(name)
                _log.info("obsolete_index_dropped", index=name)
        return dropped

    def _is_obsolete(
        self,
        index: Mapping[str, Any],
        active_keys: list[tuple[str, int]],
        active_name: str,
    ) -> bool:
        keys = _index_keys(index)
        if not _is_ledger_shaped(keys):
            return False
        if keys != active_keys:
            return True
        return index.get("name") != active_name or bool(index.get("unique", False)) != self._unique

    def ensure(self, scheme: FingerprintScheme) -> str:
        """Create the scheme's compound index; a no-op when it already exists."""
        options = {"unique": True} if self._unique else {}
        name = self._collection.create_index(scheme.index_keys(), **options)
        _log.debug("ledger_index_ensured", index=name, unique=self._unique)
        return name

    def reconcile(self, scheme: FingerprintScheme) -> str:
        self.drop_obsolete(scheme)
        return self.ensure(scheme)


def _index_keys(index: Mapping[str, Any]) -> list[tuple[str, Any]]:
    keys = []
    for name, direction in index.get("key", {}).items():
        # the server may report directions as doubles
        if isinstance(direction, float) and direction.is_integer():
            direction = int(direction)
        keys.append((name, direction))
    return keys


def _is_ledger_shaped(keys: list[tuple[str, Any]]) -> bool:
    """``type`` followed by one or more fingerprint fields, and nothing else."""
    if len(keys) < 2 or keys[0][0] != "type":
        return False
    return all(name in _FINGERPRINT_FIELDS for name, _ in keys[1:])
