"""Fingerprint scheme: which changeset attributes make up identity.

The scheme is resolved once per run from the ledger's configuration record
and then used unchanged for every existence check, every insert and the
shape of the ledger index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pymongo import ASCENDING

from docmigrate.models.changeset import ChangeSet, ChangeSetAttribute
from docmigrate.models.records import ConfigurationRecord, RecordType

BASE_ATTRIBUTES: tuple[ChangeSetAttribute, ...] = (
    ChangeSetAttribute.FILE,
    ChangeSetAttribute.CHANGE_ID,
    ChangeSetAttribute.AUTHOR,
)


@dataclass(frozen=True)
class FingerprintScheme:
    """Ordered attribute set defining changeset identity for one ledger."""

    attributes: tuple[ChangeSetAttribute, ...] = BASE_ATTRIBUTES

    @classmethod
    def for_configuration(cls, configuration: ConfigurationRecord) -> FingerprintScheme:
        if configuration.support_resource_path:
            return cls(BASE_ATTRIBUTES + (ChangeSetAttribute.RESOURCE_PATH,))
        return cls(BASE_ATTRIBUTES)

    @property
    def supports_resource_path(self) -> bool:
        return ChangeSetAttribute.RESOURCE_PATH in self.attributes

    @property
    def field_names(self) -> list[str]:
        return [attribute.value for attribute in self.attributes]

    def fingerprint(self, changeset: ChangeSet) -> dict[str, str | None]:
        """Return the changeset's identity values, in scheme order."""
        return {attribute.value: attribute.value_of(changeset) for attribute in self.attributes}

    def query(self, changeset: ChangeSet) -> dict[str, Any]:
        """Equality predicate matching execution records of *changeset*."""
        return {"type": RecordType.CHANGE_SET_EXECUTION.value, **self.fingerprint(changeset)}

    def index_keys(self) -> list[tuple[str, int]]:
        return [("type", ASCENDING)] + [(name, ASCENDING) for name in self.field_names]

    def index_name(self) -> str:
        """Name MongoDB derives for :meth:`index_keys`."""
        return "_".join(f"{name}_{direction}" for name, direction in self.index_keys())
