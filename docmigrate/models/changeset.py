"""Changeset data structures supplied by the changelog parser."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum


class ChangeSetAttribute(StrEnum):
    """Changeset attribute that can take part in identity comparison.

    The enum value is the field name used in ledger records.
    """

    FILE = "file"
    CHANGE_ID = "changeId"
    AUTHOR = "author"
    RESOURCE_PATH = "resourcePath"

    def value_of(self, changeset: ChangeSet) -> str | None:
        """Return this attribute's value on *changeset*."""
        return getattr(changeset, _ATTRIBUTE_FIELDS[self])


_ATTRIBUTE_FIELDS = {
    ChangeSetAttribute.FILE: "file",
    ChangeSetAttribute.CHANGE_ID: "change_id",
    ChangeSetAttribute.AUTHOR: "author",
    ChangeSetAttribute.RESOURCE_PATH: "resource_path",
}


@dataclass(frozen=True)
class ChangeSet:
    """A named migration unit.

    Immutable: the engine never mutates a ChangeSet handed to it.
    """

    change_id: str
    author: str
    file: str = ""
    resource_path: str | None = None
    scripts: tuple[str, ...] = ()
    run_always: bool = False
    fail_on_error: bool = True
    contexts: frozenset[str] = frozenset()

    @property
    def label(self) -> str:
        """Human-readable identifier used in logs and error messages."""
        return f"{self.file}:{self.change_id}:{self.author}"

    def applies_in(self, active_contexts: Iterable[str]) -> bool:
        """Return True if this changeset should run under *active_contexts*.

        Untagged changesets run everywhere.
        """
        if not self.contexts:
            return True
        return not self.contexts.isdisjoint(active_contexts)
