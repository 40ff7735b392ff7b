"""Resolved metadata bag for one group name.

A ResolvedGroup holds at most one single-kind entry per kind and an
ordered list of repeatable entries. Adding a second single-kind entry of
the same kind is a declaration error.
"""

from typing import Optional

from ..exceptions import SchemaDefinitionError
from ..utils import DEFAULT_GROUP
from .entries import (
    Alias,
    ArrayOf,
    DateTimeFormat,
    DumpHook,
    MetadataEntry,
    ParseHook,
    Propagate,
    RepeatableEntry,
    SingleEntry,
)
from .validators import BaseValidation


class ResolvedGroup:
    """Entries applying to one field (or one record) for one group name."""

    def __init__(self, name: str = DEFAULT_GROUP, owner: Optional[str] = None):
        """Initialize an empty group.

        Args:
            name: Group name
            owner: Field or record name, used in error messages
        """
        self.name = name
        self.owner = owner
        self._single: dict[str, SingleEntry] = {}
        self._repeatable: list[RepeatableEntry] = []

    def add(self, entry: MetadataEntry) -> None:
        """Add an entry, enforcing single-kind uniqueness.

        Raises:
            SchemaDefinitionError: If a single-kind entry of the same kind
                is already present, or the entry cannot be grouped
        """
        if isinstance(entry, SingleEntry):
            if entry.kind in self._single:
                where = f" on '{self.owner}'" if self.owner else ""
                raise SchemaDefinitionError(
                    f"Duplicate {type(entry).__name__} metadata{where} in group '{self.name}'"
                )
            self._single[entry.kind] = entry
        elif isinstance(entry, RepeatableEntry):
            self._repeatable.append(entry)
        else:
            raise SchemaDefinitionError(
                f"Cannot add {type(entry).__name__} to group '{self.name}': "
                "entries must be single-kind or repeatable"
            )

    def get(self, kind: str) -> Optional[SingleEntry]:
        """Get the single-kind entry of `kind`, if any."""
        return self._single.get(kind)

    @property
    def alias(self) -> Optional[str]:
        entry = self._single.get(Alias.kind)
        return entry.name if entry is not None else None

    @property
    def datetime_format(self) -> Optional[DateTimeFormat]:
        return self._single.get(DateTimeFormat.kind)

    @property
    def element_type(self) -> Optional[type]:
        entry = self._single.get(ArrayOf.kind)
        return entry.target if entry is not None else None

    @property
    def propagate(self) -> bool:
        return Propagate.kind in self._single

    @property
    def parse_hook(self) -> Optional[ParseHook]:
        return self._single.get(ParseHook.kind)

    @property
    def dump_hook(self) -> Optional[DumpHook]:
        return self._single.get(DumpHook.kind)

    @property
    def validators(self) -> list[BaseValidation]:
        return [entry for entry in self._repeatable if isinstance(entry, BaseValidation)]

    def __len__(self) -> int:
        return len(self._single) + len(self._repeatable)

    def __repr__(self) -> str:
        return (
            f"ResolvedGroup(name={self.name!r}, owner={self.owner!r}, "
            f"single={list(self._single)}, repeatable={len(self._repeatable)})"
        )
