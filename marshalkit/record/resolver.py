"""Attribute group resolver.

Merges record-level and field-level metadata into one ResolvedGroup per
requested group name. Ungrouped entries belong to the "default" group;
entries wrapped in Group(name, ...) only apply when `name` is requested.
Groups are fully isolated: ungrouped entries never leak into a named
group and named entries never leak into "default".
"""

import functools
from dataclasses import dataclass
from typing import Iterable, Optional

from ..config import get_settings, on_settings_change
from ..exceptions import SchemaDefinitionError
from ..metadata import Group, MetadataEntry, ResolvedGroup
from ..utils import DEFAULT_GROUP, get_logger
from .fields import FieldSpec
from .record_type import RecordType, build_record_type

logger = get_logger(__name__)


@dataclass(frozen=True)
class RecordGroups:
    """Resolved metadata of one record type for one group name."""

    record_type: RecordType
    group: str
    schema: ResolvedGroup
    fields: dict

    def field(self, name: str) -> ResolvedGroup:
        return self.fields[name]

    @property
    def aliases(self) -> dict[str, str]:
        """Map of canonical field name to alias, for aliased fields only."""
        return {
            name: resolved.alias
            for name, resolved in self.fields.items()
            if resolved.alias is not None
        }

    def external_name(self, name: str, by_alias: bool) -> str:
        if not by_alias:
            return name
        alias = self.fields[name].alias
        return alias if alias is not None else name


def merge_entries(
    entries: Iterable[MetadataEntry],
    group: str,
    owner: Optional[str] = None,
) -> ResolvedGroup:
    """Merge declared entries into a ResolvedGroup for `group`.

    Args:
        entries: Entries declared on a field or record
        group: Requested group name
        owner: Field or record name, used in error messages

    Returns:
        ResolvedGroup holding the applicable entries

    Raises:
        SchemaDefinitionError: On duplicate single-kind entries
    """
    resolved = ResolvedGroup(group, owner=owner)
    for entry in entries:
        if isinstance(entry, Group):
            if entry.name == group:
                for inner in entry.entries:
                    resolved.add(inner)
        elif group == DEFAULT_GROUP:
            resolved.add(entry)
    return resolved


def _check_group(record_type: RecordType, group: str, strict: bool = True) -> None:
    if strict and group not in record_type.declared_groups:
        raise SchemaDefinitionError(f"{record_type.name}: no such group: '{group}'")


def resolve_schema_group(
    record_type: RecordType,
    group: str = DEFAULT_GROUP,
    strict: bool = True,
) -> ResolvedGroup:
    """Resolve record-level metadata for `group`.

    With strict=False an undeclared group resolves to an empty bag.

    Raises:
        SchemaDefinitionError: If `group` is not declared anywhere on the record
    """
    _check_group(record_type, group, strict)
    return merge_entries(record_type.entries, group, owner=record_type.name)


def resolve_field_group(
    record_type: RecordType,
    spec: FieldSpec,
    group: str = DEFAULT_GROUP,
    strict: bool = True,
) -> ResolvedGroup:
    """Resolve the metadata of one field for `group`.

    Raises:
        SchemaDefinitionError: If `group` is not declared anywhere on the record
    """
    _check_group(record_type, group, strict)
    return merge_entries(spec.entries, group, owner=f"{record_type.name}.{spec.name}")


def _check_alias_collisions(record_type: RecordType, group: str, fields: dict) -> None:
    seen: dict[str, str] = {}
    for name, resolved in fields.items():
        alias = resolved.alias
        if alias is None:
            continue
        if alias in seen:
            raise SchemaDefinitionError(
                f"{record_type.name}: fields '{seen[alias]}' and '{name}' "
                f"share alias '{alias}' in group '{group}'"
            )
        seen[alias] = name


def resolve_groups(
    record_type: RecordType,
    group: Optional[str] = None,
    strict: bool = True,
) -> RecordGroups:
    """Resolve record-level and per-field metadata for `group`.

    Args:
        record_type: Record type to resolve
        group: Group name; None means "default"
        strict: Reject group names the record never declares

    Returns:
        RecordGroups with one ResolvedGroup for the record and one per field

    Raises:
        SchemaDefinitionError: On unknown groups, duplicate single-kind
            entries or alias collisions
    """
    group = group or DEFAULT_GROUP
    schema = resolve_schema_group(record_type, group, strict)
    fields = {
        spec.name: resolve_field_group(record_type, spec, group, strict)
        for spec in record_type.fields
    }
    if get_settings().detect_alias_collisions:
        _check_alias_collisions(record_type, group, fields)
    return RecordGroups(record_type=record_type, group=group, schema=schema, fields=fields)


@functools.lru_cache(maxsize=None)
def _cached_record_type(cls: type) -> RecordType:
    logger.debug(f"Record type cache miss: {cls.__name__}")
    return build_record_type(cls)


@functools.lru_cache(maxsize=None)
def _cached_groups(cls: type, group: str, strict: bool) -> RecordGroups:
    logger.debug(f"Group cache miss: {cls.__name__} / {group}")
    return resolve_groups(_cached_record_type(cls), group, strict)


def get_record_type(cls: type) -> RecordType:
    """Return the RecordType of `cls`, cached when caching is enabled."""
    if get_settings().cache_record_types:
        return _cached_record_type(cls)
    return build_record_type(cls)


def get_groups(cls: type, group: Optional[str] = None, strict: bool = True) -> RecordGroups:
    """Return resolved metadata of `cls` for `group`, cached when caching is enabled.

    Nested records are resolved with strict=False.
    """
    group = group or DEFAULT_GROUP
    if get_settings().cache_record_types:
        return _cached_groups(cls, group, strict)
    return resolve_groups(build_record_type(cls), group, strict)


@on_settings_change
def clear_caches() -> None:
    """Drop cached record types and resolved groups."""
    _cached_record_type.cache_clear()
    _cached_groups.cache_clear()
