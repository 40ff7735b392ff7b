"""Type-directed dumper.

Turns record instances back into plain nested data: mappings, lists and
scalars. With stringify set, dates and enums are rendered with their
resolved format and dump hooks are applied.
"""

from collections.abc import Mapping
from datetime import date, time
from enum import Enum
from typing import Any, Optional

from ..config import EngineSettings, get_settings
from ..metadata import ResolvedGroup
from ..record import RecordGroups, get_groups, is_record_class
from ..utils import DEFAULT_GROUP, get_logger
from .coercion import dump_datetime, dump_enum, resolve_pattern

logger = get_logger(__name__)


def field_values(record: Any) -> dict[str, Any]:
    """Shallow map of canonical field name to current value."""
    groups = get_groups(type(record), strict=False)
    return {name: getattr(record, name, None) for name in groups.record_type.field_names}


def rename_keys(data: dict, aliases: dict[str, str]) -> dict:
    """Rename keys that have an alias, keeping their order."""
    return {aliases.get(key, key): value for key, value in data.items()}


class RecordDumper:
    """Dumps record trees with one set of flags."""

    def __init__(
        self,
        group: Optional[str] = None,
        skip_nulls: bool = False,
        by_alias: bool = False,
        stringify: bool = False,
        settings: Optional[EngineSettings] = None,
    ):
        self.group = group or DEFAULT_GROUP
        self.skip_nulls = skip_nulls
        self.by_alias = by_alias
        self.stringify = stringify
        self.settings = settings or get_settings()

    def dump(self, record: Any, top_level: bool = True) -> dict[str, Any]:
        """Dump one record.

        Args:
            record: Record instance
            top_level: Whether `record` is the record the caller addressed

        Returns:
            Plain mapping of field name (or alias) to dumped value
        """
        groups = get_groups(type(record), self.group, strict=top_level)
        data = {}
        for name in groups.record_type.field_names:
            value = self._dump_field(record, groups, name, getattr(record, name, None))
            if self.skip_nulls and value is None:
                continue
            data[name] = value
        if self.by_alias:
            data = rename_keys(data, groups.aliases)
        return data

    def _dump_field(self, record: Any, groups: RecordGroups, name: str, value: Any) -> Any:
        field_group = groups.field(name)
        hook = field_group.dump_hook
        if self.stringify and hook is not None:
            logger.debug(f"Applying dump hook to {type(record).__name__}.{name}")
            return hook.dump(value, type(record))
        return self._dump_value(value, field_group, groups.schema)

    def _dump_value(self, value: Any, field_group: ResolvedGroup, schema_group: ResolvedGroup) -> Any:
        if is_record_class(type(value)):
            return self.dump(value, top_level=False)
        if isinstance(value, Mapping):
            return {key: self._dump_value(item, field_group, schema_group) for key, item in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self._dump_value(item, field_group, schema_group) for item in value]
        if self.stringify and isinstance(value, Enum):
            return dump_enum(value)
        if self.stringify and isinstance(value, (date, time)):
            pattern = resolve_pattern(type(value), field_group, schema_group, self.settings)
            return dump_datetime(value, pattern)
        return value


def dump_record(
    record: Any,
    group: Optional[str] = None,
    skip_nulls: bool = False,
    by_alias: bool = False,
    stringify: bool = False,
) -> dict[str, Any]:
    """Dump a record tree into plain data.

    Args:
        record: Record instance
        group: Metadata group name, "default" when None
        skip_nulls: Omit fields whose dumped value is None
        by_alias: Rename keys to their aliases
        stringify: Render dates, enums and dump hooks

    Returns:
        Plain mapping
    """
    return RecordDumper(
        group=group,
        skip_nulls=skip_nulls,
        by_alias=by_alias,
        stringify=stringify,
    ).dump(record)
