"""Metadata entries attached to record fields and record types.

Entries are declared inside typing.Annotated[...] for fields and with the
schema_metadata() class decorator for whole records. Single-kind entries
may occur at most once per (field, group); repeatable entries (validators)
keep their declaration order.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Optional

from ..exceptions import SchemaDefinitionError
from ..utils import UNIX_FORMAT


class MetadataEntry:
    """Base class for every declarative metadata entry."""

    kind: ClassVar[str] = ""


class SingleEntry(MetadataEntry):
    """Entry allowed at most once per (field, group)."""

    pass


class RepeatableEntry(MetadataEntry):
    """Entry that may be declared several times; order is preserved."""

    pass


def resolve_hook(
    ref: Any,
    method: Optional[str],
    owner: type,
    instance: Any = None,
) -> Callable:
    """Resolve a converter or validator reference to a callable.

    Resolution order:
    - a string names a method of the record (bound to `instance` when given)
    - a callable without `method` is used directly
    - an object or class with `method` has that attribute used

    Args:
        ref: Callable, object, class or record method name
        method: Optional method name looked up on `ref`
        owner: Record class declaring the hook
        instance: Record instance, for methods that need `self`

    Returns:
        Callable taking the value as its only argument

    Raises:
        SchemaDefinitionError: If the reference cannot be resolved
    """
    if isinstance(ref, str):
        target = instance if instance is not None else owner
        func = getattr(target, ref, None)
        if not callable(func):
            raise SchemaDefinitionError(f"{owner.__name__} has no such method: {ref}")
        return func

    if method is None:
        if callable(ref):
            return ref
        raise SchemaDefinitionError(f"{owner.__name__} - no method specified for {ref!r}")

    func = getattr(ref, method, None)
    if not callable(func):
        name = ref.__name__ if isinstance(ref, type) else type(ref).__name__
        raise SchemaDefinitionError(f"{owner.__name__} - {name} has no such method: {method}")
    return func


@dataclass(frozen=True)
class Alias(SingleEntry):
    """Alternative external name for a field."""

    name: str
    kind: ClassVar[str] = "alias"


@dataclass(frozen=True)
class DateTimeFormat(SingleEntry):
    """strftime pattern for date/time values, or "unix" for epoch seconds.

    Can be declared on a single field or on the whole record.
    """

    pattern: str
    kind: ClassVar[str] = "format"

    @property
    def is_unix(self) -> bool:
        return self.pattern == UNIX_FORMAT


@dataclass(frozen=True)
class ArrayOf(SingleEntry):
    """Element type of a collection field declared as a bare list or dict."""

    target: type
    kind: ClassVar[str] = "element_type"


@dataclass(frozen=True)
class Propagate(SingleEntry):
    """Feed this field's raw value into nested records as a default."""

    kind: ClassVar[str] = "propagate"


class ParseHook(SingleEntry):
    """Custom conversion applied instead of type-directed parsing."""

    kind: ClassVar[str] = "parse"

    def parse(self, value: Any, owner: type) -> Any:
        raise NotImplementedError


class DumpHook(SingleEntry):
    """Custom conversion applied when stringifying a field."""

    kind: ClassVar[str] = "dump"

    def dump(self, value: Any, owner: type) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Parser(ParseHook):
    """Parse a field with a custom callable, object method or record method."""

    ref: Any
    method: Optional[str] = None

    def parse(self, value: Any, owner: type) -> Any:
        return resolve_hook(self.ref, self.method, owner)(value)


@dataclass(frozen=True)
class Dumper(DumpHook):
    """Dump a field with a custom callable, object method or record method."""

    ref: Any
    method: Optional[str] = None

    def dump(self, value: Any, owner: type) -> Any:
        return resolve_hook(self.ref, self.method, owner)(value)


@dataclass(frozen=True)
class ParseJSON(ParseHook):
    """Decode a JSON string field."""

    def parse(self, value: Any, owner: type) -> Any:
        if not isinstance(value, (str, bytes, bytearray)):
            return value
        return json.loads(value)


@dataclass(frozen=True)
class DumpJSON(DumpHook):
    """Encode a field as a JSON string."""

    indent: Optional[int] = None

    def dump(self, value: Any, owner: type) -> Any:
        return json.dumps(value, indent=self.indent, ensure_ascii=False)


@dataclass(frozen=True, init=False)
class Group(MetadataEntry):
    """Bundle of entries that only apply when `name` is the requested group.

    Example:
        Annotated[datetime, Group("input", Alias("dt")), Group("output", Alias("ts"))]
    """

    name: str
    entries: tuple = field(default=())

    def __init__(self, name: str, *entries: MetadataEntry):
        if not name:
            raise SchemaDefinitionError("Group name cannot be empty")
        for entry in entries:
            if isinstance(entry, Group):
                raise SchemaDefinitionError(f"Group '{name}' cannot contain another group")
            if not isinstance(entry, (SingleEntry, RepeatableEntry)):
                raise SchemaDefinitionError(
                    f"Cannot add {type(entry).__name__} to group '{name}': "
                    "entries must be single-kind or repeatable"
                )
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "entries", tuple(entries))


def schema_metadata(*entries: MetadataEntry):
    """Class decorator attaching record-level metadata.

    Example:
        @schema_metadata(DateTimeFormat("%d.%m.%Y"), Group("api", DateTimeFormat("unix")))
        @dataclass
        class Event(Schema):
            ...
    """
    for entry in entries:
        if not isinstance(entry, MetadataEntry):
            raise SchemaDefinitionError(f"Not a metadata entry: {entry!r}")

    def decorate(cls):
        cls.__schema_metadata__ = tuple(entries)
        return cls

    return decorate
