"""Field and candidate-type model.

A FieldSpec describes one constructor parameter of a record class: its
ordered candidate types (from the annotation), whether it is optional,
its default, and the metadata entries attached to it.
"""

import types
import typing
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional, Union, get_args, get_origin

from ..metadata import Group, MetadataEntry

PRIMITIVE_TYPES = (bool, int, float, str, bytes, Decimal)
DATETIME_TYPES = (datetime, date, time)


class _Missing:
    """Marker for an absent value or default."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class CandidateKind:
    """Kind constants for candidate types."""

    ANY = "any"
    PRIMITIVE = "primitive"
    ENUM = "enum"
    DATETIME = "datetime"
    RECORD = "record"
    COLLECTION = "collection"
    OBJECT = "object"


def is_record_class(tp: Any) -> bool:
    """Check whether `tp` is a record class (a Schema subclass)."""
    return isinstance(tp, type) and bool(getattr(tp, "__marshalkit_record__", False))


@dataclass(frozen=True)
class CandidateType:
    """One acceptable type for a field or collection element.

    For collections, `container` is list, tuple, set or dict and
    `elements` holds the ordered element candidates.
    """

    kind: str
    target: Any = None
    container: Optional[type] = None
    elements: tuple = ()
    elements_nullable: bool = False

    @property
    def is_record(self) -> bool:
        return self.kind == CandidateKind.RECORD

    @property
    def is_collection(self) -> bool:
        return self.kind == CandidateKind.COLLECTION

    @property
    def holds_records(self) -> bool:
        return self.is_collection and any(element.is_record for element in self.elements)

    def describe(self) -> str:
        if self.kind == CandidateKind.ANY:
            return "Any"
        if self.is_collection:
            inner = " | ".join(element.describe() for element in self.elements) or "Any"
            return f"{self.container.__name__}[{inner}]"
        return getattr(self.target, "__name__", str(self.target))


ANY_CANDIDATE = CandidateType(CandidateKind.ANY)

_SEQUENCE_ORIGINS = {
    list: list,
    tuple: tuple,
    set: set,
    frozenset: set,
    Sequence: list,
    typing.List: list,
    typing.Tuple: tuple,
    typing.Set: set,
}
_MAPPING_ORIGINS = (dict, Mapping, typing.Dict)


def _is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or (hasattr(types, "UnionType") and origin is types.UnionType)


def strip_annotated(hint: Any) -> tuple[Any, list]:
    """Split an Annotated hint into its base type and metadata entries."""
    if get_origin(hint) is typing.Annotated:
        base, *extras = get_args(hint)
        return base, [extra for extra in extras if isinstance(extra, MetadataEntry)]
    return hint, []


def split_union(tp: Any) -> tuple[list, bool]:
    """Return the non-None union members of `tp` and whether None is allowed."""
    tp, _ = strip_annotated(tp)
    if _is_union(tp):
        members = [arg for arg in get_args(tp) if arg is not type(None)]
        return members, len(members) != len(get_args(tp))
    if tp is None or tp is type(None):
        return [], True
    return [tp], False


def candidate_for(tp: Any) -> CandidateType:
    """Build the candidate type for a single (non-union) type.

    Args:
        tp: Python type or typing construct

    Returns:
        CandidateType describing how values of `tp` are parsed and dumped
    """
    tp, _ = strip_annotated(tp)
    if tp is Any or tp is object:
        return ANY_CANDIDATE

    origin = get_origin(tp)
    args = get_args(tp)

    if origin in _SEQUENCE_ORIGINS or tp in _SEQUENCE_ORIGINS:
        container = _SEQUENCE_ORIGINS[origin if origin is not None else tp]
        if container is tuple and len(args) == 2 and args[1] is Ellipsis:
            element_hint = args[0]
        elif container is not tuple and len(args) == 1:
            element_hint = args[0]
        else:
            element_hint = Any
        return collection_of(container, element_hint)

    if origin in _MAPPING_ORIGINS or tp in _MAPPING_ORIGINS:
        element_hint = args[1] if len(args) == 2 else Any
        return collection_of(dict, element_hint)

    if isinstance(tp, type):
        if issubclass(tp, Enum):
            return CandidateType(CandidateKind.ENUM, tp)
        if issubclass(tp, DATETIME_TYPES):
            return CandidateType(CandidateKind.DATETIME, tp)
        if is_record_class(tp):
            return CandidateType(CandidateKind.RECORD, tp)
        if issubclass(tp, PRIMITIVE_TYPES):
            return CandidateType(CandidateKind.PRIMITIVE, tp)
        return CandidateType(CandidateKind.OBJECT, tp)

    return ANY_CANDIDATE


def collection_of(container: type, element_hint: Any) -> CandidateType:
    """Build a collection candidate whose elements may be any of `element_hint`'s members."""
    members, nullable = split_union(element_hint)
    elements = tuple(candidate_for(member) for member in members) or (ANY_CANDIDATE,)
    return CandidateType(
        CandidateKind.COLLECTION,
        container,
        container=container,
        elements=elements,
        elements_nullable=nullable,
    )


@dataclass(frozen=True)
class FieldSpec:
    """One declared field of a record type."""

    name: str
    candidates: tuple
    nullable: bool = False
    default: Any = MISSING
    default_factory: Optional[Callable[[], Any]] = None
    entries: tuple = ()
    annotation: Any = Any

    @property
    def optional(self) -> bool:
        return self.default is not MISSING or self.default_factory is not None

    def default_value(self) -> Any:
        """Produce the default value for an absent optional field."""
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is MISSING:
            raise ValueError(f"Field '{self.name}' has no default")
        return self.default

    @property
    def declared_groups(self) -> set[str]:
        return {entry.name for entry in self.entries if isinstance(entry, Group)}

    @property
    def holds_records(self) -> bool:
        return any(c.is_record or c.holds_records for c in self.candidates)

    def describe_type(self) -> str:
        names = [candidate.describe() for candidate in self.candidates]
        if self.nullable:
            names.append("None")
        return " | ".join(names)


def build_field(
    name: str,
    hint: Any,
    default: Any = MISSING,
    default_factory: Optional[Callable[[], Any]] = None,
) -> FieldSpec:
    """Build a FieldSpec from a parameter's annotation and default.

    Args:
        name: Parameter name
        hint: Resolved annotation (may be Annotated / a union)
        default: Parameter default, or MISSING
        default_factory: Dataclass default factory, if any

    Returns:
        FieldSpec for the parameter
    """
    base, entries = strip_annotated(hint)
    members, nullable = split_union(base)
    if base is Any:
        candidates = (ANY_CANDIDATE,)
        nullable = True
    else:
        candidates = tuple(candidate_for(member) for member in members) or (ANY_CANDIDATE,)
    if default is None:
        nullable = True
    return FieldSpec(
        name=name,
        candidates=candidates,
        nullable=nullable,
        default=default,
        default_factory=default_factory,
        entries=tuple(entries),
        annotation=hint,
    )
