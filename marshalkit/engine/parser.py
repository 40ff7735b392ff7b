"""Type-directed parser.

Turns loosely-structured input (mappings or positional sequences) into
record instances, recursing into nested records and collections.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Optional

from ..config import EngineSettings, get_settings
from ..exceptions import MarshalError, ParsingError
from ..metadata import ResolvedGroup
from ..record import (
    MISSING,
    CandidateKind,
    CandidateType,
    FieldSpec,
    RecordGroups,
    candidate_for,
    collection_of,
    get_groups,
)
from ..utils import DEFAULT_GROUP, get_logger
from .coercion import coerce_datetime, coerce_enum, coerce_primitive, is_instance, resolve_pattern
from .validation import validate_record

logger = get_logger(__name__)

SEQUENCE_TYPES = (list, tuple)


@dataclass
class FieldContext:
    """Where a value being parsed lives."""

    owner: type
    field_group: ResolvedGroup
    schema_group: ResolvedGroup
    propagated: dict
    by_alias: bool


def read_field(raw: Mapping, name: str, alias: Optional[str], by_alias: bool) -> Any:
    """Read a field's raw value, preferring the alias key when parsing by alias.

    Returns:
        The raw value, or MISSING when neither key is present
    """
    if by_alias and alias is not None and alias in raw:
        return raw[alias]
    if name in raw:
        return raw[name]
    return MISSING


def bind_positional(field_names: list[str], raw: Any) -> dict:
    """Map a positional sequence onto the first N declared fields."""
    count = min(len(raw), len(field_names))
    return dict(zip(field_names[:count], list(raw)[:count]))


def apply_element_type(candidates: tuple, target: type) -> tuple:
    """Rebuild collection candidates so their elements are `target`.

    A field without any collection candidate gains a list of `target`.
    """
    element = candidate_for(target)
    rebuilt = []
    has_collection = False
    for candidate in candidates:
        if candidate.is_collection:
            rebuilt.append(replace(candidate, elements=(element,)))
            has_collection = True
        elif candidate.kind == CandidateKind.ANY:
            rebuilt.append(collection_of(list, target))
            has_collection = True
        else:
            rebuilt.append(candidate)
    if not has_collection:
        rebuilt.append(collection_of(list, target))
    return tuple(rebuilt)


class RecordParser:
    """Builds record instances from raw data.

    One parser holds the flags of a single top-level parse call; nested
    records are parsed by the same instance.
    """

    def __init__(
        self,
        group: Optional[str] = None,
        by_alias: bool = False,
        convert: bool = True,
        settings: Optional[EngineSettings] = None,
    ):
        self.group = group or DEFAULT_GROUP
        self.by_alias = by_alias
        self.convert = convert
        self.settings = settings or get_settings()

    def parse(
        self,
        cls: type,
        raw: Any,
        propagated: Optional[dict] = None,
        top_level: bool = True,
        by_alias: Optional[bool] = None,
    ) -> Any:
        """Construct an instance of `cls` from `raw`.

        Args:
            cls: Record class to construct
            raw: Mapping keyed by field name (or alias), or a positional sequence
            propagated: Values handed down by Propagate fields of ancestors
            top_level: Whether `cls` is the record the caller addressed
            by_alias: Override of the parser-wide alias flag

        Returns:
            Instance of `cls`

        Raises:
            ParsingError: If a field cannot be parsed
            SchemaDefinitionError: If the record declaration is broken
        """
        if isinstance(raw, cls):
            return raw

        by_alias = self.by_alias if by_alias is None else by_alias
        groups = get_groups(cls, self.group, strict=top_level)
        record_type = groups.record_type

        if isinstance(raw, SEQUENCE_TYPES):
            raw = bind_positional(record_type.field_names, raw)
            by_alias = False
        elif not isinstance(raw, Mapping):
            raise ParsingError(
                f"expected a mapping or a sequence, got {type(raw).__name__}",
                record=record_type.name,
            )

        if propagated:
            raw = {**propagated, **raw}

        handed_down = dict(propagated or {})
        handed_down.update(self._collect_propagated(groups, raw, by_alias))

        kwargs = {}
        for spec in record_type.fields:
            field_group = groups.field(spec.name)
            value = read_field(raw, spec.name, field_group.alias, by_alias)
            context = FieldContext(
                owner=cls,
                field_group=field_group,
                schema_group=groups.schema,
                propagated=handed_down,
                by_alias=by_alias,
            )
            try:
                kwargs[spec.name] = self._parse_field(spec, value, context)
            except ParsingError as e:
                raise e.nested_under(record_type.name, spec.name) from e

        try:
            return cls(**kwargs)
        except MarshalError:
            raise
        except Exception as e:
            raise ParsingError(f"cannot construct record: {e}", record=record_type.name) from e

    def _collect_propagated(self, groups: RecordGroups, raw: Mapping, by_alias: bool) -> dict:
        values = {}
        for spec in groups.record_type.fields:
            field_group = groups.field(spec.name)
            if not field_group.propagate:
                continue
            value = read_field(raw, spec.name, field_group.alias, by_alias)
            if value is not MISSING:
                values[spec.name] = value
        return values

    def _parse_field(self, spec: FieldSpec, value: Any, context: FieldContext) -> Any:
        if value is MISSING:
            if spec.optional:
                return spec.default_value()
            raise ParsingError("missing required field")

        if value is None:
            if spec.nullable:
                return None
            raise ParsingError(f"null given for non-nullable field of type {spec.describe_type()}")

        hook = context.field_group.parse_hook
        if hook is not None and self.convert:
            return self._run_hook(hook, value, context.owner)

        candidates = spec.candidates
        element_type = context.field_group.element_type
        if element_type is not None:
            candidates = apply_element_type(candidates, element_type)

        return self._parse_union(candidates, value, context)

    def _run_hook(self, hook: Any, value: Any, owner: type) -> Any:
        try:
            return hook.parse(value, owner)
        except MarshalError:
            raise
        except Exception as e:
            raise ParsingError(f"parse hook {type(hook).__name__} failed: {e}") from e

    def _parse_union(self, candidates: tuple, value: Any, context: FieldContext) -> Any:
        """Try candidates in declaration order; the first one that accepts the value wins.

        A candidate accepts a value that already has its type unchanged and
        otherwise tries to convert it.
        """
        last_error: Optional[ParsingError] = None
        for candidate in candidates:
            try:
                return self._parse_candidate(candidate, value, context)
            except ParsingError as e:
                logger.debug(f"Candidate {candidate.describe()} rejected {type(value).__name__}: {e.reason}")
                last_error = e

        if not self.convert and not isinstance(value, Mapping):
            return value
        if last_error is None:
            raise ParsingError(f"no candidate type accepts {type(value).__name__}")
        raise last_error

    def _parse_candidate(self, candidate: CandidateType, value: Any, context: FieldContext) -> Any:
        kind = candidate.kind
        if kind == CandidateKind.ANY:
            return value
        if kind == CandidateKind.RECORD:
            return self._parse_record(candidate.target, value, context)
        if kind == CandidateKind.COLLECTION:
            return self._parse_collection(candidate, value, context)

        if is_instance(value, candidate.target):
            return value
        if not self.convert or kind == CandidateKind.OBJECT:
            raise ParsingError(f"expected {candidate.describe()}, got {type(value).__name__}")

        if kind == CandidateKind.PRIMITIVE:
            return coerce_primitive(candidate.target, value)
        if kind == CandidateKind.ENUM:
            return coerce_enum(candidate.target, value)
        pattern = resolve_pattern(candidate.target, context.field_group, context.schema_group, self.settings)
        return coerce_datetime(candidate.target, value, pattern)

    def _parse_record(self, cls: type, value: Any, context: FieldContext) -> Any:
        if isinstance(value, cls):
            return value
        if not isinstance(value, (Mapping, *SEQUENCE_TYPES)):
            raise ParsingError(f"expected {cls.__name__} or a mapping, got {type(value).__name__}")
        return self.parse(
            cls,
            value,
            propagated=context.propagated,
            top_level=False,
            by_alias=context.by_alias,
        )

    def _parse_collection(self, candidate: CandidateType, value: Any, context: FieldContext) -> Any:
        container = candidate.container
        if container is dict:
            if not isinstance(value, Mapping):
                raise ParsingError(f"expected a mapping, got {type(value).__name__}")
            items = list(value.items())
        else:
            if not isinstance(value, (list, tuple, set, frozenset)):
                raise ParsingError(f"expected {container.__name__}, got {type(value).__name__}")
            items = list(enumerate(value))

        parsed = []
        for key, element in items:
            try:
                parsed.append((key, self._parse_element(candidate, element, context)))
            except ParsingError as e:
                raise e.nested_under(e.record, key) from e

        if container is dict:
            return dict(parsed)
        try:
            return container(element for _, element in parsed)
        except TypeError as e:
            raise ParsingError(f"elements are not hashable: {e}") from e

    def _parse_element(self, candidate: CandidateType, element: Any, context: FieldContext) -> Any:
        if element is None:
            if candidate.elements_nullable or any(c.kind == CandidateKind.ANY for c in candidate.elements):
                return None
            raise ParsingError("null element in collection of non-nullable elements")
        return self._parse_union(candidate.elements, element, context)


def parse_record(
    cls: type,
    raw: Any,
    group: Optional[str] = None,
    by_alias: bool = False,
    convert: bool = True,
    validate: bool = False,
) -> Any:
    """Parse `raw` into an instance of `cls`.

    Args:
        cls: Record class
        raw: Mapping or positional sequence
        group: Metadata group name, "default" when None
        by_alias: Read fields under their alias keys
        convert: Apply parse hooks and type coercion
        validate: Run validation in throwing mode on the finished record

    Returns:
        Instance of `cls`

    Raises:
        ParsingError: If raw data cannot be converted
        ValidationError: If validation was requested and failed
        SchemaDefinitionError: If the record declaration is broken
    """
    parser = RecordParser(group=group, by_alias=by_alias, convert=convert)
    record = parser.parse(cls, raw)
    if validate:
        validate_record(record, group=group, throw=True)
    return record

