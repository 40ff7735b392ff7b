"""Record type model.

A RecordType is computed from a class's constructor signature: the
ordered FieldSpecs plus the record-level metadata attached with
schema_metadata(). It is immutable once computed.
"""

import dataclasses
import inspect
import typing
from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import SchemaDefinitionError
from ..metadata import Group, MetadataEntry
from ..utils import DEFAULT_GROUP, get_logger
from .fields import MISSING, FieldSpec, build_field

logger = get_logger(__name__)


@dataclass(frozen=True)
class RecordType:
    """Declared shape of a record class."""

    cls: type
    fields: tuple
    entries: tuple = ()

    @property
    def name(self) -> str:
        return self.cls.__name__

    @property
    def field_names(self) -> list[str]:
        return [spec.name for spec in self.fields]

    def field(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def declared_groups(self) -> set[str]:
        """All group names declared on the record or any of its fields."""
        groups = {DEFAULT_GROUP}
        groups.update(entry.name for entry in self.entries if isinstance(entry, Group))
        for spec in self.fields:
            groups.update(spec.declared_groups)
        return groups

    def __len__(self) -> int:
        return len(self.fields)


def _resolve_hints(cls: type) -> dict[str, Any]:
    """Resolve annotations of the constructor, falling back to class annotations."""
    hints: dict[str, Any] = {}
    try:
        hints.update(typing.get_type_hints(cls, include_extras=True))
    except (NameError, TypeError) as e:
        logger.debug(f"Could not resolve class annotations of {cls.__name__}: {e}")

    init = cls.__dict__.get("__init__") if not dataclasses.is_dataclass(cls) else None
    if init is None:
        for base in cls.__mro__:
            if "__init__" in base.__dict__ and not dataclasses.is_dataclass(base):
                init = base.__dict__["__init__"]
                break
    if init is not None and init is not object.__init__:
        try:
            hints.update(typing.get_type_hints(init, include_extras=True))
        except (NameError, TypeError) as e:
            logger.debug(f"Could not resolve constructor annotations of {cls.__name__}: {e}")
    hints.pop("return", None)
    return hints


def _dataclass_factories(cls: type) -> dict[str, Any]:
    if not dataclasses.is_dataclass(cls):
        return {}
    return {
        f.name: f.default_factory
        for f in dataclasses.fields(cls)
        if f.default_factory is not dataclasses.MISSING
    }


def build_record_type(cls: type) -> RecordType:
    """Compute the RecordType of a class from its constructor signature.

    Args:
        cls: Record class

    Returns:
        RecordType with fields in constructor parameter order

    Raises:
        SchemaDefinitionError: If the signature cannot be inspected or
            the record metadata is malformed
    """
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError) as e:
        raise SchemaDefinitionError(f"Cannot inspect constructor of {cls.__name__}: {e}") from e

    hints = _resolve_hints(cls)
    factories = _dataclass_factories(cls)

    fields = []
    for param in signature.parameters.values():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        hint = hints.get(param.name, param.annotation)
        if hint is inspect.Parameter.empty:
            hint = Any
        factory = factories.get(param.name)
        if factory is not None:
            default = MISSING
        elif param.default is inspect.Parameter.empty:
            default = MISSING
        else:
            default = param.default
        fields.append(build_field(param.name, hint, default=default, default_factory=factory))

    entries = tuple(getattr(cls, "__schema_metadata__", ()))
    for entry in entries:
        if not isinstance(entry, MetadataEntry):
            raise SchemaDefinitionError(f"{cls.__name__}: not a metadata entry: {entry!r}")

    record_type = RecordType(cls=cls, fields=tuple(fields), entries=entries)
    logger.debug(f"Built record type {cls.__name__} with fields {record_type.field_names}")
    return record_type
