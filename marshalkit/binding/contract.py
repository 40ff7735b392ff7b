"""Foreign-binding contract.

The engine only talks to foreign objects through two capabilities: a
source that hands over a field map, and a target that accepts fields one
by one. ObjectAdapter implements both for ordinary Python objects.
"""

import inspect
from typing import Any, Optional, Protocol, runtime_checkable

from ..engine import field_values
from ..record import get_groups
from ..utils import get_logger
from .adapters import ObjectAdapter

logger = get_logger(__name__)


@runtime_checkable
class FieldMapSource(Protocol):
    """Object able to hand over its fields as a name -> value map."""

    def get_field_map(self) -> dict[str, Any]: ...


@runtime_checkable
class FieldMapTarget(Protocol):
    """Object able to accept fields by canonical name."""

    def set_field(self, name: str, value: Any) -> bool: ...


def as_source(obj: Any) -> FieldMapSource:
    if isinstance(obj, FieldMapSource):
        return obj
    return ObjectAdapter(obj)


def as_target(obj: Any) -> FieldMapTarget:
    if isinstance(obj, FieldMapTarget):
        return obj
    return ObjectAdapter(obj)


def read_field_map(obj: Any) -> dict[str, Any]:
    """Read the field map of a foreign object or mapping."""
    if isinstance(obj, dict):
        return dict(obj)
    return as_source(obj).get_field_map()


def _constructor_arguments(cls: type, field_map: dict[str, Any]) -> dict[str, Any]:
    try:
        parameters = inspect.signature(cls).parameters
    except (TypeError, ValueError):
        return {}
    accepts_any = any(p.kind == inspect.Parameter.VAR_KEYWORD for p in parameters.values())
    if accepts_any:
        return dict(field_map)
    return {
        name: value
        for name, value in field_map.items()
        if name in parameters
        and parameters[name].kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
    }


def apply_field_map(target: Any, field_map: dict[str, Any]) -> Any:
    """Write a field map into a foreign object.

    When `target` is a class, fields matching constructor parameters are
    passed at construction; the remaining fields go through the target's
    set_field channel. Fields no channel accepts are skipped.

    Args:
        target: Class to instantiate or object to update
        field_map: Canonical field name -> value

    Returns:
        The constructed or updated object

    Raises:
        TypeError: If the class constructor rejects the arguments
    """
    remaining = dict(field_map)
    if isinstance(target, type):
        arguments = _constructor_arguments(target, remaining)
        obj = target(**arguments)
        for name in arguments:
            remaining.pop(name)
    else:
        obj = target

    writer = as_target(obj)
    for name, value in remaining.items():
        if not writer.set_field(name, value):
            logger.debug(f"No channel accepted field '{name}' on {type(obj).__name__}")
    return obj


def extract_field_map(
    record: Any,
    group: Optional[str] = None,
    by_alias: bool = False,
) -> dict[str, Any]:
    """Shallow field map of a record, keyed by canonical name or alias.

    Nested records and dates are handed over as objects, not dumped.
    """
    values = field_values(record)
    if not by_alias:
        return values
    groups = get_groups(type(record), group)
    return {groups.external_name(name, True): value for name, value in values.items()}
