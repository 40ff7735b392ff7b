"""Object adapters for foreign binding.

ObjectAdapter exposes any object through the field-map interfaces.
Classes can declare explicit accessors with field_getter / field_setter
instead of relying on attribute names alone.
"""

import inspect
from typing import Any, Callable

from ..utils import get_logger

logger = get_logger(__name__)

GETTER_MARK = "__marshalkit_getter__"
SETTER_MARK = "__marshalkit_setter__"


def field_getter(name: str) -> Callable:
    """Mark a method as the reader of field `name`.

    Example:
        class Legacy:
            @field_getter("created_at")
            def get_created(self):
                return self._created
    """

    def decorate(func: Callable) -> Callable:
        setattr(func, GETTER_MARK, name)
        return func

    return decorate


def field_setter(name: str) -> Callable:
    """Mark a method as the writer of field `name`."""

    def decorate(func: Callable) -> Callable:
        setattr(func, SETTER_MARK, name)
        return func

    return decorate


def _marked_methods(cls: type, mark: str) -> dict[str, str]:
    methods = {}
    for attr, member in inspect.getmembers(cls, callable):
        name = getattr(member, mark, None)
        if name is not None:
            methods[name] = attr
    return methods


class ObjectAdapter:
    """Reads and writes fields of an arbitrary object by canonical name."""

    def __init__(self, obj: Any):
        self.obj = obj
        self._getters = _marked_methods(type(obj), GETTER_MARK)
        self._setters = _marked_methods(type(obj), SETTER_MARK)

    def get_field_map(self) -> dict[str, Any]:
        """Collect readable fields: marked getters, then public attributes."""
        fields = {}
        for name, attr in self._getters.items():
            fields[name] = getattr(self.obj, attr)()
        for name, value in self._public_attributes().items():
            fields.setdefault(name, value)
        return fields

    def get_field(self, name: str, default: Any = None) -> Any:
        if name in self._getters:
            return getattr(self.obj, self._getters[name])()
        return getattr(self.obj, name, default)

    def set_field(self, name: str, value: Any) -> bool:
        """Write one field through the first channel that accepts it.

        Channels in priority order: marked setter method, writable
        attribute or property, virtual attribute.

        Returns:
            True when the value was written, False when the field was skipped
        """
        if name in self._setters:
            getattr(self.obj, self._setters[name])(value)
            return True

        declared = inspect.getattr_static(type(self.obj), name, None)
        if isinstance(declared, property):
            if declared.fset is None:
                logger.debug(f"Skipping read-only property {type(self.obj).__name__}.{name}")
                return False
            declared.fset(self.obj, value)
            return True

        try:
            setattr(self.obj, name, value)
        except (AttributeError, TypeError) as e:
            logger.debug(f"Skipping field {type(self.obj).__name__}.{name}: {e}")
            return False
        return True

    def _public_attributes(self) -> dict[str, Any]:
        values = {}
        names = list(getattr(self.obj, "__dict__", {}))
        slots = getattr(type(self.obj), "__slots__", ())
        names.extend([slots] if isinstance(slots, str) else slots)
        names.extend(
            attr for attr, member in inspect.getmembers(type(self.obj)) if isinstance(member, property)
        )
        for name in names:
            if name.startswith("_") or name in values:
                continue
            try:
                values[name] = getattr(self.obj, name)
            except AttributeError:
                continue
        return values
