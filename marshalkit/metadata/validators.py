"""Validator entries.

Each validator is a repeatable metadata entry with a predicate and a
failure message. Predicates never raise on incomparable values: an
ordering comparison that Python rejects counts as a failed check.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, time
from typing import Any, Optional, Union

from ..utils import describe_value
from .entries import RepeatableEntry, resolve_hook

Comparable = Union[int, float, str, date, time]


def _length(value: Any) -> int:
    if value is None:
        return 0
    return len(value)


def _members(value: Any) -> Any:
    if isinstance(value, Mapping):
        return list(value.values())
    return value


class BaseValidation(RepeatableEntry):
    """Base class for validators.

    Subclasses implement check() and error_message().
    """

    kind = "validator"

    def check(self, value: Any, record: Any) -> bool:
        """Return True when `value` satisfies the predicate."""
        raise NotImplementedError

    def error_message(self, value: Any) -> str:
        """Return the failure message for `value`."""
        raise NotImplementedError


@dataclass(frozen=True)
class Contains(BaseValidation):
    """Collection or string must contain `value`."""

    value: Any

    def check(self, value: Any, record: Any) -> bool:
        try:
            return self.value in _members(value)
        except TypeError:
            return False

    def error_message(self, value: Any) -> str:
        return f"{describe_value(self.value)} ∉ {describe_value(value)}"


@dataclass(frozen=True)
class HasNo(BaseValidation):
    """Collection or string must not contain `value`."""

    value: Any

    def check(self, value: Any, record: Any) -> bool:
        try:
            return self.value not in _members(value)
        except TypeError:
            return False

    def error_message(self, value: Any) -> str:
        return f"{describe_value(self.value)} ∈ {describe_value(value)}"


@dataclass(frozen=True)
class Exactly(BaseValidation):
    """Value must equal `value` (compared after parsing)."""

    value: Any

    def check(self, value: Any, record: Any) -> bool:
        return value == self.value

    def error_message(self, value: Any) -> str:
        return f"{describe_value(value)} != {describe_value(self.value)}"


@dataclass(frozen=True)
class GreaterThan(BaseValidation):
    """Value must be greater than (or equal to) `value`."""

    value: Comparable
    or_equal: bool = False

    def check(self, value: Any, record: Any) -> bool:
        try:
            return value >= self.value if self.or_equal else value > self.value
        except TypeError:
            return False

    def error_message(self, value: Any) -> str:
        sign = "<" if self.or_equal else "<="
        return f"{describe_value(value)} {sign} {describe_value(self.value)}"


@dataclass(frozen=True)
class LowerThan(BaseValidation):
    """Value must be lower than (or equal to) `value`."""

    value: Comparable
    or_equal: bool = False

    def check(self, value: Any, record: Any) -> bool:
        try:
            return value <= self.value if self.or_equal else value < self.value
        except TypeError:
            return False

    def error_message(self, value: Any) -> str:
        sign = ">" if self.or_equal else ">="
        return f"{describe_value(value)} {sign} {describe_value(self.value)}"


@dataclass(frozen=True)
class Length(BaseValidation):
    """Length of a string or collection must be within [min, max]."""

    min: int = 0
    max: Optional[int] = None

    def check(self, value: Any, record: Any) -> bool:
        try:
            size = _length(value)
        except TypeError:
            return False
        return size >= self.min and (self.max is None or size <= self.max)

    def error_message(self, value: Any) -> str:
        try:
            size = str(_length(value))
        except TypeError:
            size = "?"
        upper = "inf" if self.max is None else self.max
        return f"{self.min} <= len({describe_value(value)})={size} <= {upper}"


@dataclass(frozen=True)
class NotEmpty(BaseValidation):
    """Value must be truthy."""

    def check(self, value: Any, record: Any) -> bool:
        return bool(value)

    def error_message(self, value: Any) -> str:
        return f"!empty({describe_value(value)})"


@dataclass(frozen=True)
class NotNull(BaseValidation):
    """Value must not be None."""

    def check(self, value: Any, record: Any) -> bool:
        return value is not None

    def error_message(self, value: Any) -> str:
        return "NULL"


@dataclass(frozen=True, init=False)
class OneOf(BaseValidation):
    """Value must be one of the allowed values."""

    values: tuple

    def __init__(self, values):
        object.__setattr__(self, "values", tuple(values))

    def check(self, value: Any, record: Any) -> bool:
        return value in self.values

    def error_message(self, value: Any) -> str:
        return f"{describe_value(value)} ∉ {describe_value(list(self.values))}"


@dataclass(frozen=True, init=False)
class NotIn(BaseValidation):
    """Value must not be one of the forbidden values."""

    values: tuple

    def __init__(self, values):
        object.__setattr__(self, "values", tuple(values))

    def check(self, value: Any, record: Any) -> bool:
        return value not in self.values

    def error_message(self, value: Any) -> str:
        return f"{describe_value(value)} in {describe_value(list(self.values))}"


@dataclass(frozen=True)
class Plain(BaseValidation):
    """Collection must not contain nested collections."""

    def check(self, value: Any, record: Any) -> bool:
        if value is None:
            return True
        return not any(isinstance(item, (list, tuple, dict)) for item in _members(value))

    def error_message(self, value: Any) -> str:
        return f"{describe_value(value)} has nested arrays"


@dataclass(frozen=True)
class Validator(BaseValidation):
    """Custom predicate: a callable, an object/class method or a record method.

    A string reference names a method of the record; it is called bound
    to the record instance being validated.
    """

    ref: Any
    method: Optional[str] = None
    message: Optional[str] = None

    def check(self, value: Any, record: Any) -> bool:
        func = resolve_hook(self.ref, self.method, type(record), instance=record)
        return bool(func(value))

    def error_message(self, value: Any) -> str:
        if self.message:
            return self.message
        name = self.method or (self.ref if isinstance(self.ref, str) else getattr(self.ref, "__name__", "validator"))
        return f"{name}({describe_value(value)})"
