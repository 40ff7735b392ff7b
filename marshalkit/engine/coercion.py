"""Scalar coercion between raw values and typed values.

Covers primitives, enums and date/time types in both directions. Failures
raise ParsingError without a location; the parser adds the field path.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from ..config import EngineSettings
from ..exceptions import ParsingError
from ..metadata import DateTimeFormat, ResolvedGroup
from ..utils import UNIX_FORMAT

TRUE_STRINGS = {"true", "1", "yes", "on"}
FALSE_STRINGS = {"false", "0", "no", "off", ""}


def is_instance(value: Any, target: type) -> bool:
    """isinstance() with the distinctions marshalling needs.

    bool is not accepted as int/float, datetime is not accepted as date,
    and int is accepted as float.
    """
    if target is Any or target is object:
        return True
    if isinstance(value, bool) and target is not bool:
        return False
    if target is float:
        return isinstance(value, (int, float))
    if target is date:
        return isinstance(value, date) and not isinstance(value, datetime)
    return isinstance(value, target)


def coerce_primitive(target: type, value: Any) -> Any:
    """Convert a raw value into a primitive type.

    Strings convert to numbers and booleans, integers to floats and
    decimals. Anything else is rejected.

    Raises:
        ParsingError: If no lossless conversion exists
    """
    if is_instance(value, target):
        return value

    if target is bool:
        if isinstance(value, str) and value.strip().lower() in TRUE_STRINGS:
            return True
        if isinstance(value, str) and value.strip().lower() in FALSE_STRINGS:
            return False
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
    elif target is int:
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        elif isinstance(value, float) and value.is_integer():
            return int(value)
    elif target is float:
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                pass
        elif isinstance(value, Decimal):
            return float(value)
    elif target is Decimal:
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            try:
                return Decimal(str(value).strip())
            except InvalidOperation:
                pass
    elif target is bytes and isinstance(value, str):
        return value.encode("utf-8")

    raise ParsingError(f"cannot parse {type(value).__name__} {value!r} as {target.__name__}")


def coerce_enum(target: type[Enum], value: Any) -> Enum:
    """Convert a raw value into an enum member.

    Tries the member value first, then the member name, then the ordinal
    position.

    Raises:
        ParsingError: If no member matches
    """
    if isinstance(value, target):
        return value
    try:
        return target(value)
    except ValueError:
        pass
    if isinstance(value, str) and value in target.__members__:
        return target.__members__[value]
    if isinstance(value, int) and not isinstance(value, bool):
        members = list(target)
        if 0 <= value < len(members):
            return members[value]
    raise ParsingError(f"cannot parse {value!r} as {target.__name__}")


def default_pattern(target: type, settings: EngineSettings) -> str:
    """Universal default pattern for a date/time type."""
    if issubclass(target, datetime):
        return settings.datetime_format
    if issubclass(target, date):
        return settings.date_format
    return settings.time_format


def resolve_pattern(
    target: type,
    field_group: Optional[ResolvedGroup],
    schema_group: Optional[ResolvedGroup],
    settings: EngineSettings,
) -> str:
    """Pick the date/time pattern: field group, then record group, then default."""
    for resolved in (field_group, schema_group):
        if resolved is None:
            continue
        entry: Optional[DateTimeFormat] = resolved.datetime_format
        if entry is not None:
            return entry.pattern
    return default_pattern(target, settings)


def _from_timestamp(target: type, seconds: float) -> Any:
    if issubclass(target, datetime):
        return target.fromtimestamp(seconds)
    if issubclass(target, date):
        return datetime.fromtimestamp(seconds).date()
    if not 0 <= seconds < 86400:
        raise ParsingError(f"{seconds!r} is not a number of seconds within a day")
    return (datetime.min + timedelta(seconds=seconds)).time()


def coerce_datetime(target: type, value: Any, pattern: str) -> Any:
    """Convert a raw value into a datetime, date or time.

    Strings are parsed with `pattern` ("unix" meaning integer epoch
    seconds); numbers are epoch seconds (seconds since midnight for time).

    Raises:
        ParsingError: If the value does not match
    """
    if is_instance(value, target):
        return value
    if isinstance(value, bool):
        raise ParsingError(f"cannot parse bool as {target.__name__}")

    if isinstance(value, datetime) and target is date:
        return value.date()
    if isinstance(value, date) and not isinstance(value, datetime) and issubclass(target, datetime):
        return target.combine(value, time())

    if isinstance(value, (int, float)):
        return _from_timestamp(target, value)

    if isinstance(value, str):
        if pattern == UNIX_FORMAT:
            try:
                return _from_timestamp(target, float(value.strip()))
            except ValueError as e:
                raise ParsingError(f"cannot parse {value!r} as {target.__name__}: not a unix timestamp") from e
        try:
            parsed = datetime.strptime(value, pattern)
        except ValueError as e:
            raise ParsingError(
                f"cannot parse {value!r} as {target.__name__}: bad datetime format, expected '{pattern}'"
            ) from e
        if issubclass(target, datetime):
            return parsed if target is datetime else target.combine(parsed.date(), parsed.time())
        if issubclass(target, date):
            return parsed.date()
        return parsed.time()

    raise ParsingError(f"cannot parse {type(value).__name__} as date/time type {target.__name__}")


def dump_datetime(value: Any, pattern: str) -> Any:
    """Render a datetime, date or time with `pattern` ("unix" gives an int)."""
    if pattern == UNIX_FORMAT:
        if isinstance(value, datetime):
            return int(value.timestamp())
        if isinstance(value, date):
            return int(datetime.combine(value, time()).timestamp())
        return value.hour * 3600 + value.minute * 60 + value.second
    return value.strftime(pattern)


def dump_enum(value: Enum) -> Any:
    return value.value
