"""Uniform value-to-display routine.

Used to build validation failure messages and debug strings, so every
value is rendered the same way wherever it appears.
"""

import dataclasses
import json
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return list(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict(stringify=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if hasattr(value, "__dict__"):
        return vars(value)
    return repr(value)


def to_json_text(value: Any, pretty: bool = False) -> str:
    """Render a value as JSON, tolerating dates, enums and plain objects."""
    if pretty:
        return json.dumps(value, indent=4, ensure_ascii=False, default=_json_default)
    return json.dumps(value, ensure_ascii=False, default=_json_default)


def describe_value(value: Any) -> str:
    """Produce a readable representation of any value.

    Strings are quoted, collections are JSON-rendered, dates use ISO format,
    enums render their value, and other objects render as their class name
    followed by their JSON content.

    Args:
        value: Value to describe

    Returns:
        Display string
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return to_json_text(value if not isinstance(value, (set, frozenset)) else sorted(value, key=str))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, bytes):
        return repr(value)
    return f"{type(value).__name__}{to_json_text(value, pretty=True)}"
