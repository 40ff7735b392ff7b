"""Parse, dump and validation engine.

This module converts raw data into record instances and back, and
validates record trees.
"""

from .coercion import (
    coerce_datetime,
    coerce_enum,
    coerce_primitive,
    default_pattern,
    dump_datetime,
    is_instance,
    resolve_pattern,
)
from .dumper import RecordDumper, dump_record, field_values
from .parser import RecordParser, parse_record
from .validation import RecordValidator, validate_record

__all__ = [
    "RecordDumper",
    "RecordParser",
    "RecordValidator",
    "coerce_datetime",
    "coerce_enum",
    "coerce_primitive",
    "default_pattern",
    "dump_datetime",
    "dump_record",
    "field_values",
    "is_instance",
    "parse_record",
    "resolve_pattern",
    "validate_record",
]
