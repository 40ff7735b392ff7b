"""marshalkit: typed-record marshalling.

Converts between loosely-structured data (mappings, JSON, query strings,
environment variables, foreign objects, YAML snapshots, DataFrames) and
typed record instances, driven by metadata declared on record fields.
"""

from .binding import (
    FieldMapSource,
    FieldMapTarget,
    ObjectAdapter,
    apply_field_map,
    extract_field_map,
    field_getter,
    field_setter,
)
from .config import EngineSettings, SettingsError, configure, get_settings, load_settings, reset_settings
from .engine import dump_record, parse_record, validate_record
from .exceptions import MarshalError, ParsingError, SchemaDefinitionError, ValidationError
from .metadata import (
    Alias,
    ArrayOf,
    BaseValidation,
    Contains,
    DateTimeFormat,
    DumpHook,
    DumpJSON,
    Dumper,
    Exactly,
    GreaterThan,
    Group,
    HasNo,
    Length,
    LowerThan,
    NotEmpty,
    NotIn,
    NotNull,
    OneOf,
    ParseHook,
    ParseJSON,
    Parser,
    Plain,
    Propagate,
    Validator,
    schema_metadata,
)
from .record import get_groups, get_record_type
from .schema import Schema
from .types import DateRange, DateTimeRange, TimeRange
from .utils import APP_VERSION as __version__
from .utils import get_logger, setup_logging

__all__ = [
    "Alias",
    "ArrayOf",
    "BaseValidation",
    "Contains",
    "DateRange",
    "DateTimeFormat",
    "DateTimeRange",
    "DumpHook",
    "DumpJSON",
    "Dumper",
    "EngineSettings",
    "Exactly",
    "FieldMapSource",
    "FieldMapTarget",
    "GreaterThan",
    "Group",
    "HasNo",
    "Length",
    "LowerThan",
    "MarshalError",
    "NotEmpty",
    "NotIn",
    "NotNull",
    "ObjectAdapter",
    "OneOf",
    "ParseHook",
    "ParseJSON",
    "Parser",
    "ParsingError",
    "Plain",
    "Propagate",
    "Schema",
    "SchemaDefinitionError",
    "SettingsError",
    "TimeRange",
    "ValidationError",
    "Validator",
    "apply_field_map",
    "configure",
    "dump_record",
    "extract_field_map",
    "field_getter",
    "field_setter",
    "get_groups",
    "get_logger",
    "get_record_type",
    "get_settings",
    "load_settings",
    "parse_record",
    "reset_settings",
    "schema_metadata",
    "setup_logging",
    "validate_record",
]
