"""Metadata model.

This module defines the declarative entries attached to record fields
and record types, the validator entries, and the resolved group bag.
"""

from .entries import (
    Alias,
    ArrayOf,
    DateTimeFormat,
    DumpHook,
    DumpJSON,
    Dumper,
    Group,
    MetadataEntry,
    ParseHook,
    ParseJSON,
    Parser,
    Propagate,
    RepeatableEntry,
    SingleEntry,
    resolve_hook,
    schema_metadata,
)
from .group import ResolvedGroup
from .validators import (
    BaseValidation,
    Contains,
    Exactly,
    GreaterThan,
    HasNo,
    Length,
    LowerThan,
    NotEmpty,
    NotIn,
    NotNull,
    OneOf,
    Plain,
    Validator,
)

__all__ = [
    "Alias",
    "ArrayOf",
    "BaseValidation",
    "Contains",
    "DateTimeFormat",
    "DumpHook",
    "DumpJSON",
    "Dumper",
    "Exactly",
    "GreaterThan",
    "Group",
    "HasNo",
    "Length",
    "LowerThan",
    "MetadataEntry",
    "NotEmpty",
    "NotIn",
    "NotNull",
    "OneOf",
    "ParseHook",
    "ParseJSON",
    "Parser",
    "Plain",
    "Propagate",
    "RepeatableEntry",
    "ResolvedGroup",
    "SingleEntry",
    "Validator",
    "resolve_hook",
    "schema_metadata",
]
