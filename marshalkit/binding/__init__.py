"""Foreign-object binding.

This module moves field maps between records and arbitrary Python
objects through explicit read/write capabilities.
"""

from .adapters import ObjectAdapter, field_getter, field_setter
from .contract import (
    FieldMapSource,
    FieldMapTarget,
    apply_field_map,
    as_source,
    as_target,
    extract_field_map,
    read_field_map,
)

__all__ = [
    "FieldMapSource",
    "FieldMapTarget",
    "ObjectAdapter",
    "apply_field_map",
    "as_source",
    "as_target",
    "extract_field_map",
    "field_getter",
    "field_setter",
    "read_field_map",
]
