"""Record model and metadata resolution.

This module builds record types from class signatures and resolves
their metadata per group name.
"""

from .fields import (
    ANY_CANDIDATE,
    MISSING,
    CandidateKind,
    CandidateType,
    FieldSpec,
    build_field,
    candidate_for,
    collection_of,
    is_record_class,
)
from .record_type import RecordType, build_record_type
from .resolver import (
    RecordGroups,
    clear_caches,
    get_groups,
    get_record_type,
    merge_entries,
    resolve_field_group,
    resolve_groups,
    resolve_schema_group,
)

__all__ = [
    "ANY_CANDIDATE",
    "MISSING",
    "CandidateKind",
    "CandidateType",
    "FieldSpec",
    "RecordGroups",
    "RecordType",
    "build_field",
    "build_record_type",
    "candidate_for",
    "collection_of",
    "clear_caches",
    "get_groups",
    "get_record_type",
    "is_record_class",
    "merge_entries",
    "resolve_field_group",
    "resolve_groups",
    "resolve_schema_group",
]
