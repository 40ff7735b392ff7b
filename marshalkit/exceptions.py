"""Error taxonomy for marshalkit.

Three categories are kept apart:

- SchemaDefinitionError: the record declaration itself is broken
  (unknown group, duplicate single-kind metadata, missing hook target).
- ParsingError: raw data could not be turned into a record.
- ValidationError: a constructed record failed its validators.

Errors raised by external codecs (malformed JSON, unreadable files)
are not wrapped and surface as-is.
"""

import json
from typing import Any, Iterable, Optional


class MarshalError(Exception):
    """Base exception for all marshalkit errors."""

    pass


class SchemaDefinitionError(MarshalError):
    """Raised when a record type or its metadata is declared incorrectly."""

    pass


def format_path(path: Iterable[Any]) -> str:
    """Render a field path as a dotted string.

    Args:
        path: Sequence of field names and element keys

    Returns:
        Dotted path, e.g. "events.0.name"
    """
    return ".".join(str(part) for part in path)


class ParsingError(MarshalError):
    """Raised when raw data cannot be converted into a record.

    Attributes:
        reason: Human-readable failure reason
        record: Name of the record type that owns the failing field
        path: Field names / element keys leading to the failing value
    """

    def __init__(
        self,
        reason: str,
        record: Optional[str] = None,
        path: tuple = (),
    ):
        self.reason = reason
        self.record = record
        self.path = tuple(path)
        super().__init__(self._render())

    def _render(self) -> str:
        location = self.record or ""
        if self.path:
            location = f"{location}.{format_path(self.path)}" if location else format_path(self.path)
        return f"{location}: {self.reason}" if location else self.reason

    def nested_under(self, record: str, *prefix: Any) -> "ParsingError":
        """Build a copy of this error located below a parent field.

        Args:
            record: Name of the parent record type
            *prefix: Parent field name and, for collections, element key

        Returns:
            New ParsingError with the prefixed path
        """
        return ParsingError(self.reason, record=record, path=(*prefix, *self.path))


class ValidationError(MarshalError):
    """Raised when validation fails in throwing mode.

    Attributes:
        failures: Map of dotted field path to failure messages
    """

    def __init__(self, failures: dict[str, list[str]]):
        self.failures = failures
        fields = "`, `".join(failures.keys())
        details = json.dumps(failures, indent=4, ensure_ascii=False)
        super().__init__(f"Validation for field(s) `{fields}` failed:\n{details}")
