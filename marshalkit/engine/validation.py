"""Validation engine.

Walks a constructed record, runs each field's validator chain and
recurses into nested records and into record elements of collections.
Failures are collected in a flat map keyed by dotted field path.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from ..exceptions import ValidationError
from ..record import get_groups, is_record_class
from ..utils import get_logger

logger = get_logger(__name__)


class StopWalk(Exception):
    """Internal signal ending the walk at the first failure."""

    pass


class RecordValidator:
    """Collects validation failures of one record tree."""

    def __init__(self, group: Optional[str] = None, stop_on_fail: bool = False):
        self.group = group
        self.stop_on_fail = stop_on_fail
        self.failures: dict[str, list[str]] = {}

    def run(self, record: Any) -> dict[str, list[str]]:
        """Validate `record` and return the failure map."""
        self.failures = {}
        try:
            self._walk(record, prefix=(), top_level=True)
        except StopWalk:
            logger.debug(f"Validation of {type(record).__name__} stopped at first failure")
        return self.failures

    def _fail(self, path: tuple, message: str) -> None:
        key = ".".join(str(part) for part in path)
        self.failures.setdefault(key, []).append(message)
        if self.stop_on_fail:
            raise StopWalk()

    def _walk(self, record: Any, prefix: tuple, top_level: bool = False) -> None:
        groups = get_groups(type(record), self.group, strict=top_level)
        for spec in groups.record_type.fields:
            value = getattr(record, spec.name, None)
            path = (*prefix, spec.name)
            for validator in groups.field(spec.name).validators:
                if not validator.check(value, record):
                    self._fail(path, validator.error_message(value))

            if is_record_class(type(value)):
                self._walk(value, path)
            elif isinstance(value, Mapping):
                self._walk_elements(value.items(), path)
            elif isinstance(value, (list, tuple, set, frozenset)):
                self._walk_elements(enumerate(value), path)

    def _walk_elements(self, items: Any, path: tuple) -> None:
        for key, element in items:
            if is_record_class(type(element)):
                self._walk(element, (*path, key))


def validate_record(
    record: Any,
    group: Optional[str] = None,
    throw: bool = False,
    stop_on_fail: bool = False,
    return_failures: bool = False,
) -> Union[bool, dict[str, list[str]]]:
    """Validate a record tree.

    Args:
        record: Record instance
        group: Metadata group name, "default" when None
        throw: Raise ValidationError on any failure
        stop_on_fail: Stop at the first failing predicate anywhere in the tree
        return_failures: Return the failure map instead of a boolean

    Returns:
        True when valid (False otherwise), or the failure map when
        `return_failures` is set

    Raises:
        ValidationError: If `throw` is set and validation failed
    """
    failures = RecordValidator(group=group, stop_on_fail=stop_on_fail).run(record)
    if failures and throw:
        raise ValidationError(failures)
    if return_failures:
        return failures
    return not failures
