"""Schema base class.

Record classes subclass Schema (usually as dataclasses) and gain the
entry points for parsing, dumping, validating and binding.

Example:
    @dataclass
    class User(Schema):
        name: Annotated[str, NotEmpty()]
        born: Annotated[date, Alias("birthDate")]

    user = User.from_json('{"name": "Ann", "birthDate": "1990-04-01"}')
    user.to_dict(stringify=True)
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import pandas as pd

from .binding import apply_field_map, extract_field_map, read_field_map
from .codecs import (
    SnapshotWriter,
    decode_json,
    decode_json_object,
    decode_query,
    encode_json,
    encode_query,
    frame_to_rows,
    read_environment,
    read_snapshot_file,
    rows_to_frame,
)
from .engine import dump_record, field_values, parse_record, validate_record
from .record import get_groups
from .utils import VALIDATE_EXCLUDE, VALIDATE_INCLUDE, VALIDATE_NO, VALIDATE_THROW, VALIDATION_MODES, get_logger

logger = get_logger(__name__)


class Schema:
    """Base class of marshalkit records."""

    __marshalkit_record__ = True

    # Parsing

    @classmethod
    def from_dict(
        cls,
        raw: Union[Mapping, list, tuple],
        by_alias: bool = False,
        validate: bool = True,
        convert: bool = True,
        group: Optional[str] = None,
    ):
        """Build a record from a mapping or a positional sequence.

        Args:
            raw: Mapping keyed by field name (or alias), or positional values
            by_alias: Read fields under their alias keys
            validate: Validate the finished record, raising on failure
            convert: Apply parse hooks and type coercion
            group: Metadata group name

        Returns:
            New record instance

        Raises:
            ParsingError: If raw data cannot be converted
            ValidationError: If validation fails
        """
        return parse_record(
            cls, raw, group=group, by_alias=by_alias, convert=convert, validate=validate
        )

    @classmethod
    def _with_extra(cls, raw: Mapping, extra: Optional[Mapping], by_alias: bool, group: Optional[str]) -> dict:
        """Overlay `extra` (keyed by canonical name) on decoded input."""
        merged = dict(raw)
        if not extra:
            return merged
        groups = get_groups(cls, group)
        for name, value in extra.items():
            key = groups.external_name(name, by_alias) if name in groups.fields else name
            merged.pop(name, None)
            merged[key] = value
        return merged

    @classmethod
    def from_json(
        cls,
        text: Union[str, bytes],
        extra: Optional[Mapping] = None,
        by_alias: bool = True,
        validate: bool = True,
        group: Optional[str] = None,
    ):
        """Build a record from JSON text.

        Raises:
            json.JSONDecodeError: If the text is malformed
        """
        raw = cls._with_extra(decode_json_object(text), extra, by_alias, group)
        return cls.from_dict(raw, by_alias=by_alias, validate=validate, group=group)

    @classmethod
    def from_query(
        cls,
        query: str,
        by_alias: bool = True,
        validate: bool = True,
        extra: Optional[Mapping] = None,
        group: Optional[str] = None,
    ):
        """Build a record from a bracket-notation query string."""
        raw = cls._with_extra(decode_query(query), extra, by_alias, group)
        return cls.from_dict(raw, by_alias=by_alias, validate=validate, group=group)

    @classmethod
    def from_env(
        cls,
        by_alias: bool = True,
        extra: Optional[Mapping] = None,
        validate: bool = True,
        group: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Build a record from environment variables, one per field.

        Unset variables are left out, so field defaults apply.
        """
        names = cls.field_names(by_alias=by_alias, group=group)
        raw = cls._with_extra(read_environment(names, environ), extra, by_alias, group)
        return cls.from_dict(raw, by_alias=by_alias, validate=validate, group=group)

    @classmethod
    def from_object(
        cls,
        obj: Any,
        extra: Optional[Mapping] = None,
        by_alias: bool = False,
        validate: bool = True,
        group: Optional[str] = None,
    ):
        """Build a record from the fields of a foreign object."""
        raw = cls._with_extra(read_field_map(obj), extra, by_alias, group)
        return cls.from_dict(raw, by_alias=by_alias, validate=validate, group=group)

    @classmethod
    def from_many(
        cls,
        rows: Union[Mapping, Iterable],
        by_alias: bool = True,
        convert: bool = True,
        validate: str = VALIDATE_NO,
        group: Optional[str] = None,
    ) -> dict:
        """Build records from many rows.

        Args:
            rows: Mapping of key to row, or an iterable of rows
            by_alias: Read fields under their alias keys
            convert: Apply parse hooks and type coercion
            validate: "no" skips validation, "throw" raises on the first
                invalid row, "exclude" keeps only valid rows and "include"
                keeps only invalid rows
            group: Metadata group name

        Returns:
            Dict of row key (or position) to record, in input order

        Raises:
            ValueError: If `validate` is not a known mode
            ValidationError: In "throw" mode, for the first invalid row
        """
        if validate not in VALIDATION_MODES:
            raise ValueError(f"Unknown validation mode: {validate}. Expected one of: {', '.join(VALIDATION_MODES)}")

        items = rows.items() if isinstance(rows, Mapping) else enumerate(rows)
        result = {}
        for key, row in items:
            record = cls.from_dict(
                row,
                by_alias=by_alias,
                validate=validate == VALIDATE_THROW,
                convert=convert,
                group=group,
            )
            if validate in (VALIDATE_EXCLUDE, VALIDATE_INCLUDE):
                valid = record.validate(stop_on_fail=True, group=group)
                if valid != (validate == VALIDATE_EXCLUDE):
                    continue
            result[key] = record
        logger.debug(f"Parsed {len(result)} {cls.__name__} record(s) with validate={validate}")
        return result

    @classmethod
    def from_json_many(
        cls,
        text: Union[str, bytes],
        by_alias: bool = True,
        validate: str = VALIDATE_NO,
        group: Optional[str] = None,
    ) -> dict:
        """Build records from JSON text holding an array or an object of rows."""
        return cls.from_many(decode_json(text), by_alias=by_alias, validate=validate, group=group)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        by_alias: bool = True,
        convert: bool = True,
        validate: str = VALIDATE_NO,
        group: Optional[str] = None,
    ) -> dict:
        """Build one record per DataFrame row, keyed by row position."""
        return cls.from_many(
            frame_to_rows(df), by_alias=by_alias, convert=convert, validate=validate, group=group
        )

    @classmethod
    def read_snapshot(
        cls,
        path: Union[str, Path],
        by_alias: bool = True,
        validate: bool = True,
        group: Optional[str] = None,
    ):
        """Build a record from a YAML snapshot written by write_snapshot()."""
        return cls.from_dict(
            read_snapshot_file(path), by_alias=by_alias, validate=validate, group=group
        )

    # Introspection

    @classmethod
    def field_names(cls, by_alias: bool = False, group: Optional[str] = None) -> list[str]:
        """Declared field names in constructor order, optionally aliased."""
        groups = get_groups(cls, group)
        return [groups.external_name(name, by_alias) for name in groups.record_type.field_names]

    def get_fields(self, by_alias: bool = False, group: Optional[str] = None) -> dict[str, Any]:
        """Shallow map of field name to current value."""
        return extract_field_map(self, group=group, by_alias=by_alias)

    # Dumping

    def to_dict(
        self,
        skip_nulls: bool = False,
        by_alias: bool = False,
        stringify: bool = False,
        group: Optional[str] = None,
    ) -> dict[str, Any]:
        """Dump the record tree into plain data.

        Args:
            skip_nulls: Omit fields whose dumped value is None
            by_alias: Rename keys to their aliases
            stringify: Render dates and enums and apply dump hooks
            group: Metadata group name
        """
        return dump_record(
            self, group=group, skip_nulls=skip_nulls, by_alias=by_alias, stringify=stringify
        )

    def to_json(
        self,
        pretty: bool = False,
        skip_nulls: bool = False,
        by_alias: bool = True,
        group: Optional[str] = None,
    ) -> str:
        data = self.to_dict(skip_nulls=skip_nulls, by_alias=by_alias, stringify=True, group=group)
        return encode_json(data, pretty=pretty)

    def to_query(
        self,
        skip_nulls: bool = True,
        by_alias: bool = True,
        omit: Iterable[str] = (),
        group: Optional[str] = None,
    ) -> str:
        data = self.to_dict(skip_nulls=skip_nulls, by_alias=by_alias, stringify=True, group=group)
        return encode_query(data, omit=omit)

    @classmethod
    def to_dataframe(
        cls,
        records: Iterable["Schema"],
        by_alias: bool = False,
        stringify: bool = False,
        group: Optional[str] = None,
    ) -> pd.DataFrame:
        """Build a DataFrame with one row per record and one column per field."""
        rows = [
            record.to_dict(by_alias=by_alias, stringify=stringify, group=group)
            for record in records
        ]
        return rows_to_frame(rows, columns=cls.field_names(by_alias=by_alias, group=group))

    def write_snapshot(self, path: Union[str, Path], group: Optional[str] = None) -> Path:
        """Write the stringified dump of this record to a YAML snapshot."""
        data = self.to_dict(by_alias=False, stringify=True, group=group)
        return SnapshotWriter().write(data, path)

    # Validation

    def validate(
        self,
        throw: bool = False,
        stop_on_fail: bool = False,
        return_failures: bool = False,
        group: Optional[str] = None,
    ) -> Union[bool, dict[str, list[str]]]:
        """Run the validators of this record tree.

        Args:
            throw: Raise ValidationError on any failure
            stop_on_fail: Stop at the first failing predicate
            return_failures: Return the failure map instead of a boolean
            group: Metadata group name

        Returns:
            True when valid, or the failure map when `return_failures` is set

        Raises:
            ValidationError: If `throw` is set and validation failed
        """
        return validate_record(
            self,
            group=group,
            throw=throw,
            stop_on_fail=stop_on_fail,
            return_failures=return_failures,
        )

    # Copies and foreign objects

    def update(
        self,
        updates: Optional[Mapping] = None,
        by_alias: bool = False,
        validate: bool = True,
        group: Optional[str] = None,
    ):
        """Return a copy with `updates` applied; an empty update copies the record.

        Keys that name no field are ignored, as when parsing.

        Raises:
            ValidationError: If `validate` is set and the copy is invalid
        """
        fields = field_values(self)
        if updates:
            groups = get_groups(type(self), group)
            canonical = {groups.external_name(name, by_alias): name for name in fields}
            for key, value in updates.items():
                name = canonical.get(key, key)
                if name not in fields:
                    logger.debug(f"Ignoring unknown field '{key}' in update of {type(self).__name__}")
                    continue
                fields[name] = value
        copy = type(self)(**fields)
        if validate:
            copy.validate(throw=True, group=group)
        return copy

    def build_object(
        self,
        target: type,
        extra: Optional[Mapping] = None,
        by_alias: bool = False,
        group: Optional[str] = None,
    ) -> Any:
        """Construct an instance of a foreign class from this record's fields."""
        fields = {**self.get_fields(by_alias=by_alias, group=group), **(extra or {})}
        return apply_field_map(target, fields)

    def update_object(
        self,
        obj: Any,
        extra: Optional[Mapping] = None,
        by_alias: bool = False,
        group: Optional[str] = None,
    ) -> Any:
        """Write this record's fields into an existing foreign object."""
        fields = {**self.get_fields(by_alias=by_alias, group=group), **(extra or {})}
        return apply_field_map(obj, fields)

    def __str__(self) -> str:
        return type(self).__name__ + self.to_json(pretty=True, by_alias=False)
