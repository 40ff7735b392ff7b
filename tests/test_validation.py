from dataclasses import dataclass
from typing import Annotated

import pytest

from marshalkit import (
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
    Schema,
    ValidationError,
    Validator,
    validate_record,
)
from tests.schemas import Account, Address, Day, Event, Member, Person


def test_valid_record():
    assert Member.from_dict({"status": "ACTIVE", "age": 18}).validate() is True


def test_failure_map_has_one_key_per_failing_field():
    member = Member.from_dict({"status": "X", "age": 10}, validate=False)
    failures = member.validate(return_failures=True)
    assert set(failures) == {"status", "age"}
    assert failures["status"] == ["'X' ∉ [\"ACTIVE\", \"INACTIVE\"]"]
    assert failures["age"] == ["10 <= 17"]


def test_validate_returns_false_on_failure():
    member = Member.from_dict({"status": "X", "age": 10}, validate=False)
    assert member.validate() is False


def test_stop_on_fail_reports_single_failure():
    member = Member.from_dict({"status": "X", "age": 10}, validate=False)
    assert len(member.validate(stop_on_fail=True, return_failures=True)) == 1
    assert len(member.validate(stop_on_fail=False, return_failures=True)) == 2


def test_throw_mode():
    member = Member.from_dict({"status": "X", "age": 10}, validate=False)
    with pytest.raises(ValidationError) as exc:
        member.validate(throw=True)
    assert set(exc.value.failures) == {"status", "age"}
    assert "`status`, `age`" in str(exc.value)


def test_parse_validates_by_default():
    with pytest.raises(ValidationError):
        Member.from_dict({"status": "X", "age": 10})


def test_validation_error_is_not_a_parsing_error():
    from marshalkit import ParsingError

    assert not issubclass(ValidationError, ParsingError)


def test_nested_record_failures_use_dotted_paths():
    person = Person(name="", address=Address(city="Oslo", zip_code="123"))
    failures = person.validate(return_failures=True)
    assert set(failures) == {"name", "address.zip_code"}


def test_every_collection_element_is_checked():
    day = Day.from_dict({"day": "2024-01-01", "events": [{"name": ""}, {"name": "x"}, {"name": ""}]}, validate=False)
    assert set(day.validate(return_failures=True)) == {"events.0.name", "events.2.name"}


def test_heterogeneous_collection_is_walked():
    @dataclass
    class Bag(Schema):
        items: list

    bag = Bag(items=[Event(""), "plain", 3])
    assert bag.validate(return_failures=True) == {"items.0.name": ["!empty('')"]}


def test_stop_on_fail_stops_the_whole_walk():
    day = Day.from_dict({"day": "2024-01-01", "events": [{"name": ""}, {"name": ""}]}, validate=False)
    assert list(day.validate(stop_on_fail=True, return_failures=True)) == ["events.0.name"]


def test_record_method_validator():
    account = Account(login="Upper")
    assert account.validate(return_failures=True) == {"login": ["login must be lowercase"]}


@pytest.mark.parametrize(
    "validator, good, bad, message",
    [
        (Contains(2), [1, 2], [1], "2 ∉ [1]"),
        (HasNo("x"), "abc", "xyz", "'x' ∈ 'xyz'"),
        (Exactly(3), 3, 4, "4 != 3"),
        (GreaterThan(5, or_equal=True), 5, 4, "4 < 5"),
        (LowerThan(5), 4, 5, "5 >= 5"),
        (LowerThan(5, or_equal=True), 5, 6, "6 > 5"),
        (Length(1, 2), "ab", "abc", "1 <= len('abc')=3 <= 2"),
        (NotEmpty(), [0], [], "!empty([])"),
        (NotNull(), 0, None, "NULL"),
        (OneOf([1, 2]), 1, 3, "3 ∉ [1, 2]"),
        (NotIn([1, 2]), 3, 1, "1 in [1, 2]"),
        (Plain(), [1, 2], [1, [2]], "[1, [2]] has nested arrays"),
        (Validator(str.isdigit, message="digits only"), "12", "1a", "digits only"),
    ],
)
def test_validator_messages(validator, good, bad, message):
    assert validator.check(good, None)
    assert not validator.check(bad, None)
    assert validator.error_message(bad) == message


def test_incomparable_values_fail_instead_of_raising():
    assert not GreaterThan(5).check("five", None)
    assert not LowerThan(5).check(None, None)


def test_validator_with_object_method():
    class Rules:
        def even(self, value):
            return value % 2 == 0

    validator = Validator(Rules(), "even")
    assert validator.check(4, None)
    assert validator.error_message(3) == "even(3)"


def test_validate_record_function():
    assert validate_record(Member("ACTIVE", 30)) is True
    assert validate_record(Member("ACTIVE", 3), return_failures=True) == {"age": ["3 <= 17"]}
