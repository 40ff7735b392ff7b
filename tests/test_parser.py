from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Optional

import pytest

from marshalkit import Group, ParsingError, Schema, SchemaDefinitionError, parse_record, schema_metadata
from tests.schemas import (
    Account,
    Color,
    Custom,
    Day,
    Event,
    Invoice,
    Item,
    Meeting,
    Person,
    Product,
    Shipment,
    Status,
    Tag,
    Triple,
    Unions,
)


def test_nested_and_collection_parse():
    day = Day.from_dict({"day": "2024-03-02", "events": [{"name": "a"}, {"name": "b"}]})
    assert day.day == date(2024, 3, 2)
    assert day.events == [Event("a"), Event("b")]


def test_missing_optional_field_uses_default():
    assert Day.from_dict({"day": "2024-03-02"}).events == []
    assert Item.from_dict({"sku": "x"}).qty == 1


def test_missing_required_field():
    with pytest.raises(ParsingError, match="missing required field") as exc:
        Item.from_dict({"qty": 2})
    assert exc.value.record == "Item"
    assert exc.value.path == ("sku",)


def test_unknown_keys_are_discarded():
    assert Item.from_dict({"sku": "x", "colour": "red"}) == Item("x")


def test_primitive_coercion():
    assert Item.from_dict({"sku": "x", "qty": "5"}).qty == 5
    assert Product.from_dict({"name": "p", "price": "4.25"}).price == 4.25


def test_primitive_coercion_failure():
    with pytest.raises(ParsingError) as exc:
        Item.from_dict({"sku": "x", "qty": "many"})
    assert str(exc.value).startswith("Item.qty:")


def test_null_for_non_nullable_field():
    with pytest.raises(ParsingError, match="null given"):
        Item.from_dict({"sku": None})


def test_null_for_nullable_field():
    assert Person.from_dict(
        {"name": "Ann", "address": {"city": "Oslo", "zip_code": "01234"}, "nickname": None}
    ).nickname is None


def test_union_prefers_enum_over_failed_float_coercion():
    assert Unions.from_dict({"score": "ACTIVE"}).score is Status.ACTIVE
    assert Unions.from_dict({"score": "a"}).score is Status.ACTIVE
    assert Unions.from_dict({"score": 4.3}).score == 4.3


def test_union_tries_enum_declared_before_builtin():
    @dataclass
    class Flags(Schema):
        status: Status | str = "none"
        color: Color | int = 0

    flags = Flags.from_dict({"status": "ACTIVE", "color": 2})
    assert flags.status is Status.ACTIVE
    assert flags.color is Color.GREEN
    assert Flags.from_dict({"status": "other", "color": 7}) == Flags("other", 7)


def test_union_builtin_declared_first_keeps_value():
    @dataclass
    class Plain(Schema):
        status: str | Status = "none"

    assert Plain.from_dict({"status": "ACTIVE"}).status == "ACTIVE"
    assert Plain.from_dict({"status": Status.INACTIVE}).status is Status.INACTIVE


def test_union_record_fallback():
    assert Unions.from_dict({"label": {"name": "t"}}).label == Tag("t")
    assert Unions.from_dict({"label": "tag"}).label == "tag"


def test_union_collection_with_element_type():
    assert Unions.from_dict({"tags": {"name": "t"}}).tags == Tag("t")
    assert Unions.from_dict({"tags": [{"name": "a"}, {"name": "b"}]}).tags == [Tag("a"), Tag("b")]


def test_union_falls_through_to_next_record():
    assert Unions.from_dict({"thing": {"name": "n"}}).thing == Tag("n")
    assert Unions.from_dict({"thing": {"name": "n", "price": 2}}).thing == Product("n", 2)


def test_enum_by_name_and_ordinal():
    assert Account.from_dict({"login": "x", "color": "GREEN"}).color is Color.GREEN
    assert Account.from_dict({"login": "x", "color": 2}).color is Color.GREEN
    with pytest.raises(ParsingError):
        Account.from_dict({"login": "x", "color": "BLUE"})


def test_positional_binding():
    assert Triple.from_dict([1, "two"]) == Triple(1, "two", 0.5)
    assert Triple.from_dict([1, "two", 3.0, "four", 5]) == Triple(1, "two", 3.0)
    with pytest.raises(ParsingError, match="missing required field"):
        Triple.from_dict([1])


def test_positional_binding_ignores_aliases():
    assert Meeting.from_dict(
        ["Planning", "02.03.2024 10:30", "2024-03-02 11:30:00", "B2"], by_alias=True
    ).room == "B2"


def test_alias_parse(meeting_raw):
    meeting = Meeting.from_dict(meeting_raw, by_alias=True)
    assert meeting.room == "B2"
    assert meeting.starts_at == datetime(2024, 3, 2, 10, 30)
    assert meeting.ends_at == datetime(2024, 3, 2, 11, 30)


def test_alias_parse_falls_back_to_canonical_name(meeting_raw):
    meeting_raw["room"] = meeting_raw.pop("location")
    assert Meeting.from_dict(meeting_raw, by_alias=True).room == "B2"


def test_alias_ignored_without_by_alias(meeting_raw):
    assert Meeting.from_dict(meeting_raw).room is None


def test_group_aliases_and_formats():
    meeting = Meeting.from_dict(
        {"subject": "Retro", "starts_at": 1700000000, "ends_at": "2024-03-02T11:30:00"},
        by_alias=True,
        group="input",
    )
    assert meeting.title == "Retro"
    assert meeting.starts_at == datetime.fromtimestamp(1700000000)


def test_unix_format_from_string():
    meeting = Meeting.from_dict(
        {"title": "t", "starts_at": "1700000000", "ends_at": "1700003600"}, group="api"
    )
    assert meeting.ends_at == datetime.fromtimestamp(1700003600)


def test_bad_datetime_format():
    with pytest.raises(ParsingError, match="bad datetime format") as exc:
        Day.from_dict({"day": "02/03/2024"})
    assert exc.value.path == ("day",)


def test_unix_time_of_day():
    assert Account.from_dict({"login": "x", "alarm": 3661}).alarm.isoformat() == "01:01:01"


def test_date_from_datetime_value():
    assert Account.from_dict({"login": "x", "opened": datetime(2024, 1, 2, 3, 4)}).opened == date(2024, 1, 2)


def test_unknown_group_fails_at_top_level():
    with pytest.raises(SchemaDefinitionError):
        Person.from_dict({}, group="nope")


def test_nested_records_ignore_groups_they_do_not_declare():
    @schema_metadata(Group("input"))
    @dataclass
    class Agenda(Schema):
        meeting: Meeting
        owner: Person

    agenda = Agenda.from_dict(
        {
            "meeting": {"subject": "Retro", "starts_at": 1, "ends_at": "2024-03-02T11:30:00"},
            "owner": {"name": "Ann", "address": {"city": "Oslo", "zip_code": "01234"}},
        },
        by_alias=True,
        group="input",
        validate=False,
    )
    assert agenda.meeting.title == "Retro"
    assert agenda.owner.address.city == "Oslo"


def test_nested_error_path():
    with pytest.raises(ParsingError) as exc:
        Day.from_dict({"day": "2024-03-02", "events": [{"name": "a"}, {}]})
    assert exc.value.record == "Day"
    assert exc.value.path == ("events", 1, "name")
    assert str(exc.value) == "Day.events.1.name: missing required field"
    assert isinstance(exc.value.__cause__, ParsingError)


def test_wrong_shape_for_nested_record():
    with pytest.raises(ParsingError, match="expected Address or a mapping"):
        Person.from_dict({"name": "Ann", "address": "Oslo"})


def test_propagate_into_collection_elements():
    invoice = Invoice.from_dict(
        {
            "currency": "EUR",
            "lines": [
                {"sku": "a", "amount": 1},
                {"sku": "b", "amount": 2, "currency": "USD"},
            ],
        }
    )
    assert [line.currency for line in invoice.lines] == ["EUR", "USD"]


def test_propagate_into_nested_record_and_positional_child():
    shipment = Shipment.from_dict(
        {"currency": "NOK", "main": {"sku": "a", "amount": 3}, "extra": ["b", "SEK", 4]}
    )
    assert shipment.main.currency == "NOK"
    assert shipment.extra.currency == "SEK"


def test_parse_hooks():
    custom = Custom.from_dict(
        {"amount": 21, "codes": "a, b ,c", "payload": '{"k": [1, 2]}', "slug": " Hello World "}
    )
    assert custom.amount == 42
    assert custom.codes == ["a", "b", "c"]
    assert custom.payload == {"k": [1, 2]}
    assert custom.slug == "hello-world"


def test_parse_hook_failure_is_wrapped():
    with pytest.raises(ParsingError, match="parse hook Parser failed") as exc:
        Custom.from_dict({"amount": 1, "codes": 5, "payload": "{}"})
    assert isinstance(exc.value.__cause__.__cause__, AttributeError)


def test_parse_hook_skipped_without_convert():
    custom = Custom.from_dict(
        {"amount": 21, "codes": ["a"], "payload": {"k": 1}}, convert=False, validate=False
    )
    assert custom.amount == 21
    assert custom.payload == {"k": 1}


def test_no_convert_passes_values_through():
    item = Item.from_dict({"sku": "x", "qty": "5"}, convert=False)
    assert item.qty == "5"
    day = Day.from_dict({"day": "2024-03-02", "events": [{"name": "a"}]}, convert=False)
    assert day.day == "2024-03-02"
    assert day.events == [Event("a")]


def test_missing_hook_target_is_definition_error():
    from marshalkit import Parser

    @dataclass
    class Broken(Schema):
        value: Annotated[str, Parser("no_such_method")]

    with pytest.raises(SchemaDefinitionError, match="no such method"):
        Broken.from_dict({"value": "x"})


def test_constructor_errors_are_wrapped():
    @dataclass
    class Positive(Schema):
        value: int

        def __post_init__(self):
            if self.value <= 0:
                raise ValueError("must be positive")

    with pytest.raises(ParsingError, match="must be positive"):
        Positive.from_dict({"value": -1})


def test_existing_instances_are_kept():
    tag = Tag("t")
    assert Unions.from_dict({"label": tag}).label is tag


def test_decimal_and_dict_collections():
    @dataclass
    class Prices(Schema):
        total: Decimal
        by_sku: dict[str, Decimal]
        tags: Optional[dict[str, Tag]] = None

    prices = Prices.from_dict(
        {"total": "10.50", "by_sku": {"a": "4.50", "b": 6}, "tags": {"x": {"name": "y"}}}
    )
    assert prices.total == Decimal("10.50")
    assert prices.by_sku == {"a": Decimal("4.50"), "b": Decimal("6")}
    assert prices.tags == {"x": Tag("y")}


def test_parse_record_function():
    assert parse_record(Tag, {"name": "t"}) == Tag("t")


def test_set_of_unhashable_records_reports_field():
    @dataclass
    class Bag(Schema):
        tags: set[Tag]

    with pytest.raises(ParsingError, match="Bag.tags: elements are not hashable"):
        Bag.from_dict({"tags": [{"name": "a"}]})


def test_set_of_hashable_values():
    @dataclass
    class Numbers(Schema):
        values: frozenset[int]

    assert Numbers.from_dict({"values": ["1", 2, 2]}).values == {1, 2}
