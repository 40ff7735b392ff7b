"""Record types shared by the test modules."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Annotated, Optional

from marshalkit import (
    Alias,
    ArrayOf,
    DateTimeFormat,
    Dumper,
    DumpJSON,
    GreaterThan,
    Group,
    Length,
    NotEmpty,
    OneOf,
    Parser,
    ParseJSON,
    Propagate,
    Schema,
    Validator,
    schema_metadata,
)


class Status(Enum):
    ACTIVE = "a"
    INACTIVE = "i"


class Color(Enum):
    RED = 1
    GREEN = 2


@dataclass
class Tag(Schema):
    name: str


@dataclass
class Product(Schema):
    name: str
    price: float


@dataclass
class Item(Schema):
    sku: str
    qty: int = 1


@dataclass
class Member(Schema):
    status: Annotated[str, OneOf(["ACTIVE", "INACTIVE"])]
    age: Annotated[int, GreaterThan(17)]


@dataclass
class Event(Schema):
    name: Annotated[str, NotEmpty()]


@dataclass
class Day(Schema):
    day: Annotated[date, DateTimeFormat("%Y-%m-%d")]
    events: list[Event] = field(default_factory=list)


@dataclass
class Address(Schema):
    city: str
    zip_code: Annotated[str, Alias("zip"), Length(min=5, max=5)]


@dataclass
class Person(Schema):
    name: Annotated[str, NotEmpty()]
    address: Address
    nickname: Optional[str] = None


@dataclass
class Unions(Schema):
    score: float | Status = 0.0
    label: str | Tag = ""
    tags: Annotated[list | Tag, ArrayOf(Tag)] = field(default_factory=list)
    thing: Product | Tag | None = None


@dataclass
class Triple(Schema):
    first: int
    second: str
    third: float = 0.5


@dataclass
class Line(Schema):
    sku: str
    currency: str
    amount: float


@dataclass
class Invoice(Schema):
    currency: Annotated[str, Propagate()]
    lines: list[Line]


@dataclass
class Shipment(Schema):
    currency: Annotated[str, Propagate()]
    main: Line
    extra: Optional[Line] = None


@schema_metadata(DateTimeFormat("%d.%m.%Y %H:%M"), Group("api", DateTimeFormat("unix")))
@dataclass
class Meeting(Schema):
    title: Annotated[str, Group("input", Alias("subject")), Group("output", Alias("heading"))]
    starts_at: datetime
    ends_at: Annotated[datetime, DateTimeFormat("%Y-%m-%d %H:%M:%S")]
    room: Annotated[Optional[str], Alias("location")] = None


def double(value):
    return value * 2


class Codes:
    @staticmethod
    def parse(value):
        return [part.strip() for part in value.split(",")]

    @staticmethod
    def dump(value):
        return ",".join(value)


@dataclass
class Custom(Schema):
    amount: Annotated[int, Parser(double)]
    codes: Annotated[list[str], Parser(Codes, "parse"), Dumper(Codes, "dump")]
    payload: Annotated[dict, ParseJSON(), DumpJSON()]
    slug: Annotated[str, Parser("normalize")] = ""

    @staticmethod
    def normalize(value):
        return value.strip().lower().replace(" ", "-")


@dataclass
class Account(Schema):
    login: Annotated[str, Validator("is_lowercase", message="login must be lowercase")]
    color: Color = Color.RED
    opened: Optional[date] = None
    alarm: Annotated[Optional[time], DateTimeFormat("unix")] = None

    def is_lowercase(self, value):
        return value == value.lower()
