"""Tests for scalar handlers and the opaque-scalar marker."""

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from uuid import UUID

import pytest

from gql_shapes.core.scalars import (
    ID,
    BuiltinScalarHandler,
    DateHandler,
    DateTimeHandler,
    ScalarCodec,
    ScalarHandler,
    ScalarRegistry,
    String,
    TextScalarHandler,
    TimeHandler,
    UUIDHandler,
    is_scalar_codec,
)
from shapes import Coordinates, Money, Person


class TestDateTimeHandler:
    """Tests for DateTimeHandler."""

    def test_graphql_name(self):
        assert DateTimeHandler().graphql_name == "DateTime"

    def test_serialize(self):
        handler = DateTimeHandler()
        dt = datetime(2024, 1, 15, 10, 30, 0)
        assert handler.serialize(dt) == "2024-01-15T10:30:00"


class TestDateHandler:
    """Tests for DateHandler."""

    def test_graphql_name(self):
        assert DateHandler().graphql_name == "Date"

    def test_serialize(self):
        assert DateHandler().serialize(date(2024, 1, 15)) == "2024-01-15"


class TestTimeHandler:
    """Tests for TimeHandler."""

    def test_serialize(self):
        assert TimeHandler().serialize(time(10, 30)) == "10:30:00"


class TestUUIDHandler:
    """Tests for UUIDHandler."""

    def test_graphql_name(self):
        assert UUIDHandler().graphql_name == "UUID"

    def test_serialize(self):
        uid = UUID("12345678-1234-5678-1234-567812345678")
        assert UUIDHandler().serialize(uid) == "12345678-1234-5678-1234-567812345678"


class TestTextScalarHandler:
    """Tests for TextScalarHandler."""

    def test_serialize_returns_plain_str(self):
        result = TextScalarHandler("ID").serialize(ID("abc"))
        assert result == "abc"
        assert type(result) is str


class TestScalarRegistry:
    """Tests for ScalarRegistry."""

    def test_default_handlers_registered(self):
        registry = ScalarRegistry()
        assert registry.graphql_name(int) == "Int"
        assert registry.graphql_name(float) == "Float"
        assert registry.graphql_name(bool) == "Boolean"
        assert registry.graphql_name(str) == "ID"
        assert registry.graphql_name(ID) == "ID"
        assert registry.graphql_name(String) == "String"
        assert registry.graphql_name(datetime) == "DateTime"
        assert registry.graphql_name(date) == "Date"
        assert registry.graphql_name(time) == "Time"
        assert registry.graphql_name(UUID) == "UUID"

    def test_lookup_is_exact(self):
        """Subclasses do not inherit their base's scalar name."""

        class Slug(str):
            pass

        registry = ScalarRegistry()
        assert registry.get(Slug) is None
        assert not registry.has(Slug)

    def test_get_nonexistent(self):
        assert ScalarRegistry().get(Decimal) is None

    def test_register_custom(self):
        registry = ScalarRegistry()

        class MoneyHandler:
            graphql_name = "Money"

            def serialize(self, value):
                return str(value)

        registry.register(Decimal, MoneyHandler())
        assert registry.has(Decimal)
        assert registry.graphql_name(Decimal) == "Money"
        assert registry.get(Decimal).serialize(Decimal("1.50")) == "1.50"

    def test_override_default(self):
        registry = ScalarRegistry()
        registry.register(str, TextScalarHandler("String"))
        assert registry.graphql_name(str) == "String"
        assert ScalarRegistry().graphql_name(str) == "ID"


class TestScalarHandlerProtocol:
    """Tests for protocol compliance."""

    @pytest.mark.parametrize("handler", [
        BuiltinScalarHandler("Int"),
        TextScalarHandler("ID"),
        DateTimeHandler(),
        DateHandler(),
        TimeHandler(),
        UUIDHandler(),
    ])
    def test_handlers_are_scalar_handlers(self, handler):
        assert isinstance(handler, ScalarHandler)


class TestScalarCodec:
    """Tests for the opaque-scalar marker."""

    def test_subclass_is_scalar_codec(self):
        assert is_scalar_codec(Money)

    def test_registered_class_is_scalar_codec(self):
        assert is_scalar_codec(Coordinates)

    def test_plain_record_is_not_scalar_codec(self):
        assert not is_scalar_codec(Person)
        assert not is_scalar_codec(list[Money])
        assert not is_scalar_codec(Money("1", "EUR"))

    def test_round_trip_through_scalar(self):
        money = Money.from_scalar("9.99 EUR")
        assert money == Money("9.99", "EUR")
        assert money.to_scalar() == "9.99 EUR"

    def test_abstract_methods_required(self):
        @dataclass
        class Incomplete(ScalarCodec):
            value: str

        with pytest.raises(TypeError):
            Incomplete("x")
