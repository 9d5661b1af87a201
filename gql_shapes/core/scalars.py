"""Scalar handling for GraphQL operation building.

Two concerns live here:

* ``ScalarCodec`` is the opaque-scalar marker. A type opts in explicitly
  (by subclassing or via ``ScalarCodec.register``) to say "I decode myself
  from a single scalar value". The selection-set serializer never expands
  such a type into a sub-selection, no matter how many fields it declares.
* ``ScalarRegistry`` maps Python types to GraphQL scalar names and knows how
  to encode their values for the wire.

Example usage:
    from decimal import Decimal
    from gql_shapes.core.scalars import ScalarRegistry

    class MoneyHandler:
        graphql_name = "Money"

        def serialize(self, value):
            return str(value)

    registry = ScalarRegistry()
    registry.register(Decimal, MoneyHandler())
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, time
from typing import Any, Protocol, get_origin, runtime_checkable
from uuid import UUID

from graphql import GraphQLBoolean, GraphQLFloat, GraphQLID, GraphQLInt, GraphQLString


class ScalarCodec(ABC):
    """Marker for types that decode themselves from a single scalar value.

    Example:
        @dataclass
        class Money(ScalarCodec):
            amount: Decimal
            currency: str

            @classmethod
            def from_scalar(cls, value):
                amount, currency = value.split(" ")
                return cls(Decimal(amount), currency)

            def to_scalar(self):
                return f"{self.amount} {self.currency}"
    """

    @classmethod
    @abstractmethod
    def from_scalar(cls, value: Any) -> "ScalarCodec":
        """Build an instance from the scalar received from the server."""
        ...

    @abstractmethod
    def to_scalar(self) -> Any:
        """Convert the instance to a JSON-serializable scalar."""
        ...


def is_scalar_codec(tp: Any) -> bool:
    """Check if a type carries the opaque-scalar marker."""
    if get_origin(tp) is not None or not isinstance(tp, type):
        return False
    return issubclass(tp, ScalarCodec)


class ID(str):
    """Textual value declared as GraphQL ``ID``."""
    pass


class String(str):
    """Textual value declared as GraphQL ``String``.

    Plain ``str`` is declared as ``ID`` by default; use this type for
    variables the server declares as ``String``.
    """
    pass


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for scalar handlers.

    Attributes:
        graphql_name: The GraphQL type name (e.g., "Int", "DateTime")
    """

    graphql_name: str

    def serialize(self, value: Any) -> Any:
        """Convert Python value to JSON-serializable format for GraphQL."""
        ...


class BuiltinScalarHandler:
    """Handler for values that are already JSON-serializable."""

    def __init__(self, graphql_name: str):
        self.graphql_name = graphql_name

    def serialize(self, value: Any) -> Any:
        return value


class TextScalarHandler:
    """Handler for ``str`` and its subclasses, sent as plain strings."""

    def __init__(self, graphql_name: str):
        self.graphql_name = graphql_name

    def serialize(self, value: str) -> str:
        return str(value)


class DateTimeHandler:
    """Handler for DateTime scalars using ISO 8601 format."""

    graphql_name = "DateTime"

    def serialize(self, value: datetime) -> str:
        """Convert datetime to ISO 8601 string."""
        return value.isoformat()


class DateHandler:
    """Handler for Date scalars using ISO 8601 date format."""

    graphql_name = "Date"

    def serialize(self, value: date) -> str:
        return value.isoformat()


class TimeHandler:
    """Handler for Time scalars using ISO 8601 time format."""

    graphql_name = "Time"

    def serialize(self, value: time) -> str:
        return value.isoformat()


class UUIDHandler:
    """Handler for UUID scalars."""

    graphql_name = "UUID"

    def serialize(self, value: UUID) -> str:
        return str(value)


class ScalarRegistry:
    """Registry for scalar handlers.

    Manages the mapping between Python types and GraphQL scalar names.
    Lookups match the exact type, so ``bool`` never resolves as ``int`` and
    user subclasses of builtins keep their own class name.

    Example:
        registry = ScalarRegistry()
        registry.graphql_name(int)  # "Int"

        # Declare plain strings as String instead of ID
        registry.register(str, TextScalarHandler("String"))
    """

    def __init__(self):
        self._handlers: dict[type, ScalarHandler] = {}
        self._register_defaults()

    def _register_defaults(self):
        """Register built-in default handlers."""
        self.register(int, BuiltinScalarHandler(GraphQLInt.name))
        self.register(float, BuiltinScalarHandler(GraphQLFloat.name))
        self.register(bool, BuiltinScalarHandler(GraphQLBoolean.name))
        # Plain strings are declared as ID.
        # See https://github.com/shurcooL/githubv4/issues/12.
        self.register(str, TextScalarHandler(GraphQLID.name))
        self.register(ID, TextScalarHandler(GraphQLID.name))
        self.register(String, TextScalarHandler(GraphQLString.name))
        self.register(datetime, DateTimeHandler())
        self.register(date, DateHandler())
        self.register(time, TimeHandler())
        self.register(UUID, UUIDHandler())

    def register(self, python_type: type, handler: ScalarHandler):
        """Register a handler for a Python type."""
        self._handlers[python_type] = handler

    def get(self, python_type: Any) -> ScalarHandler | None:
        """Get the handler for a type, or None if not registered."""
        return self._handlers.get(python_type)

    def has(self, python_type: Any) -> bool:
        """Check if a handler is registered for a type."""
        return python_type in self._handlers

    def graphql_name(self, python_type: Any) -> str | None:
        """Get the GraphQL scalar name registered for a type."""
        handler = self.get(python_type)
        return handler.graphql_name if handler else None


default_registry = ScalarRegistry()
