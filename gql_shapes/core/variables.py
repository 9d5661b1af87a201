"""Typed variable values and their wire encoding.

Python values do not carry an "optional" marker the way a declared type
does, so variables whose GraphQL type cannot be read off the runtime value
are wrapped in ``Var``:

    variables = {
        "login": "octocat",                    # ID!
        "first": 10,                           # Int!
        "after": Var(None, Optional[String]),  # String
        "private": optional(True),             # Boolean
    }
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

from .errors import UnresolvableTypeNameError
from .ir import NoneType, record_fields
from .scalars import ScalarCodec, ScalarRegistry, default_registry


@dataclass(frozen=True)
class Var:
    """A variable value with an explicitly declared type."""
    value: Any
    type: Any


def optional(value: Any, tp: Any = None) -> Var:
    """Declare a variable as nullable.

    The type is inferred from the value when not given.
    """
    if tp is None:
        tp = variable_type(value)
    return Var(value, Optional[tp])


def variable_type(value: Any) -> Any:
    """Return the declared type of a variable value.

    Raises:
        UnresolvableTypeNameError: If the type cannot be inferred
    """
    if isinstance(value, Var):
        return value.type
    if value is None:
        raise UnresolvableTypeNameError(
            NoneType, "cannot infer a GraphQL type from None, wrap it in Var"
        )
    if isinstance(value, (list, tuple, set, frozenset)):
        if not value:
            raise UnresolvableTypeNameError(
                type(value), "cannot infer the element type of an empty collection"
            )
        element_types = [variable_type(v) for v in value]
        first = element_types[0]
        if any(t != first for t in element_types[1:]):
            raise UnresolvableTypeNameError(
                type(value), "list elements have mixed types"
            )
        return list[first]
    return type(value)


def encode_value(value: Any, registry: ScalarRegistry | None = None) -> Any:
    """Convert a variable value to a JSON-serializable form."""
    registry = registry or default_registry

    if isinstance(value, Var):
        return encode_value(value.value, registry)
    if value is None:
        return None
    # Registered virtual subclasses may not define to_scalar
    if isinstance(value, ScalarCodec) and callable(getattr(value, "to_scalar", None)):
        return value.to_scalar()

    handler = registry.get(type(value))
    if handler is not None:
        return handler.serialize(value)

    if isinstance(value, Enum):
        # GraphQL enums travel by name
        return value.name
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _encode_dataclass(value, registry)
    if isinstance(value, dict):
        return {k: encode_value(v, registry) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [encode_value(v, registry) for v in value]
    return value


def _encode_dataclass(value: Any, registry: ScalarRegistry) -> dict[str, Any]:
    result = {}
    for f in record_fields(type(value)):
        encoded = encode_value(getattr(value, f.name), registry)
        if f.inlined and isinstance(encoded, dict):
            result.update(encoded)
        elif encoded is not None:
            result[f.display_name] = encoded
    return result


def encode_variables(
    variables: dict[str, Any] | None,
    registry: ScalarRegistry | None = None,
) -> dict[str, Any]:
    """Serialize variables for the GraphQL request.

    Keys are sorted to match the variable declaration block. Explicit
    ``None`` values are kept since null is meaningful for nullable variables.
    """
    if not variables:
        return {}
    return {name: encode_value(variables[name], registry) for name in sorted(variables)}
