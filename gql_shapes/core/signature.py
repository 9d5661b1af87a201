"""GraphQL type signatures for operation variables.

E.g., ``{"a": 123, "b": Var(True, Optional[bool])}`` -> ``"($a:Int!$b:Boolean)"``.
"""

import re
from typing import Any, get_origin

from .errors import UnresolvableTypeNameError
from .ir import NoneType, list_element, optional_inner, strip_annotated
from .scalars import ScalarRegistry, default_registry
from .variables import variable_type

_NAME_RE = re.compile(r"[_A-Za-z][_0-9A-Za-z]*")

# Modules whose types have no GraphQL name unless registered as scalars.
_ANONYMOUS_MODULES = {"builtins", "typing", "collections.abc", "types"}


def type_name(tp: Any, registry: ScalarRegistry | None = None) -> str:
    """Return the GraphQL name of a bare (unwrapped) type.

    Raises:
        UnresolvableTypeNameError: If the type has no usable GraphQL name
    """
    registry = registry or default_registry

    if get_origin(tp) is not None or not isinstance(tp, type) or tp is NoneType:
        raise UnresolvableTypeNameError(tp)

    name = registry.graphql_name(tp)
    if name is not None:
        return name

    if tp.__module__ in _ANONYMOUS_MODULES:
        raise UnresolvableTypeNameError(tp, "no GraphQL scalar registered for type")
    if not _NAME_RE.fullmatch(tp.__name__):
        raise UnresolvableTypeNameError(tp, "type name is not a valid GraphQL name")
    return tp.__name__


def write_type_signature(
    buf: list[str],
    tp: Any,
    required: bool,
    registry: ScalarRegistry,
):
    """Append a minified GraphQL type for tp to buf.

    If required is true, "!" is written at the end of the type.
    """
    tp, _ = strip_annotated(tp)

    inner = optional_inner(tp)
    if inner is not None:
        # Optional type, so no "!" at the end of the underlying type.
        write_type_signature(buf, inner, False, registry)
        return

    element = list_element(tp)
    if element is not None:
        # List. E.g., "[Int]".
        buf.append("[")
        write_type_signature(buf, element, True, registry)
        buf.append("]")
    else:
        # Named type. E.g., "Int".
        buf.append(type_name(tp, registry))

    if required:
        buf.append("!")


def serialize_type_signature(
    tp: Any,
    required: bool = True,
    registry: ScalarRegistry | None = None,
) -> str:
    """Serialize a Python type to a GraphQL type signature.

    Examples:
        int -> "Int!"
        Optional[bool] -> "Boolean"
        list[Optional[int]] -> "[Int]!"
    """
    buf: list[str] = []
    write_type_signature(buf, tp, required, registry or default_registry)
    return "".join(buf)


def serialize_variable_block(
    variables: dict[str, Any] | None,
    registry: ScalarRegistry | None = None,
) -> str:
    """Build the minified variable declaration block.

    Variables are sorted by name so output is deterministic. Returns an
    empty string when there are no variables.
    """
    if not variables:
        return ""
    registry = registry or default_registry

    buf = ["("]
    for name in sorted(variables):
        buf.append(f"${name}:")
        write_type_signature(buf, variable_type(variables[name]), True, registry)
        # Don't insert a comma here.
        # Commas in GraphQL are insignificant, and we want minified output.
    buf.append(")")
    return "".join(buf)
