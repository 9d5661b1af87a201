"""Query builder for GraphQL operations.

Constructs minified GraphQL query/mutation/subscription strings from
typed shapes (dataclasses or pydantic models) and variable mappings.

Example:
    @dataclass
    class Viewer:
        login: str
        created_at: datetime

    @dataclass
    class ViewerQuery:
        viewer: Viewer

    build_query(ViewerQuery)
    # 'query {viewer{login,createdAt}}'
"""

import logging
import weakref
from enum import Enum
from typing import Any

from .errors import NonRecordRootError, RecursiveShapeError
from .ir import is_record, record_fields, shape_type, unwrap
from .options import Option, OperationConfig, resolve_options
from .scalars import ScalarRegistry, default_registry, is_scalar_codec
from .signature import serialize_variable_block
from .variables import encode_variables

logger = logging.getLogger(__name__)


class OperationType(Enum):
    """GraphQL operation types."""
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"


def _write_selection(buf: list[str], tp: Any, inline: bool, stack: list[type]):
    """Append a minified selection set for tp to buf.

    If inline is true, the fields of tp are inlined into the parent record.
    """
    # Optional and list wrappers do not change what is selected.
    tp = unwrap(tp)

    # Opaque scalars and plain values are leaves. Don't expand them.
    if is_scalar_codec(tp) or not is_record(tp):
        return

    if tp in stack:
        path = [t.__name__ for t in stack] + [tp.__name__]
        raise RecursiveShapeError(path)
    stack.append(tp)

    if not inline:
        buf.append("{")
    for i, f in enumerate(record_fields(tp)):
        if i != 0:
            buf.append(",")
        if not f.inlined:
            buf.append(f.display_name)
        _write_selection(buf, f.type, f.inlined, stack)
    if not inline:
        buf.append("}")

    stack.pop()


def serialize_selection_set(shape: Any) -> str:
    """Recursively construct a minified selection set from a shape.

    E.g., ``class Shape: foo: int; bar_baz: bool | None`` -> ``"{foo,barBaz}"``.

    Raises:
        NonRecordRootError: If the shape is not a record after unwrapping
        RecursiveShapeError: If a record type contains itself
    """
    root = unwrap(shape_type(shape))
    if not is_record(root) or is_scalar_codec(root):
        raise NonRecordRootError(shape)

    buf: list[str] = []
    _write_selection(buf, root, False, [])
    return "".join(buf)


def assemble_operation(
    operation_type: OperationType,
    config: OperationConfig,
    variable_block: str,
    selection: str,
) -> str:
    """Combine the pieces of an operation into its final text."""
    keyword = operation_type.value
    directives = config.directives_text

    if variable_block:
        return f"{keyword} {config.name}{variable_block}{directives}{selection}"

    if not config.name and not config.directives:
        # Anonymous queries keep a space before the selection set;
        # mutations and subscriptions do not.
        if operation_type is OperationType.QUERY:
            return f"{keyword} {selection}"
        return f"{keyword}{selection}"

    return f"{keyword} {config.name}{directives}{selection}"


class QueryBuilder:
    """Builds GraphQL operation strings from typed shapes.

    Selection sets are cached per root record class. The cache holds weak
    references, so classes created at runtime can still be collected. Call
    clear_cache() after registering new ScalarCodec types for cached shapes.
    """

    def __init__(self, registry: ScalarRegistry | None = None):
        """Initialize with a scalar registry for variable type names."""
        self.registry = registry or default_registry
        self._selection_cache: weakref.WeakKeyDictionary[type, str] = weakref.WeakKeyDictionary()

    def selection_set(self, shape: Any) -> str:
        """Return the minified selection set for a shape."""
        key = unwrap(shape_type(shape))
        if not is_record(key):
            # Raises NonRecordRootError
            return serialize_selection_set(shape)

        selection = self._selection_cache.get(key)
        if selection is not None:
            logger.debug("Selection set cache HIT: %r", key)
            return selection

        selection = serialize_selection_set(key)
        self._selection_cache[key] = selection
        return selection

    def clear_cache(self):
        """Drop all cached selection sets."""
        self._selection_cache.clear()

    def variable_block(self, variables: dict[str, Any] | None) -> str:
        """Return the variable declaration block, or "" for no variables."""
        return serialize_variable_block(variables, self.registry)

    def _build(
        self,
        operation_type: OperationType,
        shape: Any,
        variables: dict[str, Any] | None,
        options: tuple[Option, ...],
    ) -> tuple[str, OperationConfig]:
        config = resolve_options(options)
        selection = self.selection_set(shape)
        variable_block = self.variable_block(variables)

        text = assemble_operation(operation_type, config, variable_block, selection)
        logger.debug("Built %s: %s", operation_type.value, text)
        return text, config

    def build(
        self,
        operation_type: OperationType | str,
        shape: Any,
        variables: dict[str, Any] | None = None,
        *options: Option,
    ) -> str:
        """Build a GraphQL operation string.

        Args:
            operation_type: query, mutation or subscription
            shape: Record type (or instance) describing the selection
            variables: Mapping of variable name to value
            *options: Operation name and directive options

        Returns:
            Complete minified GraphQL operation text

        Raises:
            InvalidOptionError: If an option is of an unrecognized kind
            NonRecordRootError: If the shape is not a record
            UnresolvableTypeNameError: If a variable type has no GraphQL name
        """
        text, _ = self._build(OperationType(operation_type), shape, variables, options)
        return text

    def query(self, shape: Any, variables: dict[str, Any] | None = None, *options: Option) -> str:
        """Build a query operation."""
        return self.build(OperationType.QUERY, shape, variables, *options)

    def mutation(self, shape: Any, variables: dict[str, Any] | None = None, *options: Option) -> str:
        """Build a mutation operation."""
        return self.build(OperationType.MUTATION, shape, variables, *options)

    def subscription(self, shape: Any, variables: dict[str, Any] | None = None, *options: Option) -> str:
        """Build a subscription operation."""
        return self.build(OperationType.SUBSCRIPTION, shape, variables, *options)

    def request(
        self,
        operation_type: OperationType | str,
        shape: Any,
        variables: dict[str, Any] | None = None,
        *options: Option,
    ) -> dict[str, Any]:
        """Build the JSON request payload handed to a transport.

        Returns:
            ``{"query": ..., "variables": ...}`` plus ``"operationName"``
            when one was given
        """
        text, config = self._build(OperationType(operation_type), shape, variables, options)
        payload: dict[str, Any] = {
            "query": text,
            "variables": encode_variables(variables, self.registry),
        }
        if config.name:
            payload["operationName"] = config.name
        return payload


_default_builder = QueryBuilder()


def build_query(shape: Any, variables: dict[str, Any] | None = None, *options: Option) -> str:
    """Build a minified GraphQL query from a shape."""
    return _default_builder.query(shape, variables, *options)


def build_mutation(shape: Any, variables: dict[str, Any] | None = None, *options: Option) -> str:
    """Build a minified GraphQL mutation from a shape."""
    return _default_builder.mutation(shape, variables, *options)


def build_subscription(shape: Any, variables: dict[str, Any] | None = None, *options: Option) -> str:
    """Build a minified GraphQL subscription from a shape."""
    return _default_builder.subscription(shape, variables, *options)


def build_request(
    operation_type: OperationType | str,
    shape: Any,
    variables: dict[str, Any] | None = None,
    *options: Option,
    registry: ScalarRegistry | None = None,
) -> dict[str, Any]:
    """Build a request payload using the default builder or a given registry."""
    builder = QueryBuilder(registry) if registry is not None else _default_builder
    return builder.request(operation_type, shape, variables, *options)
