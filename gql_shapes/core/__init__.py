"""Core modules for building GraphQL operations from typed shapes."""

from .errors import (
    InvalidOptionError,
    NonRecordRootError,
    QueryBuildError,
    RecursiveShapeError,
    UnresolvableTypeNameError,
)
from .ir import (
    EMBED,
    FieldDescriptor,
    FieldOptions,
    graphql_name,
    is_record,
    record_fields,
)
from .options import (
    OperationConfig,
    OperationDirective,
    OperationName,
    Option,
    resolve_options,
    with_operation_directive,
    with_operation_name,
)
from .query_builder import (
    OperationType,
    QueryBuilder,
    assemble_operation,
    build_mutation,
    build_query,
    build_request,
    build_subscription,
    serialize_selection_set,
)
from .scalars import (
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
)
from .signature import serialize_type_signature, serialize_variable_block
from .variables import Var, encode_variables, optional, variable_type

__all__ = [
    # Errors
    "QueryBuildError",
    "InvalidOptionError",
    "UnresolvableTypeNameError",
    "NonRecordRootError",
    "RecursiveShapeError",
    # Shapes
    "EMBED",
    "FieldDescriptor",
    "FieldOptions",
    "graphql_name",
    "is_record",
    "record_fields",
    # Scalars
    "ID",
    "String",
    "ScalarCodec",
    "ScalarHandler",
    "ScalarRegistry",
    "BuiltinScalarHandler",
    "TextScalarHandler",
    "DateTimeHandler",
    "DateHandler",
    "TimeHandler",
    "UUIDHandler",
    # Options
    "Option",
    "OperationName",
    "OperationDirective",
    "OperationConfig",
    "resolve_options",
    "with_operation_name",
    "with_operation_directive",
    # Variables
    "Var",
    "optional",
    "variable_type",
    "encode_variables",
    "serialize_type_signature",
    "serialize_variable_block",
    # Query Builder
    "OperationType",
    "QueryBuilder",
    "assemble_operation",
    "serialize_selection_set",
    "build_query",
    "build_mutation",
    "build_subscription",
    "build_request",
]
