"""Intermediate representation of query shapes.

A shape is a dataclass or pydantic model describing the fields a caller
wants back. This module turns such classes into ordered ``FieldDescriptor``
lists and knows how to look through the wrappers (``Optional``, lists,
``Annotated``) that do not change what is selected.
"""

import collections.abc
import dataclasses
import types
import typing
from dataclasses import dataclass
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from graphql.pyutils import snake_to_camel
from pydantic import BaseModel

from .errors import QueryBuildError

NoneType = type(None)

# Generic origins treated as repeated values of a single element type.
LIST_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
)

# Key under which a dataclass field may carry its GraphQL options.
METADATA_KEY = "graphql"


@dataclass(frozen=True)
class FieldOptions:
    """Per-field GraphQL metadata.

    Attach it with ``Annotated[T, FieldOptions(...)]`` or through
    ``dataclasses.field(metadata={"graphql": FieldOptions(...)})``.

    Attributes:
        name: Text emitted instead of the attribute name. Emitted verbatim,
            so it may carry arguments, e.g. ``user(login: $login)``.
        embed: Promote the nested record's fields into the parent selection.
            Ignored when ``name`` is set.
    """
    name: str | None = None
    embed: bool = False


EMBED = FieldOptions(embed=True)


def graphql_name(name: str) -> FieldOptions:
    """Create field options overriding the emitted field name."""
    return FieldOptions(name=name)


@dataclass(frozen=True)
class FieldDescriptor:
    """Represents one field of a record shape."""
    name: str
    type: Any
    override: str | None = None
    embed: bool = False
    alias: str | None = None  # pydantic alias, if any

    @property
    def inlined(self) -> bool:
        """Embedded fields without an explicit name are flattened into the parent."""
        return self.embed and self.override is None

    @property
    def display_name(self) -> str:
        """Return the text emitted for this field in a selection set."""
        if self.override is not None:
            return self.override
        if self.alias is not None:
            return self.alias
        return snake_to_camel(self.name, upper=False)


def is_record(tp: Any) -> bool:
    """Check if a type is a record (dataclass or pydantic model class)."""
    if get_origin(tp) is not None or not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def shape_type(shape: Any) -> Any:
    """Return the type described by a shape argument.

    Classes and typing constructs are returned as-is; instances are
    replaced by their class.
    """
    if isinstance(shape, type) or get_origin(shape) is not None:
        return shape
    return type(shape)


def strip_annotated(tp: Any) -> tuple[Any, tuple]:
    """Split ``Annotated[T, *meta]`` into ``(T, meta)``."""
    if get_origin(tp) is Annotated:
        return tp.__origin__, tp.__metadata__
    return tp, ()


def optional_inner(tp: Any) -> Any | None:
    """Return ``T`` for ``Optional[T]``, or None if tp is not optional."""
    if get_origin(tp) not in (Union, types.UnionType):
        return None
    args = get_args(tp)
    if NoneType not in args:
        return None
    members = [a for a in args if a is not NoneType]
    if len(members) != 1:
        return None
    return members[0]


def list_element(tp: Any) -> Any | None:
    """Return the element type of a list-like type, or None."""
    origin = get_origin(tp)
    if origin not in LIST_ORIGINS:
        return None
    args = get_args(tp)
    if not args:
        return None
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        # Fixed-size tuples are only lists when homogeneous
        if all(a == args[0] for a in args):
            return args[0]
        return None
    return args[0]


def unwrap(tp: Any) -> Any:
    """Strip Annotated, Optional and list wrappers until a bare type remains."""
    while True:
        tp, _ = strip_annotated(tp)
        inner = optional_inner(tp)
        if inner is None:
            inner = list_element(tp)
        if inner is None:
            return tp
        tp = inner


def _merge_options(options: FieldOptions, extra: Any) -> FieldOptions:
    if isinstance(extra, FieldOptions):
        return extra
    if isinstance(extra, str):
        return FieldOptions(name=extra, embed=options.embed)
    return options


def _options_from(metadata: typing.Iterable[Any]) -> FieldOptions:
    options = FieldOptions()
    for item in metadata:
        if isinstance(item, FieldOptions):
            options = item
    return options


def _dataclass_fields(cls: type) -> list[FieldDescriptor]:
    try:
        hints = get_type_hints(cls, include_extras=True)
    except NameError as e:
        raise QueryBuildError(
            f"cannot resolve annotations of {cls.__qualname__}: {e}"
        ) from e
    result = []
    for f in dataclasses.fields(cls):
        tp, metadata = strip_annotated(hints.get(f.name, f.type))
        options = _options_from(metadata)
        if METADATA_KEY in f.metadata:
            options = _merge_options(options, f.metadata[METADATA_KEY])
        result.append(FieldDescriptor(
            name=f.name,
            type=tp,
            override=options.name,
            embed=options.embed,
        ))
    return result


def _model_fields(cls: type[BaseModel]) -> list[FieldDescriptor]:
    result = []
    for name, info in cls.model_fields.items():
        # pydantic moves top-level Annotated extras into info.metadata
        tp, metadata = strip_annotated(info.annotation)
        options = _options_from([*info.metadata, *metadata])
        result.append(FieldDescriptor(
            name=name,
            type=tp,
            override=options.name,
            embed=options.embed,
            alias=info.alias,
        ))
    return result


def record_fields(cls: type) -> list[FieldDescriptor]:
    """List the fields of a record type in declaration order."""
    if dataclasses.is_dataclass(cls):
        return _dataclass_fields(cls)
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return _model_fields(cls)
    raise TypeError(f"{cls!r} is not a dataclass or pydantic model")
