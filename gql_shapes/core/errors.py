"""Exceptions raised while building GraphQL operations."""

from typing import Any


class QueryBuildError(Exception):
    """Base exception for all operation-building errors."""
    pass


class InvalidOptionError(QueryBuildError, ValueError):
    """Raised when an option of an unrecognized kind is supplied."""

    def __init__(self, option: Any):
        self.option = option
        super().__init__(f"invalid query option type: {type(option).__name__}")


class UnresolvableTypeNameError(QueryBuildError, TypeError):
    """Raised when a variable type has no GraphQL type name."""

    def __init__(self, tp: Any, reason: str = "no resolvable GraphQL type name"):
        self.type = tp
        super().__init__(f"{reason}: {tp!r}")


class NonRecordRootError(QueryBuildError, TypeError):
    """Raised when the root shape is not a record type."""

    def __init__(self, shape: Any):
        self.shape = shape
        super().__init__(
            f"root shape must be a dataclass or pydantic model, got {shape!r}"
        )


class RecursiveShapeError(QueryBuildError):
    """Raised when a record type contains itself without an opaque scalar in between."""

    def __init__(self, path: list[str]):
        self.path = path
        super().__init__(f"recursive shape has no finite selection set: {' -> '.join(path)}")
