"""Operation options: operation name and operation directives."""

from dataclasses import dataclass, field
from typing import Iterable, Union

from .errors import InvalidOptionError


@dataclass(frozen=True)
class OperationName:
    """Names the operation, e.g. ``query GetViewer{...}``."""
    name: str


@dataclass(frozen=True)
class OperationDirective:
    """Adds a directive to the operation, e.g. ``@cached(ttl: 60)``."""
    directive: str


Option = Union[OperationName, OperationDirective]


def with_operation_name(name: str) -> OperationName:
    """Create an option setting the operation name."""
    return OperationName(name)


def with_operation_directive(directive: str) -> OperationDirective:
    """Create an option adding an operation directive."""
    return OperationDirective(directive)


@dataclass
class OperationConfig:
    """Operation name and directives folded from a list of options."""
    name: str = ""
    directives: list[str] = field(default_factory=list)

    @property
    def directives_text(self) -> str:
        """Directives joined by spaces and padded with one space on each side."""
        text = " ".join(self.directives)
        if text:
            return f" {text} "
        return ""


def resolve_options(options: Iterable[Option]) -> OperationConfig:
    """Fold options into an OperationConfig.

    The last operation name wins; directives accumulate in order.

    Raises:
        InvalidOptionError: If an option is of an unrecognized kind
    """
    config = OperationConfig()
    for option in options:
        if isinstance(option, OperationName):
            config.name = option.name
        elif isinstance(option, OperationDirective):
            config.directives.append(option.directive)
        else:
            raise InvalidOptionError(option)
    return config
