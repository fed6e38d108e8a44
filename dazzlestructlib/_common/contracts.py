"""Argument contract checks.

Each check raises InvalidArgumentError synchronously when its precondition
does not hold and returns nothing otherwise. Callers run all checks before
touching any state.
"""

from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any

from ..errors import InvalidArgumentError


def require(condition: bool, message: str) -> None:
    """Raise InvalidArgumentError with message unless condition holds."""
    if not condition:
        raise InvalidArgumentError(message)


def require_callable(value: Any, message: str) -> None:
    require(callable(value), message)


def require_callable_optional(value: Any, message: str) -> None:
    require(value is None or callable(value), message)


def require_bool(value: Any, message: str) -> None:
    require(isinstance(value, bool), message)


def require_non_empty_string(value: Any, message: str) -> None:
    require(isinstance(value, str) and len(value) > 0, message)


def require_string(value: Any, message: str) -> None:
    require(isinstance(value, str), message)


def require_sequence(value: Any, message: str) -> None:
    """Accept any iterable except strings, bytes and mappings."""
    require(
        isinstance(value, Iterable)
        and not isinstance(value, (str, bytes, Mapping)),
        message
    )


def require_sequence_optional(value: Any, message: str) -> None:
    if value is not None:
        require_sequence(value, message)


def require_mutable_mapping_optional(value: Any, message: str) -> None:
    require(value is None or isinstance(value, MutableMapping), message)
