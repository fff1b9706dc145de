"""
Result envelope for consistent success/failure handling.

Provides a typed ``Result[T]`` pattern so that recoverable failures (a value
that will not coerce, a parameter that is missing, a policy with no applicable
strategy) travel as values instead of exceptions. One bad variant or one bad
value never has to abort a whole operation: callers inspect the Result and
record a failed log entry.

Manifesto:
    - **Explicit over Implicit:** No hidden exceptions that callers might miss
    - **Pattern matching:** operations consume results with ``match``
      and turn ``Err`` into a failed log entry
    - **Exceptions are for the fatal path:** only errors that escape an
      operation boundary are raised and caught by the processor

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T]                                │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │     Ok[T]       │     Err[T]      │     Utilities           │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ value: T        │ error: Exception│ try_result()            │
        │ is_ok() → True  │ is_ok() → False │                         │
        │ unwrap() → T    │ unwrap() raises │                         │
        │ flat_map(f)     │ flat_map → Err  │                         │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    >>> Ok(4).flat_map(lambda x: Ok(x // 2)).unwrap()
    2
    >>> try_result(lambda: int("x")).is_err()
    True
    >>> match map_value(doc, variant, "230V", "Voltage"):
    ...     case Ok(param):
    ...         print(param.name)
    ...     case Err(error):
    ...         print(error)

Tags:
    result-pattern, error-handling, functional-programming, foundry

Doc-Types:
    - API Reference
    - Result Pattern Guide
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Immutable; ``flat_map()`` builds a new result rather than modifying
    this one.
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an exception.

    The exception is carried, not raised. ``unwrap()`` raises it for callers
    that have decided a failure here is fatal.
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Ok[T] | Err[T]


# =============================================================================
# RESULT CONSTRUCTORS
# =============================================================================


def try_result(f: Callable[[], T]) -> Result[T]:
    """
    Execute a function and wrap its outcome in a Result.

    This is the bridge from exception-raising host calls to Result-based
    code: ``try_result(lambda: document.set_value(name, value, variant))``.
    """
    try:
        return Ok(f())
    except Exception as e:
        return Err(e)


__all__ = [
    "Result",
    "Ok",
    "Err",
    "try_result",
]
