"""ErrorOr container: a value or a non-empty sequence of errors.

Implements a discriminated union for success/failure with a fluent
combinator algebra:
- then / then_do / fail_if: continue on success, short-circuit on failure
- else_ / else_value / else_do: substitute on failure, pass success through
- switch / switch_first: terminal consumption
- match / match_first: terminal transformation

Every combinator has an asynchronous counterpart (suffix ``_async``) that
returns an awaitable ErrorOrTask, so async steps chain fluently.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    TypeVar,
    cast,
    overload,
)

from erroror.errors import Error, InvalidAccessError, InvalidOperationError
from erroror.observability.logging import get_logger

from .task import ErrorOrTask

if TYPE_CHECKING:
    from collections.abc import Sequence

T = TypeVar("T")  # Value type
U = TypeVar("U")  # Mapped value type
R = TypeVar("R")  # Match result type

Errors = tuple[Error, ...]

_log = get_logger("erroror.result")


class ErrorOr(Generic[T]):
    """Discriminated union holding either a value or one or more errors.

    Exactly one variant is populated. The error sequence is never empty and
    keeps the order the errors were supplied in. Containers are immutable;
    every combinator returns a new container (or the receiver itself when it
    passes through unchanged).

    Examples:
        >>> def find_user(user_id: int) -> ErrorOr[str]:
        ...     if user_id != 1:
        ...         return Err(Error.not_found(code="User.NotFound"))
        ...     return Ok("amichai")
        >>>
        >>> find_user(1).then(str.upper).value
        'AMICHAI'
        >>> find_user(2).then(str.upper).first_error.code
        'User.NotFound'

    Accessor policy:
        ``value`` raises InvalidAccessError on a failure container and
        ``first_error`` raises it on a success container. Check ``is_error``
        first, or use ``value_or_default``/``errors`` which never raise.
    """

    __slots__ = ("_value", "_errors")

    def __init__(self, value: T | None, errors: Errors | None) -> None:
        """Private constructor. Use Ok()/Err() or the from_* classmethods."""
        if errors is not None and not errors:
            raise InvalidOperationError("An ErrorOr cannot hold an empty error sequence.")
        if value is not None and errors is not None:
            raise InvalidOperationError("An ErrorOr holds either a value or errors, never both.")
        self._value = value
        self._errors = errors

    # ─────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def from_value(cls, value: T) -> ErrorOr[T]:
        """Success container wrapping value."""
        return cls(value, None)

    @classmethod
    def from_error(cls, error: Error) -> ErrorOr[T]:
        """Failure container holding a single error.

        Raises:
            TypeError: If error is not an Error
        """
        if not isinstance(error, Error):
            raise TypeError(f"Expected Error, got {type(error).__name__}")
        return cls(None, (error,))

    @classmethod
    def from_errors(cls, errors: Iterable[Error]) -> ErrorOr[T]:
        """Failure container holding errors in the given order.

        Raises:
            InvalidOperationError: If errors is empty
            TypeError: If an item is not an Error
        """
        errs = tuple(errors)
        if not errs:
            _log.debug("empty error sequence", operation="from_errors")
            raise InvalidOperationError(
                "Cannot create an ErrorOr from an empty collection of errors. "
                "Provide at least one error."
            )
        for err in errs:
            if not isinstance(err, Error):
                raise TypeError(f"Expected Error, got {type(err).__name__}")
        return cls(None, errs)

    # ─────────────────────────────────────────────────────────────────
    # State & Accessors
    # ─────────────────────────────────────────────────────────────────

    @property
    def is_error(self) -> bool:
        """True iff the container holds errors."""
        return self._errors is not None

    @property
    def value(self) -> T:
        """Wrapped value.

        Raises:
            InvalidAccessError: If the container holds errors
        """
        if self._errors is not None:
            _log.debug("invalid access", accessor="value", error_count=len(self._errors))
            raise InvalidAccessError(
                "The value cannot be accessed when errors have been recorded. "
                "Check is_error before accessing value.",
                self._errors,
            )
        return cast(T, self._value)

    def value_or_default(self, default: T | None = None) -> T | None:
        """Wrapped value, or default when the container holds errors."""
        return default if self._errors is not None else self._value

    @property
    def errors(self) -> Errors:
        """Error sequence, or an empty tuple on success."""
        return self._errors if self._errors is not None else ()

    @property
    def first_error(self) -> Error:
        """First recorded error.

        Raises:
            InvalidAccessError: If the container holds a value
        """
        if self._errors is None:
            _log.debug("invalid access", accessor="first_error")
            raise InvalidAccessError(
                "The first error cannot be accessed when no errors have been recorded. "
                "Check is_error before accessing first_error."
            )
        return self._errors[0]

    # ─────────────────────────────────────────────────────────────────
    # Sequential Chaining
    # ─────────────────────────────────────────────────────────────────

    @overload
    def then(self, f: Callable[[T], ErrorOr[U]]) -> ErrorOr[U]: ...
    @overload
    def then(self, f: Callable[[T], U]) -> ErrorOr[U]: ...

    def then(self, f: Callable[[T], Any]) -> ErrorOr[Any]:
        """Transform the value on success; short-circuit on failure.

        If f returns an ErrorOr it is returned as is (flattened one level)
        and an Error becomes a failure; anything else is wrapped as a
        success. On failure f is never invoked and the same error tuple is
        carried forward.
        """
        if self._errors is not None:
            return ErrorOr(None, self._errors)
        return to_error_or(f(cast(T, self._value)))

    def then_do(self, action: Callable[[T], object]) -> ErrorOr[T]:
        """Run action with the value for side effects, return self."""
        if self._errors is None:
            action(cast(T, self._value))
        return self

    def fail_if(self, predicate: Callable[[T], bool], error: Error) -> ErrorOr[T]:
        """Turn a success into failure with error when predicate holds.

        The predicate is never invoked on a failure container.
        """
        if self._errors is None and predicate(cast(T, self._value)):
            return ErrorOr(None, (error,))
        return self

    # ─────────────────────────────────────────────────────────────────
    # Fallback Substitution
    # ─────────────────────────────────────────────────────────────────

    def else_(self, f: Callable[[Errors], T | Error | ErrorOr[T]]) -> ErrorOr[T]:
        """Substitute a failure with the result of f(errors).

        A plain value becomes a success. An Error or ErrorOr substitutes a
        different outcome, which may itself be a failure. A success
        container is returned unchanged and f is never invoked.
        """
        if self._errors is None:
            return self
        return to_error_or(f(self._errors))

    def else_value(self, substitute: T | Error | ErrorOr[T]) -> ErrorOr[T]:
        """Substitute a failure with a fixed value, Error or container."""
        if self._errors is None:
            return self
        return to_error_or(substitute)

    def else_do(self, action: Callable[[Errors], object]) -> ErrorOr[T]:
        """Run action with the errors for side effects, return self."""
        if self._errors is not None:
            action(self._errors)
        return self

    # ─────────────────────────────────────────────────────────────────
    # Terminal Consumption
    # ─────────────────────────────────────────────────────────────────

    def switch(self, on_value: Callable[[T], object], on_errors: Callable[[Errors], object]) -> None:
        """Invoke exactly one callback: on_value or on_errors (all errors)."""
        if self._errors is None:
            on_value(cast(T, self._value))
        else:
            on_errors(self._errors)

    def switch_first(self, on_value: Callable[[T], object], on_first_error: Callable[[Error], object]) -> None:
        """Like switch, but the failure branch receives only the first error."""
        if self._errors is None:
            on_value(cast(T, self._value))
        else:
            on_first_error(self._errors[0])

    def match(self, on_value: Callable[[T], R], on_errors: Callable[[Errors], R]) -> R:
        """Return the result of whichever branch applies.

        Example:
            >>> Ok(42).match(lambda v: f"got {v}", lambda errs: f"{len(errs)} errors")
            'got 42'
        """
        if self._errors is None:
            return on_value(cast(T, self._value))
        return on_errors(self._errors)

    def match_first(self, on_value: Callable[[T], R], on_first_error: Callable[[Error], R]) -> R:
        """Like match, but the failure branch receives only the first error."""
        if self._errors is None:
            return on_value(cast(T, self._value))
        return on_first_error(self._errors[0])

    # ─────────────────────────────────────────────────────────────────
    # Asynchronous Combinators
    # ─────────────────────────────────────────────────────────────────

    def then_async(self, f: Callable[[T], Awaitable[U | ErrorOr[U]]]) -> ErrorOrTask[U]:
        """Async then: await f(value) on success, short-circuit on failure.

        Example:
            >>> async def load(user_id: int) -> ErrorOr[str]: ...
            >>> name = await Ok(1).then_async(load).then(str.upper)
        """
        return ErrorOrTask(self._then_async(f))

    def then_do_async(self, action: Callable[[T], Awaitable[object]]) -> ErrorOrTask[T]:
        """Async then_do: await action(value) on success, return self."""
        return ErrorOrTask(self._then_do_async(action))

    def fail_if_async(self, predicate: Callable[[T], Awaitable[bool]], error: Error) -> ErrorOrTask[T]:
        """Async fail_if with an awaitable predicate."""
        return ErrorOrTask(self._fail_if_async(predicate, error))

    def else_async(self, f: Callable[[Errors], Awaitable[T | Error | ErrorOr[T]]]) -> ErrorOrTask[T]:
        """Async else_: await f(errors) on failure, pass success through."""
        return ErrorOrTask(self._else_async(f))

    def else_do_async(self, action: Callable[[Errors], Awaitable[object]]) -> ErrorOrTask[T]:
        """Async else_do: await action(errors) on failure, return self."""
        return ErrorOrTask(self._else_do_async(action))

    async def switch_async(
        self,
        on_value: Callable[[T], Awaitable[object]],
        on_errors: Callable[[Errors], Awaitable[object]],
    ) -> None:
        """Await exactly one callback. The other is never invoked."""
        if self._errors is None:
            await on_value(cast(T, self._value))
        else:
            await on_errors(self._errors)

    async def switch_first_async(
        self,
        on_value: Callable[[T], Awaitable[object]],
        on_first_error: Callable[[Error], Awaitable[object]],
    ) -> None:
        """Await on_value or on_first_error with only the first error."""
        if self._errors is None:
            await on_value(cast(T, self._value))
        else:
            await on_first_error(self._errors[0])

    async def match_async(
        self,
        on_value: Callable[[T], Awaitable[R]],
        on_errors: Callable[[Errors], Awaitable[R]],
    ) -> R:
        """Await whichever branch applies and return its result."""
        if self._errors is None:
            return await on_value(cast(T, self._value))
        return await on_errors(self._errors)

    async def match_first_async(
        self,
        on_value: Callable[[T], Awaitable[R]],
        on_first_error: Callable[[Error], Awaitable[R]],
    ) -> R:
        """Like match_async, but the failure branch receives only the first error."""
        if self._errors is None:
            return await on_value(cast(T, self._value))
        return await on_first_error(self._errors[0])

    # Dispatch happens before the first await; the skipped branch is never called.

    async def _then_async(self, f: Callable[[T], Awaitable[Any]]) -> ErrorOr[Any]:
        if self._errors is not None:
            return ErrorOr(None, self._errors)
        return to_error_or(await f(cast(T, self._value)))

    async def _then_do_async(self, action: Callable[[T], Awaitable[object]]) -> ErrorOr[T]:
        if self._errors is None:
            await action(cast(T, self._value))
        return self

    async def _fail_if_async(self, predicate: Callable[[T], Awaitable[bool]], error: Error) -> ErrorOr[T]:
        if self._errors is None and await predicate(cast(T, self._value)):
            return ErrorOr(None, (error,))
        return self

    async def _else_async(self, f: Callable[[Errors], Awaitable[Any]]) -> ErrorOr[T]:
        if self._errors is None:
            return self
        return to_error_or(await f(self._errors))

    async def _else_do_async(self, action: Callable[[Errors], Awaitable[object]]) -> ErrorOr[T]:
        if self._errors is not None:
            await action(self._errors)
        return self

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        if self._errors is None:
            return f"ErrorOr(value={self._value!r})"
        return f"ErrorOr(errors={list(self._errors)!r})"

    def __eq__(self, other: object) -> bool:
        """Structural equality."""
        if not isinstance(other, ErrorOr):
            return NotImplemented
        if self._errors is None or other._errors is None:
            return self._errors is None and other._errors is None and self._value == other._value
        return self._errors == other._errors

    def __hash__(self) -> int:
        return hash((False, self._value) if self._errors is None else (True, self._errors))


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def Ok(value: T) -> ErrorOr[T]:  # noqa: N802
    """Construct a success container."""
    return ErrorOr.from_value(value)


def Err(errors: Error | Sequence[Error]) -> ErrorOr[Any]:  # noqa: N802
    """Construct a failure container from one error or a non-empty sequence.

    Raises:
        InvalidOperationError: If given an empty sequence
    """
    if isinstance(errors, Error):
        return ErrorOr.from_error(errors)
    return ErrorOr.from_errors(errors)


def to_error_or(obj: T | Error | ErrorOr[T]) -> ErrorOr[T]:
    """Lift anything into a container.

    An Error becomes a failure, a container is returned as is and anything
    else becomes a success. Sequences are treated as values; use Err() for
    a failure with several errors.
    """
    if isinstance(obj, ErrorOr):
        return obj
    if isinstance(obj, Error):
        return ErrorOr.from_error(obj)
    return ErrorOr.from_value(cast(T, obj))
