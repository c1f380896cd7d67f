"""Awaitable ErrorOr for fluent asynchronous chains.

ErrorOrTask wraps an awaitable that resolves to an ErrorOr and exposes the
same combinators as the container itself. Each step awaits the previous one
to completion before inspecting the container, so a chain is a strictly
sequential pipeline:

    >>> person = await (
    ...     Ok(person_id)
    ...     .then_async(load_person)      # awaited first
    ...     .then(lambda p: p.name)       # runs on the loaded value
    ...     .else_async(fallback_name)    # only awaited on failure
    ... )

No step spawns a task; cancellation of the surrounding task propagates as
asyncio.CancelledError unchanged. A task wraps a single coroutine and can
be awaited once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Generator, Generic, TypeVar

if TYPE_CHECKING:
    from erroror.errors import Error

    from .result import ErrorOr, Errors

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class ErrorOrTask(Generic[T]):
    """Awaitable resolving to ErrorOr[T], chainable like the container.

    Produced by the ``*_async`` combinators. Wrap any coroutine returning an
    ErrorOr to chain on it directly:

        >>> async def fetch(user_id: int) -> ErrorOr[User]: ...
        >>> await ErrorOrTask(fetch(7)).then(lambda u: u.email).switch_async(send, report)
    """

    __slots__ = ("_awaitable",)

    def __init__(self, awaitable: Awaitable[ErrorOr[T]]) -> None:
        self._awaitable = awaitable

    def __await__(self) -> Generator[Any, None, ErrorOr[T]]:
        return self._awaitable.__await__()

    def __repr__(self) -> str:
        return f"ErrorOrTask({self._awaitable!r})"

    async def _apply(self, step: Callable[[ErrorOr[T]], ErrorOr[U]]) -> ErrorOr[U]:
        return step(await self._awaitable)

    async def _bind(self, step: Callable[[ErrorOr[T]], Awaitable[R]]) -> R:
        return await step(await self._awaitable)

    # ─────────────────────────────────────────────────────────────────
    # Synchronous callbacks
    # ─────────────────────────────────────────────────────────────────

    def then(self, f: Callable[[T], U | ErrorOr[U]]) -> ErrorOrTask[U]:
        return ErrorOrTask(self._apply(lambda r: r.then(f)))

    def then_do(self, action: Callable[[T], object]) -> ErrorOrTask[T]:
        return ErrorOrTask(self._apply(lambda r: r.then_do(action)))

    def fail_if(self, predicate: Callable[[T], bool], error: Error) -> ErrorOrTask[T]:
        return ErrorOrTask(self._apply(lambda r: r.fail_if(predicate, error)))

    def else_(self, f: Callable[[Errors], T | Error | ErrorOr[T]]) -> ErrorOrTask[T]:
        return ErrorOrTask(self._apply(lambda r: r.else_(f)))

    def else_value(self, substitute: T | Error | ErrorOr[T]) -> ErrorOrTask[T]:
        return ErrorOrTask(self._apply(lambda r: r.else_value(substitute)))

    def else_do(self, action: Callable[[Errors], object]) -> ErrorOrTask[T]:
        return ErrorOrTask(self._apply(lambda r: r.else_do(action)))

    async def switch(self, on_value: Callable[[T], object], on_errors: Callable[[Errors], object]) -> None:
        (await self._awaitable).switch(on_value, on_errors)

    async def switch_first(self, on_value: Callable[[T], object], on_first_error: Callable[[Error], object]) -> None:
        (await self._awaitable).switch_first(on_value, on_first_error)

    async def match(self, on_value: Callable[[T], R], on_errors: Callable[[Errors], R]) -> R:
        return (await self._awaitable).match(on_value, on_errors)

    async def match_first(self, on_value: Callable[[T], R], on_first_error: Callable[[Error], R]) -> R:
        return (await self._awaitable).match_first(on_value, on_first_error)

    # ─────────────────────────────────────────────────────────────────
    # Asynchronous callbacks
    # ─────────────────────────────────────────────────────────────────

    def then_async(self, f: Callable[[T], Awaitable[U | ErrorOr[U]]]) -> ErrorOrTask[U]:
        """Await the previous step, then await f(value) on success."""
        return ErrorOrTask(self._bind(lambda r: r.then_async(f)))

    def then_do_async(self, action: Callable[[T], Awaitable[object]]) -> ErrorOrTask[T]:
        return ErrorOrTask(self._bind(lambda r: r.then_do_async(action)))

    def fail_if_async(self, predicate: Callable[[T], Awaitable[bool]], error: Error) -> ErrorOrTask[T]:
        return ErrorOrTask(self._bind(lambda r: r.fail_if_async(predicate, error)))

    def else_async(self, f: Callable[[Errors], Awaitable[T | Error | ErrorOr[T]]]) -> ErrorOrTask[T]:
        """Await the previous step, then await f(errors) on failure."""
        return ErrorOrTask(self._bind(lambda r: r.else_async(f)))

    def else_do_async(self, action: Callable[[Errors], Awaitable[object]]) -> ErrorOrTask[T]:
        return ErrorOrTask(self._bind(lambda r: r.else_do_async(action)))

    async def switch_async(
        self,
        on_value: Callable[[T], Awaitable[object]],
        on_errors: Callable[[Errors], Awaitable[object]],
    ) -> None:
        await (await self._awaitable).switch_async(on_value, on_errors)

    async def switch_first_async(
        self,
        on_value: Callable[[T], Awaitable[object]],
        on_first_error: Callable[[Error], Awaitable[object]],
    ) -> None:
        await (await self._awaitable).switch_first_async(on_value, on_first_error)

    async def match_async(
        self,
        on_value: Callable[[T], Awaitable[R]],
        on_errors: Callable[[Errors], Awaitable[R]],
    ) -> R:
        return await (await self._awaitable).match_async(on_value, on_errors)

    async def match_first_async(
        self,
        on_value: Callable[[T], Awaitable[R]],
        on_first_error: Callable[[Error], Awaitable[R]],
    ) -> R:
        return await (await self._awaitable).match_first_async(on_value, on_first_error)
