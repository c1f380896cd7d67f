"""Tests for asynchronous combinators and ErrorOrTask chains."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import pytest

from erroror import Err, Error, ErrorOr, ErrorOrTask, Ok


@dataclass(frozen=True)
class Person:
    name: str


def _never(*_: object) -> object:
    """Raises on call, so a skipped branch fails even if never awaited."""
    raise AssertionError("should not be called")


async def _identity(x: object) -> object:
    return x


class Recorder:
    """Async callbacks that record what they received."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def on(self, name: str, result: object = None):
        async def callback(arg: object) -> object:
            self.calls.append((name, arg))
            return result
        return callback


# ═════════════════════════════════════════════════════════════════════════════
# switch_async / switch_first_async
# ═════════════════════════════════════════════════════════════════════════════


class TestSwitchAsync:
    @pytest.mark.asyncio
    async def test_switch_async_on_value(self) -> None:
        rec = Recorder()
        error_or_person: ErrorOr[Person] = Ok(Person("Amichai"))

        await error_or_person.switch_async(rec.on("value"), _never)

        assert rec.calls == [("value", Person("Amichai"))]

    @pytest.mark.asyncio
    async def test_switch_async_on_errors(self) -> None:
        rec = Recorder()
        error_or_person: ErrorOr[Person] = Err([Error.validation(), Error.conflict()])

        await error_or_person.switch_async(_never, rec.on("errors"))

        assert rec.calls == [("errors", (Error.validation(), Error.conflict()))]

    @pytest.mark.asyncio
    async def test_switch_first_async_on_value(self) -> None:
        rec = Recorder()
        await Ok(Person("Amichai")).switch_first_async(rec.on("value"), _never)
        assert rec.calls == [("value", Person("Amichai"))]

    @pytest.mark.asyncio
    async def test_switch_first_async_on_errors(self) -> None:
        rec = Recorder()
        error_or_person: ErrorOr[Person] = Err([Error.validation(), Error.conflict()])

        await error_or_person.switch_first_async(_never, rec.on("first"))

        assert rec.calls == [("first", Error.validation())]
        assert rec.calls[0][1] == error_or_person.first_error

    @pytest.mark.asyncio
    async def test_switch_first_async_after_then_async(self) -> None:
        rec = Recorder()
        person = Person("Amichai")

        await Ok(person).then_async(_identity).switch_first_async(rec.on("value"), _never)

        assert rec.calls == [("value", person)]

    @pytest.mark.asyncio
    async def test_switch_async_after_then_async(self) -> None:
        rec = Recorder()
        person = Person("Amichai")

        await Ok(person).then_async(_identity).switch_async(rec.on("value"), _never)

        assert rec.calls == [("value", person)]


# ═════════════════════════════════════════════════════════════════════════════
# match_async / match_first_async
# ═════════════════════════════════════════════════════════════════════════════


class TestMatchAsync:
    @pytest.mark.asyncio
    async def test_match_async(self) -> None:
        rec = Recorder()

        on_value = await Ok(2).match_async(rec.on("value", "v"), _never)
        on_errors = await Err([Error.failure(), Error.conflict()]).match_async(_never, rec.on("errors", "e"))

        assert (on_value, on_errors) == ("v", "e")
        assert rec.calls == [("value", 2), ("errors", (Error.failure(), Error.conflict()))]

    @pytest.mark.asyncio
    async def test_match_first_async(self) -> None:
        rec = Recorder()

        result = await Err([Error.forbidden(), Error.failure()]).match_first_async(_never, rec.on("first", 403))

        assert result == 403
        assert rec.calls == [("first", Error.forbidden())]

    @pytest.mark.asyncio
    async def test_match_async_after_then(self) -> None:
        async def describe(x: int) -> str:
            return f"value {x}"

        assert await Ok(1).then(lambda x: x + 1).match_async(describe, _never) == "value 2"


# ═════════════════════════════════════════════════════════════════════════════
# then_async / else_async
# ═════════════════════════════════════════════════════════════════════════════


class TestThenAsync:
    @pytest.mark.asyncio
    async def test_then_async_returns_task(self) -> None:
        task = Ok(1).then_async(_identity)
        assert isinstance(task, ErrorOrTask)
        assert await task == Ok(1)

    @pytest.mark.asyncio
    async def test_chain_propagates_value(self) -> None:
        async def double(x: int) -> int:
            await asyncio.sleep(0)
            return x * 2

        async def validate(x: int) -> ErrorOr[int]:
            return Ok(x) if x < 100 else Err(Error.validation())

        result = await Ok(5).then_async(double).then_async(double).then_async(validate).then(str)

        assert result == Ok("20")

    @pytest.mark.asyncio
    async def test_chain_short_circuits_on_initial_failure(self) -> None:
        errors = [Error.not_found(code="A"), Error.conflict(code="B")]
        original: ErrorOr[int] = Err(errors)

        result = await (
            original
            .then_async(_never)
            .then(_never)
            .then_async(_never)
            .then_do_async(_never)
            .fail_if_async(_never, Error.failure())
        )

        assert result.errors is original.errors
        assert list(result.errors) == errors

    @pytest.mark.asyncio
    async def test_then_async_flattens_failure(self) -> None:
        async def reject(_: int) -> ErrorOr[int]:
            return Err(Error.forbidden(code="Denied"))

        result = await Ok(1).then_async(reject).then_async(_never)

        assert result.first_error.code == "Denied"

    @pytest.mark.asyncio
    async def test_then_async_returning_error_fails(self) -> None:
        async def reject(_: int) -> Error:
            return Error.unauthorized(code="Token.Expired")

        result = await Ok(1).then_async(reject).then(_never)

        assert result == Err(Error.unauthorized(code="Token.Expired"))

    @pytest.mark.asyncio
    async def test_steps_run_strictly_in_sequence(self) -> None:
        events: list[str] = []

        def step(name: str, delay: float):
            async def run(x: int) -> int:
                events.append(f"{name}:start")
                await asyncio.sleep(delay)
                events.append(f"{name}:end")
                return x + 1
            return run

        result = await Ok(0).then_async(step("a", 0.02)).then_async(step("b", 0)).then_async(step("c", 0.01))

        assert result == Ok(3)
        assert events == ["a:start", "a:end", "b:start", "b:end", "c:start", "c:end"]

    @pytest.mark.asyncio
    async def test_then_do_async_and_fail_if_async(self) -> None:
        rec = Recorder()

        async def too_big(x: int) -> bool:
            return x > 10

        kept = await Ok(3).then_do_async(rec.on("seen")).fail_if_async(too_big, Error.validation())
        failed = await Ok(30).fail_if_async(too_big, Error.validation(code="TooBig"))

        assert kept == Ok(3)
        assert failed.first_error.code == "TooBig"
        assert rec.calls == [("seen", 3)]

    @pytest.mark.asyncio
    async def test_exceptions_propagate(self) -> None:
        async def boom(_: int) -> int:
            raise LookupError("boom")

        with pytest.raises(LookupError, match="boom"):
            await Ok(1).then_async(boom).then(_never)


class TestElseAsync:
    @pytest.mark.asyncio
    async def test_else_async_recovers(self) -> None:
        rec = Recorder()
        errors = (Error.validation(), Error.conflict())

        result = await Err(list(errors)).else_async(rec.on("else", 0)).then(lambda x: x + 1)

        assert result == Ok(1)
        assert rec.calls == [("else", errors)]

    @pytest.mark.asyncio
    async def test_else_async_skipped_on_success(self) -> None:
        ok = Ok(5)
        assert await ok.else_async(_never) is ok

    @pytest.mark.asyncio
    async def test_else_async_substitutes_failure(self) -> None:
        async def replace(_: object) -> Error:
            return Error.unexpected(code="Replaced")

        result = await Err(Error.failure()).else_async(replace)

        assert result == Err(Error.unexpected(code="Replaced"))

    @pytest.mark.asyncio
    async def test_else_do_async(self) -> None:
        rec = Recorder()
        err = Err(Error.failure())

        assert await err.else_do_async(rec.on("errs")) is err
        assert await Ok(1).else_do_async(_never) == Ok(1)
        assert rec.calls == [("errs", (Error.failure(),))]

    @pytest.mark.asyncio
    async def test_task_sync_combinators(self) -> None:
        result = await (
            Err(Error.not_found())
            .then_async(_never)
            .else_(lambda _: 1)
            .then_do(lambda _: None)
            .fail_if(lambda x: x > 5, Error.failure())
            .else_value(_never)
            .else_do(_never)
        )
        assert result == Ok(1)

    @pytest.mark.asyncio
    async def test_task_terminals(self) -> None:
        seen: list[object] = []

        await Ok(1).then_async(_identity).switch(seen.append, _never)
        await Err(Error.conflict()).then_async(_never).switch_first(_never, seen.append)
        matched = await Ok(2).then_async(_identity).match(lambda x: x * 10, _never)
        first = await Err([Error.failure(), Error.conflict()]).else_async(_identity).match_first(
            lambda errs: len(errs), _never,
        )

        assert seen == [1, Error.conflict()]
        assert matched == 20
        assert first == 2


# ═════════════════════════════════════════════════════════════════════════════
# Wrapping coroutines & cancellation
# ═════════════════════════════════════════════════════════════════════════════


class TestErrorOrTask:
    @pytest.mark.asyncio
    async def test_wraps_coroutine(self) -> None:
        async def load(user_id: int) -> ErrorOr[Person]:
            return Ok(Person(f"user-{user_id}")) if user_id else Err(Error.not_found())

        assert await ErrorOrTask(load(7)).then(lambda p: p.name) == Ok("user-7")
        assert (await ErrorOrTask(load(0)).then(_never)).is_error

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self) -> None:
        started = asyncio.Event()
        reached: list[str] = []

        async def slow(x: int) -> int:
            started.set()
            await asyncio.sleep(10)
            return x

        async def after(x: int) -> int:
            reached.append("after")
            return x

        task = asyncio.create_task(Ok(1).then_async(slow).then_async(after).switch_async(_identity, _never))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert reached == []
