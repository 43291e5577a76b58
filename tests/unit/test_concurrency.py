"""Unit tests for the fan-out helpers in utils.concurrency."""

from __future__ import annotations

import asyncio

import pytest

from groupie_tracker.utils.concurrency import gather_settled, throttled_gather


async def _value(value, delay: float = 0.0):
    await asyncio.sleep(delay)
    return value


async def _fail(message: str, delay: float = 0.0):
    await asyncio.sleep(delay)
    raise ValueError(message)


class TestGatherSettled:
    @pytest.mark.asyncio
    async def test_all_succeed(self) -> None:
        results, errors = await gather_settled([_value(1), _value(2), _value(3)])
        assert results == [1, 2, 3]
        assert errors == []

    @pytest.mark.asyncio
    async def test_failures_leave_none_and_are_all_collected(self) -> None:
        results, errors = await gather_settled(
            [_fail("first"), _value("ok", delay=0.01), _fail("third")]
        )

        assert results == [None, "ok", None]
        assert [str(err) for err in errors] == ["first", "third"]

    @pytest.mark.asyncio
    async def test_fast_failure_does_not_short_circuit(self) -> None:
        finished: list[str] = []

        async def _slow() -> str:
            await asyncio.sleep(0.01)
            finished.append("slow")
            return "slow"

        results, errors = await gather_settled([_fail("fast"), _slow()])

        assert finished == ["slow"]
        assert results == [None, "slow"]
        assert len(errors) == 1

    @pytest.mark.asyncio
    async def test_base_exceptions_are_not_collected(self) -> None:
        class _Abort(BaseException):
            pass

        async def _abort() -> None:
            raise _Abort()

        with pytest.raises(_Abort):
            await gather_settled([_value(1), _abort(), _fail("ordinary")])


class TestThrottledGather:
    @pytest.mark.asyncio
    async def test_preserves_order_and_returns_exceptions(self) -> None:
        results = await throttled_gather(
            [_value("a", 0.01), _fail("b"), _value("c")],
            semaphore=asyncio.Semaphore(2),
        )

        assert results[0] == "a"
        assert isinstance(results[1], ValueError)
        assert results[2] == "c"

    @pytest.mark.asyncio
    async def test_respects_semaphore(self) -> None:
        in_flight = 0
        peak = 0

        async def _work() -> None:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.001)
            in_flight -= 1

        await throttled_gather([_work() for _ in range(6)], semaphore=asyncio.Semaphore(3))

        assert peak == 3

    @pytest.mark.asyncio
    async def test_raises_when_not_returning_exceptions(self) -> None:
        with pytest.raises(ValueError, match="boom"):
            await throttled_gather(
                [_fail("boom")], semaphore=asyncio.Semaphore(1), return_exceptions=False
            )
