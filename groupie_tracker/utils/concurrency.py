"""Shared concurrency primitives for fan-out / fan-in work.

Two patterns are exposed:

1. **throttled_gather** -- ``asyncio.gather`` with every awaitable wrapped in
   a semaphore acquire/release.  The detail assembler uses it to geocode all
   tour locations of an artist without opening one socket per location.

2. **gather_settled** -- launch N independent awaitables, wait for *all* of
   them, and split the outcome into results and collected errors.  The
   snapshot cache uses it so a fast failure from one upstream never
   short-circuits (or orphans) the other fetches.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

_T = TypeVar("_T")


async def throttled_gather(
    coros: list[Awaitable[_T]],
    semaphore: asyncio.Semaphore,
    return_exceptions: bool = True,
) -> list[_T | BaseException]:
    """Run awaitables concurrently, at most ``semaphore`` slots at a time.

    Parameters
    ----------
    coros:
        Awaitable objects to execute concurrently.
    semaphore:
        Bounds how many of them run simultaneously.
    return_exceptions:
        If ``True``, exceptions are returned in the results list rather
        than being raised.  Mirrors ``asyncio.gather`` semantics.

    Returns
    -------
    list[_T | BaseException]
        Results in the same order as the input coroutines.
    """

    async def _wrapped(coro: Awaitable[_T]) -> _T:
        async with semaphore:
            return await coro

    return await asyncio.gather(
        *(_wrapped(c) for c in coros), return_exceptions=return_exceptions
    )


async def gather_settled(
    coros: list[Awaitable[_T]],
) -> tuple[list[_T | None], list[Exception]]:
    """Await every coroutine and return ``(results, errors)``.

    ``results`` keeps input order, with ``None`` in the slot of each failed
    coroutine.  ``errors`` lists every failure in input order.  Only
    ``Exception`` subclasses are collected; cancellation and any other
    ``BaseException`` is re-raised once every coroutine has settled.
    """
    outcomes = await asyncio.gather(*coros, return_exceptions=True)

    results: list[_T | None] = []
    errors: list[Exception] = []
    for outcome in outcomes:
        if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, Exception):
            errors.append(outcome)
            results.append(None)
        else:
            results.append(outcome)
    return results, errors
