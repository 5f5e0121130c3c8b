"""Bounded-concurrency helpers for batch extraction.

Extraction calls (OCR, transcription, ffmpeg) are slow and hold file
handles, models or subprocesses, so a batch never runs more than a fixed
number of them at once.  :func:`throttled_gather` is a drop-in replacement
for ``asyncio.gather`` that wraps each awaitable in a semaphore.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

_T = TypeVar("_T")


def make_semaphore(max_concurrency: int) -> asyncio.Semaphore:
    """Return a semaphore admitting *max_concurrency* tasks (at least one)."""
    return asyncio.Semaphore(max(1, max_concurrency))


async def throttled_gather(
    coros: list[Awaitable[_T]],
    semaphore: asyncio.Semaphore,
    return_exceptions: bool = False,
) -> list[_T | BaseException]:
    """Run awaitables concurrently, at most ``semaphore`` slots at a time.

    Parameters
    ----------
    coros:
        Awaitable objects to execute.
    semaphore:
        Semaphore bounding how many awaitables run simultaneously.
    return_exceptions:
        Mirrors ``asyncio.gather`` semantics.

    Returns
    -------
    list
        Results in the same order as the input awaitables, regardless of
        completion order.
    """

    async def _wrapped(coro: Awaitable[_T]) -> _T:
        async with semaphore:
            return await coro

    tasks = [_wrapped(c) for c in coros]
    return await asyncio.gather(*tasks, return_exceptions=return_exceptions)
