"""Bounded-concurrency batch processing."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

log = logging.getLogger(__name__)


async def process_batch[TItem, TResult](
    items: Sequence[TItem],
    handler: Callable[[TItem], Awaitable[TResult]],
    *,
    concurrency: int,
    on_progress: Callable[[int, int], None] | None = None,
    on_error: Callable[[Exception, TItem], None] | None = None,
) -> list[TResult]:
    """Run ``handler`` for every item with at most ``concurrency`` in flight.

    Failures never abort the batch: they are passed to ``on_error`` (or logged)
    and the item is left out of the returned list. Results are in completion
    order. ``on_progress`` receives ``(completed, total)`` after each item,
    successful or not.
    """

    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")

    total = len(items)
    if total == 0:
        return []

    semaphore = asyncio.Semaphore(concurrency)
    results: list[TResult] = []
    completed = 0

    async def run_one(item: TItem) -> None:
        nonlocal completed
        async with semaphore:
            try:
                results.append(await handler(item))
            except Exception as exc:  # noqa: BLE001
                if on_error is None:
                    log.warning("Batch item %r failed: %s", item, exc)
                else:
                    on_error(exc, item)
            finally:
                completed += 1
                if on_progress is not None:
                    on_progress(completed, total)

    await asyncio.gather(*(run_one(item) for item in items))
    return results
