"""Fixed-width all-settle batching for GitHub fan-out."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def settle_in_batches(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    width: int,
    label: str = "item",
) -> list[R]:
    """Run `worker` over `items`, `width` at a time, keeping only successes.

    Each batch runs fully in parallel and settles completely (every task
    succeeds or fails) before the next batch starts. A failing task never
    cancels its siblings; its item is dropped and the failure is logged.

    Results keep the order of `items`.
    """
    if width < 1:
        raise ValueError("Batch width must be at least 1")

    results: list[R] = []
    failures = 0

    for start in range(0, len(items), width):
        batch = items[start : start + width]
        settled = await asyncio.gather(
            *[worker(item) for item in batch],
            return_exceptions=True,
        )
        for item, result in zip(batch, settled, strict=True):
            if isinstance(result, BaseException):
                failures += 1
                logger.warning(f"Dropping {label} {item!r}: {result}")
                continue
            results.append(result)

    if failures:
        logger.info(f"{failures}/{len(items)} {label} lookups failed and were skipped")

    return results
