"""Bounded concurrent mapping over a list of inputs."""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class ItemResult(Generic[T, R]):
    """Outcome of applying a worker to one input item."""

    item: T
    value: Optional[R] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def bounded_map(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    batch_size: int = 10,
    batch_delay: float = 0.1,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> List[ItemResult[T, R]]:
    """
    Apply ``worker`` to every item, ``batch_size`` at a time.

    Items in a batch run concurrently. The next batch starts only once the
    whole batch has settled, after waiting ``batch_delay`` seconds. A
    worker's exception becomes that item's error result and never stops the
    map. Results come back in input order.

    :param items: Inputs to process
    :param worker: Coroutine function applied to each item
    :param batch_size: Maximum number of in-flight workers
    :param batch_delay: Seconds to wait between batches
    :param sleep: Coroutine used for the inter-batch wait
    :returns: One ItemResult per input, in input order
    :raises ValueError: If batch_size is less than 1
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")

    results: List[ItemResult[T, R]] = []
    for start in range(0, len(items), batch_size):
        if start > 0 and batch_delay > 0:
            await sleep(batch_delay)

        batch = items[start : start + batch_size]
        outcomes = await asyncio.gather(
            *(worker(item) for item in batch), return_exceptions=True
        )

        for item, outcome in zip(batch, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    # KeyboardInterrupt, CancelledError and friends
                    raise outcome
                results.append(ItemResult(item=item, error=outcome))
            else:
                results.append(ItemResult(item=item, value=outcome))

    failed = sum(1 for result in results if not result.ok)
    if failed:
        logger.debug(
            "Bounded map finished with failures",
            total=len(results),
            failed=failed,
        )
    return results
