import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def gather_in_batches(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    batch_size: int,
) -> list[tuple[T, R | Exception]]:
    """Run ``worker`` over ``items``, ``batch_size`` at a time.

    Calls inside a batch run concurrently; batches run one after another so
    at most ``batch_size`` calls are in flight. A failing call yields its
    exception in place of a result and does not affect its siblings.
    Cancellation of the caller cancels the batch in flight.
    """
    if batch_size < 1:
        raise ValueError("batch_size must be positive")

    outcomes: list[tuple[T, R | Exception]] = []
    for start in range(0, len(items), batch_size):
        batch = items[start:start + batch_size]
        results = await asyncio.gather(
            *(worker(item) for item in batch), return_exceptions=True
        )
        for item, result in zip(batch, results):
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result
            outcomes.append((item, result))
    return outcomes
