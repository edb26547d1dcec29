"""Ordered fan-out of independent calls over a shared thread pool."""

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Any, Callable, List, Optional, Sequence, Tuple

Call = Tuple[Callable[..., Any], Tuple[Any, ...]]


def gather(executor: Optional[Executor], calls: Sequence[Call]) -> List[Any]:
    """
    Run `calls` and return their results in the order given.

    With no executor every call runs inline. Otherwise all calls are
    submitted first and then joined in order. Tasks may themselves call
    `gather` on the same bounded pool, so before waiting on a future we try
    to cancel it; a future that was still queued is run on this thread
    instead. A thread therefore only blocks on work that is already running,
    which keeps nested fan-out from starving the pool.
    """

    if executor is None or len(calls) <= 1:
        return [fn(*args) for fn, args in calls]

    futures: List[Future] = [executor.submit(fn, *args) for fn, args in calls]

    results: List[Any] = []
    for future, (fn, args) in zip(futures, calls):
        if future.cancel():
            results.append(fn(*args))
        else:
            results.append(future.result())
    return results
