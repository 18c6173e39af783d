"""Run a per-channel function serially or on a thread pool."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List

logger = logging.getLogger(__name__)


def for_each_channel(fn: Callable[[int], None], channels: int, workers: int = 1) -> None:
    """
    Call fn(c) for every channel index. With workers > 1 channels run concurrently,
    one task each; every task must write only its own channel.
    Exceptions from any task propagate to the caller.
    """
    max_workers = min(max(1, int(workers)), channels)
    if max_workers == 1:
        for c in range(channels):
            fn(c)
        return

    logger.debug("processing %d channels on %d threads", channels, max_workers)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures: List[Future] = [pool.submit(fn, c) for c in range(channels)]
        for fut in futures:
            fut.result()
