"""
Parallel work distribution for PC-Outlier.

Hands out point indices to a fixed set of worker threads from one shared
queue so that every index is processed exactly once.
"""

import logging
import os
import threading
from collections import deque
from typing import Any, Callable, List, Optional

from tqdm import tqdm

logger = logging.getLogger(__name__)


class WorkerError(RuntimeError):
    """Raised after join when a worker's unit of work failed."""


def resolve_thread_count(threads: int) -> int:
    """
    Clamp a requested thread count to a usable value.

    Values below 1 are raised to 1. Values above the number of available
    processors are kept but logged, since they can degrade performance.

    Parameters
    ----------
    threads : int
        Requested number of worker threads.

    Returns
    -------
    int
        Thread count to use.
    """
    if threads < 1:
        logger.warning(f"Number of threads < 1 ({threads}). Setting to 1.")
        threads = 1

    hw_concurrency = os.cpu_count() or 1
    if threads > hw_concurrency:
        logger.warning(
            f"Number of threads ({threads}) greater than available processors "
            f"({hw_concurrency}). This can degrade performance."
        )

    return threads


def distribute(
    n_items: int,
    n_threads: int,
    work: Callable[[int], Any],
    record: Optional[Callable[[int, Any], None]] = None,
    show_progress: bool = False,
) -> None:
    """
    Process indices [0, n_items) exactly once across ``n_threads`` workers.

    Each worker pops the next index under a queue lock, runs ``work(idx)``
    without holding any lock, then passes the value to ``record(idx, value)``
    under a second, independent result lock. Returns only after every worker
    has terminated.

    Parameters
    ----------
    n_items : int
        Number of indices to process.
    n_threads : int
        Number of worker threads (clamped to at least 1).
    work : callable
        Unit of work taking a point index. Must be safe to call concurrently.
    record : callable, optional
        Called with ``(idx, result)`` while the result lock is held.
    show_progress : bool
        If True, display a progress bar.

    Raises
    ------
    WorkerError
        If any unit of work raised. The first failure is chained as
        ``__cause__``; remaining workers stop taking new indices.
    """
    n_threads = max(1, int(n_threads))

    queue = deque(range(n_items))
    queue_lock = threading.Lock()
    result_lock = threading.Lock()
    errors: List[BaseException] = []

    progress = tqdm(total=n_items, disable=not show_progress, unit="pt")

    def worker():
        while True:
            with queue_lock:
                if not queue or errors:
                    return
                idx = queue.popleft()

            try:
                value = work(idx)
                with result_lock:
                    if record is not None:
                        record(idx, value)
                    progress.update(1)
            except Exception as e:
                with queue_lock:
                    errors.append(e)
                return

    threads = [
        threading.Thread(target=worker, name=f"outlier-worker-{i}")
        for i in range(n_threads)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    progress.close()

    if errors:
        raise WorkerError(f"Worker failed: {errors[0]}") from errors[0]
