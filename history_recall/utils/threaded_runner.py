# threaded_runner.py - run callables on a small thread pool and collect their results.

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, TypeVar

R = TypeVar("R")


def run_parallel(tasks: Iterable[Callable[[], R]], max_workers: int = 4) -> List[R]:
    """
    Run zero-argument callables in a thread pool.
    Results come back in submission order; the first exception raised by a task propagates.
    """
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as ex:
        futs = [ex.submit(t) for t in tasks]
        return [f.result() for f in futs]
