# Overview: Concurrent fan-out of independent remote fetches and fetch sequencing.

from __future__ import annotations

import itertools
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable


def fetch_concurrently(*calls: Callable[[], Any], max_workers: int = 4) -> list:
    """
    Run independent fetches in parallel and wait for all of them.

    Results come back in call order. The first failure is re-raised once
    every call has finished; there is no partial result.
    """
    if not calls:
        return []
    if len(calls) == 1:
        return [calls[0]()]

    with ThreadPoolExecutor(max_workers=min(max_workers, len(calls))) as pool:
        futures = [pool.submit(call) for call in calls]
        # result() re-raises the worker's exception
        outcomes = []
        first_exc = None
        for future in futures:
            try:
                outcomes.append(future.result())
            except Exception as exc:
                outcomes.append(None)
                if first_exc is None:
                    first_exc = exc
    if first_exc is not None:
        raise first_exc
    return outcomes


class FetchSequencer:
    """
    Monotonic tags for overlapping fetches of the same view.

    issue() hands out a tag before the fetch starts; accept(tag) is true only
    when no later-issued fetch has already been accepted.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self._latest_accepted = 0

    def issue(self) -> int:
        with self._lock:
            return next(self._counter)

    def accept(self, tag: int) -> bool:
        with self._lock:
            if tag < self._latest_accepted:
                return False
            self._latest_accepted = tag
            return True

    @property
    def latest_accepted(self) -> int:
        return self._latest_accepted
