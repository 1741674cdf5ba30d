# Overview: Explicit per-view state holding the last committed fetch of each view.

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Optional

from .concurrency import FetchSequencer


@dataclass
class ViewSnapshot:
    data: Any
    tag: int
    stale: bool = False


@dataclass
class ViewState:
    """
    State owned by one view of one caller.

    A fetch commits only if it is not older than the last committed one, so
    a slow response can never overwrite fresher data.
    """
    sequencer: FetchSequencer = field(default_factory=FetchSequencer)
    snapshot: Optional[ViewSnapshot] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def begin(self) -> int:
        return self.sequencer.issue()

    def commit(self, tag: int, data: Any) -> bool:
        with self._lock:
            if not self.sequencer.accept(tag):
                return False
            self.snapshot = ViewSnapshot(data=data, tag=tag)
            return True

    def current(self) -> Optional[Any]:
        return self.snapshot.data if self.snapshot else None

    def refresh(
        self,
        fetch: Callable[[], Any],
        *,
        serve_stale_if: Optional[Callable[[Exception], bool]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> ViewSnapshot:
        """
        Fetch, commit, and return the snapshot to render.

        A discarded (stale) response yields the newer committed snapshot.
        On a failure accepted by serve_stale_if (default: any failure) the last
        committed data is returned flagged stale; otherwise, or with no prior
        data, the error propagates.
        """
        tag = self.begin()
        try:
            data = fetch()
        except Exception as exc:
            serve_stale = serve_stale_if is None or serve_stale_if(exc)
            if serve_stale and self.snapshot is not None:
                if logger is not None:
                    logger.warning("Serving last-known view state after fetch failure: %s", exc)
                return ViewSnapshot(data=self.snapshot.data, tag=self.snapshot.tag, stale=True)
            raise
        if self.commit(tag, data):
            return ViewSnapshot(data=data, tag=tag)
        return self.snapshot


def _caller_of(key: Hashable) -> Hashable:
    """Views are keyed (caller, view, ...); other keys are their own caller."""
    if isinstance(key, tuple) and key:
        return key[0]
    return key


class ViewStateRegistry:
    """
    Bounded LRU of ViewState keyed by (caller, view, ...).

    max_per_caller caps one caller's entries so a caller scanning many date
    ranges only evicts its own oldest views; max_entries caps the total.
    """

    def __init__(self, max_entries: int = 256, max_per_caller: int = 16):
        self.max_entries = max_entries
        self.max_per_caller = max_per_caller
        self._states: "OrderedDict[Hashable, ViewState]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> ViewState:
        with self._lock:
            state = self._states.get(key)
            if state is None:
                self._evict_for(_caller_of(key))
                state = ViewState()
                self._states[key] = state
            self._states.move_to_end(key)
            while len(self._states) > self.max_entries:
                self._states.popitem(last=False)
            return state

    def _evict_for(self, caller: Hashable) -> None:
        own = [k for k in self._states if _caller_of(k) == caller]
        # Oldest first, leaving room for the entry about to be added
        for key in own[:max(0, len(own) - self.max_per_caller + 1)]:
            del self._states[key]

    def discard_caller(self, caller: Hashable) -> int:
        """Drop every view held for one caller; returns how many were dropped."""
        with self._lock:
            keys = [k for k in self._states if _caller_of(k) == caller]
            for key in keys:
                del self._states[key]
            return len(keys)

    def __len__(self) -> int:
        return len(self._states)
