from __future__ import annotations

import heapq
import itertools
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional


@dataclass(order=True)
class TimerHandle:
    due: datetime
    seq: int
    callback: Callable[[], None] = field(compare=False, repr=False)
    label: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class TimerQueue:
    """Priority queue of due-times, polled cooperatively with `run_due(now)`.

    Nothing runs on its own: whoever owns the loop calls `run_due` with the
    current time and every timer whose due-time has passed fires, earliest
    first, ties in scheduling order. Callbacks run outside the queue lock and
    may schedule or cancel timers.
    """

    def __init__(self):
        self._heap: list[TimerHandle] = []
        self._seq = itertools.count()
        self._lock = threading.Lock()

    def schedule(self, due: datetime, callback: Callable[[], None], *, label: str = "") -> TimerHandle:
        with self._lock:
            handle = TimerHandle(due=due, seq=next(self._seq), callback=callback, label=label)
            heapq.heappush(self._heap, handle)
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        # Lazy removal: cancelled handles are dropped when they reach the top.
        handle.cancelled = True

    def next_due(self) -> Optional[datetime]:
        with self._lock:
            self._drop_cancelled()
            return self._heap[0].due if self._heap else None

    def run_due(self, now: datetime) -> int:
        fired = 0
        while True:
            with self._lock:
                self._drop_cancelled()
                if not self._heap or self._heap[0].due > now:
                    return fired
                handle = heapq.heappop(self._heap)
                handle.fired = True
            handle.callback()
            fired += 1

    def _drop_cancelled(self) -> None:
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for h in self._heap if h.active)
