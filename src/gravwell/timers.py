"""
Deferred callbacks driven by an external clock.

Nothing here sleeps or spawns threads: the owner calls :meth:`Scheduler.run_due`
once per tick with the current time and every timer whose due time has passed
fires, earliest first. Each timer carries the id of the round that created it
so a new round can cancel everything left over from the old one.
"""

import heapq
import itertools
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class TimerHandle:
    """A scheduled callback; cancel it with :meth:`cancel`."""

    def __init__(self, due: float, callback: Callable[[float], None],
                 round_id: Optional[int], name: str):
        self.due = due
        self.callback = callback
        self.round_id = round_id
        self.name = name
        self.cancelled = False
        self.fired = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> bool:
        """Cancel the timer; returns False if it already fired or was cancelled."""
        if not self.pending:
            return False
        self.cancelled = True
        logger.debug("Cancelled timer %s (round %s)", self.name, self.round_id)
        return True

    def __repr__(self):
        status = 'fired' if self.fired else 'cancelled' if self.cancelled else 'pending'
        return f"TimerHandle({self.name!r}, due={self.due:.3f}, round={self.round_id}, {status})"


class Scheduler:
    """
    Min-heap of cancellable timers.

    Examples
    --------
    >>> sched = Scheduler()
    >>> handle = sched.schedule(2.0, lambda now: print("reset"), round_id=1)
    >>> sched.run_due(1.0)
    0
    >>> sched.run_due(2.5)
    reset
    1
    """

    def __init__(self):
        self._heap = []
        self._counter = itertools.count()

    def schedule(self, due: float, callback: Callable[[float], None],
                 round_id: Optional[int] = None, name: str = "timer") -> TimerHandle:
        """
        Run ``callback(now)`` at the first ``run_due(now)`` with ``now >= due``.
        """
        handle = TimerHandle(float(due), callback, round_id, name)
        # the counter keeps equal due times in scheduling order
        heapq.heappush(self._heap, (handle.due, next(self._counter), handle))
        logger.debug("Scheduled timer %s at %.3f (round %s)", name, due, round_id)
        return handle

    def cancel_round(self, round_id: int) -> int:
        """Cancel every pending timer created for ``round_id``."""
        count = 0
        for _, _, handle in self._heap:
            if handle.round_id == round_id and handle.cancel():
                count += 1
        return count

    def cancel_all(self) -> int:
        count = sum(1 for _, _, handle in self._heap if handle.cancel())
        self._heap.clear()
        return count

    def run_due(self, now: float) -> int:
        """
        Fire all pending timers due at or before ``now``.

        Returns
        -------
        int
            Number of callbacks that ran
        """
        fired = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if not handle.pending:
                continue
            handle.fired = True
            handle.callback(now)
            fired += 1
        return fired

    def pending(self) -> List[TimerHandle]:
        return sorted((h for _, _, h in self._heap if h.pending), key=lambda h: h.due)

    def __len__(self):
        return len(self.pending())
