"""Discrete-event clock driving every deferred and periodic action.

All timing in the simulation goes through one :class:`EventClock`. Events
are kept in a min-heap keyed by ``(fire_at, sequence)`` so events due at the
same instant fire in the order they were scheduled. The clock can be
fast-forwarded for tests and offline scenarios, or advanced in small real
time slices by the API server.
"""
from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class ScheduledEvent:
    """An immutable entry in the event queue."""

    fire_at: float
    sequence: int
    kind: str = field(compare=False)
    handler: Callable[..., None] = field(compare=False, repr=False)
    args: Tuple[Any, ...] = field(default=(), compare=False)

    def fire(self) -> None:
        self.handler(*self.args)


class EventClock:
    """Simulated time plus the queue of events waiting to fire."""

    def __init__(self, start_time: float = 0.0) -> None:
        self.now: float = start_time
        self._queue: List[ScheduledEvent] = []
        self._counter = itertools.count()
        self._cancelled: Set[int] = set()

    def schedule_after(
        self, delay: float, handler: Callable[..., None], *args: Any, kind: str = "deferred"
    ) -> ScheduledEvent:
        if delay < 0:
            raise ValueError(f"Cannot schedule an event {delay} seconds in the past")
        event = ScheduledEvent(
            fire_at=self.now + delay,
            sequence=next(self._counter),
            kind=kind,
            handler=handler,
            args=args,
        )
        heapq.heappush(self._queue, event)
        return event

    def schedule_periodic(
        self,
        interval: float,
        tick: Callable[[], None],
        until: Callable[[], bool],
        kind: str = "periodic",
    ) -> "CancellableTimer":
        timer = CancellableTimer(self, interval, tick, until, kind=kind)
        timer.start()
        return timer

    def cancel(self, event: ScheduledEvent) -> None:
        self._cancelled.add(event.sequence)

    def pending(self) -> int:
        return sum(1 for event in self._queue if event.sequence not in self._cancelled)

    def next_fire_time(self) -> Optional[float]:
        self._discard_cancelled()
        if not self._queue:
            return None
        return self._queue[0].fire_at

    def step(self) -> Optional[ScheduledEvent]:
        """Fire the earliest pending event and move the clock to its time."""
        self._discard_cancelled()
        if not self._queue:
            return None
        event = heapq.heappop(self._queue)
        self.now = event.fire_at
        event.fire()
        return event

    def advance(self, duration: float) -> int:
        """Fire everything due within ``duration`` seconds, then jump to the end."""
        if duration < 0:
            raise ValueError("Cannot advance the clock backwards")
        target = self.now + duration
        fired = 0
        while True:
            next_time = self.next_fire_time()
            if next_time is None or next_time > target:
                break
            self.step()
            fired += 1
        self.now = target
        return fired

    def run_until_idle(self, max_time: Optional[float] = None) -> int:
        fired = 0
        while True:
            next_time = self.next_fire_time()
            if next_time is None:
                break
            if max_time is not None and next_time > max_time:
                self.now = max_time
                break
            self.step()
            fired += 1
        return fired

    def _discard_cancelled(self) -> None:
        while self._queue and self._queue[0].sequence in self._cancelled:
            event = heapq.heappop(self._queue)
            self._cancelled.discard(event.sequence)


class CancellableTimer:
    """Repeating tick owned by a single elevator or floor.

    Each tick runs ``tick`` and then checks ``until``; once the predicate
    holds the timer stops without rescheduling. The timer is also a context
    manager that cancels itself on exit.
    """

    def __init__(
        self,
        clock: EventClock,
        interval: float,
        tick: Callable[[], None],
        until: Callable[[], bool],
        kind: str = "periodic",
    ) -> None:
        if interval <= 0:
            raise ValueError("Timer interval must be positive")
        self.clock = clock
        self.interval = interval
        self.kind = kind
        self._tick = tick
        self._until = until
        self._pending: Optional[ScheduledEvent] = None
        self._stopped = True

    @property
    def active(self) -> bool:
        return not self._stopped

    def start(self) -> None:
        if self._stopped:
            self._stopped = False
            self._schedule_next()

    def cancel(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        if self._pending is not None:
            self.clock.cancel(self._pending)
            self._pending = None
        logger.debug("Cancelled %s timer at t=%.2f", self.kind, self.clock.now)

    def _schedule_next(self) -> None:
        self._pending = self.clock.schedule_after(self.interval, self._fire, kind=self.kind)

    def _fire(self) -> None:
        self._pending = None
        self._tick()
        if self._stopped:
            return
        if self._until():
            self._stopped = True
            return
        self._schedule_next()

    def __enter__(self) -> "CancellableTimer":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()
