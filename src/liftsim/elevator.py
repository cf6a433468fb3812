from __future__ import annotations

import logging
from typing import Optional

from .clock import CancellableTimer, EventClock
from .config import DispatchTiming
from .hooks import ELEVATOR_COUNTDOWN, EventHooks

logger = logging.getLogger(__name__)


class Elevator:
    """A single-destination car with a scalar availability time.

    ``destination_floor`` is the last floor the car was committed to.
    ``availability_time`` is the number of seconds until the car is free;
    assigning it restarts the display countdown that walks it down to 0.
    """

    def __init__(
        self,
        elevator_id: int,
        clock: EventClock,
        timing: Optional[DispatchTiming] = None,
        hooks: Optional[EventHooks] = None,
    ) -> None:
        self.elevator_id = elevator_id
        self.clock = clock
        self.timing = timing or DispatchTiming()
        self.hooks = hooks or EventHooks()
        self.destination_floor: int = 0
        self._availability_time: float = 0.0
        self._countdown: Optional[CancellableTimer] = None

    @property
    def availability_time(self) -> float:
        return self._availability_time

    @availability_time.setter
    def availability_time(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("availability_time cannot be negative")
        self._availability_time = seconds
        self._stop_countdown()
        if seconds > 0:
            self._countdown = self.clock.schedule_periodic(
                self.timing.countdown_tick,
                self._tick,
                until=lambda: self._availability_time == 0,
                kind=f"elevator-{self.elevator_id}-countdown",
            )

    @property
    def is_busy(self) -> bool:
        return self._availability_time > 0

    @property
    def countdown_active(self) -> bool:
        return self._countdown is not None and self._countdown.active

    def _tick(self) -> None:
        self._availability_time = max(0.0, self._availability_time - self.timing.countdown_tick)
        self.hooks.emit(
            ELEVATOR_COUNTDOWN,
            {
                "elevator": self.elevator_id,
                "remaining": self._availability_time,
                "time": self.clock.now,
            },
        )
        if self._availability_time == 0:
            logger.debug("Elevator %d available at t=%.2f", self.elevator_id, self.clock.now)

    def _stop_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def snapshot(self) -> dict:
        return {
            "id": self.elevator_id,
            "destination_floor": self.destination_floor,
            "availability_time": self._availability_time,
            "busy": self.is_busy,
        }
