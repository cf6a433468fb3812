from __future__ import annotations

import enum
import logging
from typing import Optional

from .clock import CancellableTimer, EventClock
from .config import DispatchTiming
from .hooks import FLOOR_ARRIVAL, FLOOR_COUNTDOWN, FLOOR_NOTIFICATION_END, EventHooks

logger = logging.getLogger(__name__)


class FloorState(str, enum.Enum):
    IDLE = "idle"
    WAITING = "waiting"
    ARRIVED = "arrived"


class Floor:
    """A floor's call state, arrival countdown and arrival notifications."""

    def __init__(
        self,
        number: int,
        clock: EventClock,
        timing: Optional[DispatchTiming] = None,
        hooks: Optional[EventHooks] = None,
    ) -> None:
        self._number = number
        self.clock = clock
        self.timing = timing or DispatchTiming()
        self.hooks = hooks or EventHooks()
        self.is_waiting: bool = False
        self._arrival_time: float = 0.0
        self._arrived = False
        self._countdown: Optional[CancellableTimer] = None

    @property
    def number(self) -> int:
        return self._number

    @property
    def state(self) -> FloorState:
        if not self.is_waiting:
            return FloorState.IDLE
        if self._arrived:
            return FloorState.ARRIVED
        return FloorState.WAITING

    @property
    def arrival_time(self) -> float:
        return self._arrival_time

    @arrival_time.setter
    def arrival_time(self, seconds: float) -> None:
        """Start the display countdown and schedule the arrival sequence."""
        if seconds < 0:
            raise ValueError("arrival_time cannot be negative")
        self._arrival_time = seconds
        self._arrived = False
        self.clock.schedule_after(seconds, self._arrive, kind=f"floor-{self._number}-arrival")
        self._emit_countdown()
        self._stop_countdown()
        if seconds > 0:
            self._countdown = self.clock.schedule_periodic(
                self.timing.countdown_tick,
                self._tick,
                until=lambda: self._arrival_time == 0,
                kind=f"floor-{self._number}-countdown",
            )

    def _tick(self) -> None:
        self._arrival_time = max(0.0, self._arrival_time - self.timing.countdown_tick)
        self._emit_countdown()

    def _emit_countdown(self) -> None:
        self.hooks.emit(
            FLOOR_COUNTDOWN,
            {"floor": self._number, "remaining": self._arrival_time, "time": self.clock.now},
        )

    def _stop_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def _arrive(self) -> None:
        self._arrived = True
        logger.info("Elevator arrived at floor %d at t=%.2f", self._number, self.clock.now)
        self.hooks.emit(FLOOR_ARRIVAL, {"floor": self._number, "time": self.clock.now})
        self.clock.schedule_after(
            self.timing.elevator_wait_time,
            self._end_notification,
            kind=f"floor-{self._number}-release",
        )

    def _end_notification(self) -> None:
        self.is_waiting = False
        self._arrived = False
        self.hooks.emit(FLOOR_NOTIFICATION_END, {"floor": self._number, "time": self.clock.now})

    def snapshot(self) -> dict:
        return {
            "number": self._number,
            "state": self.state.value,
            "is_waiting": self.is_waiting,
            "arrival_time": self._arrival_time,
        }
