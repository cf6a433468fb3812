from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from selection import NO_ELEVATOR, ElevatorSnapshot, SelectionStrategy

from .clock import EventClock
from .config import DispatchTiming
from .elevator import Elevator
from .errors import ConfigurationError
from .floor import Floor
from .hooks import CALL_ACCEPTED, ELEVATOR_DISPATCH, EventHooks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchOrder:
    """Payload of the deferred "begin moving" event for one accepted call."""

    floor: int
    elevator_index: int
    floors_to_move: int
    delay: float


class Dispatcher:
    """Assigns elevators to floor calls and keeps their timing state in step.

    The dispatcher is the only component that writes elevator availability
    and floor arrival times. Each accepted call commits one elevator and
    schedules exactly one deferred dispatch notification.
    """

    def __init__(
        self,
        elevators: Sequence[Elevator],
        floors: Sequence[Floor],
        strategy: SelectionStrategy,
        clock: EventClock,
        timing: Optional[DispatchTiming] = None,
        hooks: Optional[EventHooks] = None,
    ) -> None:
        self.elevators = elevators
        self.floors = floors
        self.strategy = strategy
        self.clock = clock
        self.timing = timing or DispatchTiming()
        self.hooks = hooks or EventHooks()

    def elevator_choice(self, floor: int) -> int:
        return self.strategy.choose(floor, self._snapshot_elevators())

    def is_served(self, floor: int) -> bool:
        if self.floors[floor].is_waiting:
            return True
        return any(elevator.destination_floor == floor for elevator in self.elevators)

    def handle_elevator_call(self, floor: int) -> Optional[int]:
        """Commit an elevator to ``floor``; returns its index, or None if already served."""
        if self.is_served(floor):
            logger.debug("Ignoring call for floor %d: already being served", floor)
            return None

        index = self.elevator_choice(floor)
        if index == NO_ELEVATOR:
            raise ConfigurationError("No elevators are available to dispatch")
        elevator = self.elevators[index]

        prior_availability = elevator.availability_time
        floors_to_move = abs(floor - elevator.destination_floor)
        travel_time = prior_availability + floors_to_move * self.timing.seconds_per_floor

        elevator.availability_time = travel_time + self.timing.elevator_wait_time
        elevator.destination_floor = floor

        target = self.floors[floor]
        target.arrival_time = travel_time
        target.is_waiting = True
        logger.info(
            "Floor %d assigned to elevator %d (arrival in %.2fs) at t=%.2f",
            floor,
            index,
            travel_time,
            self.clock.now,
        )

        order = DispatchOrder(
            floor=floor,
            elevator_index=index,
            floors_to_move=floors_to_move,
            delay=prior_availability,
        )
        # The departure is queued before any call_accepted subscriber runs.
        self.clock.schedule_after(order.delay, self._begin_moving, order, kind="dispatch")
        self.hooks.emit(CALL_ACCEPTED, {"floor": floor, "elevator": index, "time": self.clock.now})
        return index

    def _begin_moving(self, order: DispatchOrder) -> None:
        logger.info(
            "Elevator %d departing for floor %d (%d floors) at t=%.2f",
            order.elevator_index,
            order.floor,
            order.floors_to_move,
            self.clock.now,
        )
        self.hooks.emit(
            ELEVATOR_DISPATCH,
            {
                "floor": order.floor,
                "elevator": order.elevator_index,
                "floors_to_move": order.floors_to_move,
                "duration": order.floors_to_move * self.timing.seconds_per_floor,
                "time": self.clock.now,
            },
        )

    def _snapshot_elevators(self) -> List[ElevatorSnapshot]:
        return [
            ElevatorSnapshot(
                elevator_id=elevator.elevator_id,
                destination_floor=elevator.destination_floor,
                availability_time=elevator.availability_time,
                seconds_per_floor=self.timing.seconds_per_floor,
            )
            for elevator in self.elevators
        ]
