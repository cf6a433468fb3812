from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from selection import SelectionStrategy, get_strategy

from .clock import EventClock
from .config import BuildingConfig, DispatchTiming
from .dispatcher import Dispatcher
from .elevator import Elevator
from .errors import ConfigurationError, InvalidFloorError
from .floor import Floor
from .hooks import EventHooks

logger = logging.getLogger(__name__)


@dataclass
class Building:
    """Fixed pools of floors and elevators wired to one dispatcher."""

    floor_count: int
    elevator_count: int
    strategy_name: str = "min_wait"
    strategy_options: dict = field(default_factory=dict)
    timing: DispatchTiming = field(default_factory=DispatchTiming)
    clock: EventClock = field(default_factory=EventClock)
    hooks: EventHooks = field(default_factory=EventHooks)
    floors: List[Floor] = field(init=False)
    elevators: List[Elevator] = field(init=False)
    strategy: SelectionStrategy = field(init=False)
    dispatcher: Dispatcher = field(init=False)

    def __post_init__(self) -> None:
        self._validate_counts()
        self.floors = [
            Floor(i, self.clock, self.timing, self.hooks) for i in range(self.floor_count + 1)
        ]
        self.elevators = [
            Elevator(i, self.clock, self.timing, self.hooks) for i in range(self.elevator_count)
        ]
        self.strategy = self._build_strategy(self.strategy_name, self.strategy_options)
        self.dispatcher = Dispatcher(
            self.elevators, self.floors, self.strategy, self.clock, self.timing, self.hooks
        )
        logger.info(
            "Building ready: floors 0..%d, %d elevators, strategy=%s",
            self.floor_count,
            self.elevator_count,
            self.strategy_name,
        )

    @classmethod
    def from_config(cls, config: BuildingConfig, clock: Optional[EventClock] = None) -> "Building":
        return cls(
            floor_count=config.floor_count,
            elevator_count=config.elevator_count,
            strategy_name=config.strategy_name,
            strategy_options=dict(config.strategy_options),
            timing=config.timing,
            clock=clock or EventClock(),
        )

    @property
    def max_floor(self) -> int:
        return self.floor_count

    def submit_call(self, floor_number: int) -> Optional[int]:
        """Request service at ``floor_number``; returns the elevator index or None."""
        self.validate_floor(floor_number)
        return self.dispatcher.handle_elevator_call(floor_number)

    def on(self, event: str, callback: Callable[[dict], None]) -> None:
        self.hooks.on_event(event, callback)

    def validate_floor(self, floor_number: int) -> None:
        if not self._is_valid_floor(floor_number):
            raise InvalidFloorError(floor_number, self.max_floor)

    def get_floor(self, floor_number: int) -> Optional[Floor]:
        if self._is_valid_floor(floor_number):
            return self.floors[floor_number]
        return None

    def set_strategy(self, name: str, **options) -> None:
        strategy = self._build_strategy(name, options)
        self.strategy_name = name
        self.strategy_options = options
        self.strategy = strategy
        self.dispatcher.strategy = strategy

    def snapshot(self) -> dict:
        return {
            "time": self.clock.now,
            "strategy": self.strategy_name,
            "floors": [floor.snapshot() for floor in self.floors],
            "elevators": [elevator.snapshot() for elevator in self.elevators],
        }

    def _is_valid_floor(self, floor_number: object) -> bool:
        if isinstance(floor_number, bool) or not isinstance(floor_number, int):
            return False
        return 0 <= floor_number <= self.max_floor

    def _validate_counts(self) -> None:
        for label, value in (("floor_count", self.floor_count), ("elevator_count", self.elevator_count)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{label} must be a positive integer, got {value!r}")

    def _build_strategy(self, name: str, options: dict) -> SelectionStrategy:
        try:
            return get_strategy(name, **options)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(str(exc)) from exc


BUILDING_TYPES: Dict[str, str] = {
    "office": "min_wait",
}


def initialize_building(
    building_type: str,
    floor_count: int,
    elevator_count: int,
    timing: Optional[DispatchTiming] = None,
    clock: Optional[EventClock] = None,
) -> Building:
    strategy_name = BUILDING_TYPES.get(building_type.lower())
    if strategy_name is None:
        raise ConfigurationError(
            f"Unknown building type '{building_type}'. Available: {', '.join(BUILDING_TYPES)}"
        )
    return Building(
        floor_count=floor_count,
        elevator_count=elevator_count,
        strategy_name=strategy_name,
        timing=timing or DispatchTiming(),
        clock=clock or EventClock(),
    )
