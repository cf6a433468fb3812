from __future__ import annotations

from typing import Sequence

from .interface import ElevatorSnapshot
from .utils import argmin_first


class NearestElevatorStrategy:
    """Picks the car whose last committed floor is closest, ignoring how busy it is."""

    name = "nearest"

    def choose(self, call_floor: int, elevators: Sequence[ElevatorSnapshot]) -> int:
        return argmin_first(elevators, lambda e: abs(call_floor - e.destination_floor))
