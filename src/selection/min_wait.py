from __future__ import annotations

from typing import Sequence

from .interface import ElevatorSnapshot
from .utils import argmin_first, predicted_cost


class MinimumWaitStrategy:
    """Chooses the car with the smallest predicted wait for the calling floor."""

    name = "min_wait"

    def choose(self, call_floor: int, elevators: Sequence[ElevatorSnapshot]) -> int:
        return argmin_first(elevators, lambda e: predicted_cost(e, call_floor))
