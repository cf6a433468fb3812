from __future__ import annotations

from typing import Sequence

from .interface import NO_ELEVATOR, ElevatorSnapshot


class RoundRobinStrategy:
    """Hands calls to each car in turn."""

    name = "round_robin"

    def __init__(self, start: int = 0) -> None:
        self._cursor = max(0, start)

    def choose(self, call_floor: int, elevators: Sequence[ElevatorSnapshot]) -> int:
        if not elevators:
            return NO_ELEVATOR
        index = self._cursor % len(elevators)
        self._cursor = index + 1
        return index
