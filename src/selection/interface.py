from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

NO_ELEVATOR = -1


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for selection decisions."""

    elevator_id: int
    destination_floor: int
    availability_time: float
    seconds_per_floor: float


class SelectionStrategy(Protocol):
    """Strategy interface for choosing the elevator that serves a call."""

    name: str

    def choose(self, call_floor: int, elevators: Sequence[ElevatorSnapshot]) -> int:
        """
        Return the index into ``elevators`` of the car that should serve
        ``call_floor``, or ``NO_ELEVATOR`` when the sequence is empty.
        """
        ...
