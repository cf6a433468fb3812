from __future__ import annotations

from typing import Callable, Sequence

from .interface import NO_ELEVATOR, ElevatorSnapshot


def predicted_cost(elevator: ElevatorSnapshot, floor: int) -> float:
    """Seconds until ``elevator`` could reach ``floor`` after its current commitment.

    The car first has to become available, then travel from the floor it was
    last committed to at a constant ``seconds_per_floor``.
    """

    return elevator.availability_time + abs(floor - elevator.destination_floor) * elevator.seconds_per_floor


def argmin_first(
    elevators: Sequence[ElevatorSnapshot], key: Callable[[ElevatorSnapshot], float]
) -> int:
    """Index of the smallest key; the earliest elevator wins ties."""

    best_index = NO_ELEVATOR
    best_value = float("inf")
    for index, elevator in enumerate(elevators):
        value = key(elevator)
        if value < best_value:
            best_value = value
            best_index = index
    return best_index
