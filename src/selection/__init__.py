from __future__ import annotations

from typing import Dict, Type

from .interface import NO_ELEVATOR, ElevatorSnapshot, SelectionStrategy
from .min_wait import MinimumWaitStrategy
from .nearest import NearestElevatorStrategy
from .round_robin import RoundRobinStrategy
from .utils import predicted_cost

__all__ = [
    "NO_ELEVATOR",
    "ElevatorSnapshot",
    "MinimumWaitStrategy",
    "NearestElevatorStrategy",
    "RoundRobinStrategy",
    "SelectionStrategy",
    "get_strategy",
    "predicted_cost",
]


STRATEGY_REGISTRY: Dict[str, Type[SelectionStrategy]] = {
    "min_wait": MinimumWaitStrategy,
    "nearest": NearestElevatorStrategy,
    "round_robin": RoundRobinStrategy,
}


def get_strategy(name: str, **kwargs) -> SelectionStrategy:
    cls = STRATEGY_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown strategy '{name}'. Available: {', '.join(STRATEGY_REGISTRY)}")
    return cls(**kwargs)
