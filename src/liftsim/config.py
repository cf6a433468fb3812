from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ConfigurationError

SECONDS_PER_FLOOR = 0.5
ELEVATOR_WAIT_TIME = 2.0


@dataclass(frozen=True)
class DispatchTiming:
    """Timing constants shared by the dispatcher, elevators and floors."""

    seconds_per_floor: float = SECONDS_PER_FLOOR
    elevator_wait_time: float = ELEVATOR_WAIT_TIME

    def __post_init__(self) -> None:
        if self.seconds_per_floor <= 0:
            raise ConfigurationError("seconds_per_floor must be positive")
        if self.elevator_wait_time < 0:
            raise ConfigurationError("elevator_wait_time cannot be negative")

    @property
    def countdown_tick(self) -> float:
        return self.seconds_per_floor


@dataclass
class BuildingConfig:
    """Parameters needed to assemble a building."""

    floor_count: int = 10
    elevator_count: int = 3
    strategy_name: str = "min_wait"
    strategy_options: dict = field(default_factory=dict)
    timing: DispatchTiming = field(default_factory=DispatchTiming)

    @classmethod
    def from_dict(cls, data: dict) -> "BuildingConfig":
        timing_cfg = data.get("timing", {})
        strategy_cfg = data.get("strategy", {})
        try:
            timing = DispatchTiming(**timing_cfg)
        except TypeError as exc:
            raise ConfigurationError(f"Invalid timing settings: {exc}") from exc
        return cls(
            floor_count=data.get("floor_count", 10),
            elevator_count=data.get("elevator_count", 3),
            strategy_name=strategy_cfg.get("name", "min_wait"),
            strategy_options=strategy_cfg.get("options", {}),
            timing=timing,
        )
