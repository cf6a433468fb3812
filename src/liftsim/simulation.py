from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .building import Building
from .hooks import ELEVATOR_DISPATCH, EVENTS, FLOOR_ARRIVAL


@dataclass
class MetricsSnapshot:
    time: float
    accepted_calls: int
    ignored_calls: int
    dispatches: int
    arrivals: int
    average_wait: float
    wait_p95: float


class MetricsTracker:
    def __init__(self) -> None:
        self.wait_times: List[float] = []
        self.ignored_calls: int = 0
        self.dispatches: int = 0
        self.arrivals: int = 0

    def record_accepted(self, predicted_wait: float) -> None:
        self.wait_times.append(predicted_wait)

    def record_ignored(self) -> None:
        self.ignored_calls += 1

    def record_dispatch(self, payload: dict) -> None:
        self.dispatches += 1

    def record_arrival(self, payload: dict) -> None:
        self.arrivals += 1

    def _average(self, values: List[float]) -> float:
        if not values:
            return 0.0
        return sum(values) / len(values)

    def _percentile(self, values: List[float], percentile: float) -> float:
        if not values:
            return 0.0
        sorted_vals = sorted(values)
        k = (len(sorted_vals) - 1) * percentile
        f = math.floor(k)
        c = math.ceil(k)
        if f == c:
            return float(sorted_vals[int(k)])
        d0 = sorted_vals[int(f)] * (c - k)
        d1 = sorted_vals[int(c)] * (k - f)
        return float(d0 + d1)

    def snapshot(self, time: float) -> MetricsSnapshot:
        return MetricsSnapshot(
            time=time,
            accepted_calls=len(self.wait_times),
            ignored_calls=self.ignored_calls,
            dispatches=self.dispatches,
            arrivals=self.arrivals,
            average_wait=self._average(self.wait_times),
            wait_p95=self._percentile(self.wait_times, 0.95),
        )


class Simulation:
    """Drives a building's clock and records what happened along the way."""

    def __init__(self, building: Building, record_events: bool = True) -> None:
        self.building = building
        self.metrics = MetricsTracker()
        self.event_log: List[Tuple[str, dict]] = []
        building.on(ELEVATOR_DISPATCH, self.metrics.record_dispatch)
        building.on(FLOOR_ARRIVAL, self.metrics.record_arrival)
        if record_events:
            for event in EVENTS:
                building.on(event, self._recorder(event))

    @property
    def current_time(self) -> float:
        return self.building.clock.now

    def submit_call(self, floor_number: int) -> Optional[int]:
        elevator_index = self.building.submit_call(floor_number)
        if elevator_index is None:
            self.metrics.record_ignored()
        else:
            self.metrics.record_accepted(self.building.floors[floor_number].arrival_time)
        return elevator_index

    def schedule_call(self, at: float, floor_number: int) -> None:
        """Submit a call for ``floor_number`` once the clock reaches ``at``."""
        if at < self.current_time:
            raise ValueError(f"Cannot schedule a call at t={at}, clock is already at t={self.current_time}")
        self.building.validate_floor(floor_number)
        self.building.clock.schedule_after(
            at - self.current_time, self.submit_call, floor_number, kind="call"
        )

    def run(self, duration: float) -> int:
        return self.building.clock.advance(duration)

    def run_until_idle(self, max_time: Optional[float] = None) -> int:
        return self.building.clock.run_until_idle(max_time)

    def events_named(self, event: str) -> List[dict]:
        return [payload for name, payload in self.event_log if name == event]

    def _recorder(self, event: str):
        def record(payload: dict) -> None:
            self.event_log.append((event, payload))

        return record
