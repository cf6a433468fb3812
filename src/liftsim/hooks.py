from __future__ import annotations

from typing import Callable, Dict, List

CALL_ACCEPTED = "call_accepted"
ELEVATOR_DISPATCH = "elevator_dispatch"
FLOOR_ARRIVAL = "floor_arrival"
FLOOR_NOTIFICATION_END = "floor_notification_end"
FLOOR_COUNTDOWN = "floor_countdown"
ELEVATOR_COUNTDOWN = "elevator_countdown"

EVENTS = (
    CALL_ACCEPTED,
    ELEVATOR_DISPATCH,
    FLOOR_ARRIVAL,
    FLOOR_NOTIFICATION_END,
    FLOOR_COUNTDOWN,
    ELEVATOR_COUNTDOWN,
)


class EventHooks:
    """Callback registry the presentation layer subscribes to."""

    def __init__(self) -> None:
        self.event_hooks: Dict[str, List[Callable[[dict], None]]] = {}

    def on_event(self, event: str, callback: Callable[[dict], None]) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event '{event}'. Available: {', '.join(EVENTS)}")
        self.event_hooks.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: dict) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
