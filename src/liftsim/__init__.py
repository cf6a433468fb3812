"""Elevator call dispatch simulation primitives."""

from .building import BUILDING_TYPES, Building, initialize_building
from .clock import CancellableTimer, EventClock, ScheduledEvent
from .config import BuildingConfig, DispatchTiming
from .dispatcher import DispatchOrder, Dispatcher
from .elevator import Elevator
from .errors import ConfigurationError, InvalidFloorError, LiftSimError
from .floor import Floor, FloorState
from .hooks import EventHooks
from .simulation import MetricsSnapshot, MetricsTracker, Simulation

__all__ = [
    "BUILDING_TYPES",
    "Building",
    "BuildingConfig",
    "CancellableTimer",
    "ConfigurationError",
    "DispatchOrder",
    "DispatchTiming",
    "Dispatcher",
    "Elevator",
    "EventClock",
    "EventHooks",
    "Floor",
    "FloorState",
    "InvalidFloorError",
    "LiftSimError",
    "MetricsSnapshot",
    "MetricsTracker",
    "ScheduledEvent",
    "Simulation",
    "initialize_building",
]
