from __future__ import annotations


class LiftSimError(Exception):
    """Base class for errors raised by the dispatch simulation."""


class ConfigurationError(LiftSimError, ValueError):
    """The building, timing or strategy setup cannot be used."""


class InvalidFloorError(LiftSimError, ValueError):
    """A call was submitted for a floor the building does not have."""

    def __init__(self, floor: object, max_floor: int) -> None:
        super().__init__(f"Floor {floor!r} is outside the range 0..{max_floor}")
        self.floor = floor
        self.max_floor = max_floor
