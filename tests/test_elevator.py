import pytest

from liftsim import DispatchTiming, Elevator, EventClock, EventHooks


@pytest.fixture
def clock():
    return EventClock()


def test_new_elevator_is_idle_at_ground(clock):
    elevator = Elevator(0, clock)
    assert elevator.destination_floor == 0
    assert elevator.availability_time == 0
    assert not elevator.is_busy
    assert not elevator.countdown_active


def test_availability_counts_down_one_tick_per_half_second(clock):
    elevator = Elevator(0, clock)
    elevator.availability_time = 2.0
    clock.advance(0.5)
    assert elevator.availability_time == 1.5
    clock.advance(1.0)
    assert elevator.availability_time == 0.5
    clock.advance(0.5)
    assert elevator.availability_time == 0
    assert not elevator.countdown_active
    clock.advance(5.0)
    assert elevator.availability_time == 0


def test_countdown_is_non_increasing_and_ends_at_zero(clock):
    hooks = EventHooks()
    seen = []
    hooks.on_event("elevator_countdown", lambda payload: seen.append(payload["remaining"]))
    elevator = Elevator(3, clock, hooks=hooks)
    elevator.availability_time = 1.2
    clock.run_until_idle()
    assert seen == sorted(seen, reverse=True)
    assert seen[-1] == 0.0
    assert all(value >= 0 for value in seen)


def test_reassigning_replaces_running_countdown(clock):
    elevator = Elevator(0, clock)
    elevator.availability_time = 2.0
    clock.advance(0.5)
    elevator.availability_time = 3.0
    assert clock.pending() == 1
    clock.advance(0.5)
    assert elevator.availability_time == 2.5


def test_zero_availability_starts_no_countdown(clock):
    elevator = Elevator(0, clock)
    elevator.availability_time = 0
    assert not elevator.countdown_active
    assert clock.pending() == 0


def test_negative_availability_is_rejected(clock):
    elevator = Elevator(0, clock)
    with pytest.raises(ValueError):
        elevator.availability_time = -1


def test_tick_follows_configured_seconds_per_floor(clock):
    elevator = Elevator(0, clock, timing=DispatchTiming(seconds_per_floor=1.0))
    elevator.availability_time = 3.0
    clock.advance(1.0)
    assert elevator.availability_time == 2.0
