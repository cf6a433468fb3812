import pytest

from liftsim import Building, InvalidFloorError, Simulation


@pytest.fixture
def simulation():
    return Simulation(Building(floor_count=10, elevator_count=2))


def test_scheduled_calls_are_submitted_at_their_time(simulation):
    simulation.schedule_call(1.0, 6)
    simulation.run(0.5)
    assert not simulation.building.floors[6].is_waiting
    simulation.run(0.5)
    assert simulation.building.floors[6].is_waiting
    assert simulation.events_named("call_accepted") == [{"floor": 6, "elevator": 0, "time": 1.0}]


def test_metrics_track_accepted_and_ignored_calls(simulation):
    simulation.submit_call(4)
    simulation.submit_call(4)
    simulation.submit_call(8)
    simulation.run_until_idle()

    metrics = simulation.metrics.snapshot(simulation.current_time)
    assert metrics.accepted_calls == 2
    assert metrics.ignored_calls == 1
    assert metrics.dispatches == 2
    assert metrics.arrivals == 2
    # predicted waits: floor 4 -> 2.0, floor 8 -> 4.0 on the second car
    assert metrics.average_wait == 3.0


def test_event_log_preserves_arrival_ordering(simulation):
    simulation.submit_call(2)
    simulation.run_until_idle()
    names = [name for name, _ in simulation.event_log if name in ("floor_arrival", "floor_notification_end")]
    assert names == ["floor_arrival", "floor_notification_end"]


def test_cannot_schedule_calls_in_the_past(simulation):
    simulation.run(2.0)
    with pytest.raises(ValueError):
        simulation.schedule_call(1.0, 3)


def test_scheduling_unknown_floor_fails_fast(simulation):
    with pytest.raises(InvalidFloorError):
        simulation.schedule_call(1.0, 42)


def test_event_recording_can_be_disabled():
    simulation = Simulation(Building(floor_count=3, elevator_count=1), record_events=False)
    simulation.submit_call(3)
    simulation.run_until_idle()
    assert simulation.event_log == []
    assert simulation.metrics.dispatches == 1


@pytest.mark.parametrize("floor", [3.0, True, "3", -1, 11])
def test_scheduled_calls_are_validated_like_direct_calls(simulation, floor):
    with pytest.raises(InvalidFloorError):
        simulation.schedule_call(1.0, floor)
    assert simulation.building.clock.pending() == 0
