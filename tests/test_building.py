import pytest

from liftsim import (
    Building,
    BuildingConfig,
    ConfigurationError,
    DispatchTiming,
    InvalidFloorError,
    initialize_building,
)


def test_floor_pool_includes_ground_floor():
    building = Building(floor_count=10, elevator_count=3)
    assert [floor.number for floor in building.floors] == list(range(11))
    assert len(building.elevators) == 3


@pytest.mark.parametrize("floors, elevators", [(10, 0), (0, 2), (-1, 2), (True, 2), (10, 2.5)])
def test_non_positive_counts_abort_construction(floors, elevators):
    with pytest.raises(ConfigurationError):
        Building(floor_count=floors, elevator_count=elevators)


def test_unknown_strategy_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        Building(floor_count=5, elevator_count=1, strategy_name="telepathy")


def test_bad_strategy_options_are_a_configuration_error():
    with pytest.raises(ConfigurationError):
        Building(floor_count=5, elevator_count=1, strategy_options={"speed": 3})


def test_invalid_timing_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        DispatchTiming(seconds_per_floor=0)
    with pytest.raises(ConfigurationError):
        DispatchTiming(elevator_wait_time=-1)


@pytest.mark.parametrize("floor", [-1, 11, 100, "3", 2.0, None])
def test_out_of_range_call_fails_fast(floor):
    building = Building(floor_count=10, elevator_count=1)
    with pytest.raises(InvalidFloorError):
        building.submit_call(floor)
    assert building.clock.pending() == 0


def test_top_floor_is_callable():
    building = Building(floor_count=10, elevator_count=1)
    assert building.submit_call(10) == 0
    assert building.floors[10].arrival_time == 5.0


def test_initialize_office_building_uses_min_wait():
    building = initialize_building("office", 10, 3)
    assert building.strategy_name == "min_wait"
    assert building.max_floor == 10


def test_initialize_unknown_building_type():
    with pytest.raises(ConfigurationError, match="office"):
        initialize_building("warehouse", 10, 3)


def test_set_strategy_switches_dispatcher():
    building = Building(floor_count=10, elevator_count=2)
    building.set_strategy("round_robin")
    assert building.submit_call(1) == 0
    assert building.submit_call(2) == 1
    assert building.dispatcher.strategy is building.strategy


def test_set_strategy_rejects_unknown_name_and_keeps_current():
    building = Building(floor_count=10, elevator_count=2)
    with pytest.raises(ConfigurationError):
        building.set_strategy("nope")
    assert building.strategy_name == "min_wait"


def test_from_config_applies_timing():
    config = BuildingConfig.from_dict(
        {
            "floor_count": 4,
            "elevator_count": 1,
            "strategy": {"name": "nearest"},
            "timing": {"seconds_per_floor": 1.0, "elevator_wait_time": 3.0},
        }
    )
    building = Building.from_config(config)
    building.submit_call(2)
    assert building.strategy_name == "nearest"
    assert building.elevators[0].availability_time == 5.0


def test_unknown_event_subscription_is_rejected():
    building = Building(floor_count=2, elevator_count=1)
    with pytest.raises(ValueError):
        building.on("door_opened", lambda payload: None)


def test_snapshot_is_json_ready():
    building = Building(floor_count=2, elevator_count=1)
    building.submit_call(2)
    snapshot = building.snapshot()
    assert snapshot["strategy"] == "min_wait"
    assert snapshot["elevators"] == [
        {"id": 0, "destination_floor": 2, "availability_time": 3.0, "busy": True}
    ]
    assert snapshot["floors"][2]["state"] == "waiting"


def test_unknown_timing_key_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        BuildingConfig.from_dict({"timing": {"seconds_per_storey": 1.0}})


@pytest.mark.parametrize("floor", [3.0, True, "3", -1, 11])
def test_get_floor_returns_none_for_invalid_numbers(floor):
    building = Building(floor_count=10, elevator_count=1)
    assert building.get_floor(floor) is None
