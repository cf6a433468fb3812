import asyncio

import pytest
from fastapi.testclient import TestClient

from server import app as app_module


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(app_module, "manager", app_module.SimulationManager())
    return TestClient(app_module.app)


def test_state_lists_all_floors(client):
    response = client.get("/state")
    assert response.status_code == 200
    body = response.json()
    assert body["strategy"] == "min_wait"
    assert len(body["building"]["floors"]) == 11
    assert len(body["building"]["elevators"]) == 3


def test_call_is_accepted_then_ignored(client):
    first = client.post("/calls", json={"floor": 5}).json()
    assert first["accepted"] is True
    assert first["elevator"] == 0
    assert first["building"]["floors"][5]["is_waiting"] is True

    second = client.post("/calls", json={"floor": 5}).json()
    assert second["accepted"] is False
    assert second["metrics"]["ignored_calls"] == 1


def test_out_of_range_call_is_rejected(client):
    response = client.post("/calls", json={"floor": 99})
    assert response.status_code == 400


def test_strategy_can_be_switched(client):
    response = client.post("/strategy", json={"name": "nearest"})
    assert response.status_code == 200
    assert response.json()["strategy"] == "nearest"


def test_unknown_strategy_is_rejected(client):
    response = client.post("/strategy", json={"name": "warp"})
    assert response.status_code == 400


def test_call_is_stamped_with_wall_time_since_last_tick():
    now = [100.0]
    manager = app_module.SimulationManager(time_source=lambda: now[0])
    # start() records this sync point before launching the tick loop
    manager._synced_at = now[0]
    now[0] = 100.75

    state = asyncio.run(manager.submit_call(3))

    assert state["accepted"] is True
    assert state["time"] == 0.75
    assert state["building"]["floors"][3]["arrival_time"] == 1.5


def test_calls_without_running_loop_do_not_move_the_clock(client):
    body = client.post("/calls", json={"floor": 2}).json()
    assert body["time"] == 0.0
