from __future__ import annotations

import asyncio
import contextlib
import json
import time
from dataclasses import asdict
from typing import Callable, Dict, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from liftsim import Building, Simulation, initialize_building


class StrategySelection(BaseModel):
    name: str
    options: Dict[str, object] = {}


class CallRequest(BaseModel):
    floor: int


class SimulationManager:
    def __init__(
        self,
        building_type: str = "office",
        floor_count: int = 10,
        elevator_count: int = 3,
        tick_interval: float = 0.1,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        building = initialize_building(building_type, floor_count, elevator_count)
        self.simulation = Simulation(building, record_events=False)
        self.tick_interval = tick_interval
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        self._time_source = time_source
        self._synced_at: Optional[float] = None

    @property
    def building(self) -> Building:
        return self.simulation.building

    async def start(self) -> None:
        if self._task is None:
            self._synced_at = self._time_source()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        self._synced_at = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            async with self._lock:
                self._catch_up()
                payload = self.current_state()
            await self.broadcast(payload)

    def _catch_up(self) -> None:
        """Advance the simulation by the wall time elapsed since the last sync."""
        if self._synced_at is None:
            return
        now = self._time_source()
        self.simulation.run(max(0.0, now - self._synced_at))
        self._synced_at = now

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        metrics = asdict(self.simulation.metrics.snapshot(self.simulation.current_time))
        return {
            "time": self.simulation.current_time,
            "building": self.building.snapshot(),
            "metrics": metrics,
            "strategy": self.building.strategy_name,
        }

    async def set_strategy(self, name: str, options: Dict[str, object]) -> dict:
        async with self._lock:
            self.building.set_strategy(name, **options)
            return self.current_state()

    async def submit_call(self, floor: int) -> dict:
        async with self._lock:
            self._catch_up()
            elevator_index = self.simulation.submit_call(floor)
            state = self.current_state()
            state["floor"] = floor
            state["accepted"] = elevator_index is not None
            state["elevator"] = elevator_index
            return state


manager = SimulationManager()
app = FastAPI(title="Elevator Call Dispatch API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/strategy")
async def set_strategy(selection: StrategySelection) -> dict:
    try:
        return await manager.set_strategy(selection.name, selection.options)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/calls")
async def submit_call(request: CallRequest) -> dict:
    try:
        return await manager.submit_call(request.floor)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
