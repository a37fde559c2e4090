import asyncio
from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
import logging

from core.models.dashboard_state import DashboardState
from core.service_manager import service_manager, ServiceNotStartedError
from core.services.dashboard_controller import DashboardController, DashboardClosedError
from core.services.sample_generator import GeneratorSchedulingError
from schemas import DashboardStateResponse, ReadingPoint, StatisticsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

NOT_RUNNING_RESPONSE = {
    503: {
        "description": "Dashboard services are not running.",
        "content": {
            "application/json": {
                "example": {"detail": "Dashboard is not running"}
            }
        }
    }
}


def require_controller() -> DashboardController:
    """Return the session controller or raise 503 if the dashboard is not running."""
    try:
        return service_manager.get_controller()
    except ServiceNotStartedError as e:
        raise HTTPException(status_code=503, detail=str(e))


def to_state_response(state: DashboardState, controller: DashboardController) -> DashboardStateResponse:
    return DashboardStateResponse(
        readings=[ReadingPoint(timestamp=r.timestamp, value=r.value) for r in state.readings],
        paused=state.paused,
        status=state.status_label,
        auto=not state.paused,
        generator=controller.generator.state,
        capacity=state.readings.capacity,
    )


@router.get("/state", response_model=DashboardStateResponse, responses=NOT_RUNNING_RESPONSE)
async def get_state() -> DashboardStateResponse:
    """
    Get the current dashboard snapshot: retained readings (oldest first) and the pause flag.
    """
    controller = require_controller()
    return to_state_response(controller.current_state(), controller)


@router.put("/pause", response_model=DashboardStateResponse, responses={
    503: {
        "description": "Dashboard is not running, or generation could not be rescheduled.",
        "content": {
            "application/json": {
                "example": {"detail": "No running event loop to schedule sample generation"}
            }
        }
    }
})
async def toggle_pause() -> DashboardStateResponse:
    """
    Toggle between Live and Paused.

    Pausing stops sample generation immediately. Resuming restarts it with a
    full interval before the next reading.
    """
    controller = require_controller()
    try:
        state = controller.toggle_pause()
    except GeneratorSchedulingError as e:
        logger.error(f"Failed to resume sample generation: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    except DashboardClosedError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return to_state_response(state, controller)


@router.get("/statistics", response_model=StatisticsResponse, responses=NOT_RUNNING_RESPONSE)
async def get_statistics() -> StatisticsResponse:
    """
    Get current/average/min/max over the retained readings.
    All values are null while the window is empty.
    """
    controller = require_controller()
    stats = controller.statistics()
    return StatisticsResponse(
        current=stats.current,
        average=stats.average,
        min=stats.min,
        max=stats.max,
        unit=controller.config.unit,
    )


@router.websocket("/ws")
async def stream_state(websocket: WebSocket):
    """Push the current snapshot and every later one as JSON."""
    await websocket.accept()
    try:
        controller = service_manager.get_controller()
    except ServiceNotStartedError:
        await websocket.close(code=1013)
        return

    async def forward():
        async for state in controller.stream():
            payload = to_state_response(state, controller)
            await websocket.send_json(payload.model_dump(mode="json"))

    async def wait_disconnect():
        # Client messages are ignored; this only notices the socket going away
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            logger.debug("Dashboard stream client disconnected")

    sender = asyncio.create_task(forward())
    receiver = asyncio.create_task(wait_disconnect())
    done, pending = await asyncio.wait({sender, receiver}, return_when=asyncio.FIRST_COMPLETED)
    for task in pending:
        task.cancel()

    if sender in done:
        error = sender.exception()
        if error is not None:
            logger.debug(f"Dashboard stream send failed: {error!r}")
        try:
            await websocket.close()
        except (RuntimeError, WebSocketDisconnect) as e:
            # Socket already gone
            logger.debug(f"Dashboard stream close skipped: {e!r}")
