from fastapi import APIRouter
import datetime

from core.models.reading import Reading
from routers.dashboard import require_controller, NOT_RUNNING_RESPONSE
from schemas import ReadingRow, ReadingsList

router = APIRouter(prefix="/readings", tags=["readings"])


def format_row(reading: Reading, unit: str) -> ReadingRow:
    time_str = datetime.datetime.fromtimestamp(reading.timestamp / 1000).strftime("%H:%M:%S")
    return ReadingRow(
        timestamp=reading.timestamp,
        value=reading.value,
        time=time_str,
        display=f"{reading.value:.1f} {unit}",
    )


@router.get("", response_model=ReadingsList, responses=NOT_RUNNING_RESPONSE)
async def get_readings() -> ReadingsList:
    """
    Get the retained readings as display rows, oldest first.
    """
    controller = require_controller()
    unit = controller.config.unit
    rows = [format_row(r, unit) for r in controller.current_state().readings]
    return ReadingsList(list=rows)
