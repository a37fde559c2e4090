from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import StreamingResponse
import io
import base64
from typing import Optional

from core.config_loader import config_loader
from core.processing.chart_mapper import ChartGeometry
from core.processing.chart_renderer import render_png
from routers.dashboard import require_controller
from schemas import ChartResponse

router = APIRouter(prefix="/chart", tags=["chart"])

CHART_ERROR_RESPONSES = {
    400: {
        "description": "Invalid viewport size.",
        "content": {
            "application/json": {
                "example": {"detail": "Viewport width must be a finite, non-negative number, got -1.0"}
            }
        }
    },
    503: {
        "description": "Dashboard services are not running.",
        "content": {
            "application/json": {
                "example": {"detail": "Dashboard is not running"}
            }
        }
    }
}

MAX_IMAGE_SIDE = 4096


def _geometry(width: Optional[float], height: Optional[float]) -> ChartGeometry:
    controller = require_controller()
    chart_cfg = config_loader.get_chart_config()
    w = chart_cfg.width if width is None else width
    h = chart_cfg.height if height is None else height
    try:
        return controller.chart(w, h)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _png(width: Optional[float], height: Optional[float]) -> bytes:
    geometry = _geometry(width, height)
    if geometry.width > MAX_IMAGE_SIDE or geometry.height > MAX_IMAGE_SIDE:
        raise HTTPException(status_code=400, detail=f"Image sides are limited to {MAX_IMAGE_SIDE} pixels")
    return render_png(geometry, config_loader.get_chart_config())


@router.get("", response_model=ChartResponse, responses=CHART_ERROR_RESPONSES)
async def get_chart(
    width: Optional[float] = Query(None, description="Viewport width in pixels"),
    height: Optional[float] = Query(None, description="Viewport height in pixels"),
) -> ChartResponse:
    """
    Get the retained readings mapped onto viewport coordinates.

    The first point sits at x=0 and points are evenly spaced up to `width`.
    Higher values have smaller y (origin is top-left). An empty window yields no points.
    """
    geometry = _geometry(width, height)
    return ChartResponse(
        width=geometry.width,
        height=geometry.height,
        values=list(geometry.values),
        points=list(geometry.points),
    )


@router.get("/png", response_class=StreamingResponse, responses=CHART_ERROR_RESPONSES)
async def get_chart_png(
    width: Optional[float] = Query(None, description="Image width in pixels"),
    height: Optional[float] = Query(None, description="Image height in pixels"),
):
    """
    Get the current chart as a PNG image (line plus a dot per reading).
    """
    png_data = _png(width, height)
    return StreamingResponse(
        io.BytesIO(png_data),
        media_type="image/png",
        headers={"Content-Disposition": "inline; filename=readings.png"}
    )


@router.get("/png/base64", responses=CHART_ERROR_RESPONSES)
async def get_chart_base64(
    width: Optional[float] = Query(None, description="Image width in pixels"),
    height: Optional[float] = Query(None, description="Image height in pixels"),
):
    """
    Get the current chart as a base64-encoded PNG.

    Useful for embedding in frontend applications.
    Returns: {"data": "data:image/png;base64,..."}
    """
    png_data = _png(width, height)
    base64_data = base64.b64encode(png_data).decode('utf-8')
    return {
        "data": f"data:image/png;base64,{base64_data}"
    }
