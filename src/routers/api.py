from fastapi import APIRouter

from routers import chart, dashboard, readings

router = APIRouter()

# include sub-routers
router.include_router(dashboard.router)
router.include_router(readings.router)
router.include_router(chart.router)
