from typing import List, Optional, Tuple
from pydantic import BaseModel
from core.models.generator_state import GeneratorState


class AppHealthOK(BaseModel):
    status: str
    app: str


class ReadingPoint(BaseModel):
    timestamp: int
    value: float


class DashboardStateResponse(BaseModel):
    readings: List[ReadingPoint]
    paused: bool
    status: str
    auto: bool
    generator: GeneratorState
    capacity: int


class StatisticsResponse(BaseModel):
    current: Optional[float] = None
    average: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    unit: str


class ReadingRow(BaseModel):
    timestamp: int
    value: float
    time: str
    display: str


class ReadingsList(BaseModel):
    list: List[ReadingRow]


class ChartResponse(BaseModel):
    width: float
    height: float
    values: List[float]
    points: List[Tuple[float, float]]
