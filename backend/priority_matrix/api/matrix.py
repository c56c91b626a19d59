"""
Matrix API endpoints exposing the classification and coordinate engine.
"""
import logging
import time
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from priority_matrix.core.config import settings
from priority_matrix.core.exceptions import InvalidFrame, InvalidQuadrant, InvalidTask
from priority_matrix.models.canvas import AxisTick, CanvasFrame, Point, Rect
from priority_matrix.models.matrix import PlacementDefaults, Suggestion, TaskPlacement
from priority_matrix.models.task import EisenhowerQuadrant, Task
from priority_matrix.services.coordinate_engine import CoordinateEngine
from priority_matrix.services.matrix_aggregate import MatrixAggregate
from priority_matrix.services.time_scale import TimeScale

# Initialize logger
logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.api_prefix}/matrix", tags=["matrix"])


# Pydantic schemas for request/response validation
class FrameIn(BaseModel):
    """Canvas frame as sent by a renderer."""
    width: float = settings.canvas_width
    height: float = settings.canvas_height
    margin: float = settings.canvas_margin


class RebuildRequest(BaseModel):
    """Request schema for rebuilding the matrix."""
    tasks: list[dict[str, Any]] = Field(default_factory=list)
    frame: Optional[FrameIn] = None
    now_ms: Optional[int] = None

    class Config:
        json_schema_extra = {
            "example": {
                "tasks": [
                    {"id": "t1", "importance": 8, "dueAt": 1767261600000, "status": "doing"}
                ],
                "frame": {"width": 480, "height": 450, "margin": 30},
            }
        }


class RebuildResponse(BaseModel):
    now_ms: int
    policy: str
    quadrants: dict[str, Any]
    distribution: dict[str, int]
    suggestions: list[Suggestion]


class PositionRequest(BaseModel):
    """Request schema for placing one task."""
    task: dict[str, Any]
    frame: FrameIn = Field(default_factory=FrameIn)
    now_ms: Optional[int] = None


class DefaultsRequest(BaseModel):
    """Request schema for task defaults at a canvas point."""
    point: Optional[Point] = None
    quadrant: Optional[str] = None
    frame: FrameIn = Field(default_factory=FrameIn)

    class Config:
        json_schema_extra = {
            "example": {
                "point": {"x": 397.5, "y": 30},
                "frame": {"width": 480, "height": 450, "margin": 30},
            }
        }


def _now_ms() -> int:
    return int(time.time() * 1000)


def _frame(frame_in: FrameIn) -> CanvasFrame:
    try:
        return CanvasFrame(width=frame_in.width, height=frame_in.height, margin=frame_in.margin)
    except InvalidFrame as e:
        raise HTTPException(status_code=400, detail=e.message)


def _tasks(records: list[dict[str, Any]]) -> list[Task]:
    try:
        return [Task.from_record(record) for record in records]
    except InvalidTask as e:
        raise HTTPException(status_code=422, detail={"task_id": e.task_id, "error": e.reason})


@router.post("/rebuild", response_model=RebuildResponse)
async def rebuild_matrix(request: RebuildRequest):
    """
    Bucket in-progress tasks into the four quadrants.

    When a frame is given every task also carries its x/y position.
    """
    now_ms = request.now_ms if request.now_ms is not None else _now_ms()
    frame = _frame(request.frame) if request.frame is not None else None
    tasks = _tasks(request.tasks)

    aggregate = MatrixAggregate.from_settings(settings)
    try:
        snapshot = aggregate.rebuild(tasks, now_ms, frame)
    except InvalidTask as e:
        logger.warning(f"Rebuild rejected: {e.message}")
        raise HTTPException(status_code=422, detail={"task_id": e.task_id, "error": e.reason})

    payload = snapshot.to_dict()
    return RebuildResponse(
        now_ms=payload["now_ms"],
        policy=payload["policy"],
        quadrants=payload["quadrants"],
        distribution={q.key: pct for q, pct in snapshot.distribution().items()},
        suggestions=aggregate.suggestions(snapshot),
    )


@router.post("/position", response_model=TaskPlacement)
async def place_task(request: PositionRequest):
    """Quadrant and canvas position of a single task."""
    now_ms = request.now_ms if request.now_ms is not None else _now_ms()
    frame = _frame(request.frame)
    task = _tasks([request.task])[0]

    policy = MatrixAggregate.from_settings(settings).policy
    try:
        return CoordinateEngine.place(task, frame, now_ms, policy)
    except InvalidTask as e:
        raise HTTPException(status_code=422, detail={"task_id": e.task_id, "error": e.reason})


@router.post("/defaults", response_model=PlacementDefaults)
async def defaults_from_position(request: DefaultsRequest):
    """Importance and due offset for a task created at a canvas point."""
    frame = _frame(request.frame)
    try:
        return CoordinateEngine.compute_defaults_from_position(request.point, frame, request.quadrant)
    except InvalidQuadrant as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/quadrants/{key}/bounds", response_model=Rect)
async def quadrant_bounds(
    key: str,
    width: float = Query(settings.canvas_width),
    height: float = Query(settings.canvas_height),
):
    """Layout rectangle of a quadrant (plain quartering of the canvas)."""
    try:
        return MatrixAggregate.get_quadrant_bounds(key, width, height)
    except InvalidQuadrant as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/quadrants")
async def list_quadrants():
    """Display metadata for the four quadrants."""
    return [
        {
            "key": quadrant.key,
            "name": quadrant.label,
            "color": quadrant.color,
            "description": quadrant.description,
        }
        for quadrant in EisenhowerQuadrant
    ]


@router.get("/axis", response_model=list[AxisTick])
async def time_axis(
    width: float = Query(settings.canvas_width),
    height: float = Query(settings.canvas_height),
    margin: float = Query(settings.canvas_margin),
):
    """Time-axis anchors resolved against a frame."""
    frame = _frame(FrameIn(width=width, height=height, margin=margin))
    return TimeScale.ticks(frame)
