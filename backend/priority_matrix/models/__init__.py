# Engine models
from priority_matrix.models.canvas import AxisTick, CanvasFrame, Point, Rect
from priority_matrix.models.task import EisenhowerQuadrant, Task, TaskStatus
from priority_matrix.models.matrix import (
    Classification,
    MatrixEntry,
    MatrixSnapshot,
    PlacementDefaults,
    QuadrantBucket,
    QuadrantStats,
    Suggestion,
    TaskPlacement,
)

__all__ = [
    "AxisTick",
    "CanvasFrame",
    "Classification",
    "EisenhowerQuadrant",
    "MatrixEntry",
    "MatrixSnapshot",
    "PlacementDefaults",
    "Point",
    "QuadrantBucket",
    "QuadrantStats",
    "Rect",
    "Suggestion",
    "Task",
    "TaskPlacement",
    "TaskStatus",
]
