"""Eisenhower matrix classification and canvas coordinate engine."""

from priority_matrix.core.exceptions import InvalidFrame, InvalidQuadrant, InvalidTask, MatrixEngineError
from priority_matrix.models import (
    CanvasFrame,
    EisenhowerQuadrant,
    MatrixSnapshot,
    PlacementDefaults,
    Point,
    Task,
    TaskPlacement,
    TaskStatus,
)
from priority_matrix.services import (
    ANALYTICS_POLICY,
    LIVE_POLICY,
    ClassificationPolicy,
    CoordinateEngine,
    ImportanceScale,
    MatrixAggregate,
    QuadrantCalculator,
    TimeScale,
    normalize_importance,
)

__all__ = [
    "ANALYTICS_POLICY",
    "LIVE_POLICY",
    "CanvasFrame",
    "ClassificationPolicy",
    "CoordinateEngine",
    "EisenhowerQuadrant",
    "ImportanceScale",
    "InvalidFrame",
    "InvalidQuadrant",
    "InvalidTask",
    "MatrixAggregate",
    "MatrixEngineError",
    "MatrixSnapshot",
    "PlacementDefaults",
    "Point",
    "QuadrantCalculator",
    "Task",
    "TaskPlacement",
    "TaskStatus",
    "TimeScale",
    "normalize_importance",
]
