"""
Coordinate Engine Service

Places tasks on the matrix canvas and derives task defaults from a canvas
point (the inverse mapping used when a task is created by double-clicking).

Draw positions are independent of quadrant buckets: bucketing uses the
classification thresholds while x comes from the quantized time axis.
"""
import logging
from typing import Optional, Union

from priority_matrix.core.exceptions import InvalidTask
from priority_matrix.models.canvas import CanvasFrame, Point
from priority_matrix.models.matrix import PlacementDefaults, TaskPlacement
from priority_matrix.models.task import MS_PER_DAY, MS_PER_HOUR, EisenhowerQuadrant, Task
from priority_matrix.services.importance_scale import ImportanceScale, normalize_importance
from priority_matrix.services.quadrant_calculator import LIVE_POLICY, ClassificationPolicy, QuadrantCalculator
from priority_matrix.services.time_scale import TimeScale

logger = logging.getLogger(__name__)

DEFAULT_POSITION_TOLERANCE_MS = MS_PER_HOUR

# Used when a task is created inside a quadrant without a precise point
QUADRANT_DEFAULT_IMPORTANCE = {
    EisenhowerQuadrant.Q1: 8,
    EisenhowerQuadrant.Q2: 8,
    EisenhowerQuadrant.Q3: 3,
    EisenhowerQuadrant.Q4: 3,
}
QUADRANT_DEFAULT_DUE_OFFSET_MS = {
    EisenhowerQuadrant.Q1: 1 * MS_PER_HOUR,
    EisenhowerQuadrant.Q2: 7 * MS_PER_DAY,
    EisenhowerQuadrant.Q3: 6 * MS_PER_HOUR,
    EisenhowerQuadrant.Q4: 30 * MS_PER_DAY,
}
FALLBACK_IMPORTANCE = 5
FALLBACK_DUE_OFFSET_MS = 24 * MS_PER_HOUR


class CoordinateEngine:
    """Forward (task -> point) and inverse (point -> task defaults) canvas mapping."""

    @staticmethod
    def compute_position(task: Task, frame: CanvasFrame, now_ms: int) -> Point:
        """
        Canvas position of a task.

        A user-pinned position is returned verbatim. Otherwise x comes from
        the time axis and y from importance, both clamped inside the margins.

        Raises:
            InvalidTask: the task has no pin and lacks importance or due date
        """
        if task.explicit_coordinates is not None:
            return task.explicit_coordinates

        importance, due_at = task.require_schedule()
        try:
            importance = normalize_importance(importance)
        except TypeError as e:
            raise InvalidTask(task.id, str(e)) from e

        x = TimeScale.hours_to_x((due_at - now_ms) / MS_PER_HOUR, frame)
        y = ImportanceScale.importance_to_y(importance, frame)
        return Point(x=frame.clamp_x(x), y=frame.clamp_y(y))

    @staticmethod
    def place(
        task: Task,
        frame: CanvasFrame,
        now_ms: int,
        policy: ClassificationPolicy = LIVE_POLICY,
    ) -> TaskPlacement:
        """Classification and position of one task, for renderers."""
        classification = QuadrantCalculator.classify_task(task, now_ms, policy)
        point = CoordinateEngine.compute_position(task, frame, now_ms)
        logger.debug(
            f"Task {task.id}: {classification.quadrant.value} at ({point.x:.1f}, {point.y:.1f})"
            f"{' (pinned)' if task.is_pinned else ''}"
        )
        return TaskPlacement(
            task_id=task.id,
            quadrant=classification.quadrant,
            x=point.x,
            y=point.y,
            is_overdue=classification.is_overdue,
            is_urgent=classification.is_urgent,
            is_important=classification.is_important,
            urgency_score=classification.urgency_score,
            pinned=task.is_pinned,
        )

    @staticmethod
    def compute_defaults_from_position(
        point: Optional[Point],
        frame: CanvasFrame,
        quadrant: Optional[Union[EisenhowerQuadrant, str]] = None,
    ) -> PlacementDefaults:
        """
        Importance and due offset implied by a canvas point.

        Args:
            point: Where the user clicked, or None when only the quadrant is known
            frame: Canvas frame
            quadrant: Quadrant clicked in, used when there is no point

        Returns:
            PlacementDefaults: importance (1-10) and due offset in ms (>= 0)
        """
        if point is not None:
            importance = ImportanceScale.y_to_importance(point.y, frame)
            due_offset_ms = int(round(TimeScale.x_to_hours(point.x, frame) * MS_PER_HOUR))
            logger.debug(
                f"Defaults from ({point.x:.1f}, {point.y:.1f}): importance={importance}, "
                f"due in {due_offset_ms / MS_PER_HOUR:.1f}h"
            )
            return PlacementDefaults(importance=importance, due_offset_ms=due_offset_ms)

        if quadrant is not None:
            quadrant = EisenhowerQuadrant.from_key(quadrant)
            return PlacementDefaults(
                importance=QUADRANT_DEFAULT_IMPORTANCE[quadrant],
                due_offset_ms=QUADRANT_DEFAULT_DUE_OFFSET_MS[quadrant],
            )

        return PlacementDefaults(importance=FALLBACK_IMPORTANCE, due_offset_ms=FALLBACK_DUE_OFFSET_MS)

    @staticmethod
    def quadrant_at(point: Point, frame: CanvasFrame) -> EisenhowerQuadrant:
        """Quarter of the canvas a point falls in (right is urgent, top is important)."""
        is_urgent = point.x >= frame.center_x
        is_important = point.y < frame.center_y
        return EisenhowerQuadrant.from_flags(is_important, is_urgent)

    @staticmethod
    def position_will_change(
        defaults: PlacementDefaults,
        importance: float,
        due_at: int,
        now_ms: int,
        tolerance_ms: int = DEFAULT_POSITION_TOLERANCE_MS,
    ) -> bool:
        """
        Whether edited values move a task away from the point it was created at.

        Pure comparison against the defaults derived from the click; nothing
        is stored.
        """
        if normalize_importance(importance) != defaults.importance:
            return True
        return abs((due_at - now_ms) - defaults.due_offset_ms) > tolerance_ms
