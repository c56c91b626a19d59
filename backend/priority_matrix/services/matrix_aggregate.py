"""
Matrix aggregate: buckets tasks into the four quadrants.

Every rebuild is a full recomputation from the given task list and instant.
Nothing is cached between calls, so a changed clock or changed settings only
needs another rebuild.
"""
import logging
from collections import Counter
from typing import Iterable, Optional, Union

from priority_matrix.core.exceptions import InvalidQuadrant
from priority_matrix.models.canvas import CanvasFrame, Rect
from priority_matrix.models.matrix import MatrixEntry, MatrixSnapshot, QuadrantBucket, Suggestion
from priority_matrix.models.task import EisenhowerQuadrant, Task, TaskStatus
from priority_matrix.services.coordinate_engine import CoordinateEngine
from priority_matrix.services.quadrant_calculator import LIVE_POLICY, ClassificationPolicy, QuadrantCalculator

logger = logging.getLogger(__name__)


class MatrixAggregate:
    """Owns the quadrant bucketing policy and produces snapshots."""

    # Balance thresholds for suggestions
    Q1_OVERLOAD = 3
    Q2_MINIMUM = 2
    Q3_OVERLOAD = 2
    Q4_OVERLOAD = 1

    def __init__(self, policy: ClassificationPolicy = LIVE_POLICY):
        self.policy = policy

    @classmethod
    def from_settings(cls, settings) -> "MatrixAggregate":
        """Live policy with thresholds taken from settings."""
        policy = LIVE_POLICY.with_importance_threshold(
            settings.live_importance_threshold
        ).with_urgent_threshold(settings.urgent_threshold_hours)
        return cls(policy)

    def rebuild(
        self,
        tasks: Iterable[Task],
        now_ms: int,
        frame: Optional[CanvasFrame] = None,
    ) -> MatrixSnapshot:
        """
        Bucket the "doing" tasks by quadrant.

        Args:
            tasks: Task records in render order
            now_ms: Current time, epoch ms, captured once by the caller
            frame: When given, each entry also carries its canvas placement

        Returns:
            MatrixSnapshot: four buckets, input order kept within each

        Raises:
            InvalidTask: a doing task lacks importance or due date
        """
        entries: dict[EisenhowerQuadrant, list[MatrixEntry]] = {q: [] for q in EisenhowerQuadrant}
        status_counts: Counter = Counter()

        for task in tasks:
            status_counts[task.status] += 1
            if task.status != TaskStatus.DOING:
                continue

            classification = QuadrantCalculator.classify_task(task, now_ms, self.policy)
            placement = None
            if frame is not None:
                placement = CoordinateEngine.place(task, frame, now_ms, self.policy)
            entries[classification.quadrant].append(
                MatrixEntry(task=task, classification=classification, placement=placement)
            )

        snapshot = MatrixSnapshot(
            now_ms=now_ms,
            policy_name=self.policy.name,
            buckets={
                quadrant: QuadrantBucket(quadrant=quadrant, entries=tuple(entries[quadrant]))
                for quadrant in EisenhowerQuadrant
            },
            status_counts=dict(status_counts),
        )
        skipped = sum(status_counts.values()) - status_counts[TaskStatus.DOING]
        counts = ", ".join(f"{q.value}={len(entries[q])}" for q in EisenhowerQuadrant)
        logger.info(f"Matrix rebuilt ({self.policy.name}): {counts}, {skipped} not in progress")
        return snapshot

    def suggestions(self, snapshot: MatrixSnapshot) -> list[Suggestion]:
        """Hints when the matrix is lopsided."""
        stats = snapshot.get_stats()
        suggestions = []

        if stats[EisenhowerQuadrant.Q1].count > self.Q1_OVERLOAD:
            suggestions.append(Suggestion(
                quadrant=EisenhowerQuadrant.Q1,
                type="warning",
                message="Too many urgent and important tasks. Handle the most important first to avoid a crisis.",
                action="review_priorities",
            ))

        if stats[EisenhowerQuadrant.Q2].count < self.Q2_MINIMUM:
            suggestions.append(Suggestion(
                quadrant=EisenhowerQuadrant.Q2,
                type="info",
                message="Few important but not urgent tasks. Plan ahead by adding long-term work.",
                action="add_important_tasks",
            ))

        if stats[EisenhowerQuadrant.Q3].count > self.Q3_OVERLOAD:
            suggestions.append(Suggestion(
                quadrant=EisenhowerQuadrant.Q3,
                type="warning",
                message="Many urgent but unimportant tasks. Delegate or simplify them.",
                action="delegate_tasks",
            ))

        if stats[EisenhowerQuadrant.Q4].count > self.Q4_OVERLOAD:
            suggestions.append(Suggestion(
                quadrant=EisenhowerQuadrant.Q4,
                type="warning",
                message="Many tasks that are neither urgent nor important. Drop them and focus on what matters.",
                action="remove_unimportant_tasks",
            ))

        return suggestions

    @staticmethod
    def get_quadrant_bounds(
        quadrant: Union[EisenhowerQuadrant, str],
        width: float,
        height: float,
    ) -> Rect:
        """
        Rectangle of a quadrant for layout (a plain quartering of the canvas).

        Q1 top-right, Q2 top-left, Q3 bottom-right, Q4 bottom-left.
        """
        quadrant = EisenhowerQuadrant.from_key(quadrant)
        half_w = max(0.0, width) / 2
        half_h = max(0.0, height) / 2

        if quadrant == EisenhowerQuadrant.Q1:
            return Rect(x=half_w, y=0, width=half_w, height=half_h)
        elif quadrant == EisenhowerQuadrant.Q2:
            return Rect(x=0, y=0, width=half_w, height=half_h)
        elif quadrant == EisenhowerQuadrant.Q3:
            return Rect(x=half_w, y=half_h, width=half_w, height=half_h)
        elif quadrant == EisenhowerQuadrant.Q4:
            return Rect(x=0, y=half_h, width=half_w, height=half_h)
        raise InvalidQuadrant(quadrant)
