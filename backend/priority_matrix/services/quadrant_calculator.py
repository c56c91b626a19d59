"""
Quadrant Calculator Service

Rule-based Eisenhower Matrix quadrant assignment using importance and due date.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional

from priority_matrix.core.exceptions import InvalidTask
from priority_matrix.models.matrix import Classification
from priority_matrix.models.task import MS_PER_DAY, MS_PER_HOUR, EisenhowerQuadrant, Task, TaskStatus
from priority_matrix.services.importance_scale import normalize_importance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationPolicy:
    """
    Thresholds deciding "important" and "urgent".

    The live matrix and the analytics views use different importance
    thresholds; callers pick one explicitly.
    """

    name: str
    importance_threshold: float
    urgent_threshold_hours: float = 24.0

    @property
    def urgent_threshold_ms(self) -> float:
        return self.urgent_threshold_hours * MS_PER_HOUR

    def with_urgent_threshold(self, hours: float) -> "ClassificationPolicy":
        return replace(self, urgent_threshold_hours=hours)

    def with_importance_threshold(self, threshold: float) -> "ClassificationPolicy":
        return replace(self, importance_threshold=threshold)


LIVE_POLICY = ClassificationPolicy(name="live", importance_threshold=5.0)
ANALYTICS_POLICY = ClassificationPolicy(name="analytics", importance_threshold=5.5)


class QuadrantCalculator:
    """
    Calculate Eisenhower Matrix quadrants based on importance and due date.

    A task is important when its importance reaches the policy threshold and
    urgent when its remaining time is within the policy's urgent window.
    Terminal tasks (completed, rejected, cancelled) are never urgent.
    """

    @staticmethod
    def classify(
        importance: float,
        due_at: int,
        now_ms: int,
        status: TaskStatus = TaskStatus.DOING,
        policy: ClassificationPolicy = LIVE_POLICY,
    ) -> Classification:
        """
        Classify one task at one instant.

        Args:
            importance: Importance on the 1-10 scale (clamped)
            due_at: Due time, epoch ms
            now_ms: Current time, epoch ms, captured once by the caller
            status: Task status
            policy: Thresholds to apply

        Returns:
            Classification: quadrant, flags and urgency score
        """
        importance = normalize_importance(importance)
        remaining_ms = due_at - now_ms

        is_important = importance >= policy.importance_threshold
        if status.is_terminal:
            is_urgent = False
            is_overdue = False
        else:
            is_urgent = remaining_ms <= policy.urgent_threshold_ms
            is_overdue = remaining_ms < 0

        return Classification(
            quadrant=EisenhowerQuadrant.from_flags(is_important, is_urgent),
            is_important=is_important,
            is_urgent=is_urgent,
            is_overdue=is_overdue,
            urgency_score=QuadrantCalculator.urgency_score(remaining_ms / MS_PER_DAY),
            hours_remaining=remaining_ms / MS_PER_HOUR,
        )

    @staticmethod
    def classify_task(
        task: Task,
        now_ms: int,
        policy: ClassificationPolicy = LIVE_POLICY,
    ) -> Classification:
        """
        Classify a task record, failing loudly on missing inputs.

        Raises:
            InvalidTask: importance or due date missing or not numeric
        """
        importance, due_at = task.require_schedule()
        try:
            return QuadrantCalculator.classify(importance, due_at, now_ms, task.status, policy)
        except TypeError as e:
            logger.warning(f"Task {task.id}: cannot classify: {e}")
            raise InvalidTask(task.id, str(e)) from e

    @staticmethod
    def urgency_score(days_remaining: float) -> float:
        """
        Continuous urgency (0.2-1.0) from days until due.

        Args:
            days_remaining: Days until due (negative when overdue)

        Returns:
            float: 1.0 when overdue, falling to 0.2 beyond 30 days
        """
        d = days_remaining
        if d < 0:  # Overdue
            return 1.0
        elif d <= 1:  # Due today
            return 0.8 + (1 - d) * 0.2
        elif d <= 3:  # Due within 3 days
            return 0.6 + (3 - d) / 2 * 0.2
        elif d <= 7:  # Due within 1 week
            return 0.4 + (7 - d) / 4 * 0.2
        elif d <= 30:  # Due within a month
            return 0.2 + (30 - d) / 23 * 0.2
        else:  # Due far future
            return 0.2

    @staticmethod
    def should_recalculate(
        old_importance: Optional[float],
        new_importance: Optional[float],
        old_due_at: Optional[int],
        new_due_at: Optional[int],
    ) -> bool:
        """
        Determine if quadrant should be recalculated based on changes.

        Args:
            old_importance: Previous importance
            new_importance: New importance
            old_due_at: Previous due time, epoch ms
            new_due_at: New due time, epoch ms

        Returns:
            bool: True if importance or due time changed
        """
        importance_changed = old_importance != new_importance

        # Handle date comparison (both None is not a change)
        if old_due_at is None and new_due_at is None:
            date_changed = False
        elif old_due_at is None or new_due_at is None:
            date_changed = True
        else:
            # Compare at whole-second granularity
            date_changed = old_due_at // 1000 != new_due_at // 1000

        return importance_changed or date_changed
