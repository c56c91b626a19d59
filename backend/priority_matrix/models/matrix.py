"""
Engine output models: classifications, placements and immutable matrix snapshots.
"""
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from priority_matrix.models.task import EisenhowerQuadrant, Task, TaskStatus


class Classification(BaseModel):
    """Result of classifying one task at one instant."""

    model_config = ConfigDict(frozen=True)

    quadrant: EisenhowerQuadrant
    is_important: bool
    is_urgent: bool
    is_overdue: bool
    urgency_score: float = Field(..., ge=0.0, le=1.0)
    hours_remaining: float


class TaskPlacement(BaseModel):
    """Per-task output: quadrant plus canvas position."""

    model_config = ConfigDict(frozen=True)

    task_id: Union[int, str]
    quadrant: EisenhowerQuadrant
    x: float
    y: float
    is_overdue: bool
    is_urgent: bool
    is_important: bool
    urgency_score: float
    pinned: bool = False


class PlacementDefaults(BaseModel):
    """Importance and due offset proposed for a task created on the canvas."""

    model_config = ConfigDict(frozen=True)

    importance: int = Field(..., ge=1, le=10)
    due_offset_ms: int = Field(..., ge=0)

    def due_at(self, now_ms: int) -> int:
        return now_ms + self.due_offset_ms


class QuadrantStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = 0
    overdue_count: int = 0
    completed_count: int = 0


class MatrixEntry(BaseModel):
    """A task in a bucket, with its classification and optional placement."""

    model_config = ConfigDict(frozen=True)

    task: Task
    classification: Classification
    placement: Optional[TaskPlacement] = None


class QuadrantBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    quadrant: EisenhowerQuadrant
    entries: tuple[MatrixEntry, ...] = ()

    @property
    def tasks(self) -> list[Task]:
        return [entry.task for entry in self.entries]

    def stats(self) -> QuadrantStats:
        return QuadrantStats(
            count=len(self.entries),
            overdue_count=sum(1 for entry in self.entries if entry.classification.is_overdue),
            completed_count=sum(1 for entry in self.entries if entry.task.status == TaskStatus.COMPLETED),
        )


class Suggestion(BaseModel):
    """A balance hint about the shape of the matrix."""

    model_config = ConfigDict(frozen=True)

    quadrant: EisenhowerQuadrant
    type: str  # "warning" | "info"
    message: str
    action: str


class MatrixSnapshot(BaseModel):
    """
    Immutable result of one matrix rebuild.

    Always holds all four quadrants. Renderers that animate transitions diff
    two snapshots; nothing in here is updated in place.
    """

    model_config = ConfigDict(frozen=True)

    now_ms: int
    policy_name: str
    buckets: dict[EisenhowerQuadrant, QuadrantBucket]
    # every input task by status, including those left out of the buckets
    status_counts: dict[TaskStatus, int] = Field(default_factory=dict)

    def bucket(self, quadrant: Union[EisenhowerQuadrant, str]) -> QuadrantBucket:
        return self.buckets[EisenhowerQuadrant.from_key(quadrant)]

    def all_tasks(self) -> list[Task]:
        return [task for quadrant in EisenhowerQuadrant for task in self.buckets[quadrant].tasks]

    def placements(self) -> list[TaskPlacement]:
        return [
            entry.placement
            for quadrant in EisenhowerQuadrant
            for entry in self.buckets[quadrant].entries
            if entry.placement is not None
        ]

    def get_stats(self) -> dict[EisenhowerQuadrant, QuadrantStats]:
        """Per-quadrant count, overdue count and completed count."""
        return {quadrant: self.buckets[quadrant].stats() for quadrant in EisenhowerQuadrant}

    def totals(self) -> dict[str, Any]:
        """Counts over the whole rebuild input, not only the bucketed tasks."""
        counts = self.status_counts
        total = sum(counts.values())
        completed = counts.get(TaskStatus.COMPLETED, 0)
        return {
            "total": total,
            "pending": counts.get(TaskStatus.PENDING, 0),
            "doing": counts.get(TaskStatus.DOING, 0),
            "completed": completed,
            "rejected": counts.get(TaskStatus.REJECTED, 0) + counts.get(TaskStatus.CANCELLED, 0),
            "completion_rate": (completed / total) * 100 if total > 0 else 0.0,
        }

    def distribution(self) -> dict[EisenhowerQuadrant, int]:
        """Whole-percent share of tasks per quadrant (all zero when empty)."""
        stats = self.get_stats()
        total = sum(stat.count for stat in stats.values())
        if total == 0:
            return {quadrant: 0 for quadrant in EisenhowerQuadrant}
        # round half up, like the dashboard percentages
        return {
            quadrant: int(stats[quadrant].count * 100 / total + 0.5)
            for quadrant in EisenhowerQuadrant
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the matrix output shape keyed by "q1".."q4"."""
        quadrants = {}
        for quadrant in EisenhowerQuadrant:
            bucket = self.buckets[quadrant]
            stats = bucket.stats()
            quadrants[quadrant.key] = {
                "name": quadrant.label,
                "color": quadrant.color,
                "description": quadrant.description,
                "tasks": [
                    {
                        **entry.task.model_dump(mode="json"),
                        **(
                            entry.placement.model_dump(mode="json", exclude={"task_id"})
                            if entry.placement is not None
                            else {
                                "quadrant": entry.classification.quadrant.value,
                                "is_overdue": entry.classification.is_overdue,
                                "is_urgent": entry.classification.is_urgent,
                                "is_important": entry.classification.is_important,
                                "urgency_score": entry.classification.urgency_score,
                            }
                        ),
                    }
                    for entry in bucket.entries
                ],
                "count": stats.count,
                "overdue_count": stats.overdue_count,
                "completed_count": stats.completed_count,
            }
        return {"now_ms": self.now_ms, "policy": self.policy_name, "quadrants": quadrants}
