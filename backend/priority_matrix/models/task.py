"""
Task record consumed by the engine, plus status and Eisenhower quadrant enums.
"""
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from priority_matrix.core.exceptions import InvalidQuadrant, InvalidTask
from priority_matrix.models.canvas import Point

MS_PER_HOUR = 60 * 60 * 1000
MS_PER_DAY = 24 * MS_PER_HOUR


def to_epoch_ms(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds (naive values are UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(round(value.timestamp() * 1000))


class TaskStatus(str, Enum):
    """Task status enum."""
    PENDING = "pending"
    DOING = "doing"
    COMPLETED = "completed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    OVERDUE = "overdue"  # derived by callers; the engine recomputes it from due_at

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.COMPLETED, TaskStatus.REJECTED, TaskStatus.CANCELLED)


_QUADRANT_DISPLAY = {
    "Q1": ("Important & Urgent", "#EF4444", "Do it now"),
    "Q2": ("Important & Not Urgent", "#2563EB", "Schedule it"),
    "Q3": ("Urgent & Not Important", "#F59E0B", "Delegate it"),
    "Q4": ("Not Important & Not Urgent", "#9CA3AF", "Eliminate it"),
}


class EisenhowerQuadrant(str, Enum):
    """Eisenhower matrix quadrants."""
    Q1 = "Q1"  # Urgent & Important (Do First)
    Q2 = "Q2"  # Not Urgent, Important (Schedule)
    Q3 = "Q3"  # Urgent, Not Important (Delegate)
    Q4 = "Q4"  # Neither (Eliminate)

    @property
    def key(self) -> str:
        return self.value.lower()

    @property
    def label(self) -> str:
        return _QUADRANT_DISPLAY[self.value][0]

    @property
    def color(self) -> str:
        return _QUADRANT_DISPLAY[self.value][1]

    @property
    def description(self) -> str:
        return _QUADRANT_DISPLAY[self.value][2]

    @property
    def is_important(self) -> bool:
        return self in (EisenhowerQuadrant.Q1, EisenhowerQuadrant.Q2)

    @property
    def is_urgent(self) -> bool:
        return self in (EisenhowerQuadrant.Q1, EisenhowerQuadrant.Q3)

    @classmethod
    def from_flags(cls, is_important: bool, is_urgent: bool) -> "EisenhowerQuadrant":
        if is_important and is_urgent:
            return cls.Q1  # Do First (Urgent & Important)
        elif is_important:
            return cls.Q2  # Schedule (Not Urgent, Important)
        elif is_urgent:
            return cls.Q3  # Delegate (Urgent, Not Important)
        return cls.Q4  # Eliminate (Neither)

    @classmethod
    def from_key(cls, key: Union["EisenhowerQuadrant", str]) -> "EisenhowerQuadrant":
        """Accept an enum member, "Q1".."Q4" or "q1".."q4"."""
        if isinstance(key, EisenhowerQuadrant):
            return key
        try:
            return cls(str(key).strip().upper())
        except ValueError:
            raise InvalidQuadrant(key) from None


class Task(BaseModel):
    """
    A time-bound task as seen by the engine.

    importance and due_at are optional here so that loose records can be
    loaded; the classifier rejects a task missing either one with InvalidTask.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Union[int, str]
    title: str = ""
    description: Optional[str] = None
    category: Optional[str] = None
    importance: Optional[float] = None  # canonical 1-10
    due_at: Optional[int] = Field(
        None, validation_alias=AliasChoices("due_at", "dueAt", "dueDate")
    )  # epoch ms
    status: TaskStatus = TaskStatus.DOING
    explicit_coordinates: Optional[Point] = Field(
        None,
        validation_alias=AliasChoices("explicit_coordinates", "explicitCoordinates", "coordinates"),
    )
    created_at: Optional[int] = Field(None, validation_alias=AliasChoices("created_at", "createdAt"))
    completed_at: Optional[int] = Field(None, validation_alias=AliasChoices("completed_at", "completedAt"))

    @field_validator("due_at", "created_at", "completed_at", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return to_epoch_ms(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError("timestamp must be a finite number")
            return int(round(value))
        return value

    @field_validator("explicit_coordinates", mode="before")
    @classmethod
    def _drop_partial_coordinates(cls, value: Any) -> Any:
        # A pin only counts when both axes are set
        if isinstance(value, Mapping):
            if value.get("x") is None or value.get("y") is None:
                return None
        return value

    def __repr__(self):
        return f"<Task(id={self.id!r}, importance={self.importance}, due_at={self.due_at}, status={self.status.value})>"

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Task":
        """Build a Task from a loose mapping, reporting failures as InvalidTask."""
        try:
            return cls.model_validate(dict(record))
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise InvalidTask(record.get("id"), f"invalid field(s): {fields}") from e

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def is_pinned(self) -> bool:
        """True when the user placed this task by hand."""
        return self.explicit_coordinates is not None

    def require_schedule(self) -> tuple[float, int]:
        """Return (importance, due_at), raising InvalidTask if either is missing."""
        if self.importance is None:
            raise InvalidTask(self.id, "missing importance")
        if self.due_at is None:
            raise InvalidTask(self.id, "missing due date")
        return self.importance, self.due_at

    def time_remaining_ms(self, now_ms: int) -> int:
        _, due_at = self.require_schedule()
        return due_at - now_ms

    def hours_until_due(self, now_ms: int) -> float:
        return self.time_remaining_ms(now_ms) / MS_PER_HOUR

    def is_overdue(self, now_ms: int) -> bool:
        """Completed, rejected and cancelled tasks are never overdue."""
        if self.is_terminal:
            return False
        return self.time_remaining_ms(now_ms) < 0

    def without_coordinates(self) -> "Task":
        """Copy with the manual placement cleared."""
        return self.model_copy(update={"explicit_coordinates": None})
