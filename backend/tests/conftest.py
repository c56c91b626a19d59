import pytest

from priority_matrix.models.canvas import CanvasFrame
from priority_matrix.models.task import MS_PER_HOUR, Task, TaskStatus

# Fixed instant so every test threads the same "now"
NOW_MS = 1_760_000_000_000


@pytest.fixture
def now_ms():
    return NOW_MS


@pytest.fixture
def frame():
    """Default 480x450 canvas with a 30 unit margin."""
    return CanvasFrame(width=480, height=450, margin=30)


@pytest.fixture
def make_task():
    """Factory for tasks due a number of hours after NOW_MS."""
    counter = {"next": 0}

    def _make(importance=5, hours=24.0, status=TaskStatus.DOING, task_id=None, **extra):
        counter["next"] += 1
        return Task(
            id=task_id if task_id is not None else f"task-{counter['next']}",
            importance=importance,
            due_at=NOW_MS + int(hours * MS_PER_HOUR),
            status=status,
            **extra,
        )

    return _make
