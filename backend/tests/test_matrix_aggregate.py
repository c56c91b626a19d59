import pytest

from priority_matrix.core.config import Settings
from priority_matrix.core.exceptions import InvalidQuadrant, InvalidTask
from priority_matrix.models.canvas import Rect
from priority_matrix.models.task import EisenhowerQuadrant, Task, TaskStatus
from priority_matrix.services.matrix_aggregate import MatrixAggregate
from priority_matrix.services.quadrant_calculator import ANALYTICS_POLICY


@pytest.fixture
def aggregate():
    return MatrixAggregate()


@pytest.fixture
def mixed_tasks(make_task):
    return [
        make_task(importance=9, hours=2, task_id="q1-a"),
        make_task(importance=8, hours=100, task_id="q2-a"),
        make_task(importance=2, hours=-3, task_id="q3-late"),
        make_task(importance=1, hours=400, task_id="q4-a"),
        make_task(importance=6, hours=0.5, task_id="q1-b"),
        make_task(importance=9, hours=1, status=TaskStatus.COMPLETED, task_id="done"),
        make_task(importance=9, hours=1, status=TaskStatus.REJECTED, task_id="rejected"),
        make_task(importance=9, hours=1, status=TaskStatus.CANCELLED, task_id="cancelled"),
    ]


class TestRebuild:
    def test_buckets_doing_tasks_in_input_order(self, aggregate, mixed_tasks, now_ms):
        snapshot = aggregate.rebuild(mixed_tasks, now_ms)
        ids = {q: [t.id for t in snapshot.bucket(q).tasks] for q in EisenhowerQuadrant}
        assert ids == {
            EisenhowerQuadrant.Q1: ["q1-a", "q1-b"],
            EisenhowerQuadrant.Q2: ["q2-a"],
            EisenhowerQuadrant.Q3: ["q3-late"],
            EisenhowerQuadrant.Q4: ["q4-a"],
        }

    def test_bucket_totals_match_doing_count(self, aggregate, mixed_tasks, now_ms):
        snapshot = aggregate.rebuild(mixed_tasks, now_ms)
        doing = [t for t in mixed_tasks if t.status == TaskStatus.DOING]
        assert sum(stat.count for stat in snapshot.get_stats().values()) == len(doing)

    def test_rebuild_is_idempotent(self, aggregate, mixed_tasks, now_ms, frame):
        assert aggregate.rebuild(mixed_tasks, now_ms, frame) == aggregate.rebuild(mixed_tasks, now_ms, frame)

    def test_time_passing_moves_tasks(self, aggregate, make_task, now_ms):
        task = make_task(importance=8, hours=30)
        assert aggregate.rebuild([task], now_ms).bucket("q2").tasks == [task]
        later = now_ms + 10 * 60 * 60 * 1000
        assert aggregate.rebuild([task], later).bucket("q1").tasks == [task]

    def test_empty_input_gives_four_empty_buckets(self, aggregate, now_ms):
        snapshot = aggregate.rebuild([], now_ms)
        assert set(snapshot.buckets) == set(EisenhowerQuadrant)
        assert all(stat.count == 0 for stat in snapshot.get_stats().values())

    def test_frame_adds_placements(self, aggregate, make_task, now_ms, frame):
        snapshot = aggregate.rebuild([make_task(importance=10, hours=24, task_id="t")], now_ms, frame)
        [placement] = snapshot.placements()
        assert placement.task_id == "t"
        assert (placement.x, placement.y) == (240, 30)

    def test_no_frame_no_placements(self, aggregate, mixed_tasks, now_ms):
        assert aggregate.rebuild(mixed_tasks, now_ms).placements() == []

    def test_invalid_doing_task_fails_whole_call(self, aggregate, make_task, now_ms):
        tasks = [make_task(), Task(id="broken", importance=5)]
        with pytest.raises(InvalidTask) as exc_info:
            aggregate.rebuild(tasks, now_ms)
        assert exc_info.value.task_id == "broken"

    def test_excluded_tasks_are_not_validated(self, aggregate, now_ms):
        snapshot = aggregate.rebuild([Task(id="old", status=TaskStatus.COMPLETED)], now_ms)
        assert snapshot.all_tasks() == []

    def test_pending_task_is_left_out(self, aggregate, make_task, now_ms):
        pending = Task.from_record({"id": "p", "importance": 5, "dueAt": now_ms, "status": "pending"})
        snapshot = aggregate.rebuild([pending, make_task(task_id="active")], now_ms)
        assert [t.id for t in snapshot.all_tasks()] == ["active"]
        assert snapshot.totals()["pending"] == 1

    def test_policy_is_recorded(self, make_task, now_ms):
        snapshot = MatrixAggregate(ANALYTICS_POLICY).rebuild([make_task(importance=5, hours=1)], now_ms)
        assert snapshot.policy_name == "analytics"
        assert snapshot.bucket("q3").stats().count == 1


class TestFromSettings:
    def test_thresholds_come_from_settings(self, make_task, now_ms):
        aggregate = MatrixAggregate.from_settings(
            Settings(urgent_threshold_hours=48, live_importance_threshold=7)
        )
        snapshot = aggregate.rebuild([make_task(importance=6, hours=36)], now_ms)
        assert snapshot.bucket("q3").stats().count == 1
        assert snapshot.policy_name == "live"


class TestStats:
    def test_overdue_counts(self, aggregate, mixed_tasks, now_ms):
        stats = aggregate.rebuild(mixed_tasks, now_ms).get_stats()
        assert stats[EisenhowerQuadrant.Q3].overdue_count == 1
        assert stats[EisenhowerQuadrant.Q1].overdue_count == 0
        assert all(stat.completed_count == 0 for stat in stats.values())

    def test_totals(self, aggregate, mixed_tasks, now_ms):
        totals = aggregate.rebuild(mixed_tasks, now_ms).totals()
        assert totals == {
            "total": 8,
            "pending": 0,
            "doing": 5,
            "completed": 1,
            "rejected": 2,
            "completion_rate": 12.5,
        }

    def test_totals_of_empty_matrix(self, aggregate, now_ms):
        assert aggregate.rebuild([], now_ms).totals()["completion_rate"] == 0.0

    def test_distribution(self, aggregate, make_task, now_ms):
        tasks = [make_task(importance=9, hours=1) for _ in range(3)] + [make_task(importance=1, hours=900)]
        distribution = aggregate.rebuild(tasks, now_ms).distribution()
        assert distribution == {
            EisenhowerQuadrant.Q1: 75,
            EisenhowerQuadrant.Q2: 0,
            EisenhowerQuadrant.Q3: 0,
            EisenhowerQuadrant.Q4: 25,
        }

    def test_distribution_of_empty_matrix(self, aggregate, now_ms):
        assert set(aggregate.rebuild([], now_ms).distribution().values()) == {0}

    def test_to_dict_shape(self, aggregate, mixed_tasks, now_ms, frame):
        payload = aggregate.rebuild(mixed_tasks, now_ms, frame).to_dict()
        assert list(payload["quadrants"]) == ["q1", "q2", "q3", "q4"]
        q3 = payload["quadrants"]["q3"]
        assert q3["count"] == 1
        assert q3["overdue_count"] == 1
        assert q3["completed_count"] == 0
        assert q3["tasks"][0]["id"] == "q3-late"
        assert q3["tasks"][0]["x"] == 450
        assert q3["tasks"][0]["urgency_score"] == 1.0


class TestSuggestions:
    def test_empty_matrix_asks_for_planning(self, aggregate, now_ms):
        suggestions = aggregate.suggestions(aggregate.rebuild([], now_ms))
        assert [s.action for s in suggestions] == ["add_important_tasks"]

    def test_overloaded_quadrants(self, aggregate, make_task, now_ms):
        tasks = (
            [make_task(importance=9, hours=1) for _ in range(4)]
            + [make_task(importance=9, hours=200) for _ in range(2)]
            + [make_task(importance=2, hours=1) for _ in range(3)]
            + [make_task(importance=2, hours=200) for _ in range(2)]
        )
        actions = [s.action for s in aggregate.suggestions(aggregate.rebuild(tasks, now_ms))]
        assert actions == ["review_priorities", "delegate_tasks", "remove_unimportant_tasks"]


class TestQuadrantBounds:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("q1", Rect(x=240, y=0, width=240, height=225)),
            ("q2", Rect(x=0, y=0, width=240, height=225)),
            (EisenhowerQuadrant.Q3, Rect(x=240, y=225, width=240, height=225)),
            ("Q4", Rect(x=0, y=225, width=240, height=225)),
        ],
    )
    def test_quartering(self, key, expected):
        assert MatrixAggregate.get_quadrant_bounds(key, 480, 450) == expected

    def test_unknown_key(self):
        with pytest.raises(InvalidQuadrant):
            MatrixAggregate.get_quadrant_bounds("q5", 480, 450)
