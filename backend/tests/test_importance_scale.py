import pytest

from priority_matrix.services.importance_scale import (
    ImportanceScale,
    ImportanceScaleKind,
    normalize_importance,
)


def test_extremes_sit_on_the_margins(frame):
    assert ImportanceScale.importance_to_y(10, frame) == 30
    assert ImportanceScale.importance_to_y(1, frame) == 420


@pytest.mark.parametrize("importance", range(1, 11))
def test_round_trip_is_exact(frame, importance):
    y = ImportanceScale.importance_to_y(importance, frame)
    assert ImportanceScale.y_to_importance(y, frame) == importance


def test_higher_importance_is_never_lower_on_canvas(frame):
    ys = [ImportanceScale.importance_to_y(i / 2, frame) for i in range(0, 25)]
    assert all(a >= b for a, b in zip(ys, ys[1:]))


def test_out_of_range_importance_is_clamped(frame):
    assert ImportanceScale.importance_to_y(15, frame) == 30
    assert ImportanceScale.importance_to_y(-3, frame) == 420


def test_y_outside_the_frame_is_clamped(frame):
    assert ImportanceScale.y_to_importance(0, frame) == 10
    assert ImportanceScale.y_to_importance(449, frame) == 1


def test_midpoint_rounds_half_up(frame):
    # y=225 is exactly importance 5.5
    assert ImportanceScale.y_to_importance(225, frame) == 6


class TestNormalizeImportance:
    def test_canonical_scale_is_clamped(self):
        assert normalize_importance(7) == 7.0
        assert normalize_importance(0) == 1.0
        assert normalize_importance(12.5) == 10.0

    def test_legacy_five_point_scale(self):
        assert normalize_importance(0, ImportanceScaleKind.ZERO_TO_FIVE) == 1.0
        assert normalize_importance(5, ImportanceScaleKind.ZERO_TO_FIVE) == 10.0
        assert normalize_importance(2.5, ImportanceScaleKind.ZERO_TO_FIVE) == pytest.approx(5.5)

    @pytest.mark.parametrize("value", ["high", None, True, float("nan")])
    def test_non_numeric_is_rejected(self, value):
        with pytest.raises(TypeError):
            normalize_importance(value)
