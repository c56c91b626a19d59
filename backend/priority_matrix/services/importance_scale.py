"""
Importance Scale Service

Linear mapping between importance (1-10) and the canvas y axis, plus the
adapter that brings legacy 0-5 scores onto the 1-10 scale.
"""
import math
from enum import Enum
from numbers import Real

from priority_matrix.models.canvas import CanvasFrame

MIN_IMPORTANCE = 1
MAX_IMPORTANCE = 10


class ImportanceScaleKind(str, Enum):
    """Scales importance values arrive in."""
    ONE_TO_TEN = "1-10"
    ZERO_TO_FIVE = "0-5"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def normalize_importance(value, scale: ImportanceScaleKind = ImportanceScaleKind.ONE_TO_TEN) -> float:
    """
    Bring an importance value onto the canonical 1-10 scale.

    Out-of-range values are clamped, never rejected. Non-numeric values raise
    TypeError.

    Args:
        value: Raw importance
        scale: Scale the value was recorded on

    Returns:
        float: Importance in [1, 10]
    """
    if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
        raise TypeError(f"importance must be a number, got {value!r}")

    if scale == ImportanceScaleKind.ZERO_TO_FIVE:
        value = MIN_IMPORTANCE + (value / 5) * (MAX_IMPORTANCE - MIN_IMPORTANCE)

    return _clamp(float(value), MIN_IMPORTANCE, MAX_IMPORTANCE)


class ImportanceScale:
    """Importance 10 sits at the top margin, importance 1 at the bottom margin."""

    SPAN = MAX_IMPORTANCE - MIN_IMPORTANCE

    @staticmethod
    def importance_to_y(importance: float, frame: CanvasFrame) -> float:
        relative = _clamp((importance - MIN_IMPORTANCE) / ImportanceScale.SPAN, 0.0, 1.0)
        return frame.margin + (1 - relative) * frame.usable_height

    @staticmethod
    def y_to_importance(y: float, frame: CanvasFrame) -> int:
        relative = 1 - _clamp((y - frame.margin) / frame.usable_height, 0.0, 1.0)
        # round half up
        importance = math.floor(MIN_IMPORTANCE + relative * ImportanceScale.SPAN + 0.5)
        return int(_clamp(importance, MIN_IMPORTANCE, MAX_IMPORTANCE))
