# Services module
from .time_scale import TimeScale
from .importance_scale import ImportanceScale, ImportanceScaleKind, normalize_importance
from .quadrant_calculator import ANALYTICS_POLICY, LIVE_POLICY, ClassificationPolicy, QuadrantCalculator
from .coordinate_engine import CoordinateEngine
from .matrix_aggregate import MatrixAggregate

__all__ = [
    "ANALYTICS_POLICY",
    "LIVE_POLICY",
    "ClassificationPolicy",
    "CoordinateEngine",
    "ImportanceScale",
    "ImportanceScaleKind",
    "MatrixAggregate",
    "QuadrantCalculator",
    "TimeScale",
    "normalize_importance",
]
