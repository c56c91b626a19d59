"""
Canvas geometry: the frame tasks are drawn into, points and rectangles.
"""
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from priority_matrix.core.exceptions import InvalidFrame

DEFAULT_MARGIN = 30.0


class Point(BaseModel):
    """A position on the canvas."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class Rect(BaseModel):
    """Axis-aligned rectangle (origin at top-left)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float


class CanvasFrame(BaseModel):
    """
    Canvas size with a fixed inset from all four edges.

    Negative sizes are clamped to zero. A margin that reaches half of either
    dimension collapses the drawable range and raises InvalidFrame.
    """

    model_config = ConfigDict(frozen=True)

    width: float
    height: float
    margin: float = DEFAULT_MARGIN

    @field_validator("width", "height", "margin")
    @classmethod
    def _clamp_non_negative(cls, value: float) -> float:
        return max(0.0, value)

    @model_validator(mode="after")
    def _check_margin(self) -> "CanvasFrame":
        if not (self.margin < self.width / 2 and self.margin < self.height / 2):
            raise InvalidFrame(self.width, self.height, self.margin)
        return self

    @classmethod
    def from_settings(cls, settings) -> "CanvasFrame":
        return cls(
            width=settings.canvas_width,
            height=settings.canvas_height,
            margin=settings.canvas_margin,
        )

    @property
    def center_x(self) -> float:
        return self.width / 2

    @property
    def center_y(self) -> float:
        return self.height / 2

    @property
    def x_min(self) -> float:
        return self.margin

    @property
    def x_max(self) -> float:
        return self.width - self.margin

    @property
    def y_min(self) -> float:
        return self.margin

    @property
    def y_max(self) -> float:
        return self.height - self.margin

    @property
    def usable_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def usable_height(self) -> float:
        return self.height - 2 * self.margin

    def clamp_x(self, x: float) -> float:
        return max(self.x_min, min(self.x_max, x))

    def clamp_y(self, y: float) -> float:
        return max(self.y_min, min(self.y_max, y))

    def contains(self, point: Point) -> bool:
        """True if the point lies inside the margin inset (edges included)."""
        return self.x_min <= point.x <= self.x_max and self.y_min <= point.y <= self.y_max


class AxisTick(BaseModel):
    """A labelled anchor on the time axis, resolved against a frame."""

    model_config = ConfigDict(frozen=True)

    label: str
    hours_from_now: float
    x: float
