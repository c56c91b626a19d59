"""
Time Scale Service

Non-linear mapping between time-until-due and the canvas x axis.

The axis is defined by nine anchors placed around a moving origin
(now + 24h). Positions are quantized: a due time snaps to the nearest anchor
instead of being interpolated, so every task lands in one of nine urgency
bands. The inverse is equally coarse and is only meant for placing things on
the canvas, never for computing real remaining time.
"""
from dataclasses import dataclass

from priority_matrix.models.canvas import AxisTick, CanvasFrame
from priority_matrix.models.task import MS_PER_HOUR


@dataclass(frozen=True)
class TimeAnchor:
    label: str
    offset_hours: float  # relative to the origin, now + 24h


class TimeScale:
    """
    Map hours-from-now to x and back.

    Right edge ("Now") is maximal urgency, the canvas center is "24h" and the
    left edge is "31d". Sub-24h anchors are spread evenly over the right half,
    longer horizons evenly over the left half.
    """

    ORIGIN_HOURS = 24.0

    ANCHORS = (
        TimeAnchor("Now", -24),
        TimeAnchor("1h", -23),
        TimeAnchor("6h", -18),
        TimeAnchor("12h", -12),
        TimeAnchor("24h", 0),
        TimeAnchor("3d", 48),
        TimeAnchor("7d", 144),
        TimeAnchor("14d", 312),
        TimeAnchor("31d", 720),
    )

    @classmethod
    def _center_index(cls) -> int:
        return next(i for i, anchor in enumerate(cls.ANCHORS) if anchor.offset_hours == 0)

    @classmethod
    def anchor_hours(cls, index: int) -> float:
        """Hours from now of the anchor at index."""
        return cls.ANCHORS[index].offset_hours + cls.ORIGIN_HOURS

    @classmethod
    def anchor_x(cls, index: int, frame: CanvasFrame) -> float:
        """Canvas x of the anchor at index."""
        center = cls._center_index()
        if index <= center:
            step = (frame.x_max - frame.center_x) / center
            return frame.x_max - step * index
        step = (frame.center_x - frame.x_min) / (len(cls.ANCHORS) - 1 - center)
        return frame.center_x - step * (index - center)

    @classmethod
    def ticks(cls, frame: CanvasFrame) -> list[AxisTick]:
        """All anchors resolved against a frame, right to left."""
        return [
            AxisTick(label=anchor.label, hours_from_now=cls.anchor_hours(i), x=cls.anchor_x(i, frame))
            for i, anchor in enumerate(cls.ANCHORS)
        ]

    @classmethod
    def anchor_hour_values(cls) -> tuple[float, ...]:
        return tuple(cls.anchor_hours(i) for i in range(len(cls.ANCHORS)))

    @classmethod
    def hours_to_x(cls, hours_from_now: float, frame: CanvasFrame) -> float:
        """
        Snap a time-until-due to the x of the nearest anchor.

        Overdue (hours_from_now <= 0) maps to the right edge. Ties go to the
        first anchor in list order.
        """
        if hours_from_now <= 0:
            return frame.x_max

        # target = now + hours; its offset from origin = hours - 24
        target_offset = hours_from_now - cls.ORIGIN_HOURS
        index = min(
            range(len(cls.ANCHORS)),
            key=lambda i: abs(cls.ANCHORS[i].offset_hours - target_offset),
        )
        return cls.anchor_x(index, frame)

    @classmethod
    def x_to_hours(cls, x: float, frame: CanvasFrame) -> float:
        """
        Hours from now of the anchor nearest to x (by x distance), floored at 0.

        Ties go to the first anchor in list order.
        """
        index = min(
            range(len(cls.ANCHORS)),
            key=lambda i: abs(cls.anchor_x(i, frame) - x),
        )
        return max(0.0, cls.anchor_hours(index))

    @classmethod
    def due_at_to_x(cls, due_at: int, frame: CanvasFrame, now_ms: int) -> float:
        return cls.hours_to_x((due_at - now_ms) / MS_PER_HOUR, frame)

    @classmethod
    def x_to_due_at(cls, x: float, frame: CanvasFrame, now_ms: int) -> int:
        return now_ms + int(round(cls.x_to_hours(x, frame) * MS_PER_HOUR))
