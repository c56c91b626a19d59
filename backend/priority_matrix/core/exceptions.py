"""
Exceptions raised by the priority matrix engine.

Out-of-range inputs (importance, canvas dimensions) are clamped and never
raised. Structural problems with a frame or a task are fatal for the call.
"""
from typing import Any, Optional


class MatrixEngineError(Exception):
    """Base exception for all engine errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidFrame(MatrixEngineError):
    """Raised when a canvas frame's margin leaves no drawable area."""

    def __init__(self, width: float, height: float, margin: float):
        super().__init__(
            f"Invalid canvas frame {width}x{height}: margin {margin} must be "
            f"smaller than half of each dimension",
            {"width": width, "height": height, "margin": margin},
        )
        self.width = width
        self.height = height
        self.margin = margin


class InvalidTask(MatrixEngineError):
    """Raised when a task lacks the fields needed to classify it."""

    def __init__(self, task_id: Any, reason: str):
        super().__init__(f"Task {task_id!r}: {reason}", {"task_id": task_id, "reason": reason})
        self.task_id = task_id
        self.reason = reason


class InvalidQuadrant(MatrixEngineError):
    """Raised for an unknown quadrant key."""

    def __init__(self, key: Any):
        super().__init__(f"Unknown quadrant: {key!r}", {"quadrant": key})
        self.key = key
