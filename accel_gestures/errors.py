"""
Exceptions raised by the uWave quantizer and matcher.
"""

from typing import Optional


class UwaveError(Exception):
    """Base class for recognition errors."""


class EmptyTemplateSet(UwaveError, LookupError):
    """Raised when recognition is attempted against zero templates."""

    def __init__(self, message: str = "cannot recognize against an empty template set"):
        super().__init__(message)


class InvalidGestureLength(UwaveError, ValueError):
    """Raised when a zero-length gesture is passed to the DTW matcher."""

    def __init__(self, operand: str, length: int):
        self.operand = operand
        self.length = length
        super().__init__(f"{operand} gesture has length {length}; DTW needs at least one sample")


class InvalidSample(UwaveError, ValueError):
    """Raised when a raw sample does not expose three axis values."""

    def __init__(self, index: int, reason: Optional[str] = None):
        self.index = index
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"invalid sample at index {index}{detail}")


class InvalidQuantizationParameter(UwaveError, ValueError):
    """Raised when the window size or move step is not a positive integer."""
