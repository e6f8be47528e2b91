"""
uWave Acceleration Quantizer

Converts a raw accelerometer gesture into the compact integer form used by
the uWave matcher. Quantization happens in two stages:

1. Sliding-window averaging: one averaged sample per window start
   position, with the last windows truncated to the samples that remain.
2. Nonlinear quantization: each averaged axis value is mapped to a small
   signed integer level, with coarser steps for stronger accelerations.

Reference: Liu et al., "uWave: Accelerometer-based personalized gesture
recognition and its applications", PerCom 2009.
"""

import logging
from typing import List, Sequence

import numpy as np

from ..config.settings import UwaveConfig
from ..errors import InvalidQuantizationParameter
from ..utils.gesture_utils import Point, PathUtils, SampleLike

logger = logging.getLogger(__name__)


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero (denominator > 0)."""
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def quantize_value(value: int) -> int:
    """
    Map one averaged axis value to its quantization level.

    Values outside every band (for example 128 < v, or -40 <= v < -20)
    fall through to 0.
    """
    c = UwaveConfig
    if c.STRONG_POSITIVE_MIN <= value <= c.STRONG_POSITIVE_MAX:
        return c.STRONG_LEVEL
    if c.POSITIVE_MIN <= value < c.STRONG_POSITIVE_MIN:
        return c.BAND_BASE + _trunc_div(value - c.BAND_BASE, c.BAND_BASE) * c.BAND_STEP
    if c.NEGATIVE_MIN <= value < c.NEGATIVE_MAX:
        # floors, so the whole band lands on one level
        return -c.BAND_BASE + (value + c.BAND_BASE) // c.BAND_BASE * c.BAND_STEP
    if c.STRONG_NEGATIVE_MIN <= value < c.STRONG_NEGATIVE_MAX:
        return -c.STRONG_LEVEL
    if -c.LINEAR_LIMIT < value < c.LINEAR_LIMIT:
        return _trunc_div(value, c.LINEAR_DIVISOR)
    return 0


def average_windows(points: List[Point],
                    window_size: int = UwaveConfig.QUAN_WIN_SIZE,
                    move_step: int = UwaveConfig.QUAN_MOV_STEP) -> np.ndarray:
    """
    Average the samples in each sliding window.

    Returns an integer array of shape (num_windows, 3) holding the per-axis
    window means truncated toward zero.
    """
    length = len(points)
    if length == 0:
        return np.zeros((0, 3), dtype=np.int64)

    data = np.array([p.as_list() for p in points])
    averaged = []
    for i in range(0, length, move_step):
        window = min(window_size, length - i)
        means = data[i:i + window].sum(axis=0) / window
        averaged.append(np.trunc(means))

    return np.array(averaged, dtype=np.int64)


def quantize(samples: Sequence[SampleLike],
             window_size: int = UwaveConfig.QUAN_WIN_SIZE,
             move_step: int = UwaveConfig.QUAN_MOV_STEP) -> List[Point]:
    """
    Quantize a raw gesture.

    Args:
        samples: Raw 3-axis samples (Points, 3-element sequences or
            dicts with 'x', 'y', 'z' keys)
        window_size: Nominal averaging window width
        move_step: Distance between consecutive window starts

    Returns:
        Quantized gesture, one Point per window start. An empty input
        yields an empty list.
    """
    if not isinstance(window_size, int) or window_size < 1:
        raise InvalidQuantizationParameter(f"window_size must be a positive integer, got {window_size!r}")
    if not isinstance(move_step, int) or move_step < 1:
        raise InvalidQuantizationParameter(f"move_step must be a positive integer, got {move_step!r}")

    points = PathUtils.to_points(samples)
    if not points:
        logger.debug("Quantizing an empty gesture")
        return []

    averaged = average_windows(points, window_size, move_step)
    quantized = [Point(*(quantize_value(int(v)) for v in row)) for row in averaged]

    logger.debug(f"Quantized {len(points)} samples into {len(quantized)} levels")
    return quantized


def points_to_gesture(samples: Sequence[SampleLike]) -> List[Point]:
    """Convert raw samples into a quantized gesture with the default window."""
    return quantize(samples)
