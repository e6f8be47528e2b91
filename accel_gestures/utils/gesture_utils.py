"""
Shared utilities for accelerometer gesture processing.

This module provides the sample type and the conversions used by the
quantizer, the matcher and the template store.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Sequence, Union

from ..errors import InvalidSample


AXES = ('x', 'y', 'z')


@dataclass(frozen=True)
class Point:
    """Represents one 3-axis acceleration sample."""
    x: float
    y: float
    z: float

    def __getitem__(self, axis: int):
        if axis == 0 or axis == -3:
            return self.x
        if axis == 1 or axis == -2:
            return self.y
        if axis == 2 or axis == -1:
            return self.z
        raise IndexError(f"Point axis out of range: {axis}")

    def __iter__(self) -> Iterator:
        return iter((self.x, self.y, self.z))

    def __len__(self) -> int:
        return 3

    def __repr__(self):
        return f"Point({self.x}, {self.y}, {self.z})"

    def as_list(self) -> List:
        return [self.x, self.y, self.z]


SampleLike = Union[Point, Sequence[float], Dict[str, float]]


class PathUtils:
    """Utility class for sample sequence conversion."""

    @staticmethod
    def to_point(sample: SampleLike, index: int = 0) -> Point:
        """Convert a Point, a 3-element sequence or an x/y/z dict to a Point."""
        if isinstance(sample, Point):
            return sample
        if isinstance(sample, dict):
            missing = [axis for axis in AXES if axis not in sample]
            if missing:
                raise InvalidSample(index, f"missing axis {', '.join(missing)}")
            values = [sample[axis] for axis in AXES]
        else:
            try:
                values = [sample[axis] for axis in range(3)]
            except (IndexError, KeyError, TypeError) as e:
                raise InvalidSample(index, "expected three axis values") from e

        for value in values:
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidSample(index, f"non-numeric axis value {value!r}")
            if not math.isfinite(value):
                raise InvalidSample(index, f"non-finite axis value {value!r}")
        return Point(*values)

    @staticmethod
    def to_points(samples: Sequence[SampleLike]) -> List[Point]:
        """Convert a sequence of sample-like values to Points."""
        return [PathUtils.to_point(sample, i) for i, sample in enumerate(samples)]

    @staticmethod
    def convert_dict_to_points(path: List[Dict[str, float]]) -> List[Point]:
        """Convert samples from dict format to Point objects."""
        return [PathUtils.to_point(p, i) for i, p in enumerate(path)]

    @staticmethod
    def convert_points_to_dict(points: List[Point]) -> List[Dict[str, float]]:
        """Convert Point objects to dict format."""
        return [{'x': p.x, 'y': p.y, 'z': p.z} for p in points]


class DataValidator:
    """Utility class for validating gesture data."""

    @staticmethod
    def validate_sample_data(samples: List[Any]) -> bool:
        """Validate that every sample exposes three numeric axes."""
        if not isinstance(samples, list):
            return False

        try:
            PathUtils.to_points(samples)
        except InvalidSample:
            return False
        return True
