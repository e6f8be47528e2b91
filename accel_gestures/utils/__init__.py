"""
Utilities package for accelerometer sample handling.

This package provides the sample type and conversions shared by the
quantizer, the matcher and the template store.
"""

from .gesture_utils import (
    Point,
    PathUtils,
    DataValidator
)

__all__ = [
    'Point',
    'PathUtils',
    'DataValidator'
]
