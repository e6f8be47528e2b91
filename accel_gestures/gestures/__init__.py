"""
Gesture quantization and matching.

This module provides the uWave quantizer, the DTW matcher and a
recognizer that manages an enrolled template library.
"""

from .quantizer import quantize, quantize_value, points_to_gesture
from .uwave_recognizer import (
    GestureTemplate,
    RecognitionConfig,
    UResult,
    UwaveRecognizer,
    distance_table,
    dtw_distance,
    recognize
)

__all__ = [
    'quantize',
    'quantize_value',
    'points_to_gesture',
    'GestureTemplate',
    'RecognitionConfig',
    'UResult',
    'UwaveRecognizer',
    'distance_table',
    'dtw_distance',
    'recognize'
]
