"""
Accelerometer Gestures Package
A uWave-based recognizer for 3-axis accelerometer gestures.
"""

from .gestures.quantizer import quantize, points_to_gesture
from .gestures.uwave_recognizer import GestureTemplate, UwaveRecognizer, dtw_distance, recognize
from .utils.gesture_utils import Point

__version__ = "1.0.0"
__all__ = ["quantize", "points_to_gesture", "GestureTemplate", "UwaveRecognizer",
           "dtw_distance", "recognize", "Point"]
