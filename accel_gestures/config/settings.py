"""
Configuration settings for the accelerometer gesture recognizer.
"""

class UwaveConfig:
    """Configuration constants for uWave quantization and matching."""

    # Sliding-window averaging (in samples)
    QUAN_WIN_SIZE = 4
    QUAN_MOV_STEP = 1

    # Nonlinear quantization bands (raw acceleration units)
    STRONG_POSITIVE_MIN = 80
    STRONG_POSITIVE_MAX = 128
    POSITIVE_MIN = 40
    NEGATIVE_MIN = -20
    NEGATIVE_MAX = -10
    STRONG_NEGATIVE_MIN = -128
    STRONG_NEGATIVE_MAX = -80
    LINEAR_LIMIT = 40

    STRONG_LEVEL = 16
    BAND_BASE = 10
    BAND_STEP = 5
    LINEAR_DIVISOR = 4

    # Recognition
    DEFAULT_SCORE_THRESHOLD = 50.0
    DEFAULT_MAX_WORKERS = None
    DEFAULT_TIMEOUT_S = None
