"""
uWave Accelerometer Gesture Recognizer Implementation

This implements the uWave recognizer for 3-axis accelerometer gestures.
It is designed for resource-constrained devices: raw samples are quantized
to a small integer alphabet and compared against enrolled templates with
Dynamic Time Warping (DTW), using exact integer arithmetic throughout.

Reference: https://www.ruf.rice.edu/~mobile/publications/liu08uwave.pdf
"""

import json
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as PoolTimeoutError
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from ..config.settings import UwaveConfig
from ..errors import EmptyTemplateSet, InvalidGestureLength, InvalidSample
from ..utils.gesture_utils import Point, PathUtils, SampleLike
from ..utils.logger import GestureLogger
from .quantizer import quantize

logger = logging.getLogger(__name__)

UNSET = -1


class GestureTemplate:
    """A named, quantized reference gesture."""

    def __init__(self, name: str, resampled_points: Sequence[Point]):
        self.name = name
        self._points = tuple(resampled_points)

    @classmethod
    def from_samples(cls, name: str, samples: Sequence[SampleLike]) -> 'GestureTemplate':
        """Quantize raw samples into a new template."""
        return cls(name, quantize(samples))

    @property
    def resampled_points(self) -> Tuple[Point, ...]:
        return self._points

    @property
    def num_points(self) -> int:
        return len(self._points)

    def __repr__(self):
        return f"GestureTemplate({self.name!r}, {self.num_points} points)"


@dataclass
class UResult:
    """Result of uWave recognition with name, score, and timing."""
    name: str
    score: float
    time_ms: float
    template: Optional[GestureTemplate] = None


def _as_array(gesture: Sequence[SampleLike]) -> np.ndarray:
    points = PathUtils.to_points(gesture)
    array = np.array([p.as_list() for p in points]).reshape(len(points), 3)
    if array.dtype.kind in 'iub':
        return array.astype(np.int64)
    return array.astype(np.float64)


def distance_table(a: Sequence[SampleLike], b: Sequence[SampleLike]) -> np.ndarray:
    """
    Fill the DTW cumulative cost table for two quantized gestures.

    The table is allocated per call and filled row by row, so every cell
    is written before any cell that depends on it is computed.

    Args:
        a: Quantized gesture of length m
        b: Quantized gesture of length n

    Returns:
        (m, n) array where cell (i, j) holds the minimum cumulative cost of
        aligning a[:i+1] with b[:j+1]. Integer inputs give an int64 table.
    """
    if len(a) == 0:
        raise InvalidGestureLength("a", 0)
    if len(b) == 0:
        raise InvalidGestureLength("b", 0)

    seq_a = _as_array(a)
    seq_b = _as_array(b)
    m, n = len(seq_a), len(seq_b)

    # Squared Euclidean distance between every pair of samples
    diff = seq_a[:, np.newaxis, :] - seq_b[np.newaxis, :, :]
    local = (diff * diff).sum(axis=2)

    table = np.full((m, n), UNSET, dtype=local.dtype)
    table[0, 0] = local[0, 0]
    for j in range(1, n):
        table[0, j] = local[0, j] + table[0, j - 1]
    for i in range(1, m):
        table[i, 0] = local[i, 0] + table[i - 1, 0]
        for j in range(1, n):
            table[i, j] = local[i, j] + min(table[i, j - 1],
                                            table[i - 1, j],
                                            table[i - 1, j - 1])
    return table


def dtw_distance(a: Sequence[SampleLike], b: Sequence[SampleLike]):
    """
    Compute the DTW distance between two quantized gestures.

    Returns an int for integer-valued gestures and a float otherwise.
    """
    table = distance_table(a, b)
    return table[-1, -1].item()


def recognize(query: Sequence[Point], templates: Sequence[GestureTemplate],
              max_workers: Optional[int] = None,
              timeout: Optional[float] = None) -> Tuple[GestureTemplate, float]:
    """
    Find the template closest to a quantized query gesture.

    Each DTW distance is normalized by the combined length of the query and
    the template. The strictly smallest score wins, so ties go to the
    template that comes first.

    Args:
        query: Quantized query gesture
        templates: Ordered template library
        max_workers: Compare templates on a thread pool of this size when > 1
        timeout: Seconds to wait for parallel comparisons before raising
            concurrent.futures.TimeoutError

    Returns:
        Tuple of (best template, score)
    """
    if len(templates) == 0:
        raise EmptyTemplateSet()
    if len(query) == 0:
        raise InvalidGestureLength("query", 0)
    for i, template in enumerate(templates):
        if template.num_points == 0:
            raise InvalidGestureLength(f"template {i} ({template.name!r})", 0)

    query_points = PathUtils.to_points(query)

    def score(template: GestureTemplate) -> float:
        distance = dtw_distance(query_points, template.resampled_points)
        return distance / (len(query_points) + template.num_points)

    if max_workers is not None and max_workers > 1 and len(templates) > 1:
        executor = ThreadPoolExecutor(max_workers=max_workers)
        try:
            # map() yields in submission order, whatever the completion order
            distances = list(executor.map(score, templates, timeout=timeout))
        except PoolTimeoutError:
            logger.warning(f"Recognition against {len(templates)} templates exceeded {timeout}s")
            raise
        finally:
            # Comparisons still running are left to finish in the background
            executor.shutdown(wait=False, cancel_futures=True)
    else:
        distances = [score(template) for template in templates]

    best = 0
    for j in range(len(distances)):
        if distances[j] < distances[best]:
            best = j

    logger.debug(f"Best of {len(templates)} templates: {templates[best].name} ({distances[best]:.4f})")
    return templates[best], distances[best]


class RecognitionConfig:
    """Configuration for uWave recognition."""

    def __init__(self):
        self.score_threshold = UwaveConfig.DEFAULT_SCORE_THRESHOLD
        self.max_workers = UwaveConfig.DEFAULT_MAX_WORKERS
        self.timeout_s = UwaveConfig.DEFAULT_TIMEOUT_S

    def set_threshold(self, threshold: float):
        """Set the maximum accepted score (lower scores are better matches)."""
        self.score_threshold = max(0.0, float(threshold))

    def get_threshold(self) -> float:
        """Get the current score threshold."""
        return self.score_threshold


class UwaveRecognizer:
    """uWave recognizer holding an enrolled template library."""

    def __init__(self, config: Optional[RecognitionConfig] = None,
                 template_file: Optional[str] = None,
                 debug_file: Optional[str] = None):
        self.templates: List[GestureTemplate] = []
        self.config = config or RecognitionConfig()
        self.logger = GestureLogger(debug_file)
        if template_file:
            self.load_templates(template_file)

    def __enter__(self) -> 'UwaveRecognizer':
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        """Close the debug log file, if one was opened."""
        self.logger.close()

    def add_template(self, template: GestureTemplate) -> int:
        """Add an already quantized template, returns count of templates with this name."""
        if template.num_points == 0:
            raise InvalidGestureLength(f"template {template.name!r}", 0)
        self.templates.append(template)
        return sum(1 for t in self.templates if t.name == template.name)

    def add_gesture(self, name: str, samples: Sequence[SampleLike]) -> int:
        """Quantize raw samples and enroll them as a template."""
        template = GestureTemplate.from_samples(name, samples)
        count = self.add_template(template)
        self.logger.log_enrollment(name, len(samples), template.num_points, count)
        return count

    def delete_user_gestures(self) -> int:
        """Delete all enrolled templates."""
        self.templates = []
        return len(self.templates)

    def recognize(self, samples: Sequence[SampleLike]) -> UResult:
        """
        Recognize a raw gesture against the enrolled templates.

        Args:
            samples: Raw 3-axis samples of one pre-segmented gesture

        Returns:
            UResult with the best template's name, its score and timing
        """
        t0 = time.time() * 1000  # milliseconds

        query = quantize(samples)
        template, score = recognize(query, self.templates,
                                    max_workers=self.config.max_workers,
                                    timeout=self.config.timeout_s)

        t1 = time.time() * 1000
        self.logger.log_recognition(template.name, score, t1 - t0, len(self.templates))
        return UResult(template.name, score, t1 - t0, template)

    def classify_with_score(self, samples: Sequence[SampleLike]) -> Tuple[str, float]:
        """Classify a gesture and return both name and score."""
        result = self.recognize(samples)
        threshold = self.config.get_threshold()
        if result.score <= threshold:
            return result.name, result.score

        self.logger.log_rejection(result.name, result.score, threshold)
        return "No match.", result.score

    def classify_path(self, samples: Sequence[SampleLike]) -> str:
        """Classify a gesture and return the recognized name."""
        name, _ = self.classify_with_score(samples)
        return name

    def save_templates(self, filename: str):
        """Save quantized templates to file."""
        data = []
        for template in self.templates:
            data.append({
                'name': template.name,
                'points': [p.as_list() for p in template.resampled_points]
            })

        with open(filename, 'w', encoding='utf-8') as f:
            json.dump({'templates': data}, f, indent=2)

    def load_templates(self, filename: str) -> int:
        """Load quantized templates from file, skipping malformed entries."""
        if not os.path.exists(filename):
            logger.warning(f"Template file '{filename}' not found")
            return 0

        try:
            with open(filename, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Error loading templates from '{filename}': {e}")
            return 0

        # Accept both a bare list and a dict with a 'templates' key
        templates_data = data.get('templates', data) if isinstance(data, dict) else data

        if not isinstance(templates_data, list):
            logger.error(f"Invalid template format in '{filename}'. Expected list of templates.")
            return 0

        loaded = 0
        for i, item in enumerate(templates_data):
            template = self._parse_template(i, item)
            if template is not None:
                self.templates.append(template)
                loaded += 1

        if loaded:
            logger.info(f"Loaded {loaded} templates from '{filename}'")
        else:
            logger.warning(f"No valid templates found in '{filename}'")
        return loaded

    def _parse_template(self, index: int, item: Any) -> Optional[GestureTemplate]:
        if not isinstance(item, dict):
            logger.warning(f"Skipping template {index}: not a dictionary")
            return None

        name = str(item.get('name', '')).strip()
        if not name:
            logger.warning(f"Skipping template {index}: missing or empty 'name' field")
            return None

        points_data = item.get('points')
        if not isinstance(points_data, list) or not points_data:
            logger.warning(f"Skipping template '{name}': 'points' must be a non-empty list")
            return None

        try:
            points = PathUtils.to_points(points_data)
        except InvalidSample as e:
            logger.warning(f"Skipping template '{name}': {e}")
            return None

        return GestureTemplate(name, points)


# Global instances
recognizer = UwaveRecognizer()
config = recognizer.config


def classify_path(samples: List[SampleLike]) -> str:
    """Classify a raw gesture using the uWave recognizer."""
    return recognizer.classify_path(samples)


def classify_path_with_score(samples: List[SampleLike]) -> Tuple[str, float]:
    """Classify a raw gesture and return both classification and score."""
    return recognizer.classify_with_score(samples)


def add_gesture_template(name: str, samples: List[SampleLike]) -> int:
    """Add a new gesture template from raw samples."""
    return recognizer.add_gesture(name, samples)


def set_recognition_threshold(threshold: float):
    """Set the recognition score threshold."""
    config.set_threshold(threshold)


def get_recognition_threshold() -> float:
    """Get the current recognition score threshold."""
    return config.get_threshold()
