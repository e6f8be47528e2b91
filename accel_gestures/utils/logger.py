"""
Logging utilities for gesture enrollment and recognition.
"""

import datetime
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class GestureLogger:
    """Handles logging of enrolled templates and recognition results."""

    def __init__(self, debug_file: Optional[str] = None):
        self.debug_file = None
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file: {e}")

    @staticmethod
    def _timestamp() -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def log_enrollment(self, name: str, raw_length: int, quantized_length: int, count: int):
        """Log a newly enrolled template."""
        timestamp = self._timestamp()
        logger.info(f"[{timestamp}] ENROLLED '{name}': {raw_length} samples -> "
                    f"{quantized_length} levels ({count} template(s) with this name)")
        self._write_debug(f"[{timestamp}] enroll name={name} raw={raw_length} "
                          f"quantized={quantized_length} count={count}")

    def log_recognition(self, name: str, score: float, time_ms: float, num_templates: int):
        """Log the best match of a recognition pass."""
        timestamp = self._timestamp()
        logger.info(f"[{timestamp}] RECOGNIZED '{name}': score {score:.3f} "
                    f"against {num_templates} template(s) in {time_ms:.2f}ms")
        self._write_debug(f"[{timestamp}] recognize name={name} score={score} "
                          f"templates={num_templates} time_ms={time_ms:.3f}")

    def log_rejection(self, name: str, score: float, threshold: float):
        """Log a best match whose score is above the acceptance threshold."""
        timestamp = self._timestamp()
        logger.info(f"[{timestamp}] REJECTED '{name}': score {score:.3f} above threshold {threshold:.3f}")
        self._write_debug(f"[{timestamp}] reject name={name} score={score} threshold={threshold}")

    def _write_debug(self, message: str):
        if self.debug_file:
            try:
                self.debug_file.write(message + "\n")
                self.debug_file.flush()
            except (OSError, ValueError) as e:
                logger.warning(f"Could not write debug file: {e}")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None
