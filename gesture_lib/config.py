"""Shared configuration for gesture recognition.

This module centralizes the tunable values used by the normalizer, the
matcher, the capture buffer and the template library, and provides the
application-wide logging setup.

Having these values in one place keeps library builders and recognizers
consistent: a library must be built and queried with the same resample
count.

Example:
    Building components from one config::

        from gesture_lib.config import RecognizerConfig, configure_logging

        configure_logging(level='DEBUG')
        config = RecognizerConfig(resample_count=64)
        normalizer = config.normalizer()
        matcher = config.matcher()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .analysis.normalizer import Normalizer
    from .capture.buffer import StrokeCapture
    from .matching.cloud import GreedyCloudMatcher

# Number of points every template is resampled to
DEFAULT_RESAMPLE_COUNT = 32
MIN_RESAMPLE_COUNT = 16
MAX_RESAMPLE_COUNT = 256

# Exponent used to derive the start-offset step: step = floor(N ** (1 - e))
CLOUD_MATCH_EPSILON = 0.5

# Capture buffer defaults (screen pixels / point counts)
DEFAULT_MIN_POINT_DISTANCE = 10.0
DEFAULT_MIN_POINTS_TO_RECOGNIZE = 10

# Library file name used when none is given (without extension)
DEFAULT_LIBRARY_NAME = 'multistroke_shapes'

# Module logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecognizerConfig:
    """Tunable parameters for a recognizer and its collaborators.

    Attributes:
        resample_count: Number of points every template and candidate is
            resampled to. Must lie in [MIN_RESAMPLE_COUNT, MAX_RESAMPLE_COUNT].
        epsilon: Cloud-match offset exponent; 0.5 gives step = floor(sqrt(N)).
        min_point_distance: Capture buffer drops points closer than this to
            the previously registered point.
        min_points_to_recognize: Capture buffer is ready once it holds more
            points than this.
        max_workers: Thread count for scanning the library in parallel.
            None scans serially.
    """
    resample_count: int = DEFAULT_RESAMPLE_COUNT
    epsilon: float = CLOUD_MATCH_EPSILON
    min_point_distance: float = DEFAULT_MIN_POINT_DISTANCE
    min_points_to_recognize: int = DEFAULT_MIN_POINTS_TO_RECOGNIZE
    max_workers: int | None = None

    def __post_init__(self):
        if not MIN_RESAMPLE_COUNT <= self.resample_count <= MAX_RESAMPLE_COUNT:
            raise ValueError(
                f"resample_count must be in [{MIN_RESAMPLE_COUNT}, {MAX_RESAMPLE_COUNT}], "
                f"got {self.resample_count}"
            )
        if not 0.0 <= self.epsilon < 1.0:
            raise ValueError(f"epsilon must be in [0, 1), got {self.epsilon}")
        if self.min_point_distance < 0:
            raise ValueError(f"min_point_distance must be >= 0, got {self.min_point_distance}")
        if self.min_points_to_recognize < 0:
            raise ValueError(
                f"min_points_to_recognize must be >= 0, got {self.min_points_to_recognize}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be None or >= 1, got {self.max_workers}")

    def normalizer(self) -> Normalizer:
        """Create a Normalizer using this config's resample count."""
        from .analysis.normalizer import Normalizer
        return Normalizer(resample_count=self.resample_count)

    def matcher(self) -> GreedyCloudMatcher:
        """Create a GreedyCloudMatcher using this config's epsilon."""
        from .matching.cloud import GreedyCloudMatcher
        return GreedyCloudMatcher(epsilon=self.epsilon)

    def capture(self) -> StrokeCapture:
        """Create an empty StrokeCapture using this config's thresholds."""
        from .capture.buffer import StrokeCapture
        return StrokeCapture(
            min_point_distance=self.min_point_distance,
            min_points_to_recognize=self.min_points_to_recognize,
        )


def configure_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Configure logging for an application embedding the recognizer.

    gesture_lib itself only creates module loggers under ``gesture_lib.*``
    and never installs handlers. An application that wants to see library
    loads, template saves and per-recognition scores calls this once at
    startup. Calling it again replaces the handlers instead of adding more.

    Levels used by the package:
        DEBUG: each recognition result, each normalized record, dropped
            channel results.
        INFO: library files loaded, saved or seeded; gestures learned.
        WARNING/ERROR: saves dropped by a read-only store, unreadable or
            unwritable library files.

    Args:
        level: Log level string ('DEBUG', 'INFO', 'WARNING', 'ERROR').
            Unknown names fall back to INFO.
        log_file: Optional path to log file. If None, logs to stderr only.

    Example::

        from gesture_lib import GestureRecognizer, configure_logging
        from gesture_lib.templates import BUNDLED_LIBRARY, XmlTemplateStore

        configure_logging(level='DEBUG', log_file='gestures.log')
        store = XmlTemplateStore('data/multistroke_shapes.xml', seed_path=BUNDLED_LIBRARY)
        recognizer = GestureRecognizer.from_store(store)
        # INFO  [gesture_lib.templates.storage] Copied seed library ...
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)-8s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logger.info("Logging configured: level=%s, file=%s", level, log_file or 'stderr')
