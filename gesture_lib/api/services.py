"""Service layer for gesture recognition.

This module provides the GestureRecognizer facade that applications talk
to. It ties together a TemplateLibrary, an optional TemplateStore for
persistence and a RecognitionChannel for consumers that want results pushed
to them instead of (or as well as) returned.

Example usage:
    Recognizing from a capture buffer::

        from gesture_lib.api import GestureRecognizer
        from gesture_lib.templates import XmlTemplateStore

        recognizer = GestureRecognizer.from_store(XmlTemplateStore('shapes.xml'))
        capture = recognizer.new_capture()

        capture.begin_stroke()
        for x, y in positions:
            capture.add_point(x, y)

        result = recognizer.recognize_capture(capture)
        if result is not None and result.is_match:
            print(f"{result.name}: {result.score:.3f}")

    Teaching a new gesture::

        recognizer.add_template(candidate, 'star')  # saved through the store

    Listening for results on another thread::

        with recognizer.channel.subscribe() as sub:
            result = sub.get(timeout=5.0)
"""

from __future__ import annotations

import logging

from ..capture.buffer import StrokeCapture
from ..config import RecognizerConfig
from ..domain.gesture import Candidate, Result, Template
from ..templates.library import TemplateLibrary
from ..templates.storage import TemplateStore
from .channel import RecognitionChannel

# Logger for service errors
_logger = logging.getLogger(__name__)


class GestureRecognizer:
    """Facade over library, persistence and result notification.

    Attributes:
        library: TemplateLibrary queried by ``recognize``.
        store: Optional TemplateStore written by ``add_template``.
        channel: RecognitionChannel every result is published on.
        config: RecognizerConfig the collaborators were built from.
    """

    def __init__(
        self,
        library: TemplateLibrary | None = None,
        store: TemplateStore | None = None,
        channel: RecognitionChannel | None = None,
        config: RecognizerConfig | None = None,
    ):
        self.config = config or RecognizerConfig()
        self.library = library if library is not None else TemplateLibrary(
            normalizer=self.config.normalizer(),
            matcher=self.config.matcher(),
            max_workers=self.config.max_workers,
        )
        self.store = store
        self.channel = channel or RecognitionChannel()

    @classmethod
    def from_store(
        cls,
        store: TemplateStore,
        config: RecognizerConfig | None = None,
        channel: RecognitionChannel | None = None,
    ) -> GestureRecognizer:
        """Create a recognizer whose library is loaded from ``store``.

        Raises:
            MalformedRecordError: If the store cannot parse its records.
        """
        config = config or RecognizerConfig()
        library = TemplateLibrary.load(
            store.load(),
            normalizer=config.normalizer(),
            matcher=config.matcher(),
            max_workers=config.max_workers,
        )
        return cls(library=library, store=store, channel=channel, config=config)

    def new_capture(self) -> StrokeCapture:
        """Empty capture buffer using this recognizer's thresholds."""
        return self.config.capture()

    def recognize(self, candidate: Candidate) -> Result:
        """Recognize a candidate and publish the result.

        Raises:
            InvalidInputError: If the candidate cannot be normalized.
        """
        result = self.library.recognize(candidate)
        delivered = self.channel.publish(result)
        _logger.debug("Result '%s' score=%.4f published to %d subscribers",
                      result.name, result.score, delivered)
        return result

    def recognize_capture(self, capture: StrokeCapture) -> Result | None:
        """Recognize a capture buffer's contents, then clear it.

        Returns:
            The Result, or None if the capture did not hold enough points
            to be worth recognizing. The capture is cleared in both cases.

        Raises:
            InvalidInputError: If the captured points cannot be normalized.
        """
        try:
            if not capture.is_ready:
                _logger.debug("Capture has %d points, need more than %d",
                              capture.point_count, capture.min_points_to_recognize)
                return None
            return self.recognize(capture.to_candidate())
        finally:
            capture.clear()

    def add_template(self, candidate: Candidate, name: str, persist: bool = True) -> Template:
        """Add a named template and, if a store is attached, save the library.

        Args:
            candidate: Captured gesture to learn.
            name: Name to report when it matches.
            persist: Save through ``store`` after adding.

        Returns:
            The new Template.

        Raises:
            InvalidInputError: If the candidate cannot be normalized.
            OSError: If the store fails to write.
        """
        template = self.library.add_template(candidate, name)
        if persist and self.store is not None:
            try:
                self.store.save(self.library.to_records())
            except OSError as e:
                _logger.warning("Template '%s' added but library was not saved: %s", name, e)
                raise
        _logger.info("Learned gesture '%s' (%d templates)", name, len(self.library))
        return template

    def save(self) -> None:
        """Save the whole library through the attached store."""
        if self.store is None:
            raise RuntimeError("No template store attached")
        self.store.save(self.library.to_records())
