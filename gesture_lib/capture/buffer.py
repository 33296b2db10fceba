"""Point capture buffer.

Input layers (mouse, touch, stylus) feed pen events into a StrokeCapture,
which turns them into a Candidate. The buffer assigns stroke ids, one per
pen-down, and thins out points that land too close to the previous one so
that a slow drag does not flood the candidate with near-duplicates.

Example usage::

    from gesture_lib.capture import StrokeCapture

    capture = StrokeCapture(min_point_distance=10.0)
    capture.begin_stroke()
    for x, y in pointer_positions:
        capture.add_point(x, y)
    if capture.is_ready:
        candidate = capture.to_candidate()
"""

from __future__ import annotations

from typing import List

from ..config import DEFAULT_MIN_POINT_DISTANCE, DEFAULT_MIN_POINTS_TO_RECOGNIZE
from ..domain.geometry import Point, StrokePoint
from ..domain.gesture import Candidate


class StrokeCapture:
    """Accumulates pen input into stroke-tagged points.

    Attributes:
        min_point_distance: A point is registered only if it is farther than
            this from the previously registered point of the same stroke.
        min_points_to_recognize: ``is_ready`` turns True once more points
            than this have been registered.
    """

    def __init__(
        self,
        min_point_distance: float = DEFAULT_MIN_POINT_DISTANCE,
        min_points_to_recognize: int = DEFAULT_MIN_POINTS_TO_RECOGNIZE,
    ):
        self.min_point_distance = min_point_distance
        self.min_points_to_recognize = min_points_to_recognize
        self._points: List[StrokePoint] = []
        self._stroke_id = -1
        self._last_point: Point | None = None

    def begin_stroke(self) -> int:
        """Start a new stroke (pen down) and return its id."""
        self._stroke_id += 1
        self._last_point = None
        return self._stroke_id

    def add_point(self, x: float, y: float) -> bool:
        """Register a pointer position on the current stroke.

        Opens stroke 0 if no stroke was started.

        Returns:
            True if the point was registered, False if it was too close to
            the previous one.
        """
        if self._stroke_id < 0:
            self.begin_stroke()

        point = Point(float(x), float(y))
        if self._last_point is not None and point.distance_to(self._last_point) <= self.min_point_distance:
            return False

        self._points.append(StrokePoint(point, self._stroke_id))
        self._last_point = point
        return True

    @property
    def is_ready(self) -> bool:
        """Enough points have been captured to attempt recognition."""
        return len(self._points) > self.min_points_to_recognize

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def stroke_count(self) -> int:
        return self._stroke_id + 1

    def to_candidate(self) -> Candidate:
        """Snapshot of the captured points as a Candidate."""
        return Candidate(self._points)

    def clear(self) -> None:
        """Discard all points and reset stroke numbering."""
        self._points = []
        self._stroke_id = -1
        self._last_point = None
