"""Candidate normalization.

This module turns a raw captured point sequence into the canonical form
that templates are stored in and compared against. Three steps run in a
fixed order, each relying on the previous one's result:

    1. Scale: divide by the larger bounding-box side so the shape fits a
       unit box regardless of how large it was drawn.
    2. Translate: move the centroid to the origin.
    3. Resample: walk the in-stroke path and emit exactly N points spaced
       evenly by path length, never interpolating across a stroke boundary.

Every step returns a new tuple; the input sequence is never modified.

Example usage::

    from gesture_lib.analysis import Normalizer
    from gesture_lib.domain import Candidate

    normalizer = Normalizer(resample_count=32)
    points = normalizer.normalize(Candidate.from_xy([(0, 0), (50, 10), (100, 0)]))
    assert len(points) == 32
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..config import DEFAULT_RESAMPLE_COUNT
from ..domain.geometry import StrokePoint
from ..domain.gesture import Candidate, Template
from ..errors import InvalidInputError, ResampleError
from ..utils.geometry import bounding_box, centroid, interpolation_fraction, path_length


def scale_to_unit(points: Sequence[StrokePoint]) -> Tuple[StrokePoint, ...]:
    """Scale points so the larger bounding-box side has length 1.

    Coordinates are measured from the box's top-left corner, so the result
    lies in [0, 1] x [0, 1].

    Raises:
        InvalidInputError: If all points coincide (zero scale).
    """
    box = bounding_box(points)
    scale = box.scale
    if scale == 0:
        raise InvalidInputError("Cannot scale a gesture whose points all coincide")
    origin = box.top_left
    return tuple(sp.moved_to((sp.point - origin) / scale) for sp in points)


def translate_to_center(points: Sequence[StrokePoint]) -> Tuple[StrokePoint, ...]:
    """Translate points so their centroid is at the origin."""
    center = centroid(points)
    return tuple(sp.moved_to(sp.point - center) for sp in points)


def resample(points: Sequence[StrokePoint], num_points: int) -> Tuple[StrokePoint, ...]:
    """Resample a multi-stroke path to exactly ``num_points`` points.

    Points are spaced evenly by path length measured within strokes only.
    The first output point is the first input point. Distance left over at
    the end of a stroke carries into the next stroke, but no segment spans a
    stroke boundary. Each emitted point takes the stroke id of the segment it
    was interpolated on.

    A stroke of a single point (a tap, such as the dot of an 'i') adds no
    path length, so no emitted point lies on it and its stroke id is absent
    from the output. The only exception is a tap as the very last input
    point, which is appended when the walk ends one point short. The output
    therefore ends with the id of the last stroke that has length, not
    necessarily the last stroke.

    Args:
        points: Sequence of at least two stroke points.
        num_points: Number of output points (>= 2).

    Returns:
        Tuple of exactly ``num_points`` stroke points.

    Raises:
        InvalidInputError: If the in-stroke path length is zero.
        ResampleError: If the walk ends with a count other than
            ``num_points`` after the final-point fallback.
    """
    increment = path_length(points) / (num_points - 1)
    if increment <= 0:
        raise InvalidInputError("Cannot resample a gesture with zero in-stroke path length")

    resampled = [points[0]]
    covered = 0.0

    for i in range(1, len(points)):
        prev, cur = points[i - 1], points[i]
        if not cur.same_stroke(prev):
            continue

        distance = prev.point.distance_to(cur.point)
        if covered + distance < increment:
            covered += distance
            continue

        start = prev.point
        while covered + distance >= increment and len(resampled) < num_points:
            t = interpolation_fraction(increment - covered, distance)
            emitted = StrokePoint(start.lerp(cur.point, t), cur.stroke_id)
            resampled.append(emitted)
            # Remaining length from the new point to the segment end
            distance = covered + distance - increment
            covered = 0.0
            start = emitted.point
        covered = distance

    # Float drift can leave the last increment just short of the end
    if len(resampled) == num_points - 1:
        resampled.append(points[-1])

    if len(resampled) != num_points:
        raise ResampleError(f"Resampled to {len(resampled)} points, expected {num_points}")

    return tuple(resampled)


@dataclass(frozen=True)
class Normalizer:
    """Scale, center and resample candidates into canonical form.

    Attributes:
        resample_count: Number of points in every normalized sequence.
            Libraries must be built and queried with the same value.
    """
    resample_count: int = DEFAULT_RESAMPLE_COUNT

    def __post_init__(self):
        if self.resample_count < 2:
            raise ValueError(f"resample_count must be >= 2, got {self.resample_count}")

    def normalize(self, candidate: Candidate | Sequence[StrokePoint]) -> Tuple[StrokePoint, ...]:
        """Normalize a candidate into ``resample_count`` canonical points.

        Args:
            candidate: Candidate or plain sequence of stroke points, in
                capture order.

        Returns:
            Tuple of exactly ``resample_count`` stroke points.

        Raises:
            InvalidInputError: If the candidate has fewer than two points,
                all of its points coincide, or it has no in-stroke length.
        """
        points = tuple(candidate)
        if len(points) < 2:
            raise InvalidInputError(f"A gesture needs at least 2 points, got {len(points)}")

        points = scale_to_unit(points)
        points = translate_to_center(points)
        return resample(points, self.resample_count)

    def to_template(self, candidate: Candidate | Sequence[StrokePoint], name: str = '') -> Template:
        """Normalize a candidate and wrap it as a named Template."""
        return Template(name, self.normalize(candidate))

    def is_normalized(self, points: Sequence[StrokePoint]) -> bool:
        """True if ``points`` has this normalizer's point count."""
        return len(points) == self.resample_count
