"""Gesture-level domain objects.

This module provides the value objects that flow through recognition:
captured candidates, normalized templates and recognition results. All of
them are immutable; every transformation in the pipeline builds a new
sequence instead of editing one in place, so a template stored in a library
can never be changed through a caller's working copy.

The module provides the following classes:
    Candidate: A freshly captured, not yet normalized point sequence.
    Template: A normalized, named reference shape.
    Result: The best template name and its distance score.

It also defines TemplateRecord, the plain ``(name, [(x, y, id), ...])``
tuple exchanged with template stores.

Example usage:
    Building a candidate::

        from gesture_lib.domain import Candidate

        candidate = Candidate.from_tuples([(0, 0, 0), (100, 0, 0), (50, 80, 1)])
        print(candidate.stroke_count)  # 2

    Converting a template to a persistence record::

        record = template.to_record()
        same = Template.from_record(record)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

from .geometry import Point, StrokePoint

# (name, [(x, y, stroke_id), ...]) as exchanged with template stores
TemplateRecord = Tuple[str, List[Tuple[float, float, int]]]


@dataclass(frozen=True)
class Candidate:
    """A captured gesture, in temporal order.

    Attributes:
        points: Tuple of StrokePoint in capture order. Points sharing a
            stroke id and adjacent in the tuple form one pen-down segment.
    """
    points: Tuple[StrokePoint, ...]

    def __init__(self, points: Iterable[StrokePoint]):
        object.__setattr__(self, 'points', tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[StrokePoint]:
        return iter(self.points)

    def __getitem__(self, idx) -> StrokePoint:
        return self.points[idx]

    def stroke_ids(self) -> List[int]:
        """Distinct stroke ids in order of first appearance."""
        seen = []
        for sp in self.points:
            if sp.stroke_id not in seen:
                seen.append(sp.stroke_id)
        return seen

    @property
    def stroke_count(self) -> int:
        return len(self.stroke_ids())

    def translated(self, dx: float, dy: float) -> Candidate:
        """Copy of this candidate moved by (dx, dy)."""
        offset = Point(dx, dy)
        return Candidate(sp.moved_to(sp.point + offset) for sp in self.points)

    def scaled(self, factor: float) -> Candidate:
        """Copy of this candidate scaled about the origin."""
        return Candidate(sp.moved_to(sp.point * factor) for sp in self.points)

    def to_tuples(self) -> List[Tuple[float, float, int]]:
        return [sp.to_tuple() for sp in self.points]

    @classmethod
    def from_tuples(cls, triples: Iterable[Sequence]) -> Candidate:
        """Create from (x, y, stroke_id) triples."""
        return cls(StrokePoint.from_tuple(t) for t in triples)

    @classmethod
    def from_xy(cls, pairs: Iterable[Sequence], stroke_id: int = 0) -> Candidate:
        """Create a single-stroke candidate from (x, y) pairs."""
        return cls(StrokePoint.of(p[0], p[1], stroke_id) for p in pairs)


@dataclass(frozen=True)
class Template:
    """A normalized, named reference shape.

    Templates are produced by the Normalizer (directly or through
    ``TemplateLibrary.add_template``) or restored from a persisted record.
    Names need not be unique.

    Attributes:
        name: Gesture name reported on a match.
        points: Normalized, resampled points.
    """
    name: str
    points: Tuple[StrokePoint, ...]

    def __post_init__(self):
        if not isinstance(self.points, tuple):
            object.__setattr__(self, 'points', tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    def to_record(self) -> TemplateRecord:
        """Convert to a (name, [(x, y, id), ...]) record."""
        return (self.name, [sp.to_tuple() for sp in self.points])

    @classmethod
    def from_record(cls, record: TemplateRecord) -> Template:
        """Create from a (name, [(x, y, id), ...]) record, without normalizing."""
        name, triples = record
        return cls(name, tuple(StrokePoint.from_tuple(t) for t in triples))


@dataclass(frozen=True)
class Result:
    """Outcome of a recognition attempt.

    Attributes:
        name: Name of the best-matching template, or '' when nothing was
            compared.
        score: Greedy cloud distance to that template. Lower is better and
            the value is unbounded above; it is not a [0, 1] similarity.
    """
    name: str
    score: float

    @classmethod
    def empty(cls) -> Result:
        """Sentinel returned when the library holds no templates."""
        return cls('', math.inf)

    @property
    def is_match(self) -> bool:
        return math.isfinite(self.score)
