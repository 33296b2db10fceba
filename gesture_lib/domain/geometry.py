"""Geometric value objects for gesture recognition."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Tuple
import math


@dataclass(frozen=True)
class Point:
    """Immutable 2D point."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> Point:
        return Point(self.x / scalar, self.y / scalar)

    def lerp(self, other: Point, t: float) -> Point:
        """Point at fraction t along the segment from self to other."""
        return Point(
            (1.0 - t) * self.x + t * other.x,
            (1.0 - t) * self.y + t * other.y,
        )

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple for compatibility."""
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, t: Tuple[float, float]) -> Point:
        """Create from tuple."""
        return cls(float(t[0]), float(t[1]))


@dataclass(frozen=True)
class StrokePoint:
    """A point tagged with the stroke it was captured in.

    Adjacent points with different ``stroke_id`` values belong to different
    pen-down segments and are never treated as path-connected.
    """
    point: Point
    stroke_id: int = 0

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    def same_stroke(self, other: StrokePoint) -> bool:
        return self.stroke_id == other.stroke_id

    def moved_to(self, point: Point) -> StrokePoint:
        """Same stroke id at a new position."""
        return StrokePoint(point, self.stroke_id)

    def to_tuple(self) -> Tuple[float, float, int]:
        """Convert to an (x, y, stroke_id) triple."""
        return (self.point.x, self.point.y, self.stroke_id)

    @classmethod
    def from_tuple(cls, t: Tuple[float, float, int]) -> StrokePoint:
        """Create from an (x, y, stroke_id) triple."""
        return cls(Point(float(t[0]), float(t[1])), int(t[2]))

    @classmethod
    def of(cls, x: float, y: float, stroke_id: int = 0) -> StrokePoint:
        return cls(Point(float(x), float(y)), stroke_id)

    def __repr__(self) -> str:
        return f"StrokePoint({self.point.x!r}, {self.point.y!r}, stroke_id={self.stroke_id})"


@dataclass(frozen=True)
class BBox:
    """Immutable bounding box."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def scale(self) -> float:
        """Larger of width and height."""
        return max(self.width, self.height)

    @property
    def top_left(self) -> Point:
        return Point(self.x_min, self.y_min)

    @property
    def center(self) -> Point:
        return Point(
            (self.x_min + self.x_max) / 2,
            (self.y_min + self.y_max) / 2
        )

    def contains(self, point: Point) -> bool:
        """Check if point is inside bounding box."""
        return (self.x_min <= point.x <= self.x_max and
                self.y_min <= point.y <= self.y_max)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        """Convert to tuple for compatibility."""
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> BBox:
        """Create bounding box containing all points."""
        points = list(points)
        if not points:
            return cls(0, 0, 0, 0)
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))
