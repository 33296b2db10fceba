"""Domain objects for gesture recognition.

This module provides the core value objects used throughout the package.
All of them are immutable.

Geometry classes:
    Point: Immutable 2D point with vector operations.
    StrokePoint: Point tagged with the stroke it belongs to.
    BBox: Immutable axis-aligned bounding box.

Gesture classes:
    Candidate: Captured point sequence awaiting recognition.
    Template: Normalized, named reference shape.
    Result: Recognition outcome (name, score).
    TemplateRecord: Plain persistence tuple for a template.

Example usage::

    from gesture_lib.domain import Candidate, StrokePoint

    candidate = Candidate([StrokePoint.of(0, 0), StrokePoint.of(100, 0)])
    print(len(candidate))
"""

from .geometry import BBox, Point, StrokePoint
from .gesture import Candidate, Result, Template, TemplateRecord

__all__ = [
    'Point', 'StrokePoint', 'BBox',
    'Candidate', 'Template', 'Result', 'TemplateRecord',
]
