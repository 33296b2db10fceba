"""Pen input capture.

The module exports:
    StrokeCapture: Buffer that turns pen-down / move events into a Candidate.
"""

from .buffer import StrokeCapture

__all__ = ['StrokeCapture']
