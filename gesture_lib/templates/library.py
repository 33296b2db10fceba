"""In-memory template library.

This module provides the TemplateLibrary class, the ordered collection of
templates that candidates are recognized against. The library owns a
Normalizer and a Matcher so that every template it stores and every
candidate it scores go through the same pipeline.

The library supports:
    - Loading persistence records, normalizing each one
    - Adding new templates from captured candidates
    - Recognizing a candidate by a full scan, optionally in parallel
    - Exporting its contents as persistence records

Names are not unique. Recognition reports the name of whichever template
scores lowest; when two templates tie exactly, the one added first wins.

Example usage:
    Building and querying a library::

        from gesture_lib.domain import Candidate
        from gesture_lib.templates import TemplateLibrary

        library = TemplateLibrary()
        library.add_template(Candidate.from_xy([(0, 0), (100, 0)]), 'line')

        result = library.recognize(Candidate.from_xy([(0, 0), (50, 0), (100, 0)]))
        print(result.name, result.score)  # line 0.0

    Loading persisted records::

        library = TemplateLibrary.load(store.load())
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, List, Sequence, Tuple

from ..analysis.normalizer import Normalizer
from ..domain.geometry import StrokePoint
from ..domain.gesture import Candidate, Result, Template, TemplateRecord
from ..matching.cloud import GreedyCloudMatcher, Matcher

logger = logging.getLogger(__name__)


class TemplateLibrary:
    """Ordered collection of normalized templates.

    Appends are guarded by a lock and readers work on a snapshot tuple, so a
    recognition running alongside ``add_template`` sees either the library
    before the append or after it, never a half-built template.

    Attributes:
        normalizer: Normalizer applied to candidates and to every loaded
            record.
        matcher: Matcher used to score candidate against template.
        max_workers: Thread count for parallel scans, or None for serial.

    Example:
        >>> library = TemplateLibrary()
        >>> library.add_template(candidate, 'circle')
        >>> library.names()
        ['circle']
    """

    def __init__(
        self,
        normalizer: Normalizer | None = None,
        matcher: Matcher | None = None,
        templates: Iterable[Template] = (),
        max_workers: int | None = None,
    ):
        """Initialize a library, optionally pre-populated.

        Args:
            normalizer: Normalizer to use. Defaults to 32 points.
            matcher: Matcher to use. Defaults to GreedyCloudMatcher.
            templates: Already-normalized templates to start with.
            max_workers: Thread count for parallel recognition. None or 1
                scans serially. A pool is started per ``recognize`` call.

        Raises:
            ValueError: If a template's point count does not match the
                normalizer's resample count.
        """
        self.normalizer = normalizer or Normalizer()
        self.matcher = matcher or GreedyCloudMatcher()
        self.max_workers = max_workers
        self._lock = threading.Lock()
        self._templates: List[Template] = []

        for template in templates:
            self.add(template)

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        records: Iterable[TemplateRecord],
        normalizer: Normalizer | None = None,
        matcher: Matcher | None = None,
        max_workers: int | None = None,
    ) -> TemplateLibrary:
        """Create a library from persistence records.

        Args:
            records: ``(name, [(x, y, stroke_id), ...])`` tuples, already
                parsed by a template store.
            normalizer: Normalizer for the new library.
            matcher: Matcher for the new library.
            max_workers: Thread count for parallel recognition.

        Returns:
            Ready-to-query TemplateLibrary.
        """
        library = cls(normalizer=normalizer, matcher=matcher, max_workers=max_workers)
        library.extend_records(records)
        return library

    def extend_records(self, records: Iterable[TemplateRecord]) -> List[Template]:
        """Append templates built from persistence records.

        Every record goes through the normalizer, whatever its point count,
        so hand-authored files, raw pixel-space records and files built with
        a different resample count all load into this library. Records that
        were saved already normalized come back close to, but not bit-equal
        with, the templates they were saved from.

        Returns:
            The templates appended, in record order.

        Raises:
            InvalidInputError: If a record cannot be normalized.
        """
        templates = [self._template_from_record(record) for record in records]
        with self._lock:
            self._templates.extend(templates)
        logger.info("Loaded %d templates (library size %d)", len(templates), len(self))
        return templates

    def _template_from_record(self, record: TemplateRecord) -> Template:
        name, triples = record
        logger.debug("Normalizing record '%s' with %d points to %d",
                     name, len(triples), self.normalizer.resample_count)
        return self.normalizer.to_template(Candidate.from_tuples(triples), name)

    def add_template(self, candidate: Candidate, name: str) -> Template:
        """Normalize a candidate and append it as a named template.

        Persisting the updated library is left to the caller (see
        ``to_records``).

        Args:
            candidate: Captured gesture with at least two points.
            name: Name reported when this template matches.

        Returns:
            The new Template.

        Raises:
            InvalidInputError: If the candidate cannot be normalized.
        """
        template = self.normalizer.to_template(candidate, name)
        with self._lock:
            self._templates.append(template)
        logger.debug("Added template '%s' (library size %d)", name, len(self))
        return template

    def add(self, template: Template) -> None:
        """Append an already-normalized template.

        Raises:
            ValueError: If its point count differs from the resample count.
        """
        if not self.normalizer.is_normalized(template.points):
            raise ValueError(
                f"Template '{template.name}' has {len(template)} points, "
                f"expected {self.normalizer.resample_count}"
            )
        with self._lock:
            self._templates.append(template)

    # ------------------------------------------------------------------
    # Recognition
    # ------------------------------------------------------------------

    def recognize(self, candidate: Candidate) -> Result:
        """Find the template closest to a candidate.

        Args:
            candidate: Captured gesture with at least two points.

        Returns:
            Result with the best template's name and distance, or
            ``Result.empty()`` if the library holds no templates.

        Raises:
            InvalidInputError: If the candidate cannot be normalized.
        """
        return self.recognize_normalized(self.normalizer.normalize(candidate))

    def recognize_normalized(self, points: Sequence[StrokePoint]) -> Result:
        """Find the template closest to an already-normalized sequence."""
        templates = self.templates
        if not templates:
            logger.debug("Recognition against an empty library")
            return Result.empty()

        distances = self._score_all(points, templates)

        best = Result.empty()
        for template, distance in zip(templates, distances):
            # Strict comparison keeps the first template on ties
            if distance < best.score:
                best = Result(template.name, distance)

        logger.debug("Recognized '%s' (score=%.4f) among %d templates",
                     best.name, best.score, len(templates))
        return best

    def _score_all(self, points: Sequence[StrokePoint], templates: Tuple[Template, ...]) -> List[float]:
        """Distance from ``points`` to each template, in template order.

        Each template costs O((N / step) * N^2). A parallel scan opens its
        own thread pool per call, which adds thread start-up on top of that,
        so ``max_workers`` pays off only for libraries large enough for the
        matching to dominate. Libraries with fewer than two templates are
        always scanned serially.
        """
        def score(template: Template) -> float:
            return self.matcher.distance(points, template.points)

        if self.max_workers is None or self.max_workers <= 1 or len(templates) < 2:
            return [score(t) for t in templates]

        # map() yields in submission order, so the reduction matches the serial scan
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(score, templates))

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def templates(self) -> Tuple[Template, ...]:
        """Snapshot of the templates in insertion order."""
        with self._lock:
            return tuple(self._templates)

    @property
    def resample_count(self) -> int:
        return self.normalizer.resample_count

    def names(self) -> List[str]:
        """Template names in insertion order, duplicates included."""
        return [t.name for t in self.templates]

    def to_records(self) -> List[TemplateRecord]:
        """Export all templates as persistence records."""
        return [t.to_record() for t in self.templates]

    def __len__(self) -> int:
        with self._lock:
            return len(self._templates)

    def __iter__(self) -> Iterator[Template]:
        return iter(self.templates)

    def __repr__(self) -> str:
        return f"TemplateLibrary({len(self)} templates, N={self.resample_count})"
