"""Unit tests for gesture_lib.templates.library.

Tests TemplateLibrary population, recognition and its determinism and
thread-safety guarantees.
"""

import math
import threading

import pytest

from gesture_lib.analysis import Normalizer
from gesture_lib.domain import Candidate, Result, StrokePoint, Template
from gesture_lib.errors import InvalidInputError
from gesture_lib.templates import TemplateLibrary


class TestRecognize:
    """Tests for TemplateLibrary.recognize."""

    def test_denser_line_matches_line_exactly(self, line_candidate, dense_line_candidate):
        library = TemplateLibrary()
        library.add_template(line_candidate, 'line')

        result = library.recognize(dense_line_candidate)

        assert result.name == 'line'
        assert result.score == pytest.approx(0.0, abs=1e-6)

    def test_empty_library_returns_sentinel(self, x_candidate):
        result = TemplateLibrary().recognize(x_candidate)
        assert result == Result.empty()
        assert result.name == ''
        assert math.isinf(result.score)

    def test_identical_points_raise(self, shape_library):
        with pytest.raises(InvalidInputError):
            shape_library.recognize(Candidate.from_tuples([(5, 5, 0), (5, 5, 0)]))

    @pytest.mark.parametrize('fixture_name, expected', [
        ('line_candidate', 'line'),
        ('x_candidate', 'X'),
        ('plus_candidate', 'plus'),
        ('triangle_candidate', 'triangle'),
    ])
    def test_each_shape_finds_itself(self, request, shape_library, fixture_name, expected):
        candidate = request.getfixturevalue(fixture_name)
        result = shape_library.recognize(candidate)
        assert result.name == expected
        assert result.score == pytest.approx(0.0, abs=1e-9)

    def test_resized_and_moved_shape(self, shape_library, triangle_candidate):
        candidate = triangle_candidate.scaled(0.37).translated(400, 120)
        assert shape_library.recognize(candidate).name == 'triangle'

    def test_deterministic(self, shape_library, zigzag_candidate):
        first = shape_library.recognize(zigzag_candidate)
        second = shape_library.recognize(zigzag_candidate)
        assert first == second

    def test_score_is_lowest_distance(self, shape_library, zigzag_candidate, normalizer, matcher):
        points = normalizer.normalize(zigzag_candidate)
        expected = min(matcher.distance(points, t.points) for t in shape_library)
        assert shape_library.recognize(zigzag_candidate).score == expected

    def test_tie_goes_to_first_added(self, x_candidate):
        library = TemplateLibrary()
        library.add_template(x_candidate, 'first')
        library.add_template(x_candidate, 'second')
        assert library.recognize(x_candidate).name == 'first'

    def test_duplicate_names_allowed(self, x_candidate, plus_candidate):
        library = TemplateLibrary()
        library.add_template(x_candidate, 'shape')
        library.add_template(plus_candidate, 'shape')
        assert library.names() == ['shape', 'shape']
        assert library.recognize(plus_candidate).name == 'shape'

    def test_recognize_normalized(self, shape_library, normalizer, plus_candidate):
        result = shape_library.recognize_normalized(normalizer.normalize(plus_candidate))
        assert result.name == 'plus'


class TestParallelScan:
    """Parallel recognition must agree with the serial scan."""

    def test_same_result_as_serial(self, shape_library, zigzag_candidate, x_candidate):
        parallel = TemplateLibrary(templates=shape_library.templates, max_workers=4)
        for candidate in (zigzag_candidate, x_candidate):
            assert parallel.recognize(candidate) == shape_library.recognize(candidate)

    def test_tie_break_preserved(self, x_candidate):
        library = TemplateLibrary(max_workers=3)
        for name in ('a', 'b', 'c', 'd'):
            library.add_template(x_candidate, name)
        assert library.recognize(x_candidate).name == 'a'


class TestPopulation:
    """Tests for load, add and add_template."""

    def test_add_template_returns_normalized(self, x_candidate):
        library = TemplateLibrary()
        template = library.add_template(x_candidate, 'X')
        assert template.name == 'X'
        assert len(template) == 32
        assert library.templates == (template,)

    def test_add_template_invalid_candidate(self):
        library = TemplateLibrary()
        with pytest.raises(InvalidInputError):
            library.add_template(Candidate.from_tuples([(1, 1, 0)]), 'dot')
        assert len(library) == 0

    def test_load_renormalizes_stored_records(self, x_candidate, normalizer):
        record = normalizer.to_template(x_candidate, 'X').to_record()
        library = TemplateLibrary.load([record])
        expected = normalizer.to_template(Candidate.from_tuples(record[1]), 'X')
        assert library.templates == (expected,)
        assert library.recognize(x_candidate).name == 'X'

    def test_load_normalizes_raw_records(self, x_candidate, normalizer):
        raw = ('X', x_candidate.to_tuples())
        library = TemplateLibrary.load([raw])
        assert len(library.templates[0]) == 32
        assert library.templates[0] == normalizer.to_template(x_candidate, 'X')

    def test_load_normalizes_raw_record_with_resample_count_points(self, normalizer):
        """A pixel-space record that already has N points is still normalized."""
        raw_points = [(10.0 * x, 0.0, 0) for x in range(32)]
        library = TemplateLibrary.load([('line', raw_points)])

        template = library.templates[0]
        assert template == normalizer.to_template(Candidate.from_tuples(raw_points), 'line')
        assert max(abs(sp.x) for sp in template) == pytest.approx(0.5)

        result = library.recognize(Candidate.from_tuples(raw_points))
        assert result.name == 'line'
        assert result.score == pytest.approx(0.0, abs=1e-6)

    def test_load_respects_resample_count(self, x_candidate):
        library = TemplateLibrary.load([('X', x_candidate.to_tuples())], normalizer=Normalizer(64))
        assert library.resample_count == 64
        assert len(library.templates[0]) == 64

    def test_extend_records_appends(self, shape_library, x_candidate):
        added = shape_library.extend_records([('X2', x_candidate.to_tuples())])
        assert [t.name for t in added] == ['X2']
        assert shape_library.names()[-1] == 'X2'

    def test_add_rejects_wrong_length(self):
        library = TemplateLibrary()
        with pytest.raises(ValueError):
            library.add(Template('short', (StrokePoint.of(0, 0), StrokePoint.of(1, 1))))

    def test_constructor_templates(self, shape_library):
        copy = TemplateLibrary(templates=shape_library)
        assert copy.names() == shape_library.names()

    def test_to_records_reload(self, shape_library):
        restored = TemplateLibrary.load(shape_library.to_records())
        assert restored.names() == shape_library.names()
        for template in shape_library:
            assert restored.recognize_normalized(template.points).name == template.name

    def test_snapshot_is_independent(self, shape_library, x_candidate):
        snapshot = shape_library.templates
        shape_library.add_template(x_candidate, 'extra')
        assert len(snapshot) == 4
        assert len(shape_library) == 5

    def test_repr(self, shape_library):
        assert repr(shape_library) == 'TemplateLibrary(4 templates, N=32)'


class TestConcurrency:
    """Appends running alongside recognition."""

    def test_concurrent_add_and_recognize(self, x_candidate, plus_candidate):
        library = TemplateLibrary()
        library.add_template(x_candidate, 'X')
        errors = []

        def writer():
            try:
                for i in range(20):
                    library.add_template(plus_candidate, f'plus{i}')
            except Exception as e:  # pragma: no cover - reported below
                errors.append(e)

        def reader():
            try:
                for _ in range(20):
                    result = library.recognize(x_candidate)
                    assert result.name == 'X'
            except Exception as e:  # pragma: no cover - reported below
                errors.append(e)

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(library) == 21
        assert all(len(t) == 32 for t in library)
