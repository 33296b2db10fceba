"""Shared pytest fixtures for the gesture_lib test suite.

Fixtures:
    line_candidate: Two-point horizontal line
    dense_line_candidate: Same line sampled with a midpoint
    x_candidate: Two-stroke 'X'
    plus_candidate: Two-stroke '+'
    zigzag_candidate: Single-stroke zigzag with uneven spacing
    normalizer: Default 32-point Normalizer
    matcher: Default GreedyCloudMatcher
    shape_library: TemplateLibrary holding line, X, plus and triangle
    bundled_records: Records parsed from the packaged sample library
    library_file: Path to a temporary XML library file

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gesture_lib.analysis import Normalizer
from gesture_lib.domain import Candidate
from gesture_lib.matching import GreedyCloudMatcher
from gesture_lib.templates import BUNDLED_LIBRARY, TemplateLibrary, parse_library_xml


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Candidate Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def line_candidate():
    """Horizontal line from (0, 0) to (100, 0), one stroke."""
    return Candidate.from_tuples([(0, 0, 0), (100, 0, 0)])


@pytest.fixture
def dense_line_candidate():
    """The same line with an extra midpoint."""
    return Candidate.from_tuples([(0, 0, 0), (50, 0, 0), (100, 0, 0)])


@pytest.fixture
def x_candidate():
    """Two diagonal strokes crossing in the middle."""
    return Candidate.from_tuples([
        (0, 0, 0), (100, 100, 0),
        (100, 0, 1), (0, 100, 1),
    ])


@pytest.fixture
def plus_candidate():
    """Vertical stroke then horizontal stroke."""
    return Candidate.from_tuples([
        (50, 0, 0), (50, 100, 0),
        (0, 50, 1), (100, 50, 1),
    ])


@pytest.fixture
def triangle_candidate():
    """Closed triangle drawn in one stroke."""
    return Candidate.from_tuples([
        (0, 100, 0), (50, 0, 0), (100, 100, 0), (0, 100, 0),
    ])


@pytest.fixture
def zigzag_candidate():
    """Single stroke with unevenly spaced points."""
    return Candidate.from_xy([
        (0, 0), (3, 10), (10, 0), (12, 4), (25, 30), (30, 0), (31, 1), (60, 20),
    ])


# -----------------------------------------------------------------------------
# Pipeline Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def normalizer():
    """Default 32-point normalizer."""
    return Normalizer()


@pytest.fixture
def matcher():
    """Default greedy cloud matcher."""
    return GreedyCloudMatcher()


@pytest.fixture
def shape_library(line_candidate, x_candidate, plus_candidate, triangle_candidate):
    """Library with four distinct shapes."""
    library = TemplateLibrary()
    library.add_template(line_candidate, 'line')
    library.add_template(x_candidate, 'X')
    library.add_template(plus_candidate, 'plus')
    library.add_template(triangle_candidate, 'triangle')
    return library


# -----------------------------------------------------------------------------
# Persistence Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def bundled_records():
    """Records from the sample library shipped in gesture_lib/resources."""
    return parse_library_xml(BUNDLED_LIBRARY.read_text(encoding='utf-8'))


@pytest.fixture
def library_file(tmp_path):
    """Path to a (not yet existing) library file in a temp directory."""
    return tmp_path / 'data' / 'multistroke_shapes.xml'
