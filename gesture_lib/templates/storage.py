"""Template persistence.

The library never touches files itself. Persistence goes through the
TemplateStore protocol, with one implementation per deployment situation:

    XmlTemplateStore: Reads and writes the reference XML format, optionally
        seeding a writable copy from a bundled resource file.
    ReadOnlyTemplateStore: Wraps another store and drops saves, for
        environments that cannot write.
    MemoryTemplateStore: Keeps records in a list, for tests and embedding.

The reference XML format::

    <?xml version='1.0' encoding='utf-8'?>
    <multistrokes>
      <multistroke name="line">
        <point x="-0.5" y="0.0" id="0" />
        ...
      </multistroke>
    </multistrokes>

Example usage::

    from gesture_lib.templates import TemplateLibrary, XmlTemplateStore

    store = XmlTemplateStore('data/multistroke_shapes.xml',
                             seed_path='resources/multistroke_shapes.xml')
    library = TemplateLibrary.load(store.load())
    library.add_template(candidate, 'star')
    store.save(library.to_records())
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, List, Protocol

from ..config import DEFAULT_LIBRARY_NAME
from ..domain.gesture import TemplateRecord
from ..errors import MalformedRecordError

logger = logging.getLogger(__name__)

ROOT_TAG = 'multistrokes'
TEMPLATE_TAG = 'multistroke'
POINT_TAG = 'point'


class TemplateStore(Protocol):
    """Protocol for template persistence back ends."""

    def load(self) -> List[TemplateRecord]:
        """Return all stored records in stored order."""
        ...

    def save(self, records: Iterable[TemplateRecord]) -> None:
        """Replace the stored records with ``records``."""
        ...


# ---------------------------------------------------------------------------
# XML codec
# ---------------------------------------------------------------------------

def _parse_float(value: str | None, attr: str, name: str) -> float:
    if value is None:
        raise MalformedRecordError(f"Point in '{name}' is missing attribute '{attr}'")
    try:
        # Files written under a comma-decimal locale use ',' as separator
        return float(value.strip().replace(',', '.'))
    except ValueError:
        raise MalformedRecordError(
            f"Point in '{name}' has non-numeric {attr}={value!r}"
        ) from None


def parse_library_xml(text: str | bytes) -> List[TemplateRecord]:
    """Parse the reference XML format into records.

    Args:
        text: XML document, as text or as raw bytes. Bytes are decoded
            according to the XML declaration (UTF-8 when it names none).

    Returns:
        List of ``(name, [(x, y, stroke_id), ...])`` records in document
        order.

    Raises:
        MalformedRecordError: If the document is not well-formed, a
            template has no name, or a point lacks a numeric x, y or id.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MalformedRecordError(f"Invalid template XML: {e}") from e

    records: List[TemplateRecord] = []
    for element in root.iter(TEMPLATE_TAG):
        name = element.get('name')
        if name is None:
            raise MalformedRecordError(f"<{TEMPLATE_TAG}> element without a name attribute")

        points = []
        for point in element.findall(POINT_TAG):
            x = _parse_float(point.get('x'), 'x', name)
            y = _parse_float(point.get('y'), 'y', name)
            stroke_id = int(_parse_float(point.get('id'), 'id', name))
            points.append((x, y, stroke_id))
        records.append((name, points))

    return records


def render_library_xml(records: Iterable[TemplateRecord]) -> str:
    """Render records in the reference XML format.

    Coordinates are written with ``repr`` so they read back bit-identical.
    """
    root = ET.Element(ROOT_TAG)
    for name, points in records:
        element = ET.SubElement(root, TEMPLATE_TAG, name=name)
        for x, y, stroke_id in points:
            ET.SubElement(element, POINT_TAG, x=repr(float(x)), y=repr(float(y)), id=str(int(stroke_id)))

    ET.indent(root)
    body = ET.tostring(root, encoding='unicode')
    return "<?xml version='1.0' encoding='utf-8'?>\n" + body + "\n"


def library_path(directory: str | os.PathLike, name: str = DEFAULT_LIBRARY_NAME) -> Path:
    """Path of library ``name`` (given without '.xml') inside ``directory``."""
    return Path(directory) / f"{name}.xml"


# Raw sample shapes shipped with the package, normalized on load
BUNDLED_LIBRARY = library_path(Path(__file__).resolve().parent.parent / 'resources')


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

class XmlTemplateStore:
    """Template store backed by an XML file.

    Attributes:
        path: Writable library file.
        seed_path: Optional bundled library copied to ``path`` when ``path``
            does not exist yet (or always, with ``force_copy``).
        force_copy: Overwrite ``path`` from ``seed_path`` on construction.
    """

    def __init__(
        self,
        path: str | os.PathLike,
        seed_path: str | os.PathLike | None = None,
        force_copy: bool = False,
    ):
        self.path = Path(path)
        self.seed_path = Path(seed_path) if seed_path is not None else None
        self.force_copy = force_copy
        self._copy_seed()

    def _copy_seed(self) -> None:
        if self.seed_path is None:
            return
        if self.path.exists() and not self.force_copy:
            return
        if not self.seed_path.exists():
            logger.warning("Seed library %s not found, not copying", self.seed_path)
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.seed_path, self.path)
        logger.info("Copied seed library %s -> %s", self.seed_path, self.path)

    def load(self) -> List[TemplateRecord]:
        """Read all records; a missing file is an empty library.

        Raises:
            MalformedRecordError: If the file cannot be parsed.
        """
        if not self.path.exists():
            logger.info("Library file %s does not exist, starting empty", self.path)
            return []

        data = self.path.read_bytes()
        try:
            records = parse_library_xml(data)
        except MalformedRecordError as e:
            logger.error("Failed to parse library %s: %s", self.path, e)
            raise

        logger.info("Loaded %d template records from %s", len(records), self.path)
        return records

    def save(self, records: Iterable[TemplateRecord]) -> None:
        """Write all records, replacing the file atomically."""
        records = list(records)
        text = render_library_xml(records)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(text)
            os.replace(tmp_name, self.path)
        except OSError:
            logger.error("Failed to write library %s", self.path, exc_info=True)
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise

        logger.info("Saved %d template records to %s", len(records), self.path)


class ReadOnlyTemplateStore:
    """Store that loads from another store and never writes."""

    def __init__(self, inner: TemplateStore):
        self.inner = inner

    def load(self) -> List[TemplateRecord]:
        return self.inner.load()

    def save(self, records: Iterable[TemplateRecord]) -> None:
        logger.warning("Read-only template store: dropping save of %d records", len(list(records)))


class MemoryTemplateStore:
    """Store holding records in memory."""

    def __init__(self, records: Iterable[TemplateRecord] = ()):
        self._records: List[TemplateRecord] = [_copy_record(r) for r in records]

    def load(self) -> List[TemplateRecord]:
        return [_copy_record(r) for r in self._records]

    def save(self, records: Iterable[TemplateRecord]) -> None:
        self._records = [_copy_record(r) for r in records]

    def __len__(self) -> int:
        return len(self._records)


def _copy_record(record: TemplateRecord) -> TemplateRecord:
    name, points = record
    return (name, [tuple(p) for p in points])
