"""Template library and persistence.

The module exports:
    TemplateLibrary: Ordered, thread-safe collection of templates with
        recognition by full scan.
    TemplateStore: Protocol for persistence back ends.
    XmlTemplateStore: Reference XML file store with seed-copy support.
    ReadOnlyTemplateStore: Store wrapper that drops saves.
    MemoryTemplateStore: In-memory store.
    parse_library_xml / render_library_xml: XML codec helpers.
    library_path: Resolve a library name to its XML file path.
    BUNDLED_LIBRARY: Path of the sample library shipped with the package.

Example usage::

    from gesture_lib.templates import TemplateLibrary, XmlTemplateStore

    store = XmlTemplateStore('multistroke_shapes.xml')
    library = TemplateLibrary.load(store.load())
"""

from .library import TemplateLibrary
from .storage import (
    BUNDLED_LIBRARY,
    MemoryTemplateStore,
    ReadOnlyTemplateStore,
    TemplateStore,
    XmlTemplateStore,
    library_path,
    parse_library_xml,
    render_library_xml,
)

__all__ = [
    'TemplateLibrary',
    'TemplateStore', 'XmlTemplateStore', 'ReadOnlyTemplateStore', 'MemoryTemplateStore',
    'parse_library_xml', 'render_library_xml', 'library_path', 'BUNDLED_LIBRARY',
]
