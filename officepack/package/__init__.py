"""OPC packaging layer — parts, relationships and the ZIP container.

- assembler.py: Package / Part / Relationship and archive writing
- oxml.py: namespaces, content/relationship types, lxml serialisation
- xmltext.py: checking of caller-supplied text
- errors.py: DuplicatePartError, PackagingError, EncodingError
"""

from .assembler import (
    CONTENT_TYPES_PARTNAME,
    PACKAGE_ROOT,
    Package,
    Part,
    Relationship,
    rels_partname,
)
from .errors import (
    DuplicatePartError,
    EncodingError,
    OfficePackError,
    PackagingError,
)
from .oxml import PPTX_MIME_TYPE, XLSX_MIME_TYPE
from .xmltext import xml_text

__all__ = [
    # Assembly
    "CONTENT_TYPES_PARTNAME",
    "PACKAGE_ROOT",
    "Package",
    "Part",
    "Relationship",
    "rels_partname",
    # Errors
    "DuplicatePartError",
    "EncodingError",
    "OfficePackError",
    "PackagingError",
    # MIME types
    "PPTX_MIME_TYPE",
    "XLSX_MIME_TYPE",
    # Text
    "xml_text",
]
