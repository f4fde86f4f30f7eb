"""officepack — minimal Office Open XML package generator.

Builds structurally valid .pptx presentations (one text slide per string)
and .xlsx workbooks (one worksheet of text cells) entirely in memory.

    from officepack import build_presentation, build_spreadsheet

    pptx_bytes = build_presentation(["Hello", "World & Friends"])
    xlsx_bytes = build_spreadsheet([["Name", "Age"], ["Ana", "30"]])

Persisting the bytes, and naming the file, is up to the caller.
"""

from .generator import (
    PresentationBuilder,
    SpreadsheetBuilder,
    build_document,
    build_presentation,
    build_spreadsheet,
)
from .package import (
    DuplicatePartError,
    EncodingError,
    OfficePackError,
    PackagingError,
    PPTX_MIME_TYPE,
    XLSX_MIME_TYPE,
)

__version__ = "0.1.0"

__all__ = [
    "PresentationBuilder",
    "SpreadsheetBuilder",
    "build_document",
    "build_presentation",
    "build_spreadsheet",
    "DuplicatePartError",
    "EncodingError",
    "OfficePackError",
    "PackagingError",
    "PPTX_MIME_TYPE",
    "XLSX_MIME_TYPE",
]
