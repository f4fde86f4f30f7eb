"""Package generator — PPTX and XLSX builder engines.

Consumes slide texts or rows of cell values and produces OOXML packages as
bytes.

Modules:
    pptx_builder: Presentation packages
    xlsx_builder: Single-sheet workbook packages
    document: DocumentContent dispatch, MIME types, output naming
"""

from .document import build_document, mime_type_for, unique_filename
from .pptx_builder import PresentationBuilder, build_presentation
from .xlsx_builder import SpreadsheetBuilder, build_spreadsheet

__all__ = [
    "PresentationBuilder",
    "SpreadsheetBuilder",
    "build_document",
    "build_presentation",
    "build_spreadsheet",
    "mime_type_for",
    "unique_filename",
]
