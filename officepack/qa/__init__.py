"""QA validation package for officepack.

Reads generated .pptx / .xlsx packages back and checks OPC invariants —
structural parts, content types, relationship targets, r:id references,
slide numbering and workbook sheets.
"""

from .validator import (
    Issue,
    PackageValidator,
    QAResult,
    read_cells,
    read_slide_texts,
    validate_package,
)

__all__ = [
    "Issue",
    "PackageValidator",
    "QAResult",
    "read_cells",
    "read_slide_texts",
    "validate_package",
]
