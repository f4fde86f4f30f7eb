"""Dispatch from a DocumentContent to the matching builder.

Also owns output naming for callers that persist packages: names carry a
``uuid4`` so concurrent generations never compute the same path.
"""

import uuid

from officepack.package.oxml import PPTX_MIME_TYPE, XLSX_MIME_TYPE
from officepack.schema.models import DocumentContent, DocumentKind

from .pptx_builder import build_presentation
from .xlsx_builder import build_spreadsheet


_MIME_TYPES = {
    DocumentKind.PRESENTATION: PPTX_MIME_TYPE,
    DocumentKind.SPREADSHEET: XLSX_MIME_TYPE,
}

_FILE_STEMS = {
    DocumentKind.PRESENTATION: ("presentation", ".pptx"),
    DocumentKind.SPREADSHEET: ("spreadsheet", ".xlsx"),
}


def build_document(content: DocumentContent) -> bytes:
    """Build the package described by *content*."""
    if content.kind == DocumentKind.PRESENTATION:
        return build_presentation(content.slide_texts())
    return build_spreadsheet(content.row_values())


def mime_type_for(kind: DocumentKind) -> str:
    """MIME type a transport should advertise for *kind*."""
    return _MIME_TYPES[kind]


def unique_filename(kind: DocumentKind) -> str:
    """A collision-resistant output filename, e.g. ``presentation_<hex>.pptx``."""
    stem, suffix = _FILE_STEMS[kind]
    return f"{stem}_{uuid.uuid4().hex}{suffix}"
