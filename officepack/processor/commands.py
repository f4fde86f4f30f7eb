"""Command mini-language parser — free-text requests to content units.

Recognises requests such as::

    criar apresentação slides: Introdução; Resultados; Próximos passos
    gerar excel dados: Nome,Idade|Ana,30|Carlos,22|

and turns them into a :class:`ParsedCommand` carrying a DocumentContent.
Parsing is pure; it never builds or writes a package.

Rules:
    - ``slides:`` introduces slide texts separated by ``;``.  Fragments are
      stripped and blank fragments dropped.
    - ``dados:`` (or ``data:``) introduces rows.  Each row is terminated by
      ``|``; text after the last ``|`` is not a row.  Cells are separated
      by ``,`` and stripped.  Blank row segments are dropped.
    - Without a marker the default outline / sample table is used.
"""

import re
from dataclasses import dataclass

from officepack.schema.models import DocumentContent, DocumentKind


# ---------------------------------------------------------------------------
# Keywords and defaults
# ---------------------------------------------------------------------------

_PRESENTATION_TRIGGERS = (
    "criar apresentação",
    "criar apresentacao",
    "gerar ppt",
    "create presentation",
)

_SPREADSHEET_TRIGGERS = (
    "criar planilha",
    "gerar excel",
    "create spreadsheet",
)

_SLIDES_MARKER = re.compile(r"slides\s*:", re.IGNORECASE)
_ROWS_MARKER = re.compile(r"(?:dados|data)\s*:", re.IGNORECASE)

DEFAULT_SLIDES = [
    "Título da Apresentação",
    "Tópico 1: Introdução",
    "Tópico 2: Desenvolvimento",
    "Tópico 3: Conclusão",
]

DEFAULT_ROWS = [
    ["Nome", "Idade", "Cidade"],
    ["João", "25", "São Paulo"],
    ["Maria", "30", "Rio de Janeiro"],
    ["Carlos", "22", "Belo Horizonte"],
]


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass
class ParsedCommand:
    """A recognised request and the content it asks for."""
    kind: DocumentKind
    content: DocumentContent
    used_defaults: bool = False


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def detect_request(text: str) -> DocumentKind | None:
    """Which package a free-text request asks for, or None."""
    lowered = text.lower()
    if any(t in lowered for t in _PRESENTATION_TRIGGERS):
        return DocumentKind.PRESENTATION
    if any(t in lowered for t in _SPREADSHEET_TRIGGERS):
        return DocumentKind.SPREADSHEET
    return None


def _after_marker(text: str, marker: re.Pattern) -> str | None:
    match = marker.search(text)
    if match is None:
        return None
    return text[match.end():]


def split_slides(body: str) -> list[str]:
    """Split a ``;``-separated slide list."""
    return [s.strip() for s in body.split(";") if s.strip()]


def split_rows(body: str) -> list[list[str]]:
    """Split ``a,b|c,d|`` into rows of cells; only ``|``-terminated rows count."""
    segments = body.split("|")[:-1]
    return [
        [cell.strip() for cell in segment.split(",")]
        for segment in segments
        if segment.strip()
    ]


def parse_slides(text: str) -> list[str]:
    """Slide texts after ``slides:``, or DEFAULT_SLIDES when absent."""
    body = _after_marker(text, _SLIDES_MARKER)
    if body is None:
        return list(DEFAULT_SLIDES)
    return split_slides(body)


def parse_rows(text: str) -> list[list[str]]:
    """Rows after ``dados:``, or DEFAULT_ROWS when absent."""
    body = _after_marker(text, _ROWS_MARKER)
    if body is None:
        return [list(r) for r in DEFAULT_ROWS]
    return split_rows(body)


def parse_command(text: str) -> ParsedCommand:
    """Detect the request kind and parse its content.

    Raises:
        ValueError: If the text asks for neither a presentation nor a
            spreadsheet.
    """
    kind = detect_request(text)
    if kind is None:
        raise ValueError(
            "Unrecognised request. Use 'criar apresentação slides: ...' "
            "or 'criar planilha dados: ...'"
        )
    if kind == DocumentKind.PRESENTATION:
        used_defaults = _SLIDES_MARKER.search(text) is None
        content = DocumentContent.presentation(parse_slides(text))
    else:
        used_defaults = _ROWS_MARKER.search(text) is None
        content = DocumentContent.spreadsheet(parse_rows(text))
    return ParsedCommand(kind=kind, content=content,
                         used_defaults=used_defaults)
