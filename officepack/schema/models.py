"""Content models — the contract between parsers, loaders and the builders.

A presentation is an ordered list of slide texts; a spreadsheet is an
ordered list of rows of cell strings.  Cell references are derived from
position, never stored.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class DocumentKind(Enum):
    """Which kind of package a content document produces."""
    PRESENTATION = "presentation"   # .pptx, one slide per text
    SPREADSHEET = "spreadsheet"     # .xlsx, one worksheet of rows


# ---------------------------------------------------------------------------
# Cell references
# ---------------------------------------------------------------------------

def column_letter(index: int) -> str:
    """Spreadsheet column name for a 0-based column index.

    Bijective base-26 (there is no zero digit)::

        0 -> A, 25 -> Z, 26 -> AA, 27 -> AB, 701 -> ZZ, 702 -> AAA
    """
    if index < 0:
        raise ValueError(f"Column index must be >= 0, got {index}")
    letters: list[str] = []
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters.append(chr(ord("A") + rem))
    return "".join(reversed(letters))


def cell_reference(column: int, row_number: int) -> str:
    """A1-style reference from a 0-based column and a 1-based row number."""
    if row_number < 1:
        raise ValueError(f"Row number must be >= 1, got {row_number}")
    return f"{column_letter(column)}{row_number}"


# ---------------------------------------------------------------------------
# Content units
# ---------------------------------------------------------------------------

@dataclass
class Slide:
    """One slide: an opaque run of text placed as the slide body."""
    text: str

    def to_dict(self) -> str:
        return self.text

    @classmethod
    def from_dict(cls, d: Any) -> "Slide":
        if isinstance(d, dict):
            d = d.get("text")
        return cls(text="" if d is None else str(d))


@dataclass
class Row:
    """One worksheet row: ordered cell values."""
    cells: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cells)

    def references(self, row_number: int) -> list[str]:
        """Cell references for this row when placed at *row_number*."""
        return [cell_reference(col, row_number)
                for col in range(len(self.cells))]

    def to_dict(self) -> list[str]:
        return list(self.cells)

    @classmethod
    def from_dict(cls, d: Any) -> "Row":
        if d is None:
            return cls()
        return cls(cells=["" if c is None else str(c) for c in d])


@dataclass
class DocumentContent:
    """The full variable input for one package."""
    kind: DocumentKind
    slides: list[Slide] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)

    @classmethod
    def presentation(cls, texts) -> "DocumentContent":
        return cls(kind=DocumentKind.PRESENTATION,
                   slides=[Slide(t) for t in texts])

    @classmethod
    def spreadsheet(cls, rows) -> "DocumentContent":
        return cls(kind=DocumentKind.SPREADSHEET,
                   rows=[Row(list(r)) for r in rows])

    def slide_texts(self) -> list[str]:
        return [s.text for s in self.slides]

    def row_values(self) -> list[list[str]]:
        return [list(r.cells) for r in self.rows]

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"kind": self.kind.value}
        if self.kind == DocumentKind.PRESENTATION:
            d["slides"] = [s.to_dict() for s in self.slides]
        else:
            d["rows"] = [r.to_dict() for r in self.rows]
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "DocumentContent":
        kind = DocumentKind(d.get("kind", DocumentKind.PRESENTATION.value))
        return cls(
            kind=kind,
            slides=[Slide.from_dict(s) for s in d.get("slides") or []],
            rows=[Row.from_dict(r) for r in d.get("rows") or []],
        )
