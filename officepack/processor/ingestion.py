"""Content ingestion — reads slide texts and table rows from files.

Handles:
- Plain text (.txt): one slide per non-blank line
- CSV/TSV (.csv, .tsv): one worksheet row per record, all values as text
  (UTF-16 LE with BOM is read tab-delimited, anything else UTF-8 comma)
- YAML content documents (.yaml, .yml): see officepack.schema.loader
"""

import csv
from pathlib import Path

import pandas as pd

from officepack.schema.loader import load_content
from officepack.schema.models import DocumentContent


# ---------------------------------------------------------------------------
# Encoding detection and CSV reading
# ---------------------------------------------------------------------------

def detect_encoding(path):
    """Detect whether a file is UTF-16 LE (with BOM) or UTF-8.

    Returns (encoding, delimiter) tuple.
    """
    with open(path, "rb") as f:
        raw = f.read(4)
    if raw[:2] == b"\xff\xfe":
        return "utf-16", "\t"
    if Path(path).suffix.lower() == ".tsv":
        return "utf-8-sig", "\t"
    return "utf-8-sig", ","


def _max_fields(path, encoding, sep):
    """Widest record in the file, so ragged rows parse.

    Counted per CSV record, not per line: a quoted cell may span lines.
    """
    with open(path, encoding=encoding, newline="") as f:
        return max((len(record) for record in csv.reader(f, delimiter=sep)),
                   default=1)


def _trim_row(values):
    """Drop trailing empty cells so ragged rows stay ragged."""
    end = len(values)
    while end and values[end - 1] == "":
        end -= 1
    return values[:end]


def read_rows_csv(path):
    """Read a CSV file into rows of cell strings.

    No header inference, no type conversion, blank cells kept as "".
    Returns [] for an empty file.
    """
    encoding, sep = detect_encoding(path)
    width = _max_fields(path, encoding, sep)
    try:
        df = pd.read_csv(
            path, encoding=encoding, sep=sep, header=None,
            names=list(range(width)), index_col=False, dtype=str,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        return []
    return [
        _trim_row(["" if pd.isna(v) else str(v) for v in values])
        for values in df.itertuples(index=False)
    ]


def read_slides_text(path):
    """Read one slide text per non-blank line of a UTF-8 text file."""
    text = Path(path).read_text(encoding="utf-8-sig")
    return [line.strip() for line in text.splitlines() if line.strip()]


# ---------------------------------------------------------------------------
# Source type registry
# ---------------------------------------------------------------------------

def _ingest_text(path):
    return DocumentContent.presentation(read_slides_text(path))


def _ingest_csv(path):
    return DocumentContent.spreadsheet(read_rows_csv(path))


SOURCE_TYPES = {
    ".txt": _ingest_text,
    ".csv": _ingest_csv,
    ".tsv": _ingest_csv,
    ".yaml": load_content,
    ".yml": load_content,
}


def ingest(path):
    """Read a content file into a DocumentContent, by file extension.

    Raises:
        ValueError: If the extension is not recognized.
    """
    suffix = Path(path).suffix.lower()
    if suffix not in SOURCE_TYPES:
        raise ValueError(
            f"Unknown content file type '{suffix}'. "
            f"Valid types: {', '.join(sorted(SOURCE_TYPES))}"
        )
    return SOURCE_TYPES[suffix](path)
