"""Content processor module for officepack."""

from .commands import (
    DEFAULT_ROWS,
    DEFAULT_SLIDES,
    ParsedCommand,
    detect_request,
    parse_command,
    parse_rows,
    parse_slides,
    split_rows,
    split_slides,
)
from .ingestion import (
    SOURCE_TYPES,
    detect_encoding,
    ingest,
    read_rows_csv,
    read_slides_text,
)
