"""Content schema package — typed models for package input.

- models.py: Slide, Row, DocumentContent and cell-reference derivation
- loader.py: YAML serialization/deserialization
"""

from .loader import load_content, save_content
from .models import (
    DocumentContent,
    DocumentKind,
    Row,
    Slide,
    cell_reference,
    column_letter,
)

__all__ = [
    # Models
    "DocumentContent",
    "DocumentKind",
    "Row",
    "Slide",
    # References
    "cell_reference",
    "column_letter",
    # Loader
    "load_content",
    "save_content",
]
