"""Content loader — YAML serialization and deserialization for DocumentContent.

Lets slide decks and tables be kept as human-readable YAML files::

    kind: presentation
    slides:
      - Quarterly review
      - Revenue & margin

    kind: spreadsheet
    rows:
      - [Name, Age]
      - [Ana, "30"]
"""

from pathlib import Path

import yaml

from .models import DocumentContent


def save_content(content: DocumentContent, path: str | Path) -> None:
    """Serialize a DocumentContent to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = content.to_dict()
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False,
                  allow_unicode=True, width=120)


def load_content(path: str | Path) -> DocumentContent:
    """Deserialize a DocumentContent from a YAML file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return DocumentContent.from_dict(data)
