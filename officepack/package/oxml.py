"""Namespace map, OPC constants and lxml helpers shared by all part writers.

Content types and relationship types come from python-pptx's OPC constants
so the strings match what python-pptx itself writes and expects.
"""

from lxml import etree
from pptx.opc.constants import CONTENT_TYPE as CT
from pptx.opc.constants import RELATIONSHIP_TYPE as RT


# ---------------------------------------------------------------------------
# Namespaces
# ---------------------------------------------------------------------------

NSMAP = {
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "ct": "http://schemas.openxmlformats.org/package/2006/content-types",
    "p": "http://schemas.openxmlformats.org/presentationml/2006/main",
    "pr": "http://schemas.openxmlformats.org/package/2006/relationships",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "s": "http://schemas.openxmlformats.org/spreadsheetml/2006/main",
}


def qn(tag: str) -> str:
    """Clark-notation name for a prefixed tag, e.g. ``qn("p:sld")``."""
    prefix, local = tag.split(":")
    return f"{{{NSMAP[prefix]}}}{local}"


def nsmap(*prefixes: str, default: str | None = None) -> dict:
    """Subset of NSMAP for an element's declarations.

    ``default`` names a prefix whose URI becomes the default namespace.
    """
    m = {p: NSMAP[p] for p in prefixes}
    if default is not None:
        m[None] = NSMAP[default]
    return m


# ---------------------------------------------------------------------------
# Content and relationship types
# ---------------------------------------------------------------------------

PPTX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.presentationml.presentation"
)
XLSX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)

# python-pptx's RELATIONSHIP_TYPE has no member for the worksheet relationship
RT_WORKSHEET = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships/worksheet"
)

# Extensions that get a <Default> entry in [Content_Types].xml
DEFAULT_CONTENT_TYPES = {
    "rels": CT.OPC_RELATIONSHIPS,
    "xml": CT.XML,
}


def partname_ext(partname: str) -> str:
    """Lower-case extension of a partname, taken from its last segment.

    ``_rels/.rels`` -> ``rels``; a segment with no dot has no extension.
    """
    basename = partname.rsplit("/", 1)[-1]
    if "." not in basename:
        return ""
    return basename.rpartition(".")[2].lower()


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------

def serialize(element) -> bytes:
    """Serialise an element tree as a standalone UTF-8 XML part."""
    return etree.tostring(
        element, xml_declaration=True, encoding="UTF-8", standalone=True,
    )
