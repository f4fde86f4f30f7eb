"""PPTX builder engine — generates minimal presentations from slide texts.

Each text becomes one slide holding a single text box with one paragraph and
one run.  The package carries exactly the parts a presentation needs to be
structurally valid: the content-types manifest, the package relationships,
``ppt/presentation.xml`` with its relationships, and one part per slide.

Usage::

    from officepack.generator.pptx_builder import PresentationBuilder

    builder = PresentationBuilder()
    pptx_bytes = builder.build(["Hello", "World & Friends"])

    with open("deck.pptx", "wb") as f:
        f.write(pptx_bytes)
"""

from typing import Iterable

from lxml import etree
from pptx.util import Inches

from officepack.package.assembler import PACKAGE_ROOT, Package
from officepack.package.oxml import CT, RT, nsmap, qn, serialize
from officepack.package.xmltext import xml_text


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PRESENTATION_PARTNAME = "ppt/presentation.xml"

# First slide id; ids below 256 are reserved by PresentationML
_FIRST_SLIDE_ID = 256

# Portrait letter notes page, in EMU
_NOTES_CX = 6858000
_NOTES_CY = 9144000


def slide_partname(index: int) -> str:
    """Partname for the slide at 0-based *index*."""
    return f"ppt/slides/slide{index + 1}.xml"


# ---------------------------------------------------------------------------
# Part renderers
# ---------------------------------------------------------------------------

def _presentation_xml(slide_rids: list[str], cx: int, cy: int) -> bytes:
    prs = etree.Element(qn("p:presentation"), nsmap=nsmap("a", "r", "p"))
    sld_id_lst = etree.SubElement(prs, qn("p:sldIdLst"))
    for idx, rId in enumerate(slide_rids):
        etree.SubElement(sld_id_lst, qn("p:sldId"), {
            "id": str(_FIRST_SLIDE_ID + idx),
            qn("r:id"): rId,
        })
    etree.SubElement(prs, qn("p:sldSz"), cx=str(cx), cy=str(cy))
    etree.SubElement(prs, qn("p:notesSz"),
                     cx=str(_NOTES_CX), cy=str(_NOTES_CY))
    return serialize(prs)


def _slide_xml(text: str) -> bytes:
    sld = etree.Element(qn("p:sld"), nsmap=nsmap("a", "r", "p"))
    c_sld = etree.SubElement(sld, qn("p:cSld"))
    sp_tree = etree.SubElement(c_sld, qn("p:spTree"))

    # Group shape properties for the tree itself
    nv_grp = etree.SubElement(sp_tree, qn("p:nvGrpSpPr"))
    etree.SubElement(nv_grp, qn("p:cNvPr"), id="1", name="")
    etree.SubElement(nv_grp, qn("p:cNvGrpSpPr"))
    etree.SubElement(nv_grp, qn("p:nvPr"))
    etree.SubElement(sp_tree, qn("p:grpSpPr"))

    # Body text box
    sp = etree.SubElement(sp_tree, qn("p:sp"))
    nv_sp = etree.SubElement(sp, qn("p:nvSpPr"))
    etree.SubElement(nv_sp, qn("p:cNvPr"), id="2", name="TextBox 1")
    etree.SubElement(nv_sp, qn("p:cNvSpPr"), txBox="1")
    etree.SubElement(nv_sp, qn("p:nvPr"))
    etree.SubElement(sp, qn("p:spPr"))
    tx_body = etree.SubElement(sp, qn("p:txBody"))
    etree.SubElement(tx_body, qn("a:bodyPr"), wrap="square")
    etree.SubElement(tx_body, qn("a:lstStyle"))
    p = etree.SubElement(tx_body, qn("a:p"))
    r = etree.SubElement(p, qn("a:r"))
    t = etree.SubElement(r, qn("a:t"))
    t.text = text
    return serialize(sld)


# ---------------------------------------------------------------------------
# PresentationBuilder
# ---------------------------------------------------------------------------

class PresentationBuilder:
    """Builds a .pptx package with one text slide per input string.

    Parameters
    ----------
    width_inches, height_inches : float
        Slide size.  Defaults to 16:9 widescreen.
    """

    def __init__(self, width_inches: float = 13.333,
                 height_inches: float = 7.5) -> None:
        self.width_inches = width_inches
        self.height_inches = height_inches

    def build(self, slide_texts: Iterable[str | bytes]) -> bytes:
        """Build the PPTX and return it as bytes.

        Parameters
        ----------
        slide_texts : iterable of str or bytes
            One entry per slide, in order.  May be empty.

        Returns
        -------
        bytes
            The .pptx file content.

        Raises
        ------
        EncodingError
            If any text is not valid UTF-8 or not representable in XML.
            Raised before any part is created.
        TypeError
            If *slide_texts* is itself a string.
        PackagingError
            If the archive cannot be written.
        """
        if isinstance(slide_texts, (str, bytes)):
            raise TypeError("slide_texts must be a sequence of slide texts, "
                            "not a single string")
        texts = [xml_text(t) for t in slide_texts]
        return self.build_package(texts).finalize()

    def build_package(self, texts: list[str]) -> Package:
        """Assemble the Package for already-checked slide texts."""
        pkg = Package()
        pkg.add_relationship(PACKAGE_ROOT, PRESENTATION_PARTNAME,
                             RT.OFFICE_DOCUMENT)

        slide_rids = [
            pkg.add_relationship(PRESENTATION_PARTNAME, slide_partname(idx),
                                 RT.SLIDE)
            for idx in range(len(texts))
        ]

        pkg.add_part(
            PRESENTATION_PARTNAME,
            _presentation_xml(slide_rids, int(Inches(self.width_inches)),
                              int(Inches(self.height_inches))),
            CT.PML_PRESENTATION_MAIN,
        )
        for idx, text in enumerate(texts):
            pkg.add_part(slide_partname(idx), _slide_xml(text), CT.PML_SLIDE)
        return pkg


# ---------------------------------------------------------------------------
# Convenience function
# ---------------------------------------------------------------------------

def build_presentation(slide_texts: Iterable[str | bytes]) -> bytes:
    """One-shot convenience: build a PPTX from an ordered list of texts."""
    return PresentationBuilder().build(slide_texts)
