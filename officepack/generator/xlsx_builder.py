"""XLSX builder engine — generates a single-sheet workbook from rows of text.

Every cell is written as a string (``t="str"`` with the value in ``<v>``);
there is no numeric detection and no formula support.  Rows keep their input
order and length: input row *k* is worksheet row *k + 1*, and a row with
three values gets exactly three ``<c>`` elements.

Usage::

    from officepack.generator.xlsx_builder import build_spreadsheet

    xlsx_bytes = build_spreadsheet([["Name", "Age"], ["Ana", "30"]])
"""

from typing import Iterable

from lxml import etree

from officepack.package.assembler import PACKAGE_ROOT, Package
from officepack.package.oxml import (
    CT,
    RT,
    RT_WORKSHEET,
    nsmap,
    qn,
    serialize,
)
from officepack.package.xmltext import xml_text
from officepack.schema.models import Row


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

WORKBOOK_PARTNAME = "xl/workbook.xml"
WORKSHEET_PARTNAME = "xl/worksheets/sheet1.xml"
SHEET_NAME = "Sheet1"
SHEET_ID = 1


# ---------------------------------------------------------------------------
# Part renderers
# ---------------------------------------------------------------------------

def _workbook_xml(sheet_rid: str) -> bytes:
    wb = etree.Element(qn("s:workbook"), nsmap=nsmap("r", default="s"))
    sheets = etree.SubElement(wb, qn("s:sheets"))
    etree.SubElement(sheets, qn("s:sheet"), {
        "name": SHEET_NAME,
        "sheetId": str(SHEET_ID),
        qn("r:id"): sheet_rid,
    })
    return serialize(wb)


def _worksheet_xml(rows: list[Row]) -> bytes:
    ws = etree.Element(qn("s:worksheet"), nsmap=nsmap("r", default="s"))
    sheet_data = etree.SubElement(ws, qn("s:sheetData"))
    for row_idx, row in enumerate(rows):
        row_number = row_idx + 1
        row_el = etree.SubElement(sheet_data, qn("s:row"), r=str(row_number))
        for ref, value in zip(row.references(row_number), row.cells):
            c = etree.SubElement(row_el, qn("s:c"), r=ref, t="str")
            v = etree.SubElement(c, qn("s:v"))
            v.text = value
    return serialize(ws)


# ---------------------------------------------------------------------------
# SpreadsheetBuilder
# ---------------------------------------------------------------------------

class SpreadsheetBuilder:
    """Builds a .xlsx package with one worksheet named ``Sheet1``."""

    def build(self, rows: Iterable[Iterable[str | bytes]]) -> bytes:
        """Build the XLSX and return it as bytes.

        Raises EncodingError (before any part is created) if a cell value
        is not valid UTF-8 or not representable in XML, and PackagingError
        if the archive cannot be written.
        """
        checked = []
        for row in rows:
            if isinstance(row, (str, bytes)):
                raise TypeError("Each row must be a sequence of cell values, "
                                "not a single string")
            checked.append(Row([xml_text(value) for value in row]))
        return self.build_package(checked).finalize()

    def build_package(self, rows: list[Row]) -> Package:
        """Assemble the Package for already-checked rows."""
        pkg = Package()
        pkg.add_relationship(PACKAGE_ROOT, WORKBOOK_PARTNAME,
                             RT.OFFICE_DOCUMENT)
        sheet_rid = pkg.add_relationship(WORKBOOK_PARTNAME,
                                         WORKSHEET_PARTNAME, RT_WORKSHEET)

        pkg.add_part(WORKBOOK_PARTNAME, _workbook_xml(sheet_rid),
                     CT.SML_SHEET_MAIN)
        pkg.add_part(WORKSHEET_PARTNAME, _worksheet_xml(rows),
                     CT.SML_WORKSHEET)
        return pkg


# ---------------------------------------------------------------------------
# Convenience function
# ---------------------------------------------------------------------------

def build_spreadsheet(rows: Iterable[Iterable[str | bytes]]) -> bytes:
    """One-shot convenience: build an XLSX from rows of cell strings."""
    return SpreadsheetBuilder().build(rows)
