"""QA validator — inspects a generated OOXML package against OPC invariants.

Checks that a package opens as a ZIP archive, carries the two structural
parts, that every part is well-formed XML with a declared content type, that
every relationship resolves to a part in the archive, that every ``r:id``
used in a part is defined in its relationships file, and (for presentations
and workbooks) that the document root agrees with its slide / sheet parts.

Usage::

    from officepack.qa.validator import PackageValidator

    result = PackageValidator().validate(pptx_bytes)
    assert result.passed, result.report()
"""

import io
import posixpath
import re
import zipfile
from dataclasses import dataclass, field

from lxml import etree

from officepack.package.assembler import (
    CONTENT_TYPES_PARTNAME,
    PACKAGE_ROOT,
    rels_partname,
)
from officepack.package.oxml import CT, RT, RT_WORKSHEET, partname_ext, qn


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class Issue:
    """A single QA issue found during validation."""
    severity: str       # "error" or "warning"
    part: str           # "" for package-level issues
    category: str       # e.g. "structure", "relationship", "slide_count"
    message: str

    def __str__(self) -> str:
        loc = self.part or "package"
        return f"[{self.severity.upper()}] {loc}: {self.message}"


@dataclass
class QAResult:
    """Aggregated result of QA validation."""
    issues: list[Issue] = field(default_factory=list)

    @property
    def errors(self) -> list[Issue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[Issue]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def summary(self) -> str:
        """One-line summary string."""
        status = "PASS" if self.passed else "FAIL"
        return (
            f"QA {status}: {self.error_count} error(s), "
            f"{self.warning_count} warning(s)"
        )

    def report(self) -> str:
        """Multi-line report of all issues."""
        lines = [self.summary()]
        for issue in self.issues:
            lines.append(f"  {issue}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

ROOT_RELS_PARTNAME = "_rels/.rels"

_SLIDE_PARTNAME_RE = re.compile(r"^ppt/slides/slide(\d+)\.xml$")
_R_ID = qn("r:id")

# Untrusted input: no entity expansion, no network access
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


def _parse(blob: bytes):
    return etree.fromstring(blob, parser=_PARSER)


def _source_partname(rels_name: str) -> str:
    """``ppt/_rels/presentation.xml.rels`` -> ``ppt/presentation.xml``."""
    if rels_name == ROOT_RELS_PARTNAME:
        return PACKAGE_ROOT
    directory, filename = posixpath.split(rels_name)
    parent = posixpath.dirname(directory)
    return posixpath.join(parent, filename[:-len(".rels")])


def _resolve_target(source: str, target: str) -> str:
    if target.startswith("/"):
        return target.lstrip("/")
    base = "" if source == PACKAGE_ROOT else posixpath.dirname(source)
    return posixpath.normpath(posixpath.join(base, target))


def _read_relationships(root) -> list[dict]:
    return [
        {
            "Id": rel.get("Id"),
            "Type": rel.get("Type"),
            "Target": rel.get("Target"),
            "TargetMode": rel.get("TargetMode", "Internal"),
        }
        for rel in root.iter(qn("pr:Relationship"))
    ]


def _open_archive(blob: bytes) -> dict[str, bytes]:
    """All entries of a ZIP archive, by name.

    Raises ValueError if *blob* is not a ZIP archive.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(blob)) as zf:
            return {name: zf.read(name) for name in zf.namelist()}
    except zipfile.BadZipFile as exc:
        raise ValueError(f"Not a ZIP archive: {exc}") from exc


# ---------------------------------------------------------------------------
# PackageValidator
# ---------------------------------------------------------------------------

class PackageValidator:
    """Validates a .pptx / .xlsx package against OPC structural invariants."""

    def validate(self, blob: bytes) -> QAResult:
        """Run all validation checks on a package.

        Parameters
        ----------
        blob : bytes
            The raw package content (e.g. from ``build_presentation()``).

        Returns
        -------
        QAResult
            Aggregated validation result.
        """
        result = QAResult()
        try:
            entries = _open_archive(blob)
        except ValueError as exc:
            self._add(result, "", "zip", str(exc))
            return result

        self._check_structure(entries, result)
        trees = self._parse_parts(entries, result)
        self._check_content_types(entries, trees, result)
        rels = self._check_relationships(entries, trees, result)
        self._check_references(trees, rels, result)
        self._check_orphans(entries, rels, result)

        main = self._main_document(rels)
        if main and main in trees:
            content_type = self._content_type_of(trees, main)
            if content_type == CT.PML_PRESENTATION_MAIN:
                self._check_presentation(main, entries, trees, rels, result)
            elif content_type == CT.SML_SHEET_MAIN:
                self._check_workbook(main, trees, rels, result)
        return result

    # ------------------------------------------------------------------
    # Package-level checks
    # ------------------------------------------------------------------

    def _add(self, result: QAResult, part: str, category: str,
             message: str, severity: str = "error") -> None:
        result.issues.append(Issue(
            severity=severity, part=part, category=category, message=message,
        ))

    def _check_structure(self, entries: dict[str, bytes],
                         result: QAResult) -> None:
        """Verify the two structural parts are present."""
        for required in (CONTENT_TYPES_PARTNAME, ROOT_RELS_PARTNAME):
            if required not in entries:
                self._add(result, required, "structure",
                          f"Required part {required} is missing")

    def _parse_parts(self, entries: dict[str, bytes],
                     result: QAResult) -> dict:
        """Parse every XML part; report the ones that are not well-formed."""
        trees = {}
        for name, blob in entries.items():
            if partname_ext(name) not in ("xml", "rels"):
                continue
            try:
                trees[name] = _parse(blob)
            except etree.XMLSyntaxError as exc:
                self._add(result, name, "xml", f"Not well-formed XML: {exc}")
        return trees

    def _content_type_of(self, trees: dict, partname: str) -> str | None:
        types = trees.get(CONTENT_TYPES_PARTNAME)
        if types is None:
            return None
        for override in types.iter(qn("ct:Override")):
            if override.get("PartName", "").lstrip("/") == partname:
                return override.get("ContentType")
        for default in types.iter(qn("ct:Default")):
            if default.get("Extension", "").lower() == partname_ext(partname):
                return default.get("ContentType")
        return None

    def _check_content_types(self, entries: dict[str, bytes], trees: dict,
                             result: QAResult) -> None:
        """Every part has a content type; every override names a part."""
        types = trees.get(CONTENT_TYPES_PARTNAME)
        if types is None:
            return
        for override in types.iter(qn("ct:Override")):
            name = override.get("PartName", "").lstrip("/")
            if name not in entries:
                self._add(result, CONTENT_TYPES_PARTNAME, "content_type",
                          f"Override for missing part /{name}")
        for name in entries:
            if name == CONTENT_TYPES_PARTNAME:
                continue
            if self._content_type_of(trees, name) is None:
                self._add(result, name, "content_type",
                          "Part has no Default or Override content type")

    def _check_relationships(self, entries: dict[str, bytes], trees: dict,
                             result: QAResult) -> dict[str, list[dict]]:
        """Ids unique per .rels file; internal targets exist.

        Returns relationships keyed by source partname.
        """
        rels_by_source: dict[str, list[dict]] = {}
        for name, root in trees.items():
            if partname_ext(name) != "rels":
                continue
            source = _source_partname(name)
            if source != PACKAGE_ROOT and source not in entries:
                self._add(result, name, "relationship",
                          f"Relationships file for missing part {source}")
            rels = _read_relationships(root)
            rels_by_source[source] = rels

            seen: set[str] = set()
            for rel in rels:
                if rel["Id"] in seen:
                    self._add(result, name, "relationship",
                              f"Duplicate relationship Id {rel['Id']}")
                seen.add(rel["Id"])
                if rel["TargetMode"] == "External":
                    continue
                target = _resolve_target(source, rel["Target"] or "")
                if target not in entries:
                    self._add(result, name, "relationship",
                              f"{rel['Id']} targets missing part {target}")
        return rels_by_source

    def _check_references(self, trees: dict, rels: dict[str, list[dict]],
                          result: QAResult) -> None:
        """Every r:id used in a part is defined in that part's .rels."""
        for name, root in trees.items():
            if partname_ext(name) == "rels":
                continue
            defined = {r["Id"] for r in rels.get(name, [])}
            for el in root.iter(tag=etree.Element):
                rId = el.get(_R_ID)
                if rId is not None and rId not in defined:
                    self._add(result, name, "reference",
                              f"r:id {rId} is not defined in the part's "
                              f"relationships")

    def _check_orphans(self, entries: dict[str, bytes],
                       rels: dict[str, list[dict]], result: QAResult) -> None:
        """Warn about content parts no relationship points at."""
        reachable = {
            _resolve_target(source, r["Target"] or "")
            for source, source_rels in rels.items()
            for r in source_rels
            if r["TargetMode"] != "External"
        }
        for name in entries:
            if (name == CONTENT_TYPES_PARTNAME
                    or partname_ext(name) == "rels"):
                continue
            if name not in reachable:
                self._add(result, name, "orphan",
                          "Part is not the target of any relationship",
                          severity="warning")

    def _main_document(self, rels: dict[str, list[dict]]) -> str | None:
        for rel in rels.get(PACKAGE_ROOT, []):
            if rel["Type"] == RT.OFFICE_DOCUMENT:
                return _resolve_target(PACKAGE_ROOT, rel["Target"] or "")
        return None

    # ------------------------------------------------------------------
    # Document-level checks
    # ------------------------------------------------------------------

    def _check_presentation(self, main: str, entries: dict[str, bytes],
                            trees: dict, rels: dict[str, list[dict]],
                            result: QAResult) -> None:
        """Slide parts numbered 1..N and listed once each in sldIdLst."""
        numbers = sorted(
            int(m.group(1)) for m in map(_SLIDE_PARTNAME_RE.match, entries)
            if m
        )
        if numbers != list(range(1, len(numbers) + 1)):
            self._add(result, "", "slide_count",
                      f"Slide parts are not numbered 1..{len(numbers)}: "
                      f"{numbers}")

        sld_ids = list(trees[main].iter(qn("p:sldId")))
        if len(sld_ids) != len(numbers):
            self._add(result, main, "slide_count",
                      f"sldIdLst lists {len(sld_ids)} slide(s), package "
                      f"holds {len(numbers)}")

        ids = [el.get("id") for el in sld_ids]
        if len(set(ids)) != len(ids):
            self._add(result, main, "slide_count", "Duplicate slide ids")

        rids = [el.get(_R_ID) for el in sld_ids]
        if len(set(rids)) != len(rids):
            self._add(result, main, "slide_count",
                      "Two slides share one relationship id")

        slide_rels = {r["Id"] for r in rels.get(main, [])
                      if r["Type"] == RT.SLIDE}
        for rId in rids:
            if rId in slide_rels:
                continue
            self._add(result, main, "slide_count",
                      f"sldId r:id {rId} is not a slide relationship")

    def _check_workbook(self, main: str, trees: dict,
                        rels: dict[str, list[dict]],
                        result: QAResult) -> None:
        """A workbook lists at least one sheet, each a worksheet relationship."""
        sheets = list(trees[main].iter(qn("s:sheet")))
        if not sheets:
            self._add(result, main, "sheet", "Workbook lists no sheets")
        sheet_rels = {r["Id"] for r in rels.get(main, [])
                      if r["Type"] == RT_WORKSHEET}
        for sheet in sheets:
            if sheet.get(_R_ID) not in sheet_rels:
                self._add(result, main, "sheet",
                          f"Sheet {sheet.get('name')!r} is not related to a "
                          f"worksheet part")


# ---------------------------------------------------------------------------
# Read-back helpers
# ---------------------------------------------------------------------------

def _related(entries: dict[str, bytes], source: str) -> dict[str, str]:
    """rId -> resolved target partname for *source*."""
    rels_name = rels_partname(source)
    if rels_name not in entries:
        return {}
    return {
        r["Id"]: _resolve_target(source, r["Target"] or "")
        for r in _read_relationships(_parse(entries[rels_name]))
    }


def _main_partname(entries: dict[str, bytes]) -> str:
    root_rels = entries.get(ROOT_RELS_PARTNAME)
    if root_rels is not None:
        for rel in _read_relationships(_parse(root_rels)):
            if rel["Type"] == RT.OFFICE_DOCUMENT:
                return _resolve_target(PACKAGE_ROOT, rel["Target"])
    raise ValueError("Package has no main document relationship")


def read_slide_texts(blob: bytes) -> list[str]:
    """Slide texts of a presentation, in sldIdLst order."""
    entries = _open_archive(blob)
    main = _main_partname(entries)
    related = _related(entries, main)
    texts = []
    for sld_id in _parse(entries[main]).iter(qn("p:sldId")):
        slide = _parse(entries[related[sld_id.get(_R_ID)]])
        texts.append("".join(t.text or "" for t in slide.iter(qn("a:t"))))
    return texts


def read_cells(blob: bytes) -> dict[str, str]:
    """Cell reference -> value for the first worksheet of a workbook."""
    entries = _open_archive(blob)
    main = _main_partname(entries)
    related = _related(entries, main)
    sheet = next(_parse(entries[main]).iter(qn("s:sheet")), None)
    if sheet is None:
        return {}
    worksheet = _parse(entries[related[sheet.get(_R_ID)]])
    cells = {}
    for c in worksheet.iter(qn("s:c")):
        v = c.find(qn("s:v"))
        cells[c.get("r")] = "" if v is None or v.text is None else v.text
    return cells


def validate_package(blob: bytes) -> QAResult:
    """One-shot convenience: validate a package."""
    return PackageValidator().validate(blob)
