"""OPC package assembler — turns parts plus a relationship graph into a ZIP.

A :class:`Package` collects content parts and the relationships between
them, then :meth:`Package.finalize` renders the two kinds of structural
part (``[Content_Types].xml`` and every ``_rels/*.rels``) and writes the
whole archive into memory.

Usage::

    from officepack.package.assembler import Package, PACKAGE_ROOT

    pkg = Package()
    pkg.add_part("ppt/presentation.xml", xml_bytes, CT.PML_PRESENTATION_MAIN)
    pkg.add_relationship(PACKAGE_ROOT, "ppt/presentation.xml",
                         RT.OFFICE_DOCUMENT)
    pptx_bytes = pkg.finalize()

A package is owned by the single build call that creates it; it holds no
global state and is never shared between calls.
"""

import io
import posixpath
import zipfile
from dataclasses import dataclass

from lxml import etree

from .errors import DuplicatePartError, PackagingError
from .oxml import DEFAULT_CONTENT_TYPES, nsmap, partname_ext, qn, serialize


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PACKAGE_ROOT = "/"
CONTENT_TYPES_PARTNAME = "[Content_Types].xml"

# Fixed entry timestamp so identical input yields identical archives
_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Part:
    """One named entry in the package."""
    partname: str       # posix path inside the archive, no leading slash
    blob: bytes
    content_type: str

    @property
    def ext(self) -> str:
        return partname_ext(self.partname)


@dataclass(frozen=True)
class Relationship:
    """A typed edge from a source part to a target part."""
    rId: str
    reltype: str
    target: str         # partname of the target, relative to the archive root


def rels_partname(source: str) -> str:
    """Partname of the relationships companion for *source*.

    ``"/"`` -> ``_rels/.rels``;
    ``ppt/presentation.xml`` -> ``ppt/_rels/presentation.xml.rels``.
    """
    if source == PACKAGE_ROOT:
        return "_rels/.rels"
    directory, filename = posixpath.split(source)
    return posixpath.join(directory, "_rels", f"{filename}.rels")


def _relative_target(source: str, target: str) -> str:
    """Target reference as written in *source*'s .rels file."""
    if source == PACKAGE_ROOT:
        return target
    base = posixpath.dirname(source) or "."
    return posixpath.relpath(target, base)


def _normalize_partname(partname: str) -> str:
    name = partname.lstrip("/")
    if not name or name.endswith("/"):
        raise ValueError(f"Invalid partname: {partname!r}")
    return name


# ---------------------------------------------------------------------------
# Package
# ---------------------------------------------------------------------------

class Package:
    """An OPC package under construction.

    Parts keep their registration order; that order is the order of content
    entries in the finished archive.  Relationship ids are allocated per
    source part as ``rId1``, ``rId2``, ...
    """

    def __init__(self) -> None:
        self._parts: dict[str, Part] = {}
        self._rels: dict[str, list[Relationship]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_part(self, partname: str, blob: bytes,
                 content_type: str) -> Part:
        """Register a content part.

        Raises
        ------
        DuplicatePartError
            If *partname* is already taken, including by a structural part
            (``[Content_Types].xml`` or a ``.rels`` file).
        """
        name = _normalize_partname(partname)
        if (name in self._parts or name == CONTENT_TYPES_PARTNAME
                or name.endswith(".rels")):
            raise DuplicatePartError(name)
        part = Part(partname=name, blob=bytes(blob), content_type=content_type)
        self._parts[name] = part
        return part

    def add_relationship(self, source: str, target: str,
                         reltype: str) -> str:
        """Record an edge from *source* to *target*, returning its rId."""
        if source != PACKAGE_ROOT:
            source = _normalize_partname(source)
        rels = self._rels.setdefault(source, [])
        rId = f"rId{len(rels) + 1}"
        rels.append(Relationship(rId=rId, reltype=reltype,
                                 target=_normalize_partname(target)))
        return rId

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def parts(self) -> list[Part]:
        return list(self._parts.values())

    def relationships(self, source: str) -> list[Relationship]:
        if source != PACKAGE_ROOT:
            source = _normalize_partname(source)
        return list(self._rels.get(source, []))

    # ------------------------------------------------------------------
    # Structural parts
    # ------------------------------------------------------------------

    def content_types_xml(self) -> bytes:
        """Render ``[Content_Types].xml`` for the current set of parts."""
        types = etree.Element(qn("ct:Types"), nsmap=nsmap(default="ct"))

        present = {"rels"} | {p.ext for p in self._parts.values()}
        for ext in sorted(present):
            if ext in DEFAULT_CONTENT_TYPES:
                etree.SubElement(types, qn("ct:Default"), {
                    "Extension": ext,
                    "ContentType": DEFAULT_CONTENT_TYPES[ext],
                })

        for part in self._parts.values():
            if DEFAULT_CONTENT_TYPES.get(part.ext) == part.content_type:
                continue
            etree.SubElement(types, qn("ct:Override"), {
                "PartName": f"/{part.partname}",
                "ContentType": part.content_type,
            })
        return serialize(types)

    def rels_xml(self, source: str) -> bytes:
        """Render the relationships companion part for *source*."""
        root = etree.Element(qn("pr:Relationships"),
                             nsmap=nsmap(default="pr"))
        for rel in self.relationships(source):
            etree.SubElement(root, qn("pr:Relationship"), {
                "Id": rel.rId,
                "Type": rel.reltype,
                "Target": _relative_target(source, rel.target),
            })
        return serialize(root)

    def _check_references(self) -> None:
        """Every relationship endpoint must be a registered part."""
        for source, rels in self._rels.items():
            if source != PACKAGE_ROOT and source not in self._parts:
                raise PackagingError(
                    f"Relationship source {source!r} is not a part of the "
                    f"package"
                )
            for rel in rels:
                if rel.target not in self._parts:
                    raise PackagingError(
                        f"{rel.rId} in {rels_partname(source)} targets "
                        f"missing part {rel.target!r}"
                    )

    def _rels_sources(self) -> list[str]:
        """Sources with a .rels file: package root first, then part order."""
        sources = [PACKAGE_ROOT]
        sources.extend(name for name in self._parts if name in self._rels)
        return sources

    def entries(self) -> list[tuple[str, bytes]]:
        """All archive entries as ``(partname, blob)`` in writing order."""
        self._check_references()
        entries = [(CONTENT_TYPES_PARTNAME, self.content_types_xml())]
        for source in self._rels_sources():
            entries.append((rels_partname(source), self.rels_xml(source)))
        entries.extend((p.partname, p.blob) for p in self._parts.values())
        return entries

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def finalize(self) -> bytes:
        """Write the package as a ZIP archive and return its bytes.

        Raises
        ------
        PackagingError
            If a relationship points at a missing part, or the archive
            could not be written.  No partial output is returned.
        """
        entries = self.entries()
        buf = io.BytesIO()
        try:
            with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
                for partname, blob in entries:
                    _write_entry(zf, partname, blob)
        except (OSError, MemoryError, zipfile.LargeZipFile) as exc:
            raise PackagingError(f"Could not write package: {exc}") from exc
        return buf.getvalue()


def _write_entry(zf: zipfile.ZipFile, partname: str, blob: bytes) -> None:
    info = zipfile.ZipInfo(partname, date_time=_ZIP_EPOCH)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.create_system = 0
    zf.writestr(info, blob)
