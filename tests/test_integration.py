"""End-to-end integration tests.

Exercises the full pipeline:
    request text / content file → parser or ingestion → builder → QA validator

Each test produces a real package, reads it back with python-pptx or the
read-back helpers, and checks it is structurally valid and data-accurate.
"""

import io
import zipfile

import pytest
from pptx import Presentation

from officepack import (
    PresentationBuilder,
    SpreadsheetBuilder,
    build_document,
    build_presentation,
    build_spreadsheet,
)
from officepack.processor.commands import (
    DEFAULT_ROWS,
    DEFAULT_SLIDES,
    parse_command,
)
from officepack.processor.ingestion import ingest
from officepack.qa.validator import (
    PackageValidator,
    read_cells,
    read_slide_texts,
)
from officepack.schema.loader import load_content, save_content
from officepack.schema.models import DocumentContent


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def validator():
    return PackageValidator()


def _names(blob: bytes) -> list[str]:
    return zipfile.ZipFile(io.BytesIO(blob)).namelist()


# ---------------------------------------------------------------------------
# Presentations
# ---------------------------------------------------------------------------

class TestPresentationPipeline:
    def test_request_to_valid_deck(self, validator):
        parsed = parse_command(
            "criar apresentação slides: Introdução; Resultados & metas; <Fim>"
        )
        blob = build_document(parsed.content)

        result = validator.validate(blob)
        assert result.passed, result.report()

        prs = Presentation(io.BytesIO(blob))
        texts = [s.shapes[0].text_frame.text for s in prs.slides]
        assert texts == ["Introdução", "Resultados & metas", "<Fim>"]

    def test_default_deck(self, validator):
        blob = build_document(parse_command("gerar ppt").content)
        assert validator.validate(blob).passed
        assert read_slide_texts(blob) == DEFAULT_SLIDES

    def test_three_slides_layout(self):
        blob = build_presentation(["A", "B", "C"])
        names = _names(blob)
        for i in (1, 2, 3):
            assert f"ppt/slides/slide{i}.xml" in names
        assert "ppt/slides/slide4.xml" not in names

    def test_empty_presentation(self, validator):
        blob = build_presentation([])
        assert validator.validate(blob).passed
        assert len(Presentation(io.BytesIO(blob)).slides) == 0

    def test_text_file_to_deck(self, tmp_path, validator):
        p = tmp_path / "talk.txt"
        p.write_text("Olá\nMundo\n", encoding="utf-8")
        blob = build_document(ingest(p))
        assert validator.validate(blob).passed
        assert read_slide_texts(blob) == ["Olá", "Mundo"]

    def test_injection_stays_text(self, validator):
        payload = '</a:t></a:r><a:r><a:t>x" & \'y\''
        blob = build_presentation([payload])
        assert validator.validate(blob).passed
        assert read_slide_texts(blob) == [payload]


# ---------------------------------------------------------------------------
# Spreadsheets
# ---------------------------------------------------------------------------

class TestSpreadsheetPipeline:
    def test_request_to_valid_workbook(self, validator):
        parsed = parse_command("criar planilha dados: Nome,Idade|Ana,30|")
        blob = build_document(parsed.content)

        result = validator.validate(blob)
        assert result.passed, result.report()
        assert read_cells(blob) == {
            "A1": "Nome", "B1": "Idade", "A2": "Ana", "B2": "30",
        }

    def test_default_table(self, validator):
        blob = build_document(parse_command("gerar excel").content)
        assert validator.validate(blob).passed
        cells = read_cells(blob)
        assert cells["A1"] == DEFAULT_ROWS[0][0]
        assert cells["C4"] == DEFAULT_ROWS[3][2]

    def test_csv_to_workbook(self, tmp_path, validator):
        p = tmp_path / "people.csv"
        p.write_text("Nome,Cidade\nJoão,\"São Paulo, SP\"\n", encoding="utf-8")
        blob = build_document(ingest(p))
        assert validator.validate(blob).passed
        assert read_cells(blob)["B2"] == "São Paulo, SP"

    def test_wide_row_columns(self):
        row = [str(i) for i in range(28)]
        cells = read_cells(build_spreadsheet([row]))
        assert cells["Z1"] == "25"
        assert cells["AA1"] == "26"
        assert cells["AB1"] == "27"

    def test_values_stay_text(self):
        cells = read_cells(build_spreadsheet([["007", "=1+1", "1e3"]]))
        assert cells == {"A1": "007", "B1": "=1+1", "C1": "1e3"}

    def test_empty_spreadsheet(self, validator):
        blob = build_spreadsheet([])
        assert validator.validate(blob).passed
        assert "xl/worksheets/sheet1.xml" in _names(blob)


# ---------------------------------------------------------------------------
# YAML content files
# ---------------------------------------------------------------------------

class TestContentFileRoundTrip:
    def test_presentation_yaml(self, tmp_path):
        content = DocumentContent.presentation(["A & B", "C"])
        save_content(content, tmp_path / "deck.yaml")
        blob = build_document(load_content(tmp_path / "deck.yaml"))
        assert read_slide_texts(blob) == ["A & B", "C"]

    def test_spreadsheet_yaml(self, tmp_path):
        content = DocumentContent.spreadsheet([["a", "b"], ["c"]])
        save_content(content, tmp_path / "t.yaml")
        blob = build_document(ingest(tmp_path / "t.yaml"))
        assert read_cells(blob) == {"A1": "a", "B1": "b", "A2": "c"}


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------

class TestDeterminism:
    def test_presentation_bytes_repeat(self):
        texts = ["Intro", "Body", "End"]
        assert build_presentation(texts) == build_presentation(texts)

    def test_spreadsheet_bytes_repeat(self):
        rows = [["a", "b"], ["1", "2"]]
        assert build_spreadsheet(rows) == build_spreadsheet(rows)

    def test_builder_instances_agree(self):
        assert PresentationBuilder().build(["x"]) == \
            PresentationBuilder().build(["x"])
        assert SpreadsheetBuilder().build([["x"]]) == \
            SpreadsheetBuilder().build([["x"]])
