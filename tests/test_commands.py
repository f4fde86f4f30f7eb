"""Tests for the command mini-language parser."""

import pytest

from officepack.processor.commands import (
    DEFAULT_ROWS,
    DEFAULT_SLIDES,
    detect_request,
    parse_command,
    parse_rows,
    parse_slides,
    split_rows,
    split_slides,
)
from officepack.schema.models import DocumentKind


# ---------------------------------------------------------------------------
# Request detection
# ---------------------------------------------------------------------------

class TestDetectRequest:
    @pytest.mark.parametrize("text", [
        "criar apresentação sobre vendas",
        "Por favor, gerar PPT agora",
        "Create presentation: slides: a;b",
        "CRIAR APRESENTACAO",
    ])
    def test_presentation(self, text):
        assert detect_request(text) == DocumentKind.PRESENTATION

    @pytest.mark.parametrize("text", [
        "criar planilha dados: a,b|",
        "gerar Excel",
        "create spreadsheet",
    ])
    def test_spreadsheet(self, text):
        assert detect_request(text) == DocumentKind.SPREADSHEET

    def test_unrelated(self):
        assert detect_request("Olá, tudo bem?") is None

    def test_presentation_wins_when_both(self):
        assert detect_request("gerar ppt e gerar excel") == \
            DocumentKind.PRESENTATION


# ---------------------------------------------------------------------------
# Slides
# ---------------------------------------------------------------------------

class TestSlides:
    def test_split(self):
        assert split_slides("Intro;Body;End") == ["Intro", "Body", "End"]

    def test_split_strips_and_drops_blanks(self):
        assert split_slides(" Intro ; ;Body;") == ["Intro", "Body"]

    def test_parse_after_marker(self):
        text = "criar apresentação slides: Intro; Resultados & metas"
        assert parse_slides(text) == ["Intro", "Resultados & metas"]

    def test_marker_case_insensitive(self):
        assert parse_slides("gerar ppt SLIDES: a;b") == ["a", "b"]

    def test_default_without_marker(self):
        assert parse_slides("criar apresentação") == DEFAULT_SLIDES

    def test_default_is_a_copy(self):
        parse_slides("gerar ppt").append("extra")
        assert len(DEFAULT_SLIDES) == 4

    def test_marker_with_nothing_after(self):
        assert parse_slides("gerar ppt slides:") == []

    def test_colon_inside_slide_text(self):
        assert parse_slides("slides: Tópico 1: Introdução") == \
            ["Tópico 1: Introdução"]


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------

class TestRows:
    def test_split(self):
        assert split_rows("Nome,Idade|Ana,30|") == [
            ["Nome", "Idade"], ["Ana", "30"],
        ]

    def test_unterminated_tail_ignored(self):
        assert split_rows("a,b|c,d") == [["a", "b"]]

    def test_cells_stripped(self):
        assert split_rows(" a , b |") == [["a", "b"]]

    def test_ragged_rows(self):
        assert split_rows("a|b,c,d|") == [["a"], ["b", "c", "d"]]

    def test_blank_segments_dropped(self):
        assert split_rows("a||b|") == [["a"], ["b"]]

    def test_empty_cells_kept(self):
        assert split_rows("a,,c|") == [["a", "", "c"]]

    def test_parse_after_dados(self):
        assert parse_rows("criar planilha dados: x,y|1,2|") == [
            ["x", "y"], ["1", "2"],
        ]

    def test_parse_after_data(self):
        assert parse_rows("create spreadsheet data: x|") == [["x"]]

    def test_default_without_marker(self):
        assert parse_rows("gerar excel") == DEFAULT_ROWS

    def test_default_is_a_copy(self):
        parse_rows("gerar excel")[0].append("extra")
        assert DEFAULT_ROWS[0] == ["Nome", "Idade", "Cidade"]


# ---------------------------------------------------------------------------
# parse_command
# ---------------------------------------------------------------------------

class TestParseCommand:
    def test_presentation(self):
        parsed = parse_command("criar apresentação slides: A;B")
        assert parsed.kind == DocumentKind.PRESENTATION
        assert parsed.content.slide_texts() == ["A", "B"]
        assert parsed.used_defaults is False

    def test_spreadsheet(self):
        parsed = parse_command("gerar excel dados: Nome,Idade|Ana,30|")
        assert parsed.kind == DocumentKind.SPREADSHEET
        assert parsed.content.row_values() == [["Nome", "Idade"], ["Ana", "30"]]
        assert parsed.used_defaults is False

    def test_presentation_defaults(self):
        parsed = parse_command("gerar ppt")
        assert parsed.used_defaults is True
        assert parsed.content.slide_texts() == DEFAULT_SLIDES

    def test_spreadsheet_defaults(self):
        parsed = parse_command("criar planilha")
        assert parsed.used_defaults is True
        assert parsed.content.row_values() == DEFAULT_ROWS

    def test_unrecognised(self):
        with pytest.raises(ValueError, match="Unrecognised request"):
            parse_command("qual é a previsão do tempo?")
