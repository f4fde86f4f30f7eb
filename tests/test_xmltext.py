"""Tests for XML text checking."""

import pytest

from officepack.package.errors import EncodingError
from officepack.package.xmltext import xml_text


# ---------------------------------------------------------------------------
# xml_text
# ---------------------------------------------------------------------------

class TestXmlText:
    def test_plain_string_unchanged(self):
        assert xml_text("Hello") == "Hello"

    def test_markup_characters_pass_through(self):
        # Escaping happens on serialisation, not here
        assert xml_text('<a href="x">&</a>') == '<a href="x">&</a>'

    def test_whitespace_controls_allowed(self):
        assert xml_text("a\tb\nc\rd") == "a\tb\nc\rd"

    def test_unicode_allowed(self):
        assert xml_text("Introdução — São Paulo 🚀") == "Introdução — São Paulo 🚀"

    def test_empty_string(self):
        assert xml_text("") == ""

    def test_bytes_decoded_as_utf8(self):
        assert xml_text("João".encode("utf-8")) == "João"

    def test_invalid_utf8_bytes(self):
        with pytest.raises(EncodingError, match="not valid UTF-8"):
            xml_text(b"\xff\xfe\xfa")

    def test_nul_rejected(self):
        with pytest.raises(EncodingError, match="U\\+0000"):
            xml_text("a\x00b")

    def test_vertical_tab_rejected(self):
        with pytest.raises(EncodingError, match="U\\+000B"):
            xml_text("a\x0bb")

    def test_lone_surrogate_rejected(self):
        with pytest.raises(EncodingError):
            xml_text("a\ud800b")

    def test_noncharacter_rejected(self):
        with pytest.raises(EncodingError):
            xml_text("a\uffffb")

    def test_offset_reported(self):
        with pytest.raises(EncodingError, match="offset 3"):
            xml_text("abc\x01")

    def test_non_string_rejected(self):
        with pytest.raises(TypeError, match="int"):
            xml_text(42)

    def test_none_rejected(self):
        with pytest.raises(TypeError):
            xml_text(None)

