"""XML text handling for caller-supplied strings.

Slide texts and cell values are untrusted.  Before any of them is placed in
a part it goes through :func:`xml_text`, which decodes bytes as UTF-8 and
rejects characters that XML 1.0 cannot carry.  Parts themselves are
serialised with lxml, which escapes markup characters on output, so a value
like ``"<b>&"`` always comes back out of a parser unchanged.
"""

import re

from .errors import EncodingError


# Characters outside the XML 1.0 Char production.
_ILLEGAL_XML_CHARS = re.compile(
    "[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)


def xml_text(value: str | bytes) -> str:
    """Return *value* as a str that is safe to place in an XML text node.

    Bytes are decoded as UTF-8.  Raises EncodingError for invalid UTF-8 or
    for characters outside the XML 1.0 character range (C0 controls other
    than tab/LF/CR, lone surrogates, U+FFFE, U+FFFF).  Raises TypeError for
    anything that is neither str nor bytes.
    """
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError(f"Input is not valid UTF-8: {exc}") from exc
    elif not isinstance(value, str):
        raise TypeError(
            f"Expected str or bytes, got {type(value).__name__}"
        )

    match = _ILLEGAL_XML_CHARS.search(value)
    if match:
        raise EncodingError(
            f"Character U+{ord(match.group()):04X} at offset "
            f"{match.start()} cannot be represented in XML"
        )
    return value

