"""Regex helpers shared by the HTML parsers and converters."""
import re

HTML_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&apos;", "'"),
    ("&nbsp;", " "),
    ("&#8217;", "’"),
    ("&#8220;", "“"),
    ("&#8221;", "”"),
    ("&hellip;", "..."),
    ("&mdash;", "—"),
    ("&ndash;", "–"),
    ("&#x2F;", "/"),
    ("&#x27;", "'"),
    ("&copy;", "©"),
    ("&reg;", "®"),
    ("&trade;", "™"),
    # Last, so "&amp;lt;" decodes to "&lt;" and not "<".
    ("&amp;", "&"),
)

_TAG = re.compile(r"<[^>]+>")
_NUMERIC_ENTITY = re.compile(r"&#(?:(\d+)|[xX]([0-9a-fA-F]+));")
_WHITESPACE = re.compile(r"\s+")


def _numeric_replacement(match: re.Match) -> str:
    decimal, hexadecimal = match.groups()
    code = int(decimal) if decimal is not None else int(hexadecimal, 16)
    if code == 0 or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        return match.group(0)
    return chr(code)


def decode_entities(text: str) -> str:
    """Decode the known named entities plus numeric character references."""
    if "&" not in text:
        return text
    for entity, replacement in HTML_ENTITIES[:-1]:
        text = text.replace(entity, replacement)
    text = _NUMERIC_ENTITY.sub(_numeric_replacement, text)
    return text.replace("&amp;", "&")


def strip_tags(html: str, replacement: str = "") -> str:
    return _TAG.sub(replacement, html)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def html_to_text(fragment: str) -> str:
    """Plain single-line text of an HTML fragment."""
    return collapse_whitespace(decode_entities(strip_tags(fragment)))
