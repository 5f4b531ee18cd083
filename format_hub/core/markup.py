"""Inline markup helpers shared by the subtitle formats.

WHY: XCC text may carry a small set of formatting tags that SRT output
does not keep, and every free-text value written to XCC must be escaped
so the document stays well-formed.

HOW: ``strip_formatting`` runs one regex per tag, once each, in a fixed
order. ``escape_xml`` replaces the five XML special characters. The
integer helper mimics a lenient leading-digits parse.

RULES:
- Tag stripping is single-pass and non-recursive. Nested instances of
  the same tag are not fully unwound.
- Parsing never unescapes entities. Only the XCC serializer escapes.
- ``parse_int_prefix`` never raises; unparseable text yields NaN.
"""

from __future__ import annotations

import math
import re
from typing import Union

# Order matters: font first, then the simple tags.
_FORMATTING_TAG_RES = (
    re.compile(r"<font[^>]*>(.*?)</font>"),
    re.compile(r"<b>(.*?)</b>"),
    re.compile(r"<i>(.*?)</i>"),
    re.compile(r"<u>(.*?)</u>"),
    re.compile(r"<s>(.*?)</s>"),
    re.compile(r"<sub>(.*?)</sub>"),
    re.compile(r"<sup>(.*?)</sup>"),
)

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")


def strip_formatting(text: str) -> str:
    """Remove XCC formatting tags, keeping their content, and trim."""
    for pattern in _FORMATTING_TAG_RES:
        text = pattern.sub(r"\1", text)
    return text.strip()


def escape_xml(text: str) -> str:
    """Escape ``& < > " '`` for inclusion in XML text or attributes."""
    # & must go first or the other entities would be double-escaped
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text


def parse_int_prefix(text: str) -> Union[int, float]:
    """Parse the leading integer of ``text``, or return NaN.

    ``"42"`` → 42, ``" 12s"`` → 12, ``"abc"`` → nan.
    """
    match = _INT_PREFIX_RE.match(text)
    if match is None:
        return math.nan
    return int(match.group(1))
