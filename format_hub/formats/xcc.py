"""XCC (XML Closed Captions) parser and serializer.

WHY: XCC is the richer of the two subtitle formats — it carries a
metadata block, optional on-screen positions and inline formatting.
The handler needs to read it into the shared document model and to
render a model back out as well-formed XCC.

HOW: Parsing is regex-driven, not a full XML parse: the first <meta>
block is mined field by field, then every <line> block is scanned in
order. Serializing builds the document line by line from a fixed
template, escaping every free-text value.

RULES:
- A <line> without <start>, <end> or <text> is dropped, never raised
- Inline formatting tags are stripped from text on parse
- Entities are NOT unescaped on parse, but ARE escaped on serialize
- With no metadata (None or empty) a default <meta> block is written
"""

from __future__ import annotations

import logging
import math
import re
from typing import List, Optional

from format_hub import config
from format_hub.core.document import (
    SubtitleDocument,
    SubtitleLine,
    SubtitleMetadata,
    TextPosition,
)
from format_hub.core.markup import escape_xml, parse_int_prefix, strip_formatting

logger = logging.getLogger(__name__)

_META_RE = re.compile(r"<meta>(.*?)</meta>", re.DOTALL)
_LINE_RE = re.compile(r"<line>(.*?)</line>", re.DOTALL)
_START_RE = re.compile(r"<start>(.*?)</start>")
_END_RE = re.compile(r"<end>(.*?)</end>")
_TEXT_RE = re.compile(r"<text>(.*?)</text>", re.DOTALL)
_TEXTPOS_RE = re.compile(r'<textpos\s+x="(\d+)"\s+y="(\d+)"\s*/>')

# SubtitleMetadata attribute → XCC element name, in output order
_META_FIELDS = (
    ("source", "source"),
    ("title", "title"),
    ("language", "language"),
    ("generator", "generator"),
    ("video_id", "video-id"),
    ("duration", "duration"),
    ("seconds", "seconds"),
)


def _find(element: str, content: str) -> Optional[str]:
    match = re.search(r"<{0}>(.*?)</{0}>".format(re.escape(element)), content)
    return match.group(1) if match else None


def _parse_metadata(meta_content: str) -> SubtitleMetadata:
    metadata = SubtitleMetadata()
    for attr, element in _META_FIELDS:
        value = _find(element, meta_content)
        if value is None:
            continue
        if attr == "seconds":
            setattr(metadata, attr, parse_int_prefix(value))
        else:
            setattr(metadata, attr, value)
    return metadata


def parse_xcc(content: str) -> SubtitleDocument:
    """Parse XCC text into a SubtitleDocument.

    Args:
        content: Decoded XCC document text.

    Returns:
        A document with metadata (empty when there is no <meta> block)
        and every complete <line> in document order.
    """
    metadata = SubtitleMetadata()
    meta_match = _META_RE.search(content)
    if meta_match:
        metadata = _parse_metadata(meta_match.group(1))

    lines: List[SubtitleLine] = []
    for index, line_match in enumerate(_LINE_RE.finditer(content), start=1):
        line_content = line_match.group(1)
        start = _START_RE.search(line_content)
        end = _END_RE.search(line_content)
        text = _TEXT_RE.search(line_content)

        if not (start and end and text):
            logger.debug("Skipping XCC line %d: missing start, end or text", index)
            continue

        line = SubtitleLine(
            start=start.group(1),
            end=end.group(1),
            text=strip_formatting(text.group(1)),
        )
        textpos = _TEXTPOS_RE.search(line_content)
        if textpos:
            line.textpos = TextPosition(x=int(textpos.group(1)), y=int(textpos.group(2)))
        lines.append(line)

    return SubtitleDocument(metadata=metadata, lines=lines)


def _format_seconds(value) -> str:
    if isinstance(value, float) and math.isnan(value):
        return "NaN"
    return str(value)


def _compose_metadata(metadata: Optional[SubtitleMetadata]) -> List[str]:
    out: List[str] = []
    if metadata is None or metadata.is_empty():
        out.append("    <source>{}</source>".format(escape_xml(config.DEFAULT_SOURCE)))
        out.append("    <language>{}</language>".format(escape_xml(config.DEFAULT_LANGUAGE)))
        out.append("    <generator>{}</generator>".format(escape_xml(config.GENERATOR_NAME)))
        return out

    for attr, element in _META_FIELDS:
        value = getattr(metadata, attr)
        if attr == "seconds":
            if value is not None:
                out.append("    <seconds>{}</seconds>".format(_format_seconds(value)))
        elif attr == "video_id":
            if value is not None:
                out.append("    <video-id>{}</video-id>".format(escape_xml(value)))
        elif value:
            out.append("    <{0}>{1}</{0}>".format(element, escape_xml(value)))
    return out


def compose_xcc(
    lines: List[SubtitleLine],
    metadata: Optional[SubtitleMetadata] = None,
) -> str:
    """Render subtitle lines (and optional metadata) as an XCC document.

    Args:
        lines: Lines to write, in output order.
        metadata: Metadata to write. ``None`` or an empty block produces
                  the configured default block instead.

    Returns:
        The complete XCC text, ending in a newline.
    """
    out = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<xcc xmlns="{}">'.format(config.XCC_NAMESPACE),
        "",
        "  <meta>",
    ]
    out.extend(_compose_metadata(metadata))
    out.append("  </meta>")
    out.append("")
    out.append("  <subtitles>")

    for line in lines:
        out.append("    <line>")
        out.append("      <start>{}</start>".format(escape_xml(line.start)))
        out.append("      <end>{}</end>".format(escape_xml(line.end)))
        if line.textpos is not None:
            out.append('      <textpos x="{}" y="{}"/>'.format(line.textpos.x, line.textpos.y))
        out.append("      <text>{}</text>".format(escape_xml(line.text)))
        out.append("    </line>")

    out.append("  </subtitles>")
    out.append("</xcc>")
    return "\n".join(out) + "\n"
