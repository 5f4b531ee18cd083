"""SRT (SubRip) parser and serializer.

WHY: SRT is the lowest-common-denominator subtitle format — numbered
blocks with a comma-separated timing line and plain text. The handler
reads it into the shared document model and writes the model back out.

HOW: Parsing splits on blank lines and keeps every block whose second
line matches the timing pattern. Serializing renumbers lines from 1 and
converts decimal-point timestamps to comma form.

RULES:
- The block index is ignored on parse and regenerated on output
- Blocks with fewer than 3 lines or no valid timing line are skipped
- Parsed timestamps are stored in decimal-point form
- SRT has no metadata; parsed documents carry ``metadata=None``
"""

from __future__ import annotations

import logging
import re
from typing import List

from format_hub.core.document import SubtitleDocument, SubtitleLine
from format_hub.core.timestamps import SRT_TIMING_RE, to_comma_form, to_decimal_form

logger = logging.getLogger(__name__)

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")


def parse_srt(content: str) -> SubtitleDocument:
    """Parse SRT text into a SubtitleDocument.

    Args:
        content: Decoded SRT text. CRLF line endings are accepted.

    Returns:
        A document with one line per well-formed block, in file order.
    """
    content = content.replace("\r\n", "\n").strip()
    lines: List[SubtitleLine] = []

    for index, block in enumerate(_BLOCK_SPLIT_RE.split(content), start=1):
        block_lines = block.split("\n")
        if len(block_lines) < 3:
            logger.debug("Skipping SRT block %d: fewer than 3 lines", index)
            continue

        timing = SRT_TIMING_RE.search(block_lines[1])
        if timing is None:
            logger.debug("Skipping SRT block %d: no timing line", index)
            continue

        lines.append(SubtitleLine(
            start=to_decimal_form(timing.group(1)),
            end=to_decimal_form(timing.group(2)),
            text="\n".join(block_lines[2:]),
        ))

    return SubtitleDocument(metadata=None, lines=lines)


def compose_srt(lines: List[SubtitleLine]) -> str:
    """Render subtitle lines as SRT text.

    Each block is ``index\\nSTART --> END\\ntext\\n\\n``.
    """
    parts: List[str] = []
    for index, line in enumerate(lines, start=1):
        parts.append("{}\n{} --> {}\n{}\n\n".format(
            index,
            to_comma_form(line.start),
            to_comma_form(line.end),
            line.text,
        ))
    return "".join(parts)
