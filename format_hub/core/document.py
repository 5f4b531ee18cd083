"""In-memory model of a parsed subtitle track.

WHY: XCC and SRT disagree on almost everything — markup, timestamp
separators, metadata — but both describe an ordered list of timed text
lines. Parsing into one shared model lets each serializer ignore where
the data came from.

HOW: Four dataclasses:
  TextPosition      — optional on-screen coordinates (XCC only)
  SubtitleLine      — one timed caption with its text payload
  SubtitleMetadata  — the optional XCC <meta> fields
  SubtitleDocument  — metadata plus the ordered line list

RULES:
- Timestamps are kept as strings in decimal-point form (HH:MM:SS.mmm)
- Line order is file order; nothing here sorts or merges lines
- Every metadata field is optional; an empty block is ``is_empty()``
- ``seconds`` may hold NaN when the source text was not numeric
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import List, Optional, Union


@dataclass
class TextPosition:
    """Screen coordinates from an XCC ``<textpos x="…" y="…"/>`` element."""

    x: int
    y: int


@dataclass
class SubtitleLine:
    """A single timed subtitle line.

    Attributes:
        start: Start timestamp, decimal-point form (``00:00:01.000``).
        end: End timestamp, decimal-point form.
        text: Caption text; may span several lines joined by ``\\n``.
        textpos: Optional screen position (only XCC carries one).
    """

    start: str
    end: str
    text: str
    textpos: Optional[TextPosition] = None


@dataclass
class SubtitleMetadata:
    """Optional descriptive fields from an XCC ``<meta>`` block.

    ``video_id`` is written as ``<video-id>`` on the wire. ``seconds`` is
    the only numeric field.
    """

    source: Optional[str] = None
    title: Optional[str] = None
    language: Optional[str] = None
    generator: Optional[str] = None
    video_id: Optional[str] = None
    duration: Optional[str] = None
    seconds: Optional[Union[int, float]] = None

    def is_empty(self) -> bool:
        """True when no field has been set."""
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass
class SubtitleDocument:
    """A parsed subtitle track: optional metadata plus ordered lines."""

    metadata: Optional[SubtitleMetadata] = None
    lines: List[SubtitleLine] = field(default_factory=list)
