"""Subtitle wire formats.

WHY: Each subtitle format has its own syntax but produces and consumes
the same SubtitleDocument, so handlers can pair any parser with any
serializer.

HOW: One module per format, each exposing ``parse_<fmt>`` and
``compose_<fmt>``.

RULES:
- Parsers are lenient: malformed entries are skipped, never raised
- Serializers never mutate the lines they are given
"""

from format_hub.formats.srt import compose_srt, parse_srt
from format_hub.formats.xcc import compose_xcc, parse_xcc

__all__ = ["compose_srt", "compose_xcc", "parse_srt", "parse_xcc"]
