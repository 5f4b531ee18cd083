"""Subtitle handler — XCC ⇄ SRT conversion.

WHY: XCC and SRT describe the same timed text with different timestamp
separators, metadata and markup. This handler is the bridge: it parses
one into the shared SubtitleDocument and serializes the other.

HOW: Routing is a table keyed on ``(input.internal, output.internal)``.
Cross-format pairs parse then compose; same-format pairs return the
input bytes untouched without parsing.

RULES:
- Four routes only: xcc→srt, srt→xcc, xcc→xcc, srt→srt
- Anything else raises UnsupportedConversionError before any file is read
- XCC → SRT drops metadata and textpos (SRT cannot carry them)
- SRT → XCC writes the handler's ``metadata`` if one was given,
  otherwise the configured default block
- Passthrough keeps the original file name and bytes
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from format_hub.core.document import SubtitleMetadata
from format_hub.formats.srt import compose_srt, parse_srt
from format_hub.formats.xcc import compose_xcc, parse_xcc
from format_hub.handlers.base import (
    FileData,
    FileFormat,
    FormatHandler,
    decode_text,
    rename,
)

logger = logging.getLogger(__name__)

XCC = "xcc"
SRT = "srt"

_ROUTES = (
    (XCC, SRT),
    (SRT, XCC),
    (XCC, XCC),
    (SRT, SRT),
)


class SubtitleHandler(FormatHandler):
    """Handler for XML Closed Captions and SubRip subtitles.

    Args:
        metadata: Metadata to write when producing XCC from SRT. SRT has
                  no metadata of its own, so without this the default
                  block is written.
    """

    name = "xcc"

    def __init__(self, metadata: Optional[SubtitleMetadata] = None) -> None:
        super().__init__()
        self.metadata = metadata

    def build_formats(self) -> Iterable[FileFormat]:
        return [
            FileFormat(
                name="XML Closed Captions subtitle",
                format="XCC",
                extension="xcc",
                mime="text/x-xcc",
                from_=True,
                to=True,
                internal=XCC,
            ),
            FileFormat(
                name="SubRip subtitle",
                format="SRT",
                extension="srt",
                mime="application/x-subrip",
                from_=True,
                to=True,
                internal=SRT,
            ),
        ]

    async def do_convert(
        self,
        input_files: List[FileData],
        input_format: FileFormat,
        output_format: FileFormat,
    ) -> List[FileData]:
        self.require_route(input_format, output_format, _ROUTES)
        logger.info(
            "Converting %d file(s) %s -> %s",
            len(input_files), input_format.format, output_format.format,
        )
        return [self._convert_one(f, input_format, output_format) for f in input_files]

    def _convert_one(
        self,
        file: FileData,
        input_format: FileFormat,
        output_format: FileFormat,
    ) -> FileData:
        source = input_format.internal
        target = output_format.internal

        if source == target:
            return FileData(name=file.name, bytes=bytes(file.bytes))

        text = decode_text(file)
        if source == XCC:
            document = parse_xcc(text)
            output = compose_srt(document.lines)
        else:
            document = parse_srt(text)
            output = compose_xcc(document.lines, self.metadata)

        logger.debug("%s: %d subtitle line(s)", file.name, len(document.lines))
        return FileData(
            name=rename(file.name, input_format, output_format),
            bytes=output.encode("utf-8"),
        )
