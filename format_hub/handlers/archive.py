"""Text-to-archive handler — wraps plain text in an HRA container.

WHY: A Human Readable Archive is plain text inside a fixed header and
trailer. It needs no parsing, so it is the smallest useful handler and
a second consumer of the FormatHandler contract.

HOW: Each text file is decoded, checked against the size limit, and
dropped into the template. The last extension of the name is swapped
for ``hra``.

RULES:
- Only txt → hra is routed
- Files above config.MAX_ARCHIVE_INPUT_BYTES raise InputTooLargeError
- Output: "<~= HRA File =~>\\n<= File => {name}\\n{text}'@"
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List

from format_hub import config
from format_hub.handlers.base import (
    FileData,
    FileFormat,
    FormatHandler,
    InputTooLargeError,
    decode_text,
)

logger = logging.getLogger(__name__)

_ROUTES = (("txt", "hra"),)

_HRA_TEMPLATE = "<~= HRA File =~>\n<= File => {name}\n{text}'@"

_LAST_EXTENSION_RE = re.compile(r"\.[^.]+$")


class TextToArchiveHandler(FormatHandler):
    """Handler producing Human Readable Archives from plain text."""

    name = "txtToHra"

    def build_formats(self) -> Iterable[FileFormat]:
        return [
            FileFormat(
                name="Plain Text",
                format="txt",
                extension="txt",
                mime="text/plain",
                from_=True,
                to=False,
                internal="txt",
            ),
            FileFormat(
                name="Human Readable Archive",
                format="hra",
                extension="hra",
                mime="archive/x-hra",
                from_=False,
                to=True,
                internal="hra",
            ),
        ]

    async def do_convert(
        self,
        input_files: List[FileData],
        input_format: FileFormat,
        output_format: FileFormat,
    ) -> List[FileData]:
        self.require_route(input_format, output_format, _ROUTES)

        out: List[FileData] = []
        for file in input_files:
            size = len(file.bytes)
            if size > config.MAX_ARCHIVE_INPUT_BYTES:
                raise InputTooLargeError(
                    "Input too large: {} is {} bytes (max {})".format(
                        file.name, size, config.MAX_ARCHIVE_INPUT_BYTES,
                    )
                )

            archive = _HRA_TEMPLATE.format(name=file.name, text=decode_text(file))
            if _LAST_EXTENSION_RE.search(file.name):
                new_name = _LAST_EXTENSION_RE.sub("." + output_format.extension, file.name)
            else:
                new_name = "{}.{}".format(file.name, output_format.extension)

            logger.debug("Archived %s (%d bytes) as %s", file.name, size, new_name)
            out.append(FileData(name=new_name, bytes=archive.encode("utf-8")))

        return out
