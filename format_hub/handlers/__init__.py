"""Handler lookup for the CLI and the HTTP API.

WHY: Neither front end should know which module converts which pair.
Both ask this module for the handler that reads the source format and
writes the target one. New handlers become visible to both by getting
an entry in HANDLERS.

HOW: HANDLERS maps handler names to handler *classes*. HandlerRegistry
instantiates and initializes every class once, then resolves a pair of
internal ids to the first handler whose own descriptors can read the
input and write the output.

RULES:
- Keys match each handler's ``name`` attribute
- Every handler listed here must be importable without side effects
- Resolution never chains handlers (no A → B → C)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from format_hub.handlers.archive import TextToArchiveHandler
from format_hub.handlers.base import FileFormat, UnsupportedConversionError
from format_hub.handlers.subtitles import SubtitleHandler

if TYPE_CHECKING:
    from format_hub.handlers.base import FormatHandler

logger = logging.getLogger(__name__)

HANDLERS: Dict[str, type[FormatHandler]] = {
    "xcc": SubtitleHandler,
    "txtToHra": TextToArchiveHandler,
}


class HandlerRegistry:
    """Initialized handler instances plus pair resolution.

    Build with ``await HandlerRegistry.create()``; the constructor alone
    does no initialization.
    """

    def __init__(self, handlers: List[FormatHandler]) -> None:
        self.handlers = handlers

    @classmethod
    async def create(cls, handlers: Optional[List[FormatHandler]] = None) -> "HandlerRegistry":
        """Instantiate (unless given) and ``init()`` every handler."""
        if handlers is None:
            handlers = [handler_cls() for handler_cls in HANDLERS.values()]
        for handler in handlers:
            await handler.init()
        logger.debug("Registry ready with %d handler(s)", len(handlers))
        return cls(handlers)

    def formats(self) -> List[Tuple[FormatHandler, FileFormat]]:
        """Every (handler, descriptor) pair, in registration order."""
        return [(h, f) for h in self.handlers for f in h.supported_formats]

    def format_for_extension(self, extension: str) -> Optional[str]:
        """Map a file extension (with or without dot) to an internal id."""
        extension = extension.lower().lstrip(".")
        for _, file_format in self.formats():
            if file_format.extension.lower() == extension:
                return file_format.internal
        return None

    def resolve(
        self,
        input_internal: str,
        output_internal: str,
    ) -> Tuple[FormatHandler, FileFormat, FileFormat]:
        """Find the handler that reads ``input_internal`` and writes ``output_internal``.

        Returns:
            The handler and its own descriptors for both formats.

        Raises:
            UnsupportedConversionError: If no single handler covers the pair.
        """
        for handler in self.handlers:
            source = handler.find_format(input_internal)
            target = handler.find_format(output_internal)
            if source is not None and target is not None and source.from_ and target.to:
                return handler, source, target
        raise UnsupportedConversionError(input_internal, output_internal)
