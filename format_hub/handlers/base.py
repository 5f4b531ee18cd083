"""FormatHandler contract, format descriptors, file records and errors.

WHY: The host (registry, CLI, HTTP API) must treat every handler the
same way — ask what it supports, wait until it is ready, hand it a
batch of files — without knowing how it converts. This module is that
shared contract.

HOW: FileFormat and FileData are frozen dataclasses passed across the
host/handler boundary. FormatHandler is an ABC with a two-phase
lifecycle: construct (no I/O) → ``await init()`` (populate
``supported_formats``, set ``ready``) → ``await do_convert()``. The
error hierarchy roots at ConversionError so callers can catch one type.

RULES:
- ``internal`` is the only FileFormat field used for routing
- ``do_convert`` raises HandlerNotReadyError until ``init()`` completes
- ``do_convert`` never mutates its inputs and returns new FileData
- A failure on any file aborts the batch; there are no partial results
- Subclasses implement ``build_formats()`` and ``do_convert()``

To add a new handler:
1. Create a new module in handlers/
2. Subclass FormatHandler, set ``name``
3. Implement build_formats() and do_convert()
4. Register in HANDLERS in handlers/__init__.py
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Boundary types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FileFormat:
    """Static description of one file format and a handler's access to it.

    Attributes:
        name: Human-readable label, e.g. ``"SubRip subtitle"``.
        format: Short display code, e.g. ``"SRT"``.
        extension: File extension without the dot, e.g. ``"srt"``.
        mime: MIME type, e.g. ``"application/x-subrip"``.
        from_: The owning handler can read this format.
        to: The owning handler can write this format.
        internal: Stable routing id, unique within one handler.
    """

    name: str
    format: str
    extension: str
    mime: str
    from_: bool
    to: bool
    internal: str


@dataclass(frozen=True)
class FileData:
    """A named binary payload. Immutable once produced."""

    name: str
    bytes: bytes


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ConversionError(Exception):
    """Base class for every error a handler raises from ``do_convert``."""


class HandlerNotReadyError(ConversionError):
    """Raised when ``do_convert`` is called before ``init()`` completed."""


class UnsupportedConversionError(ConversionError):
    """Raised when a handler cannot convert between the requested formats.

    Attributes:
        input_format: Display label of the requested source format.
        output_format: Display label of the requested target format.
    """

    def __init__(self, input_format: str, output_format: str, detail: str = "") -> None:
        self.input_format = input_format
        self.output_format = output_format
        message = "Unsupported conversion: {} to {}".format(input_format, output_format)
        if detail:
            message = "{} ({})".format(message, detail)
        super().__init__(message)


class InputTooLargeError(ConversionError):
    """Raised when an input file exceeds a handler's size limit."""


class DecodeError(ConversionError):
    """Raised when input bytes are not valid UTF-8 text."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def decode_text(file: FileData) -> str:
    """Decode a file's bytes as UTF-8, dropping a leading byte-order mark.

    Raises:
        DecodeError: With the file name and failing byte offset.
    """
    try:
        return file.bytes.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DecodeError(
            "{} is not valid UTF-8 text (byte {})".format(file.name, exc.start)
        ) from exc


def rename(name: str, input_format: FileFormat, output_format: FileFormat) -> str:
    """Swap a trailing source extension for the target extension.

    ``talk.XCC`` → ``talk.srt``. A name without the source extension
    keeps its full name and gets the target extension appended.
    """
    pattern = r"\.{}$".format(re.escape(input_format.extension))
    stem = re.sub(pattern, "", name, flags=re.IGNORECASE)
    return "{}.{}".format(stem, output_format.extension)


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class FormatHandler(ABC):
    """Abstract base for all format handlers.

    WHY: Handlers are discovered and driven generically by the registry.
    The contract fixes the lifecycle and the conversion call shape so
    that no host code depends on a concrete handler.

    RULES:
    - ``supported_formats`` is empty and ``ready`` is False until init()
    - ``init()`` may be awaited more than once; later calls rebuild the
      same list
    - ``do_convert`` must call ``require_route()`` before touching files
    """

    name: str = ""

    def __init__(self) -> None:
        self.supported_formats: List[FileFormat] = []
        self.ready = False

    async def init(self) -> None:
        """Populate ``supported_formats`` and mark the handler ready."""
        self.supported_formats = list(self.build_formats())
        self.ready = True
        logger.debug(
            "Handler %s ready with formats: %s",
            self.name,
            ", ".join(f.internal for f in self.supported_formats),
        )

    @abstractmethod
    def build_formats(self) -> Iterable[FileFormat]:
        """Return the descriptors this handler supports."""

    @abstractmethod
    async def do_convert(
        self,
        input_files: List[FileData],
        input_format: FileFormat,
        output_format: FileFormat,
    ) -> List[FileData]:
        """Convert a batch of files from ``input_format`` to ``output_format``.

        Args:
            input_files: Files, all in ``input_format``.
            input_format: Source descriptor; only ``internal`` routes.
            output_format: Target descriptor; only ``internal`` routes.

        Returns:
            New FileData objects in input order.

        Raises:
            HandlerNotReadyError: If ``init()`` has not completed.
            UnsupportedConversionError: If the pair is not handled.
        """

    def find_format(self, internal: str) -> Optional[FileFormat]:
        """Return this handler's own descriptor for ``internal``, or None."""
        for file_format in self.supported_formats:
            if file_format.internal == internal:
                return file_format
        return None

    def require_route(
        self,
        input_format: FileFormat,
        output_format: FileFormat,
        routes: Iterable[Tuple[str, str]],
    ) -> None:
        """Check readiness, the routing table and read/write capability.

        Raises:
            HandlerNotReadyError: If ``init()`` has not completed.
            UnsupportedConversionError: If the pair is not in ``routes``
                or the descriptors deny reading or writing.
        """
        if not self.ready:
            raise HandlerNotReadyError(
                "Handler {} used before init() completed".format(self.name)
            )

        if (input_format.internal, output_format.internal) not in set(routes):
            raise UnsupportedConversionError(input_format.format, output_format.format)

        if not input_format.from_:
            raise UnsupportedConversionError(
                input_format.format, output_format.format,
                "{} is not readable".format(input_format.format),
            )
        if not output_format.to:
            raise UnsupportedConversionError(
                input_format.format, output_format.format,
                "{} is not writable".format(output_format.format),
            )
