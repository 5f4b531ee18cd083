"""Timestamp separator conversion.

XCC writes ``HH:MM:SS.mmm``; SRT writes ``HH:MM:SS,mmm``. The two differ
only in the fractional separator, so conversion is a substitution on the
timestamp token itself. No time arithmetic is performed and the digits
are never re-validated.
"""

from __future__ import annotations

import re

SRT_TIMING_RE = re.compile(
    r"(\d{2}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2},\d{3})"
)


def to_comma_form(timestamp: str) -> str:
    """``00:00:01.500`` → ``00:00:01,500`` (first ``.`` only)."""
    return timestamp.replace(".", ",", 1)


def to_decimal_form(timestamp: str) -> str:
    """``00:00:01,500`` → ``00:00:01.500`` (first ``,`` only)."""
    return timestamp.replace(",", ".", 1)
