"""Shared test fixtures for the format_hub test suite.

WHY: Handler, format, CLI and API tests all need the same small XCC and
SRT samples and the same format descriptors. Centralizing them here
keeps every test module looking at identical input.

HOW: Plain module constants hold the sample documents; pytest fixtures
hand out descriptors and initialized handlers.

RULES:
- SAMPLE_XCC has metadata, a textpos, inline tags and one broken line
- SAMPLE_SRT has irregular blank-line gaps and one block without timing
- Handler fixtures are already initialized (``ready`` is True)
"""

import asyncio

import pytest

from format_hub.handlers.archive import TextToArchiveHandler
from format_hub.handlers.base import FileFormat
from format_hub.handlers.subtitles import SubtitleHandler


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

SAMPLE_XCC = """<?xml version="1.0" encoding="UTF-8"?>
<xcc xmlns="https://www.mihaipopa.com/2025/xcc">

  <meta>
    <source>youtube</source>
    <title>Opening Night</title>
    <language>en</language>
    <generator>caption-tool 2.1</generator>
    <video-id>dQw4w9WgXcQ</video-id>
    <duration>00:03:32</duration>
    <seconds>212</seconds>
  </meta>

  <subtitles>
    <line>
      <start>00:00:01.000</start>
      <end>00:00:03.000</end>
      <textpos x="120" y="640"/>
      <text>Hello <b>world</b></text>
    </line>
    <line>
      <start>00:00:04.500</start>
      <end>00:00:06.250</end>
      <text><font color="#ff0000">Red</font> and <i>italic</i></text>
    </line>
    <line>
      <start>00:00:07.000</start>
      <text>No end timestamp, dropped</text>
    </line>
    <line>
      <start>00:00:08.000</start>
      <end>00:00:09.000</end>
      <text>  Last line  </text>
    </line>
  </subtitles>
</xcc>
"""

SAMPLE_SRT = """1
00:00:01,000 --> 00:00:03,000
Hello world


2
00:00:04,500 --> 00:00:06,250
Two lines
of text

3
not a timing line
Skipped block



4
00:01:00,000 --> 00:01:02,000
Final
"""


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

XCC_FORMAT = FileFormat(
    name="XML Closed Captions subtitle",
    format="XCC",
    extension="xcc",
    mime="text/x-xcc",
    from_=True,
    to=True,
    internal="xcc",
)

SRT_FORMAT = FileFormat(
    name="SubRip subtitle",
    format="SRT",
    extension="srt",
    mime="application/x-subrip",
    from_=True,
    to=True,
    internal="srt",
)

PNG_FORMAT = FileFormat(
    name="Portable Network Graphics",
    format="PNG",
    extension="png",
    mime="image/png",
    from_=True,
    to=True,
    internal="png",
)


@pytest.fixture
def xcc_format():
    return XCC_FORMAT


@pytest.fixture
def srt_format():
    return SRT_FORMAT


@pytest.fixture
def png_format():
    return PNG_FORMAT


@pytest.fixture
def subtitle_handler():
    """An initialized SubtitleHandler with no extra metadata."""
    handler = SubtitleHandler()
    asyncio.run(handler.init())
    return handler


@pytest.fixture
def archive_handler():
    """An initialized TextToArchiveHandler."""
    handler = TextToArchiveHandler()
    asyncio.run(handler.init())
    return handler
