"""Unit tests for the XCC and SRT parsers and serializers.

WHY: The parsers decide which lines survive a conversion and what their
text looks like; the serializers decide whether the output opens in a
player at all. Both are lenient in specific, deliberate ways that must
not drift.

HOW: Tests parse the shared samples from conftest.py and compose small
hand-built line lists, asserting on exact output strings.

RULES:
- Malformed entries are expected to be skipped, never raised
- The escape/unescape asymmetry is asserted as current behavior
- Tag stripping is asserted to be single-pass (nested tags survive)
"""

import math

from format_hub import config
from format_hub.core.document import SubtitleLine, SubtitleMetadata, TextPosition
from format_hub.core.markup import escape_xml, parse_int_prefix, strip_formatting
from format_hub.core.timestamps import to_comma_form, to_decimal_form
from format_hub.formats.srt import compose_srt, parse_srt
from format_hub.formats.xcc import compose_xcc, parse_xcc

from conftest import SAMPLE_SRT, SAMPLE_XCC


# =========================================================================
# XCC parsing
# =========================================================================

class TestParseXCC:
    """parse_xcc() metadata extraction and line scanning."""

    def test_metadata_fields(self):
        metadata = parse_xcc(SAMPLE_XCC).metadata
        assert metadata.source == "youtube"
        assert metadata.title == "Opening Night"
        assert metadata.language == "en"
        assert metadata.generator == "caption-tool 2.1"
        assert metadata.video_id == "dQw4w9WgXcQ"
        assert metadata.duration == "00:03:32"
        assert metadata.seconds == 212

    def test_absent_metadata_fields_are_none(self):
        doc = parse_xcc("<meta><title>Only</title></meta>")
        assert doc.metadata.title == "Only"
        assert doc.metadata.source is None
        assert doc.metadata.seconds is None

    def test_no_meta_block_gives_empty_metadata(self):
        doc = parse_xcc("<subtitles></subtitles>")
        assert doc.metadata.is_empty()
        assert doc.lines == []

    def test_non_numeric_seconds_is_nan(self):
        doc = parse_xcc("<meta><seconds>abc</seconds></meta>")
        assert math.isnan(doc.metadata.seconds)

    def test_seconds_leading_digits(self):
        doc = parse_xcc("<meta><seconds>90s</seconds></meta>")
        assert doc.metadata.seconds == 90

    def test_incomplete_line_is_dropped(self):
        """The line without <end> is skipped; the other three survive in order."""
        lines = parse_xcc(SAMPLE_XCC).lines
        assert [line.start for line in lines] == ["00:00:01.000", "00:00:04.500", "00:00:08.000"]

    def test_textpos(self):
        lines = parse_xcc(SAMPLE_XCC).lines
        assert lines[0].textpos == TextPosition(x=120, y=640)
        assert lines[1].textpos is None

    def test_formatting_stripped_and_trimmed(self):
        lines = parse_xcc(SAMPLE_XCC).lines
        assert lines[0].text == "Hello world"
        assert lines[1].text == "Red and italic"
        assert lines[2].text == "Last line"

    def test_multiline_text(self):
        doc = parse_xcc("<line><start>a</start><end>b</end><text>one\ntwo</text></line>")
        assert doc.lines[0].text == "one\ntwo"

    def test_entities_not_unescaped(self):
        doc = parse_xcc(
            "<line><start>a</start><end>b</end><text>Tom &amp; Jerry &lt;3</text></line>"
        )
        assert doc.lines[0].text == "Tom &amp; Jerry &lt;3"


class TestStripFormatting:
    """strip_formatting() single-pass behavior."""

    def test_all_supported_tags(self):
        text = "<u>u</u><s>s</s><sub>2</sub><sup>3</sup>"
        assert strip_formatting(text) == "us23"

    def test_nested_same_tag_not_fully_unwound(self):
        assert strip_formatting("<b>a <b>b</b> c</b>") == "a <b>b c</b>"

    def test_unknown_tags_kept(self):
        assert strip_formatting("<em>x</em>") == "<em>x</em>"


# =========================================================================
# XCC serialization
# =========================================================================

class TestComposeXCC:
    """compose_xcc() metadata block, lines and escaping."""

    def test_header_and_namespace(self):
        out = compose_xcc([])
        assert out.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        assert '<xcc xmlns="{}">'.format(config.XCC_NAMESPACE) in out
        assert out.endswith("  </subtitles>\n</xcc>\n")

    def test_default_metadata_when_none(self):
        out = compose_xcc([], None)
        assert "    <source>{}</source>\n".format(config.DEFAULT_SOURCE) in out
        assert "    <language>{}</language>\n".format(config.DEFAULT_LANGUAGE) in out
        assert "    <generator>{}</generator>\n".format(config.GENERATOR_NAME) in out

    def test_default_metadata_when_empty(self):
        out = compose_xcc([], SubtitleMetadata())
        assert "<source>{}</source>".format(config.DEFAULT_SOURCE) in out

    def test_only_present_fields_written(self):
        out = compose_xcc([], SubtitleMetadata(title="Film", seconds=0))
        assert "    <title>Film</title>\n" in out
        assert "    <seconds>0</seconds>\n" in out
        assert "<source>" not in out
        assert "<language>" not in out

    def test_empty_video_id_is_written(self):
        out = compose_xcc([], SubtitleMetadata(video_id="", title=""))
        assert "<video-id></video-id>" in out
        assert "<title>" not in out

    def test_nan_seconds(self):
        out = compose_xcc([], SubtitleMetadata(seconds=math.nan))
        assert "<seconds>NaN</seconds>" in out

    def test_line_layout(self):
        lines = [
            SubtitleLine("00:00:01.000", "00:00:02.000", "Hi", TextPosition(1, 2)),
            SubtitleLine("00:00:03.000", "00:00:04.000", "There"),
        ]
        out = compose_xcc(lines)
        assert (
            "    <line>\n"
            "      <start>00:00:01.000</start>\n"
            "      <end>00:00:02.000</end>\n"
            '      <textpos x="1" y="2"/>\n'
            "      <text>Hi</text>\n"
            "    </line>\n"
        ) in out
        assert "<textpos" not in out.split("There")[0].split("00:00:03.000")[1]

    def test_every_special_character_escaped(self):
        text = "Tom & \"Jerry\" <3 'x'>"
        out = compose_xcc([SubtitleLine("a", "b", text)])
        assert "<text>Tom &amp; &quot;Jerry&quot; &lt;3 &apos;x&apos;&gt;</text>" in out

    def test_escape_then_parse_keeps_entities(self):
        """Serializer escapes, parser does not unescape: text grows an &amp;."""
        out = compose_xcc([SubtitleLine("a", "b", "A & B")])
        assert parse_xcc(out).lines[0].text == "A &amp; B"

    def test_metadata_values_escaped(self):
        out = compose_xcc([], SubtitleMetadata(title="Q&A <live>"))
        assert "<title>Q&amp;A &lt;live&gt;</title>" in out


class TestEscapeXML:

    def test_ampersand_not_double_escaped(self):
        assert escape_xml("&lt;") == "&amp;lt;"


# =========================================================================
# SRT parsing
# =========================================================================

class TestParseSRT:
    """parse_srt() block splitting and leniency."""

    def test_recovers_each_well_formed_block(self):
        lines = parse_srt(SAMPLE_SRT).lines
        assert len(lines) == 3
        assert [line.text for line in lines] == ["Hello world", "Two lines\nof text", "Final"]

    def test_timestamps_converted_to_decimal_form(self):
        line = parse_srt(SAMPLE_SRT).lines[1]
        assert line.start == "00:00:04.500"
        assert line.end == "00:00:06.250"

    def test_no_metadata(self):
        assert parse_srt(SAMPLE_SRT).metadata is None

    def test_index_not_validated(self):
        doc = parse_srt("99\n00:00:01,000 --> 00:00:02,000\nx\n")
        assert len(doc.lines) == 1

    def test_two_line_block_skipped(self):
        doc = parse_srt("1\n00:00:01,000 --> 00:00:02,000\n\n2\n00:00:03,000 --> 00:00:04,000\nkept")
        assert [line.text for line in doc.lines] == ["kept"]

    def test_crlf_line_endings(self):
        doc = parse_srt("1\r\n00:00:01,000 --> 00:00:02,000\r\nHello\r\n\r\n")
        assert doc.lines[0].text == "Hello"

    def test_arrow_without_spaces(self):
        doc = parse_srt("1\n00:00:01,000-->00:00:02,000\nx")
        assert doc.lines[0].end == "00:00:02.000"

    def test_empty_input(self):
        assert parse_srt("").lines == []


# =========================================================================
# SRT serialization
# =========================================================================

class TestComposeSRT:
    """compose_srt() numbering and timestamp conversion."""

    def test_single_block(self):
        out = compose_srt([SubtitleLine("00:00:01.000", "00:00:03.000", "Hello world")])
        assert out == "1\n00:00:01,000 --> 00:00:03,000\nHello world\n\n"

    def test_sequential_numbering(self):
        lines = [SubtitleLine("00:00:0{}.000".format(i), "00:00:0{}.500".format(i), "t") for i in range(3)]
        out = compose_srt(lines)
        assert [block.split("\n")[0] for block in out.strip().split("\n\n")] == ["1", "2", "3"]

    def test_text_periods_untouched(self):
        out = compose_srt([SubtitleLine("00:00:01.000", "00:00:02.000", "Wait. What.")])
        assert "Wait. What." in out

    def test_empty(self):
        assert compose_srt([]) == ""


class TestTimestamps:

    def test_only_separator_changes(self):
        for stamp in ("00:00:00.000", "01:23:45.678", "99:59:59.999"):
            converted = to_comma_form(stamp)
            assert converted == stamp[:8] + "," + stamp[9:]
            assert to_decimal_form(converted) == stamp

    def test_first_separator_only(self):
        assert to_comma_form("1.2.3") == "1,2.3"

    def test_no_separator_unchanged(self):
        assert to_comma_form("00:00:01") == "00:00:01"


class TestParseIntPrefix:

    def test_values(self):
        assert parse_int_prefix("42") == 42
        assert parse_int_prefix(" -7x") == -7
        assert math.isnan(parse_int_prefix(""))
