from searchvid.core.srt_parser import SubtitleParser

TWO_ENTRIES = """1
00:00:01,000 --> 00:00:03,000
Hello there

2
00:00:04,500 --> 00:00:06,000
General Kenobi
You are a bold one
"""


def test_parse_two_entries():
    entries = SubtitleParser.parse_srt_content(TWO_ENTRIES)

    assert len(entries) == 2
    first, second = entries
    assert first.id == 1
    assert first.start_time == "00:00:01,000"
    assert first.start_time_ms == 1000
    assert first.end_time_ms == 3000
    assert first.text == "Hello there"
    assert second.id == 2
    assert second.start_time_ms == 4500
    assert second.text == "General Kenobi\nYou are a bold one"


def test_crlf_and_extra_blank_lines():
    content = TWO_ENTRIES.replace("\n", "\r\n").replace("\r\n\r\n", "\r\n\r\n\r\n")

    entries = SubtitleParser.parse_srt_content(content)

    assert [entry.text for entry in entries] == ["Hello there", "General Kenobi\nYou are a bold one"]


def test_malformed_block_is_skipped_and_ids_renumbered():
    content = """7
00:00:01,000 --> 00:00:02,000
First

8
not a time line
Broken

9
00:00:05,000 --> 00:00:06,000
Third

10
00:00:07,000 --> 00:00:08,000
"""
    entries = SubtitleParser.parse_srt_content(content)

    assert [entry.text for entry in entries] == ["First", "Third"]
    assert [entry.id for entry in entries] == [1, 2]
    assert entries[1].start_time_ms == 5000


def test_empty_content():
    assert SubtitleParser.parse_srt_content("") == []
    assert SubtitleParser.parse_srt_content("\n\n\n") == []


def test_parse_vtt_content():
    content = """WEBVTT

NOTE this is a comment

intro
00:01.500 --> 00:03.000 align:start
Hello from VTT

01:00:00.250 --> 01:00:02.000
Second cue
"""
    entries = SubtitleParser.parse_vtt_content(content)

    assert len(entries) == 2
    assert entries[0].start_time == "00:00:01,500"
    assert entries[0].start_time_ms == 1500
    assert entries[0].text == "Hello from VTT"
    assert entries[1].start_time_ms == 3600250
    assert entries[1].id == 2


def test_normalize_vtt_timestamp():
    assert SubtitleParser.normalize_vtt_timestamp("01:02.5") == "00:01:02,500"
    assert SubtitleParser.normalize_vtt_timestamp("1:02:03.456") == "01:02:03,456"
    assert SubtitleParser.normalize_vtt_timestamp("bad") == "00:00:00,000"


def test_parse_content_dispatches_on_extension_and_header():
    vtt = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nCue\n"

    assert len(SubtitleParser.parse_content(vtt, "clip.vtt")) == 1
    assert len(SubtitleParser.parse_content(vtt, "clip.srt")) == 1
    assert SubtitleParser.parse_content(TWO_ENTRIES, "clip.srt")[0].text == "Hello there"


def test_parse_subtitle_file_with_latin1(tmp_path):
    path = tmp_path / "accents.srt"
    path.write_bytes("1\n00:00:01,000 --> 00:00:02,000\nCaf\xe9 cr\xe8me\n".encode("latin-1"))

    entries = SubtitleParser.parse_subtitle_file(str(path))

    assert len(entries) == 1
    assert entries[0].text.startswith("Caf")


def test_parse_missing_file_returns_empty(tmp_path):
    assert SubtitleParser.parse_subtitle_file(str(tmp_path / "missing.srt")) == []


def test_bytes_invalid_in_utf8_and_cp1252_fall_back_to_latin1(tmp_path):
    path = tmp_path / "odd.srt"
    path.write_bytes(b"1\n00:00:01,000 --> 00:00:02,000\nodd \x81 byte\n")

    entries = SubtitleParser.parse_subtitle_file(str(path))

    assert [entry.text for entry in entries] == ["odd \x81 byte"]


def test_form_feed_and_line_separator_stay_in_text():
    content = "1\n00:00:01,000 --> 00:00:02,000\npage\x0cbreak and\u2028separator\n"

    entries = SubtitleParser.parse_srt_content(content)

    assert len(entries) == 1
    assert entries[0].text == "page\x0cbreak and\u2028separator"
