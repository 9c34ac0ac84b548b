from conftest import srt_text

from searchvid.core.models import SearchOptions
from searchvid.core.search import (
    SubtitleSearcher,
    exact_matches,
    find_subtitle_files,
    fuzzy_matches,
    search_subtitles,
)
from searchvid.core.srt_parser import SubtitleParser


def test_exact_search_single_hit_across_two_files(write_file, tmp_path):
    write_file("a/movie.srt", srt_text(["The quick brown fox", "jumps over the lazy dog"]))
    write_file("a/movie.mp4")
    write_file("b/other.srt", srt_text(["Nothing to see here", "Move along"]))

    results = search_subtitles(SearchOptions(query="BROWN", directory=str(tmp_path)))

    assert len(results) == 1
    result = results[0]
    assert result.file_path == str(tmp_path / "a" / "movie.srt")
    assert result.video_path == str(tmp_path / "a" / "movie.mp4")
    assert len(result.matches) == 1
    assert result.matches[0].subtitle.text == "The quick brown fox"
    assert result.matches[0].score is None


def test_fuzzy_search_on_empty_directory(tmp_path):
    results = search_subtitles(
        SearchOptions(query="anything", directory=str(tmp_path), exact_match=False)
    )

    assert results == []


def test_fuzzy_matches_with_empty_entries():
    assert fuzzy_matches([], "hello") == []


def test_fuzzy_search_tolerates_typos():
    entries = SubtitleParser.parse_srt_content(srt_text(["Hello there, general Kenobi", "Zzz"]))

    matches = fuzzy_matches(entries, "genral kenobi")

    assert len(matches) == 1
    assert matches[0].subtitle.text == "Hello there, general Kenobi"
    assert 0.6 <= matches[0].score <= 1.0


def test_fuzzy_matches_best_first():
    entries = SubtitleParser.parse_srt_content(
        srt_text(["the general idea", "General Kenobi", "zzz"])
    )

    matches = fuzzy_matches(entries, "general kenobi")

    assert matches[0].subtitle.text == "General Kenobi"
    assert matches[0].score == 1.0
    assert all(match.subtitle.text != "zzz" for match in matches)


def test_fuzzy_matches_ignore_short_unrelated_lines():
    entries = SubtitleParser.parse_srt_content(
        srt_text(["Wow", "Well...", "Hello!", "I know", "Completely unrelated"])
    )

    matches = fuzzy_matches(entries, "hello world")

    assert [match.subtitle.text for match in matches] == ["Hello!"]
    assert 0.6 <= matches[0].score < 1.0


def test_exact_matches_case_insensitive():
    entries = SubtitleParser.parse_srt_content(srt_text(["Hello World", "hello again", "bye"]))

    assert [match.subtitle.id for match in exact_matches(entries, "HELLO")] == [1, 2]


def test_non_recursive_search_skips_subdirectories(write_file, tmp_path):
    write_file("top.srt", srt_text(["needle"]))
    write_file("nested/deep.srt", srt_text(["needle"]))

    flat = search_subtitles(SearchOptions(query="needle", directory=str(tmp_path), recursive=False))
    deep = search_subtitles(SearchOptions(query="needle", directory=str(tmp_path)))

    assert [result.file_path for result in flat] == [str(tmp_path / "top.srt")]
    assert len(deep) == 2


def test_find_subtitle_files_filters_extensions_and_ignored_dirs(write_file, tmp_path):
    write_file("a.srt")
    write_file("b.vtt")
    write_file("c.txt")
    write_file("node_modules/pkg/d.srt")
    write_file(".git/e.srt")

    assert find_subtitle_files(str(tmp_path), ("srt", "vtt")) == [
        str(tmp_path / "a.srt"),
        str(tmp_path / "b.vtt"),
    ]
    assert find_subtitle_files(str(tmp_path), ("srt",)) == [str(tmp_path / "a.srt")]


def test_vtt_files_are_searchable(write_file, tmp_path):
    write_file("clip.vtt", "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nSearch me\n")

    results = search_subtitles(SearchOptions(query="search", directory=str(tmp_path)))

    assert len(results) == 1
    assert results[0].matches[0].subtitle.start_time_ms == 1000


def test_missing_directory_returns_empty(tmp_path):
    options = SearchOptions(query="x", directory=str(tmp_path / "missing"))

    assert search_subtitles(options) == []


def test_per_file_failure_does_not_abort(write_file, tmp_path, monkeypatch):
    write_file("bad.srt", srt_text(["needle"]))
    write_file("good.srt", srt_text(["needle"]))
    original = SubtitleParser.parse_subtitle_file

    def flaky_parse(file_path):
        if file_path.endswith("bad.srt"):
            raise RuntimeError("boom")
        return original(file_path)

    searcher = SubtitleSearcher()
    monkeypatch.setattr(searcher.parser, "parse_subtitle_file", flaky_parse)

    results = searcher.search(SearchOptions(query="needle", directory=str(tmp_path)))

    assert [result.file_path for result in results] == [str(tmp_path / "good.srt")]
