"""Tests for TEXT escaping and line folding."""

import pytest

from calfeed.output.text import (
    content_line,
    escape_text,
    fold_line,
    join_lines,
    unescape_text,
    unfold_lines,
)


def test_escape_special_characters():
    assert escape_text("a,b;c\\d\ne") == r"a\,b\;c\\d\ne"


def test_escape_backslash_first_avoids_double_escaping():
    """An existing comma escape is treated as a literal backslash and comma."""
    assert escape_text("\\,") == r"\\\,"


def test_escape_strips_bare_carriage_returns():
    assert escape_text("one\r\ntwo\rthree") == r"one\ntwothree"


def test_escape_round_trip():
    title = "Budget, Q1; review \\ notes\nsecond line"
    assert unescape_text(escape_text(title)) == title


def test_unescape_accepts_uppercase_newline():
    assert unescape_text(r"a\Nb") == "a\nb"


def test_short_line_not_folded():
    line = "SUMMARY:Short"
    assert fold_line(line) == line


def test_fold_exactly_75_octets_not_folded():
    line = "X" * 75
    assert fold_line(line) == line


def test_fold_long_ascii_description():
    """A 200-character description folds into ≤75-octet segments and unfolds exactly."""
    text = "".join(chr(ord("a") + i % 26) for i in range(200))
    line = f"DESCRIPTION:{text}"

    folded = fold_line(line)
    segments = folded.split("\r\n")

    assert len(segments) == 3
    assert all(len(s.encode("utf-8")) <= 75 for s in segments)
    assert all(s.startswith(" ") for s in segments[1:])
    assert segments[0] + "".join(s[1:] for s in segments[1:]) == line


def test_fold_never_splits_multibyte_characters():
    line = "SUMMARY:" + "é" * 60 + "日本語" * 10
    folded = fold_line(line)
    segments = folded.split("\r\n")

    assert len(segments) > 1
    for segment in segments:
        assert len(segment.encode("utf-8")) <= 75
        segment.encode("utf-8").decode("utf-8")
    assert unfold_lines(folded + "\r\n") == [line]


def test_fold_rejects_embedded_line_breaks():
    with pytest.raises(ValueError):
        fold_line("SUMMARY:a\nb")


def test_content_line_escapes_text_properties_only():
    assert content_line("SUMMARY", "a,b") == r"SUMMARY:a\,b"
    assert content_line("LOCATION", "Room 1; Floor 2") == r"LOCATION:Room 1\; Floor 2"
    assert content_line("UID", "event-1,2@example.org") == "UID:event-1,2@example.org"
    assert content_line("DTSTART", "20250601", params="VALUE=DATE") == "DTSTART;VALUE=DATE:20250601"


def test_join_lines_folds_each_line_independently():
    lines = ["SUMMARY:" + "a" * 80, "LOCATION:short"]
    document = join_lines(lines)

    assert document.endswith("\r\n")
    assert unfold_lines(document) == lines
    # The second property starts on its own physical line
    assert "\r\nLOCATION:short\r\n" in document
