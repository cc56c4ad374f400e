"""Tests for convlog.pipeline.source."""

import pytest

from convlog.pipeline.source import iter_lines, resolve_files


def test_iter_lines_strips_line_endings(tmp_path):
    """LF, CRLF and lone CR all end a line and are not kept."""
    path = tmp_path / "mixed.log"
    path.write_bytes(b"first\r\nsecond\nthird\rfourth\n")

    texts = [line.text for line in iter_lines(path)]

    assert texts == ["first", "second", "third", "fourth"]


def test_iter_lines_keeps_blank_lines_and_order(tmp_path):
    path = tmp_path / "blank.log"
    path.write_text("a\n\nb\n", encoding="utf-8")

    assert [line.text for line in iter_lines(path)] == ["a", "", "b"]


def test_iter_lines_tags_source(tmp_path):
    path = tmp_path / "x.log"
    path.write_text("line\n", encoding="utf-8")

    (line,) = list(iter_lines(path))

    assert line.source_id == path.as_posix()


def test_iter_lines_missing_file_raises(tmp_path):
    """Missing file is an error, surfaced when reading starts."""
    lines = iter_lines(tmp_path / "nope.log")
    with pytest.raises(FileNotFoundError):
        next(lines)


def test_iter_lines_restartable(s3_log):
    """Each call reads the file again from the top."""
    assert list(iter_lines(s3_log)) == list(iter_lines(s3_log))


def test_resolve_files_sorted_and_recursive(s3_glob, fixtures_dir):
    files = resolve_files(s3_glob)

    assert files == [
        str(fixtures_dir / "201709" / "01" / "05" / "3022.69933758693960.log"),
        str(fixtures_dir / "201709" / "01" / "06" / "0308.70025261277880.log"),
    ]


def test_resolve_files_skips_directories(tmp_path):
    (tmp_path / "dir.log").mkdir()
    (tmp_path / "file.log").write_text("", encoding="utf-8")

    assert resolve_files(str(tmp_path / "*.log")) == [str(tmp_path / "file.log")]


def test_resolve_files_no_match(tmp_path):
    assert resolve_files(str(tmp_path / "*.log")) == []


def test_iter_lines_replaces_undecodable_bytes(tmp_path):
    """A bad byte does not stop the file; it is read as U+FFFD."""
    path = tmp_path / "bad.log"
    path.write_bytes(b"<----------\n\xff\xfe garbage\n<----------\n")

    texts = [line.text for line in iter_lines(path)]

    assert texts == ["<----------", "\ufffd\ufffd garbage", "<----------"]
