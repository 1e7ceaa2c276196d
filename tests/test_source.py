import io
import sys

import pytest

from linerate.source.reader import FileSource, ReadOutcome, StdinSource, StreamSource, open_source


def read_all(src):
    outcomes = []
    while True:
        outcome = src.read_line()
        if outcome.is_eof:
            return outcomes
        outcomes.append(outcome)


def test_lines_keep_terminators():
    outcomes = read_all(StreamSource(io.BytesIO(b"a\nb\n")))
    assert [o.line for o in outcomes] == ["a\n", "b\n"]


def test_empty_line_is_a_line():
    outcomes = read_all(StreamSource(io.BytesIO(b"\n\n")))
    assert [o.line for o in outcomes] == ["\n", "\n"]


def test_last_line_without_newline():
    outcomes = read_all(StreamSource(io.BytesIO(b"a\nb")))
    assert [o.line for o in outcomes] == ["a\n", "b"]


def test_empty_stream_is_eof():
    assert StreamSource(io.BytesIO(b"")).read_line().is_eof


def test_invalid_utf8_fails_and_reading_continues():
    outcomes = read_all(StreamSource(io.BytesIO(b"ok\n\xff\xfe\nafter\n")))
    assert outcomes[0].line == "ok\n"
    assert outcomes[1].line is None
    assert isinstance(outcomes[1].error, UnicodeDecodeError)
    assert outcomes[1].raw == b"\xff\xfe\n"
    assert outcomes[2].line == "after\n"


def test_outcome_tags():
    assert ReadOutcome.eof().is_eof
    assert not ReadOutcome.ok("").is_eof
    assert not ReadOutcome.failed(ValueError("x")).is_eof


def test_open_source_dash_is_stdin():
    assert isinstance(open_source("-"), StdinSource)


def test_open_source_path_is_file(tmp_path):
    path = tmp_path / "in.txt"
    path.write_bytes(b"1\n")
    with open_source(str(path)) as src:
        assert isinstance(src, FileSource)
        assert src.read_line().line == "1\n"
        assert src.read_line().is_eof


def test_open_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        open_source(str(tmp_path / "missing.txt"))


def test_stdin_source_does_not_close_stdin(monkeypatch):
    fake = io.TextIOWrapper(io.BytesIO(b"x\n"))
    monkeypatch.setattr(sys, "stdin", fake)
    with StdinSource() as src:
        assert src.read_line().line == "x\n"
    assert not fake.buffer.closed
