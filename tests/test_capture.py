import sys

import pytest

from coreason_codesubmit.capture import OutputSink


def test_write_splits_lines() -> None:
    sink = OutputSink()
    for ch in "ab\ncd":
        sink.write(ch)
    assert sink.lines == ["ab", "cd"]
    assert sink.text() == "ab\ncd"


def test_write_trailing_newline_is_not_an_empty_line() -> None:
    sink = OutputSink()
    sink.write("hello\n")
    assert sink.text() == "hello"


def test_append_and_write_keep_order() -> None:
    sink = OutputSink()
    sink.append("one")
    sink.write("two\n")
    sink.append("three")
    assert sink.lines == ["one", "two", "three"]


def test_closed_sink_drops_output() -> None:
    with OutputSink() as sink:
        sink.write("tail")
    sink.append("late")
    sink.write("later\n")
    assert sink.closed
    assert sink.lines == ["tail"]


def test_console_proxy_formats() -> None:
    sink = OutputSink()
    console = sink.console()
    console.log("a", 1, None)
    console.warn("careful")
    console.error("bad", "thing")
    assert sink.lines == ["a 1 None", "Warning: careful", "Error: bad thing"]


def test_tee_stdio_captures_and_forwards(capsys: pytest.CaptureFixture[str]) -> None:
    sink = OutputSink()
    with sink.tee_stdio():
        print("to out")
        print("to err", file=sys.stderr)
        sys.stdout.write("partial")

    captured = capsys.readouterr()
    assert "to out" in captured.out
    assert "to err" in captured.err
    assert sink.lines == ["to out", "Error: to err", "partial"]


def test_tee_stdio_restores_streams_on_error() -> None:
    before_out, before_err = sys.stdout, sys.stderr
    sink = OutputSink()
    with pytest.raises(RuntimeError):
        with sink.tee_stdio():
            assert sys.stdout is not before_out
            raise RuntimeError("boom")
    assert sys.stdout is before_out
    assert sys.stderr is before_err


def test_tee_stdio_echo_to_another_stream(capsys: pytest.CaptureFixture[str]) -> None:
    sink = OutputSink()
    with sink.tee_stdio(echo_to=sys.stderr):
        print("vm line")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "vm line" in captured.err
    assert sink.lines == ["vm line"]


def test_flush_commits_partial_line_before_append() -> None:
    sink = OutputSink()
    sink.write("x")
    sink.flush()
    sink.append("trailer")
    assert sink.lines == ["x", "trailer"]
    assert not sink.closed
