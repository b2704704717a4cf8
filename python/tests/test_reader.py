from __future__ import annotations

import io
import math

import numpy as np
import pytest

from numstat import reader
from numstat.reader import (
    InputSourceError,
    NoValidNumbersError,
    SampleAllocationError,
    SampleBuffer,
    iter_tokens,
    open_input,
    parse_token,
    read_numbers,
    read_samples,
)


def _raise_memory_error(*args, **kwargs):
    raise MemoryError


@pytest.mark.parametrize(
    "token, expected",
    [
        ("3.5", 3.5),
        ("-1e3", -1000.0),
        ("+2", 2.0),
        (".5", 0.5),
        ("5.", 5.0),
        ("1E-2", 0.01),
        ("-inf", -math.inf),
        ("Infinity", math.inf),
        ("0x10", 16.0),
        ("-0x1.8p1", -3.0),
        ("0X.8", 0.5),
    ],
)
def test_parse_token_accepts_numbers(token, expected):
    assert parse_token(token) == (expected, "")


@pytest.mark.parametrize("token", ["NaN", "nan(0x7ff)"])
def test_parse_token_accepts_nan(token):
    value, rest = parse_token(token)
    assert value is not None and math.isnan(value)
    assert rest == ""


@pytest.mark.parametrize("token", ["abc", "--1", "", ".", "-", "e5", "x1"])
def test_parse_token_rejects_tokens_without_numeric_prefix(token):
    assert parse_token(token) == (None, token)


@pytest.mark.parametrize(
    "token, expected, rest",
    [
        ("12abc", 12.0, "abc"),
        ("1,2,3", 1.0, ",2,3"),
        ("1_000", 1.0, "_000"),
        ("1e", 1.0, "e"),
        ("0x", 0.0, "x"),
        ("0x1fg", 31.0, "g"),
        ("infix", math.inf, "ix"),
        ("2.5%", 2.5, "%"),
    ],
)
def test_parse_token_returns_numeric_prefix(token, expected, rest):
    assert parse_token(token) == (expected, rest)


def test_parse_token_hex_overflow_is_infinite():
    assert parse_token("-0x1p99999") == (-math.inf, "")


def test_iter_tokens_splits_on_any_whitespace():
    stream = io.StringIO("1  2\t3\n\n  4\r\n")
    assert list(iter_tokens(stream)) == ["1", "2", "3", "4"]


def test_iter_tokens_uses_c_whitespace_only():
    stream = io.StringIO("1\v2\f3 4\u00a05\x1c6\n")
    assert list(iter_tokens(stream)) == ["1", "2", "3", "4\u00a05\x1c6"]


def test_read_numbers_collects_all_values():
    values = read_numbers(io.StringIO("1 2\n3\t4.5\n-6e1\n"))
    assert values.dtype == np.float64
    np.testing.assert_array_equal(values, [1.0, 2.0, 3.0, 4.5, -60.0])


def test_read_numbers_stops_at_first_bad_token():
    stream = io.StringIO("1 2 oops 3\nbad\n4\n")
    values = read_numbers(stream)

    np.testing.assert_array_equal(values, [1.0, 2.0])
    # Lines after the one holding the bad token are never consumed.
    assert stream.read() == "bad\n4\n"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1,2,3\n", [1.0]),
        ("4 5 12abc 7\n", [4.0, 5.0, 12.0]),
        ("0x10 2\n", [16.0, 2.0]),
        ("3\u00a04 5\n", [3.0]),
    ],
)
def test_read_numbers_keeps_prefix_of_partly_numeric_token(text, expected):
    np.testing.assert_array_equal(read_numbers(io.StringIO(text)), expected)


@pytest.mark.parametrize("text", ["", "   \n\t\n", "garbage 1 2 3"])
def test_read_numbers_returns_empty_without_leading_number(text):
    assert read_numbers(io.StringIO(text)).size == 0


def test_sample_buffer_doubles_capacity():
    buffer = SampleBuffer()
    assert buffer.capacity == reader.INITIAL_CAPACITY

    for value in range(100):
        buffer.append(float(value))

    assert len(buffer) == 100
    assert buffer.capacity == 128
    np.testing.assert_array_equal(buffer.values(), np.arange(100, dtype=float))


def test_sample_buffer_values_is_a_mutable_view():
    buffer = SampleBuffer(capacity=2)
    buffer.append(2.0)
    buffer.append(1.0)
    view = buffer.values()
    view[:] = [1.0, 2.0]
    np.testing.assert_array_equal(buffer.values(), [1.0, 2.0])


def test_sample_buffer_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        SampleBuffer(capacity=0)


def test_sample_buffer_allocation_failure(monkeypatch):
    monkeypatch.setattr(reader.np, "empty", _raise_memory_error)
    with pytest.raises(SampleAllocationError):
        SampleBuffer()


def test_sample_buffer_growth_failure(monkeypatch):
    buffer = SampleBuffer(capacity=1)
    buffer.append(1.0)

    monkeypatch.setattr(reader.np, "empty", _raise_memory_error)
    with pytest.raises(SampleAllocationError):
        buffer.append(2.0)
    assert len(buffer) == 1


def test_open_input_defaults_to_stdin(monkeypatch):
    fake_stdin = io.StringIO("1 2 3")
    monkeypatch.setattr("sys.stdin", fake_stdin)

    with open_input() as stream:
        assert stream is fake_stdin
    assert not fake_stdin.closed


def test_open_input_replaces_undecodable_stdin_bytes(monkeypatch):
    raw = io.BytesIO(b"1 2 3 \xff garbage\n")
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(raw, encoding="utf-8"))

    np.testing.assert_array_equal(read_samples(), [1.0, 2.0, 3.0])
    # The wrapper is detached, so the underlying stdin stays usable.
    assert not raw.closed


def test_read_samples_replaces_undecodable_file_bytes(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"4 5 \xff 6\n")

    np.testing.assert_array_equal(read_samples(path), [4.0, 5.0])


def test_open_input_closes_files(tmp_path):
    path = tmp_path / "values.txt"
    path.write_text("1 2 3\n", encoding="utf-8")

    with open_input(path) as stream:
        np.testing.assert_array_equal(read_numbers(stream), [1.0, 2.0, 3.0])
    assert stream.closed


def test_open_input_missing_file(tmp_path):
    with pytest.raises(InputSourceError, match="Cannot open file"):
        with open_input(tmp_path / "missing.txt"):
            pass


def test_read_samples_rejects_input_without_numbers(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("no numbers here\n", encoding="utf-8")

    with pytest.raises(NoValidNumbersError, match="No valid numbers found in input"):
        read_samples(path)


def test_read_samples_from_file(tmp_path):
    path = tmp_path / "values.txt"
    path.write_text("10 20\n30 end\n", encoding="utf-8")

    np.testing.assert_array_equal(read_samples(path), [10.0, 20.0, 30.0])
