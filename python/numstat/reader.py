"""Numeric token reader feeding the statistics engine."""

from __future__ import annotations

import io
import logging
import math
import re
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

INITIAL_CAPACITY = 16

# Longest prefix strtod would convert: hex float, decimal, inf or nan.
_FLOAT_PREFIX = re.compile(
    r"""
    (?P<sign>[+-]?)
    (?:
        (?P<hex>0x(?:[0-9a-f]+(?:\.[0-9a-f]*)?|\.[0-9a-f]+)(?:p[+-]?\d+)?)
      | (?P<dec>(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)
      | (?P<special>inf(?:inity)?|nan(?:\([0-9a-z_]*\))?)
    )
    """,
    re.IGNORECASE | re.VERBOSE,
)

# Token separators as classified by C's isspace in the "C" locale.
_C_WHITESPACE = re.compile(r"[ \t\n\v\f\r]+")


class ReaderError(RuntimeError):
    """Base class for failures while acquiring numeric samples."""


class SampleAllocationError(ReaderError):
    """Raised when the sample buffer cannot grow."""


class InputSourceError(ReaderError):
    """Raised when the input source cannot be opened."""


class NoValidNumbersError(ReaderError):
    """Raised when an input source yields no parseable number."""


def parse_token(token: str) -> Tuple[Optional[float], str]:
    """Parse the numeric prefix of *token*.

    Returns ``(value, rest)`` where ``rest`` is the unconsumed tail of the
    token. ``value`` is ``None`` when the token does not start with a number,
    in which case ``rest`` is the whole token.
    """

    match = _FLOAT_PREFIX.match(token)
    if match is None:
        return None, token

    sign = match.group("sign")
    if match.group("hex") is not None:
        try:
            value = float.fromhex(sign + match.group("hex"))
        except OverflowError:
            value = -math.inf if sign == "-" else math.inf
    elif match.group("dec") is not None:
        value = float(sign + match.group("dec"))
    else:
        value = float(sign + match.group("special")[:3])
    return value, token[match.end():]


def iter_tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        for token in _C_WHITESPACE.split(line):
            if token:
                yield token


class SampleBuffer:
    """Growable float64 buffer that doubles its capacity when full."""

    __slots__ = ("_values", "_count")

    def __init__(self, capacity: int = INITIAL_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._values: np.ndarray = self._allocate(capacity)
        self._count: int = 0

    def __len__(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return int(self._values.shape[0])

    def append(self, value: float) -> None:
        if self._count >= self.capacity:
            self._grow()
        self._values[self._count] = value
        self._count += 1

    def values(self) -> np.ndarray:
        """Mutable view over the filled part of the buffer."""
        return self._values[: self._count]

    # ------------------------------------------------------------------
    def _grow(self) -> None:
        grown = self._allocate(self.capacity * 2)
        grown[: self._count] = self._values[: self._count]
        self._values = grown

    @staticmethod
    def _allocate(capacity: int) -> np.ndarray:
        try:
            return np.empty(capacity, dtype=np.float64)
        except MemoryError as exc:
            raise SampleAllocationError(
                f"Cannot allocate buffer for {capacity} samples"
            ) from exc


def read_numbers(stream: TextIO) -> np.ndarray:
    """Read numbers until the first non-numeric token or end of stream.

    A token such as ``12abc`` contributes its numeric prefix and ends the
    read. Trailing garbage is not an error: reading simply stops there. An empty
    array is returned when the stream starts with a bad token or holds no
    tokens at all; callers decide whether that is acceptable.
    """

    buffer = SampleBuffer()
    for token in iter_tokens(stream):
        value, rest = parse_token(token)
        if value is not None:
            buffer.append(value)
        if value is None or rest:
            logger.debug(
                "Stopped reading at %r in token %r after %d values",
                rest,
                token,
                len(buffer),
            )
            break
    return buffer.values()


@contextmanager
def open_input(path: Optional[Union[str, Path]] = None) -> Iterator[TextIO]:
    """Yield a text stream for *path*, or standard input when it is ``None``.

    Both are decoded as UTF-8 with undecodable bytes replaced, so bad bytes
    end the read like any other non-numeric token. Standard input is left
    open; a file opened here is closed on exit.
    """

    if path is None:
        binary = getattr(sys.stdin, "buffer", None)
        if binary is None:
            # Already a plain text stream (e.g. an in-memory replacement).
            yield sys.stdin
            return
        wrapper = io.TextIOWrapper(binary, encoding="utf-8", errors="replace")
        try:
            yield wrapper
        finally:
            wrapper.detach()
        return

    try:
        handle = Path(path).open("r", encoding="utf-8", errors="replace")
    except OSError as exc:
        raise InputSourceError(f"Cannot open file '{path}'") from exc
    with handle:
        yield handle


def read_samples(path: Optional[Union[str, Path]] = None) -> np.ndarray:
    """Read all leading numbers from *path* (or stdin); reject empty input."""
    with open_input(path) as stream:
        values = read_numbers(stream)
    if values.size == 0:
        raise NoValidNumbersError("No valid numbers found in input")
    logger.info("Read %d values from %s", values.size, path or "<stdin>")
    return values


__all__ = [
    "INITIAL_CAPACITY",
    "ReaderError",
    "SampleAllocationError",
    "InputSourceError",
    "NoValidNumbersError",
    "SampleBuffer",
    "parse_token",
    "iter_tokens",
    "read_numbers",
    "open_input",
    "read_samples",
]
