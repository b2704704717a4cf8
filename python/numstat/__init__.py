"""Descriptive statistics for whitespace separated numbers on a text stream."""

from .config import (
    DEFAULT_PRECISION,
    MAX_PRECISION,
    MIN_PRECISION,
    NumstatConfig,
    clamp_precision,
)
from .formatter import OUTPUT_FIELDS, format_json, format_text, render
from .reader import (
    InputSourceError,
    NoValidNumbersError,
    ReaderError,
    SampleAllocationError,
    SampleBuffer,
    open_input,
    parse_token,
    read_numbers,
    read_samples,
)
from .stats import Stats, compare_double, compute, percentile

__all__ = [
    "Stats",
    "compute",
    "percentile",
    "compare_double",
    "SampleBuffer",
    "parse_token",
    "read_numbers",
    "read_samples",
    "open_input",
    "ReaderError",
    "SampleAllocationError",
    "InputSourceError",
    "NoValidNumbersError",
    "OUTPUT_FIELDS",
    "format_text",
    "format_json",
    "render",
    "NumstatConfig",
    "clamp_precision",
    "DEFAULT_PRECISION",
    "MIN_PRECISION",
    "MAX_PRECISION",
]
