"""Runtime options for the numstat command."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 4
MIN_PRECISION = 0
MAX_PRECISION = 10

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class NumstatConfig:
    json_output: bool = False
    precision: int = DEFAULT_PRECISION
    # None reads from standard input.
    input_file: Optional[Path] = None


def clamp_precision(value: int) -> int:
    """Return *value* if it is a supported precision, else the default.

    Out-of-range values are a recoverable mistake: a warning is logged and
    :data:`DEFAULT_PRECISION` is used instead.
    """

    if MIN_PRECISION <= value <= MAX_PRECISION:
        return value
    logger.warning(
        "Precision should be between %d and %d. Using default (%d).",
        MIN_PRECISION,
        MAX_PRECISION,
        DEFAULT_PRECISION,
    )
    return DEFAULT_PRECISION


__all__ = [
    "DEFAULT_PRECISION",
    "MIN_PRECISION",
    "MAX_PRECISION",
    "LOG_LEVELS",
    "NumstatConfig",
    "clamp_precision",
]
