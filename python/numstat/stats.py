"""Descriptive statistics over a fully materialised sample sequence."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from functools import cmp_to_key
from typing import Dict, Iterator, MutableSequence, Optional, Sequence, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Stats:
    """Snapshot of the statistics derived from one sample sequence.

    ``variance`` is the population variance (divided by ``count``).
    """

    count: int
    sum: float
    mean: float
    min: float
    max: float
    range: float
    median: float
    q1: float
    q3: float
    variance: float
    stddev: float

    def to_dict(self) -> Dict[str, Number]:
        return asdict(self)


def compare_double(a: float, b: float) -> int:
    """Three-way comparison from the sign of ``a - b``.

    Pairs whose difference is NaN (NaN operands, or equal infinities)
    compare as equal.
    """
    diff = a - b
    return int(diff > 0) - int(diff < 0)


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """Linear-interpolation percentile (R-7) of an ascending sequence."""
    count = len(sorted_values)
    if count == 0:
        return 0.0
    if count == 1:
        return float(sorted_values[0])

    index = p * (count - 1)
    lower = int(index)
    upper = lower + 1
    if upper >= count:
        return float(sorted_values[count - 1])

    weight = index - lower
    return float(sorted_values[lower] * (1 - weight) + sorted_values[upper] * weight)


def _terms(samples: Sequence[float], center: Optional[float]) -> Iterator[float]:
    if center is None:
        return iter(samples)
    return ((value - center) * (value - center) for value in samples)


def _sum(samples: Sequence[float], center: Optional[float] = None) -> float:
    """Sum *samples*, or their squared deviations from *center*."""
    try:
        return math.fsum(_terms(samples, center))
    except (OverflowError, ValueError):
        # fsum rejects intermediate overflow and inf + -inf; plain IEEE
        # addition yields inf or nan for those inputs instead.
        total = 0.0
        for term in _terms(samples, center):
            total += term
        return float(total)


def compute(samples: MutableSequence[float]) -> Stats:
    """Derive :class:`Stats` from *samples*, sorting them in place.

    ``samples`` may be a list or a one-dimensional numpy array.
    """

    count = len(samples)
    if count == 0:
        raise ValueError("compute() requires at least one sample")

    total = _sum(samples)
    lowest = highest = samples[0]
    for value in samples:
        if value < lowest:
            lowest = value
        if value > highest:
            highest = value

    mean = total / count
    variance = _sum(samples, center=mean) / count

    key = cmp_to_key(compare_double)
    if isinstance(samples, list):
        samples.sort(key=key)
    else:
        samples[:] = sorted(samples, key=key)

    return Stats(
        count=count,
        sum=total,
        mean=mean,
        min=float(lowest),
        max=float(highest),
        range=float(highest - lowest),
        median=percentile(samples, 0.50),
        q1=percentile(samples, 0.25),
        q3=percentile(samples, 0.75),
        variance=variance,
        stddev=math.sqrt(variance),
    )


__all__ = ["Stats", "compare_double", "percentile", "compute"]
