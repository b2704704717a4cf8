"""Text and JSON renderers for :class:`~numstat.stats.Stats`."""

from __future__ import annotations

import math
from typing import List, Tuple

from .stats import Stats

OUTPUT_FIELDS: Tuple[str, ...] = (
    "count",
    "sum",
    "mean",
    "median",
    "min",
    "max",
    "range",
    "q1",
    "q3",
    "stddev",
)

TEXT_LABELS = {
    "sum": "Sum",
    "mean": "Mean",
    "median": "Median",
    "min": "Minimum",
    "max": "Maximum",
    "range": "Range",
    "q1": "Q1",
    "q3": "Q3",
    "stddev": "StdDev",
}

_LABEL_WIDTH = max(len(label) for label in TEXT_LABELS.values()) + 2


def _fixed(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def format_text(stats: Stats, precision: int) -> str:
    values = stats.to_dict()
    lines: List[str] = [f"Statistics for {stats.count} numbers:"]
    for name in OUTPUT_FIELDS[1:]:
        label = f"{TEXT_LABELS[name]}:".ljust(_LABEL_WIDTH)
        lines.append(f"  {label}{_fixed(values[name], precision)}")
    return "\n".join(lines) + "\n"


def _json_number(value: float, precision: int) -> str:
    # JSON has no spelling for nan/inf.
    if not math.isfinite(value):
        return "null"
    return _fixed(value, precision)


def format_json(stats: Stats, precision: int) -> str:
    """Render *stats* as a 2-space indented JSON object.

    ``json.dumps`` cannot pin the number of decimals, so members are written
    out directly in :data:`OUTPUT_FIELDS` order.
    """

    values = stats.to_dict()
    members = [f'  "count": {stats.count}']
    for name in OUTPUT_FIELDS[1:]:
        members.append(f'  "{name}": {_json_number(values[name], precision)}')
    return "{\n" + ",\n".join(members) + "\n}\n"


def render(stats: Stats, precision: int, *, json_output: bool = False) -> str:
    if json_output:
        return format_json(stats, precision)
    return format_text(stats, precision)


__all__ = ["OUTPUT_FIELDS", "TEXT_LABELS", "format_text", "format_json", "render"]
