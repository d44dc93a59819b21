"""
Shared interpolate-or-clamp lookup for Reynolds-number tables.

A table is a sequence of (re, value) rows where value is either a plain
number or a mapping keyed by a secondary dimension (L/D ratio, baffle cut).
"""

import bisect
import math
from typing import Hashable, Mapping, Optional, Sequence, Tuple, Union

Row = Tuple[float, Union[float, Mapping[Hashable, float]]]


def interpolate(x: float, x1: float, x2: float, y1: float, y2: float) -> float:
    """Straight-line interpolation between (x1, y1) and (x2, y2)."""
    if x1 == x2:
        return y1
    return y1 + (x - x1) * (y2 - y1) / (x2 - x1)


def nearest_bucket(value: float, buckets: Sequence[float]) -> float:
    """Return the bucket closest to value; the first one wins a tie."""
    return min(buckets, key=lambda b: abs(b - value))


def _row_value(row: Row, key: Optional[Hashable]) -> float:
    value = row[1]
    if key is None:
        return value
    return value[key]


def lookup_table(re: float, table: Sequence[Row], key: Optional[Hashable] = None) -> float:
    """
    Look up a factor at Reynolds number re.

    Clamps to the first/last row outside the tabulated range, otherwise
    interpolates linearly between the bracketing rows.

    Args:
        re: Reynolds number
        table: Rows of (re, value) or (re, {key: value})
        key: Secondary key for mapping rows, None for plain rows

    Returns:
        Interpolated factor (nan if re is nan)
    """
    rows = sorted(table, key=lambda row: row[0])
    if math.isnan(re):
        return math.nan

    lower, upper = rows[0], rows[-1]
    if re <= lower[0]:
        return _row_value(lower, key)
    if re >= upper[0]:
        return _row_value(upper, key)

    res = [row[0] for row in rows]
    idx = bisect.bisect_right(res, re)
    lower, upper = rows[idx - 1], rows[idx]
    return interpolate(re, lower[0], upper[0], _row_value(lower, key), _row_value(upper, key))
