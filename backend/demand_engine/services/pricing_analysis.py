"""Price ceiling statistics.

All functions take the list of non-null price ceilings for one campaign
and never raise on empty input: the empty case returns zeros.
"""

from __future__ import annotations

import math
import statistics
from bisect import bisect_left
from typing import Optional, Sequence

from ..constants import DEMAND_CURVE_MAX_POINTS, PRICE_BRACKETS, ROUND_PRICE_STEP
from ..schemas.market_schema import DemandPoint, PriceBracket, TieredPricePoints


def percentile(values: Sequence[float], pct: float) -> float:
    """Linear-interpolated percentile of *values* (0 when empty).

    Uses the inclusive method, i.e. rank ``pct/100 × (n-1)`` between the
    sorted neighbours.  *values* is not mutated.
    """
    if not values:
        return 0.0
    ordered = sorted(values)
    if len(ordered) == 1:
        return float(ordered[0])
    rank = (pct / 100.0) * (len(ordered) - 1)
    lower = int(rank)
    upper = min(lower + 1, len(ordered) - 1)
    fraction = rank - lower
    return float(ordered[lower] + (ordered[upper] - ordered[lower]) * fraction)


def median(values: Sequence[float]) -> float:
    """Standard median: mean of the two middle values when the count is even."""
    if not values:
        return 0.0
    return float(statistics.median(values))


def mode(values: Sequence[float]) -> float:
    """Most frequent price; ties resolve to the lowest price."""
    if not values:
        return 0.0
    return float(min(statistics.multimode(values)))


def _bracket_label(lo: int, hi: Optional[int]) -> str:
    if hi is None:
        return f"{lo}+"
    return f"{lo}-{hi}"


def price_distribution(values: Sequence[float]) -> list[PriceBracket]:
    """Count price ceilings per fixed bracket, with whole-percent shares."""
    total = len(values)
    brackets: list[PriceBracket] = []
    for lo, hi in PRICE_BRACKETS:
        if hi is None:
            count = sum(1 for v in values if v >= lo)
        else:
            count = sum(1 for v in values if lo <= v < hi)
        brackets.append(
            PriceBracket(
                bracket=_bracket_label(lo, hi),
                count=count,
                percentage=round(count / total * 100) if total else 0,
            )
        )
    return brackets


def tiered_price_points(values: Sequence[float]) -> TieredPricePoints:
    """Economy / standard / premium anchors at the 25th, 50th, 75th percentile."""
    if not values:
        return TieredPricePoints()
    return TieredPricePoints(
        economy=round(percentile(values, 25), 2),
        standard=round(percentile(values, 50), 2),
        premium=round(percentile(values, 75), 2),
    )


def _buyers_at(ordered: Sequence[float], price: float) -> int:
    return len(ordered) - bisect_left(ordered, price)


def demand_curve(values: Sequence[float], max_points: int = DEMAND_CURVE_MAX_POINTS) -> list[DemandPoint]:
    """Buyers willing to pay at least each distinct stated price, lowest first."""
    ordered = sorted(values)
    distinct = sorted(set(ordered))[:max_points]
    return [
        DemandPoint(price=round(price, 2), estimated_buyers=_buyers_at(ordered, price))
        for price in distinct
    ]


def optimal_price(values: Sequence[float]) -> tuple[float, float]:
    """Revenue-maximizing price and the revenue it yields.

    Candidates are every distinct stated price, then whole prices from
    the lowest ceiling upwards in steps of ``ROUND_PRICE_STEP``.  The
    first candidate to reach the highest revenue wins; with no positive
    revenue the median is returned.
    """
    if not values:
        return 0.0, 0.0
    ordered = sorted(values)

    candidates: list[float] = sorted(set(ordered))
    start = max(1, math.floor(ordered[0]))
    candidates.extend(range(start, math.floor(ordered[-1]) + 1, ROUND_PRICE_STEP))

    best_price, best_revenue = median(ordered), 0.0
    for price in candidates:
        revenue = price * _buyers_at(ordered, price)
        if revenue > best_revenue:
            best_price, best_revenue = price, revenue
    return round(float(best_price), 2), round(best_revenue, 2)
