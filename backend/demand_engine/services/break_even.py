"""Break-Even Calculator.

Uses the moderate scenario:

    unit_cost = price × (1 − moderate margin)
    units     = ceil(fixed_cost_baseline / (price − unit_cost))
    revenue   = units × price

A price at or below unit cost (including a zero price when no pricing
data exists) is reported as ``null`` units with the timeframe
"pricing unsustainable" and a warning.  It never aborts the report.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from ..config import DEFAULT_SETTINGS, EngineSettings
from ..constants import (
    TIMEFRAME_LONG,
    TIMEFRAME_MEDIUM,
    TIMEFRAME_SHORT,
    TIMEFRAME_UNSUSTAINABLE,
    TIMEFRAME_WITHIN_CAMPAIGN,
)
from ..errors import UneconomicPricing
from ..schemas.business_case_schema import BreakEvenAnalysis, ScenarioProjection

logger = logging.getLogger(__name__)


def per_unit_cost(price: float, margin: float) -> float:
    return round(price * (1.0 - margin), 2)


def units_to_break_even(fixed_costs: float, price: float, unit_cost: float) -> int:
    """Units whose contribution covers *fixed_costs*.

    Raises ``UneconomicPricing`` when price does not exceed unit cost.
    """
    contribution = round(price - unit_cost, 2)
    if contribution <= 0:
        raise UneconomicPricing(price, unit_cost)
    return math.ceil(round(fixed_costs / contribution, 6))


def break_even_timeframe(units: int, customers: int) -> str:
    """Bucket how many cohorts of the moderate size are needed to break even."""
    if customers <= 0:
        return TIMEFRAME_LONG
    cohorts = units / customers
    if cohorts < 1:
        return TIMEFRAME_WITHIN_CAMPAIGN
    if cohorts < 3:
        return TIMEFRAME_SHORT
    if cohorts <= 10:
        return TIMEFRAME_MEDIUM
    return TIMEFRAME_LONG


def calculate_break_even(
    moderate: ScenarioProjection,
    suggested_price_point: float,
    settings: Optional[EngineSettings] = None,
) -> BreakEvenAnalysis:
    settings = settings or DEFAULT_SETTINGS
    fixed = settings.fixed_cost_baseline
    unit_cost = per_unit_cost(suggested_price_point, moderate.profit_margin / 100.0)

    try:
        units = units_to_break_even(fixed, suggested_price_point, unit_cost)
    except UneconomicPricing as exc:
        logger.warning("[BREAK_EVEN] %s", exc)
        return BreakEvenAnalysis(
            units_sold_to_break_even=None,
            revenue_needed=None,
            estimated_timeframe=TIMEFRAME_UNSUSTAINABLE,
            per_unit_cost=unit_cost,
            fixed_cost_baseline=fixed,
            warning=(
                f"Uneconomic pricing: suggested price {suggested_price_point:.2f} does not "
                f"exceed the per-unit cost {unit_cost:.2f}, so break-even cannot be reached."
            ),
        )

    return BreakEvenAnalysis(
        units_sold_to_break_even=units,
        revenue_needed=round(units * suggested_price_point, 2),
        estimated_timeframe=break_even_timeframe(units, moderate.customers),
        per_unit_cost=unit_cost,
        fixed_cost_baseline=fixed,
    )


def calculate_margin(
    gross_revenue: float,
    production_cost_per_unit: float,
    units_sold: int,
    fixed_costs: float = 0.0,
    variable_costs: float = 0.0,
) -> int:
    """Whole-percent profit margin after production, variable and fixed costs."""
    if gross_revenue == 0:
        return 0
    total_costs = (production_cost_per_unit + variable_costs) * units_sold + fixed_costs
    return round((gross_revenue - total_costs) / gross_revenue * 100)
