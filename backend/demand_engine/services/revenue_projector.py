"""Revenue Projector.

Builds the conservative / moderate / optimistic scenario triple from the
aggregated signal counts and the suggested price point.

Lobby cohort rates (moderate) come from the observed funnel when any
lobbyist has ordered, otherwise from ``DEFAULT_LOBBY_CONVERSION``.
Conservative halves each rate; optimistic multiplies by 1.5, capped at
90% but never below the moderate rate.  Pledges convert at flat
per-scenario rates.

All three scenarios go through ``project_scenario`` with the same price
point, so conservative ≤ moderate ≤ optimistic holds for customers and
revenue by construction.

``profit_margin`` is a fixed per-scenario assumption (higher volume is
assumed to bring better unit economics).  It is a modeling
simplification, not a measurement.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_SETTINGS, EngineSettings
from ..constants import (
    CONSERVATIVE_RATE_MULTIPLIER,
    DEFAULT_LOBBY_CONVERSION,
    OPTIMISTIC_RATE_CAP,
    OPTIMISTIC_RATE_MULTIPLIER,
    PLEDGE_CONVERSION,
)
from ..schemas.business_case_schema import (
    CohortRates,
    RevenueProjections,
    ScenarioName,
    ScenarioProjection,
)
from ..schemas.funnel_schema import ByIntensity
from ..schemas.market_schema import MarketSizing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioAssumptions:
    name: ScenarioName
    label: str
    rate_multiplier: float
    margin: float  # fraction


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scenario_assumptions(settings: Optional[EngineSettings] = None) -> list[ScenarioAssumptions]:
    settings = settings or DEFAULT_SETTINGS
    return [
        ScenarioAssumptions("conservative", "Lower conversion", CONSERVATIVE_RATE_MULTIPLIER, settings.conservative_margin),
        ScenarioAssumptions("moderate", "Expected case", 1.0, settings.moderate_margin),
        ScenarioAssumptions("optimistic", "Best case", OPTIMISTIC_RATE_MULTIPLIER, settings.optimistic_margin),
    ]


def moderate_lobby_rates(observed: Optional[ByIntensity]) -> tuple[dict[str, float], bool]:
    """Moderate lobby conversion fractions and whether they were observed.

    Observed rates are used only when at least one lobbyist ordered;
    a cohort with no members keeps its default rate.
    """
    if observed is None:
        return dict(DEFAULT_LOBBY_CONVERSION), False

    cohorts = {
        "NEAT_IDEA": observed.neat_idea,
        "PROBABLY_BUY": observed.probably_buy,
        "TAKE_MY_MONEY": observed.take_my_money,
    }
    if sum(c.converted for c in cohorts.values()) == 0:
        return dict(DEFAULT_LOBBY_CONVERSION), False

    rates = {
        key: (cohort.rate / 100.0 if cohort.count > 0 else DEFAULT_LOBBY_CONVERSION[key])
        for key, cohort in cohorts.items()
    }
    return rates, True


def scale_rate(moderate: float, multiplier: float) -> float:
    """Scale a moderate rate for another scenario, preserving ordering."""
    scaled = moderate * multiplier
    if multiplier > 1.0:
        scaled = max(moderate, min(scaled, OPTIMISTIC_RATE_CAP))
    return max(0.0, min(scaled, 1.0))


def scenario_rates(moderate: dict[str, float], assumptions: ScenarioAssumptions) -> CohortRates:
    pledge_rates = PLEDGE_CONVERSION[assumptions.name]
    return CohortRates(
        neat_idea=round(scale_rate(moderate["NEAT_IDEA"], assumptions.rate_multiplier), 6),
        probably_buy=round(scale_rate(moderate["PROBABLY_BUY"], assumptions.rate_multiplier), 6),
        take_my_money=round(scale_rate(moderate["TAKE_MY_MONEY"], assumptions.rate_multiplier), 6),
        intent=pledge_rates["INTENT"],
        support=pledge_rates["SUPPORT"],
    )


def _describe(assumptions: ScenarioAssumptions, rates: CohortRates) -> str:
    return (
        f"{assumptions.label}: {rates.neat_idea:.0%} NEAT_IDEA, {rates.probably_buy:.0%} PROBABLY_BUY, "
        f"{rates.take_my_money:.0%} TAKE_MY_MONEY lobbies; {rates.intent:.0%} INTENT and "
        f"{rates.support:.0%} SUPPORT pledges convert."
    )


def project_scenario(
    market: MarketSizing,
    price_point: float,
    rates: CohortRates,
    assumptions: ScenarioAssumptions,
) -> ScenarioProjection:
    """customers = Σ cohort × rate (rounded half up); revenue = customers × price."""
    lobbies = market.lobby_breakdown
    pledges = market.pledge_breakdown
    expected = (
        lobbies.neat_idea * rates.neat_idea
        + lobbies.probably_buy * rates.probably_buy
        + lobbies.take_my_money * rates.take_my_money
        + pledges.intent * rates.intent
        + pledges.support * rates.support
    )
    customers = _round_half_up(expected)

    return ScenarioProjection(
        scenario=assumptions.name,
        description=_describe(assumptions, rates),
        customers=customers,
        revenue=round(customers * max(price_point, 0.0), 2),
        profit_margin=round(assumptions.margin * 100, 2),
        conversion_rates=rates,
    )


def project_revenue(
    market: MarketSizing,
    suggested_price_point: float,
    observed: Optional[ByIntensity] = None,
    settings: Optional[EngineSettings] = None,
) -> RevenueProjections:
    """Produce the three scenario projections for one campaign."""
    moderate, is_observed = moderate_lobby_rates(observed)

    projections = {}
    for assumptions in scenario_assumptions(settings):
        rates = scenario_rates(moderate, assumptions)
        projections[assumptions.name] = project_scenario(
            market, suggested_price_point, rates, assumptions
        )

    logger.info(
        "[REVENUE] rates=%s customers=%d/%d/%d price=%.2f",
        "observed" if is_observed else "default",
        projections["conservative"].customers,
        projections["moderate"].customers,
        projections["optimistic"].customers,
        suggested_price_point,
    )

    return RevenueProjections(
        conservative=projections["conservative"],
        moderate=projections["moderate"],
        optimistic=projections["optimistic"],
        rate_source="observed" if is_observed else "default",
    )
