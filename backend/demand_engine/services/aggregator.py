"""Signal Aggregator.

Scans one campaign's lobby and pledge records and produces:

- ``MarketSizing``  — counts per intensity / pledge type plus weighted demand
- ``PricingInsights`` — statistics over pledges carrying a price ceiling

Rules
-----
- NO I/O, NO wall clock
- Empty inputs produce all-zero results, never an exception
- Unknown enum values propagate ``UnknownSignalKind``
"""

from __future__ import annotations

import logging
import statistics
from collections import Counter
from typing import Optional, Sequence

from ..config import DEFAULT_SETTINGS, EngineSettings
from ..constants import HIGH_PRICE_PERCENTILE
from ..schemas.market_schema import (
    IntensityPrice,
    IntensityPricing,
    LobbyBreakdown,
    MarketSizing,
    PledgeBreakdown,
    PriceRange,
    PricingInsights,
)
from ..schemas.signal_schema import LobbyIntensity, LobbySignal, PledgeSignal, PledgeType
from .funnel_calculator import lobbyist_intensities
from .pricing_analysis import (
    demand_curve,
    median,
    mode,
    optimal_price,
    percentile,
    price_distribution,
    tiered_price_points,
)
from .signal_classifier import lobby_weight, pledge_weight, resolve_intensity, resolve_pledge_type

logger = logging.getLogger(__name__)


def summarize_market(
    lobbies: Sequence[LobbySignal],
    pledges: Sequence[PledgeSignal],
) -> MarketSizing:
    """Partition signals by kind and compute raw and weighted demand."""
    lobby_counts = Counter(resolve_intensity(lobby.intensity) for lobby in lobbies)
    pledge_counts = Counter(resolve_pledge_type(pledge.type) for pledge in pledges)

    lobby_weighted = sum(lobby_weight(kind) * n for kind, n in lobby_counts.items())
    pledge_weighted = sum(pledge_weight(kind) * n for kind, n in pledge_counts.items())

    lobby_breakdown = LobbyBreakdown(
        neat_idea=lobby_counts[LobbyIntensity.NEAT_IDEA],
        probably_buy=lobby_counts[LobbyIntensity.PROBABLY_BUY],
        take_my_money=lobby_counts[LobbyIntensity.TAKE_MY_MONEY],
        total=len(lobbies),
        weighted=lobby_weighted,
    )
    pledge_breakdown = PledgeBreakdown(
        support=pledge_counts[PledgeType.SUPPORT],
        intent=pledge_counts[PledgeType.INTENT],
        total=len(pledges),
        weighted=pledge_weighted,
    )

    return MarketSizing(
        total_demand_signals=lobby_breakdown.total + pledge_breakdown.total,
        weighted_demand=lobby_weighted + pledge_weighted,
        lobby_breakdown=lobby_breakdown,
        pledge_breakdown=pledge_breakdown,
    )


def price_ceilings(pledges: Sequence[PledgeSignal]) -> list[float]:
    """Sorted non-null price ceilings."""
    return sorted(float(p.price_ceiling) for p in pledges if p.price_ceiling is not None)


def pricing_by_intensity(
    lobbies: Sequence[LobbySignal],
    pledges: Sequence[PledgeSignal],
) -> IntensityPricing:
    """Average price ceiling per lobby intensity.

    A priced pledge is attributed to its pledger's earliest lobby.
    Pledges from users who never lobbied (or carry no user id) are left out.
    """
    by_user, _ = lobbyist_intensities(lobbies)
    grouped: dict[LobbyIntensity, list[float]] = {intensity: [] for intensity in LobbyIntensity}
    for pledge in pledges:
        if pledge.price_ceiling is None or pledge.user_id is None:
            continue
        intensity = by_user.get(pledge.user_id)
        if intensity is not None:
            grouped[intensity].append(float(pledge.price_ceiling))

    def cohort(intensity: LobbyIntensity) -> IntensityPrice:
        prices = grouped[intensity]
        if not prices:
            return IntensityPrice()
        return IntensityPrice(avg=round(statistics.fmean(prices), 2), count=len(prices))

    return IntensityPricing(
        neat_idea=cohort(LobbyIntensity.NEAT_IDEA),
        probably_buy=cohort(LobbyIntensity.PROBABLY_BUY),
        take_my_money=cohort(LobbyIntensity.TAKE_MY_MONEY),
    )


def summarize_pricing(
    ceilings: Sequence[float],
    settings: Optional[EngineSettings] = None,
    by_intensity: Optional[IntensityPricing] = None,
) -> PricingInsights:
    """Compute price-ceiling statistics and a conservative suggested price.

    The suggested price sits at a low percentile (40th by default) of
    stated willingness-to-pay.  With fewer than
    ``min_points_for_percentile`` points a percentile is meaningless and
    the mean is used instead.
    """
    settings = settings or DEFAULT_SETTINGS
    prices = sorted(ceilings)
    n = len(prices)

    if n == 0:
        return PricingInsights(
            suggested_price_reasoning=(
                "Insufficient data: no pledges include a price ceiling, so no price "
                "point can be suggested yet."
            ),
            distribution=price_distribution(prices),
            by_intensity=by_intensity or IntensityPricing(),
        )

    avg = round(statistics.fmean(prices), 2)
    mid = round(median(prices), 2)
    best_price, best_revenue = optimal_price(prices)

    if n < settings.min_points_for_percentile:
        suggested = avg
        reasoning = (
            f"Only {n} price ceiling{'s' if n != 1 else ''} available; using the average "
            f"({avg:.2f}) until at least {settings.min_points_for_percentile} data points "
            "support a percentile estimate."
        )
    else:
        pct = settings.suggested_price_percentile
        suggested = round(percentile(prices, pct), 2)
        reasoning = (
            f"{pct:g}th percentile of {n} price ceilings ({suggested:.2f}) sits below the "
            f"median willingness-to-pay ({mid:.2f}) to maximize conversion while "
            "preserving margin."
        )

    return PricingInsights(
        avg_price_ceiling=avg,
        median_price_ceiling=mid,
        mode_price_ceiling=round(mode(prices), 2),
        price_range=PriceRange(min=prices[0], max=prices[-1]),
        suggested_price_point=suggested,
        suggested_price_reasoning=reasoning,
        price_ceiling_data_points=n,
        distribution=price_distribution(prices),
        tiered_price_points=tiered_price_points(prices),
        p90_price_ceiling=round(percentile(prices, HIGH_PRICE_PERCENTILE), 2),
        by_intensity=by_intensity or IntensityPricing(),
        demand_curve=demand_curve(prices),
        optimal_price=best_price,
        max_revenue=best_revenue,
    )


def aggregate_signals(
    lobbies: Sequence[LobbySignal],
    pledges: Sequence[PledgeSignal],
    settings: Optional[EngineSettings] = None,
) -> tuple[MarketSizing, PricingInsights]:
    """Run market sizing and pricing over one campaign's signals."""
    market = summarize_market(lobbies, pledges)
    pricing = summarize_pricing(
        price_ceilings(pledges), settings, pricing_by_intensity(lobbies, pledges)
    )

    logger.info(
        "[AGGREGATOR] signals=%d weighted=%d price_points=%d suggested=%.2f",
        market.total_demand_signals,
        market.weighted_demand,
        pricing.price_ceiling_data_points,
        pricing.suggested_price_point,
    )
    return market, pricing
