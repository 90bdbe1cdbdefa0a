"""Funnel Calculator.

Tracks Visitors → Lobbyists → Pledgers → Orderers for one campaign.

Counts are either supplied pre-aggregated by the data store
(``CampaignSnapshot.funnel``) or derived here from raw records:

- visitors  = number of visit events
- lobbyists / pledgers / orderers = distinct ``user_id``s; records with
  no user id count as one person each
- per-intensity cohorts: a lobbyist belongs to the intensity of their
  earliest lobby; an orderer converts their cohort only if they lobbied

All rates are percentages clamped to [0, 100].  A zero denominator yields
0, never a division error.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from ..config import DEFAULT_SETTINGS, EngineSettings
from ..constants import TREND_WINDOW_DAYS
from ..schemas.funnel_schema import (
    ByIntensity,
    ConversionFunnelResult,
    ConversionRates,
    Funnel,
    IntensityConversion,
)
from ..schemas.signal_schema import (
    CampaignSnapshot,
    FunnelCounts,
    IntensityCohortCounts,
    LobbyIntensity,
    LobbySignal,
    TrendPoint,
)
from .benchmark import compare_to_benchmark
from .signal_classifier import resolve_intensity

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------

def conversion_rate(numerator: int, denominator: int) -> float:
    """``numerator / denominator × 100`` clamped to [0, 100]; 0 if denominator is 0."""
    if denominator <= 0:
        return 0.0
    return max(0.0, min(100.0, numerator / denominator * 100))


def overall_conversion(orderers: int, visitors: int) -> float:
    """Orderers as a percent of visitors; zero visitors yields 0."""
    if visitors <= 0:
        return 0.0
    return conversion_rate(orderers, max(visitors, 1))


def compute_rates(funnel: Funnel) -> ConversionRates:
    return ConversionRates(
        visit_to_lobby=round(conversion_rate(funnel.lobbyists, funnel.visitors), 4),
        lobby_to_pledge=round(conversion_rate(funnel.pledgers, funnel.lobbyists), 4),
        pledge_to_order=round(conversion_rate(funnel.orderers, funnel.pledgers), 4),
        overall_conversion=round(overall_conversion(funnel.orderers, funnel.visitors), 4),
    )


def _cohort(counts: IntensityCohortCounts) -> IntensityConversion:
    return IntensityConversion(
        count=counts.count,
        converted=counts.converted,
        rate=round(conversion_rate(counts.converted, counts.count), 4),
    )


def compute_by_intensity(counts: FunnelCounts) -> ByIntensity:
    return ByIntensity(
        neat_idea=_cohort(counts.neat_idea),
        probably_buy=_cohort(counts.probably_buy),
        take_my_money=_cohort(counts.take_my_money),
    )


# ---------------------------------------------------------------------------
# Derivation from raw records
# ---------------------------------------------------------------------------

def _distinct_people(user_ids: Iterable[Optional[str]]) -> int:
    known: set[str] = set()
    anonymous = 0
    for uid in user_ids:
        if uid is None:
            anonymous += 1
        else:
            known.add(uid)
    return len(known) + anonymous


def lobbyist_intensities(lobbies: Sequence[LobbySignal]) -> tuple[dict[str, LobbyIntensity], Counter]:
    """Map each identified lobbyist to their earliest lobby's intensity.

    Returns the mapping and a per-intensity count of distinct lobbyists
    (anonymous lobbies count individually).
    """
    by_user: dict[str, LobbyIntensity] = {}
    cohort_sizes: Counter = Counter()
    for lobby in sorted(lobbies, key=lambda l: (as_naive_utc(l.created_at), l.id)):
        intensity = resolve_intensity(lobby.intensity)
        if lobby.user_id is None:
            cohort_sizes[intensity] += 1
        elif lobby.user_id not in by_user:
            by_user[lobby.user_id] = intensity
            cohort_sizes[intensity] += 1
    return by_user, cohort_sizes


def derive_funnel_counts(snapshot: CampaignSnapshot) -> FunnelCounts:
    """Build funnel counters from the snapshot's raw records."""
    by_user, cohort_sizes = lobbyist_intensities(snapshot.lobbies)

    ordering_users = {o.user_id for o in snapshot.orders if o.user_id is not None}
    converted: Counter = Counter(
        intensity for uid, intensity in by_user.items() if uid in ordering_users
    )

    def cohort(intensity: LobbyIntensity) -> IntensityCohortCounts:
        return IntensityCohortCounts(count=cohort_sizes[intensity], converted=converted[intensity])

    return FunnelCounts(
        visitors=len(snapshot.visits),
        lobbyists=_distinct_people(l.user_id for l in snapshot.lobbies),
        pledgers=_distinct_people(p.user_id for p in snapshot.pledges),
        orderers=_distinct_people(o.user_id for o in snapshot.orders),
        neat_idea=cohort(LobbyIntensity.NEAT_IDEA),
        probably_buy=cohort(LobbyIntensity.PROBABLY_BUY),
        take_my_money=cohort(LobbyIntensity.TAKE_MY_MONEY),
    )


def _utc_date(ts: datetime) -> date:
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    return ts.date()


def as_naive_utc(ts: datetime) -> datetime:
    if ts.tzinfo is not None:
        return ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts


def resolve_as_of(snapshot: CampaignSnapshot) -> Optional[datetime]:
    """Explicit ``as_of`` or the latest record timestamp; None when there are no records."""
    if snapshot.as_of is not None:
        return snapshot.as_of
    stamps = [
        *(as_naive_utc(l.created_at) for l in snapshot.lobbies),
        *(as_naive_utc(p.created_at) for p in snapshot.pledges),
        *(as_naive_utc(v.timestamp) for v in snapshot.visits),
        *(as_naive_utc(o.timestamp) for o in snapshot.orders),
    ]
    return max(stamps) if stamps else None


def build_trend_series(
    snapshot: CampaignSnapshot,
    as_of: Optional[datetime],
    days: int = TREND_WINDOW_DAYS,
) -> list[TrendPoint]:
    """Zero-filled daily counters for the *days* ending on ``as_of``'s date."""
    if as_of is None:
        return []

    end = _utc_date(as_of)
    start = end - timedelta(days=days - 1)

    def bucket(stamps: Iterable[datetime]) -> Counter:
        return Counter(d for d in map(_utc_date, stamps) if start <= d <= end)

    visits = bucket(v.timestamp for v in snapshot.visits)
    lobbies = bucket(l.created_at for l in snapshot.lobbies)
    pledges = bucket(p.created_at for p in snapshot.pledges)
    orders = bucket(o.timestamp for o in snapshot.orders)

    series = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        series.append(
            TrendPoint(
                date=day.isoformat(),
                visitors=visits[day],
                lobbies=lobbies[day],
                pledges=pledges[day],
                orders=orders[day],
            )
        )
    return series


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def calculate_conversion_funnel(
    counts: FunnelCounts,
    trends: Sequence[TrendPoint] = (),
    settings: Optional[EngineSettings] = None,
) -> ConversionFunnelResult:
    """Compute funnel, stage rates, intensity cohorts and benchmark.

    ``trends`` is passed through unmodified for charting.
    """
    settings = settings or DEFAULT_SETTINGS
    funnel = Funnel(
        visitors=counts.visitors,
        lobbyists=counts.lobbyists,
        pledgers=counts.pledgers,
        orderers=counts.orderers,
    )
    rates = compute_rates(funnel)
    benchmarks = compare_to_benchmark(rates.overall_conversion, settings)

    logger.info(
        "[FUNNEL] visitors=%d lobbyists=%d pledgers=%d orderers=%d overall=%.2f%% (%s)",
        funnel.visitors,
        funnel.lobbyists,
        funnel.pledgers,
        funnel.orderers,
        rates.overall_conversion,
        benchmarks.campaign_performance,
    )

    return ConversionFunnelResult(
        funnel=funnel,
        rates=rates,
        by_intensity=compute_by_intensity(counts),
        trends=list(trends),
        benchmarks=benchmarks,
    )


def funnel_for_snapshot(
    snapshot: CampaignSnapshot,
    settings: Optional[EngineSettings] = None,
) -> ConversionFunnelResult:
    """Funnel over a snapshot, preferring its pre-aggregated counters and trends."""
    counts = snapshot.funnel if snapshot.funnel is not None else derive_funnel_counts(snapshot)
    if snapshot.trends is not None:
        trends = snapshot.trends
    else:
        trends = build_trend_series(snapshot, resolve_as_of(snapshot))
    return calculate_conversion_funnel(counts, trends, settings)
