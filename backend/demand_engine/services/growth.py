"""Lobby growth.

Compares the last week of lobbies with an average week of the last 30
days (30 days ≈ 4.3 weeks):

    growth_rate = (last_7 / (last_30 / 4.3) − 1) × 100

Both windows end at the snapshot's ``as_of`` (or latest record).  With no
lobbies in either window the rate is 0 and the trend "flat".
"""

from __future__ import annotations

import logging
from datetime import timedelta

from ..constants import (
    GROWTH_LONG_WINDOW_DAYS,
    GROWTH_SHORT_WINDOW_DAYS,
    GROWTH_TREND_TOP,
    GROWTH_TRENDS,
    WEEKS_PER_MONTH,
)
from ..schemas.funnel_schema import GrowthTrend, LobbyGrowth
from ..schemas.signal_schema import CampaignSnapshot
from .funnel_calculator import as_naive_utc, resolve_as_of

logger = logging.getLogger(__name__)


def growth_rate(last_short: int, last_long: int) -> float:
    if last_short <= 0 or last_long <= 0:
        return 0.0
    return (last_short / (last_long / WEEKS_PER_MONTH) - 1) * 100


def growth_trend(rate: float) -> GrowthTrend:
    for upper_bound, trend in GROWTH_TRENDS:
        if rate < upper_bound:
            return trend  # type: ignore[return-value]
    return GROWTH_TREND_TOP  # type: ignore[return-value]


def calculate_lobby_growth(snapshot: CampaignSnapshot) -> LobbyGrowth:
    as_of = resolve_as_of(snapshot)
    if as_of is None:
        return LobbyGrowth()

    anchor = as_naive_utc(as_of)
    short_start = anchor - timedelta(days=GROWTH_SHORT_WINDOW_DAYS)
    long_start = anchor - timedelta(days=GROWTH_LONG_WINDOW_DAYS)

    last_short = last_long = 0
    for lobby in snapshot.lobbies:
        created = as_naive_utc(lobby.created_at)
        if created > anchor:
            continue
        if created >= long_start:
            last_long += 1
        if created >= short_start:
            last_short += 1

    raw_rate = growth_rate(last_short, last_long)
    rate = round(raw_rate, 1)
    trend = growth_trend(raw_rate)
    logger.debug("[GROWTH] last7=%d last30=%d rate=%.1f%% (%s)", last_short, last_long, rate, trend)
    return LobbyGrowth(
        lobbies_last_7_days=last_short,
        lobbies_last_30_days=last_long,
        growth_rate=rate,
        trend=trend,
    )
