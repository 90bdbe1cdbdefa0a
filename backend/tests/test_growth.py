"""Lobby growth tests — windows, growth rate and trend labels."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timedelta, timezone

import pytest

from demand_engine.schemas.signal_schema import CampaignSnapshot, LobbySignal
from demand_engine.services.growth import calculate_lobby_growth, growth_rate, growth_trend

AS_OF = datetime(2026, 6, 30, 12, 0)


def _snapshot(days_ago, as_of=AS_OF):
    lobbies = [
        LobbySignal(id=f"l{i}", intensity="NEAT_IDEA", created_at=AS_OF - timedelta(days=d))
        for i, d in enumerate(days_ago)
    ]
    return CampaignSnapshot(campaign_id="c1", lobbies=lobbies, as_of=as_of)


class TestGrowthRate:
    def test_zero_windows(self):
        assert growth_rate(0, 10) == 0
        assert growth_rate(3, 0) == 0

    def test_rate_against_average_week(self):
        assert growth_rate(3, 10) == pytest.approx(29.0)

    @pytest.mark.parametrize(
        "rate,trend",
        [(-50, "declining"), (-10, "flat"), (4.9, "flat"), (5, "growing"), (49.9, "growing"), (50, "accelerating")],
    )
    def test_trend_labels(self, rate, trend):
        assert growth_trend(rate) == trend


class TestCalculateLobbyGrowth:
    def test_windows_anchor_on_as_of(self):
        # 3 lobbies within 7 days, 10 within 30, one older
        growth = calculate_lobby_growth(_snapshot([0, 2, 6, 10, 12, 14, 18, 20, 25, 29, 45]))
        assert growth.lobbies_last_7_days == 3
        assert growth.lobbies_last_30_days == 10
        assert growth.growth_rate == pytest.approx(29.0)
        assert growth.trend == "growing"

    def test_accelerating(self):
        growth = calculate_lobby_growth(_snapshot([0] * 10 + [20] * 10))
        assert growth.trend == "accelerating"

    def test_declining(self):
        growth = calculate_lobby_growth(_snapshot([1] + [15] * 29))
        assert growth.trend == "declining"

    def test_future_records_ignored(self):
        growth = calculate_lobby_growth(_snapshot([-3, 1]))
        assert growth.lobbies_last_7_days == 1

    def test_aware_timestamps(self):
        as_of = AS_OF.replace(tzinfo=timezone.utc)
        growth = calculate_lobby_growth(_snapshot([1, 2], as_of=as_of))
        assert growth.lobbies_last_7_days == 2

    def test_no_lobbies(self):
        growth = calculate_lobby_growth(CampaignSnapshot(campaign_id="c1"))
        assert growth.lobbies_last_30_days == 0
        assert growth.trend == "flat"
