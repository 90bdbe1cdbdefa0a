"""Funnel calculator and benchmark comparator tests."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timedelta, timezone

import pytest

from demand_engine.config import EngineSettings
from demand_engine.schemas.signal_schema import (
    CampaignSnapshot,
    FunnelCounts,
    IntensityCohortCounts,
    LobbySignal,
    OrderEvent,
    PledgeSignal,
    TrendPoint,
    VisitEvent,
)
from demand_engine.services.benchmark import classify_performance
from demand_engine.services.funnel_calculator import (
    build_trend_series,
    calculate_conversion_funnel,
    conversion_rate,
    derive_funnel_counts,
    funnel_for_snapshot,
    overall_conversion,
    resolve_as_of,
)

T0 = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


def _snapshot():
    lobbies = [
        LobbySignal(id="l1", intensity="NEAT_IDEA", created_at=T0, user_id="u1"),
        LobbySignal(id="l2", intensity="TAKE_MY_MONEY", created_at=T0, user_id="u2"),
        LobbySignal(id="l3", intensity="TAKE_MY_MONEY", created_at=T0, user_id="u3"),
        # u3 lobbying again later does not move them to another cohort
        LobbySignal(id="l4", intensity="PROBABLY_BUY", created_at=T0 + timedelta(days=1), user_id="u3"),
    ]
    pledges = [
        PledgeSignal(id="p1", type="INTENT", price_ceiling=40, created_at=T0, user_id="u2"),
        PledgeSignal(id="p2", type="SUPPORT", created_at=T0, user_id="u3"),
        PledgeSignal(id="p3", type="INTENT", created_at=T0, user_id="u2"),
    ]
    visits = [VisitEvent(campaign_id="c1", timestamp=T0, user_id=f"v{i}") for i in range(10)]
    orders = [
        OrderEvent(campaign_id="c1", amount=40, timestamp=T0 + timedelta(days=2), user_id="u2"),
        OrderEvent(campaign_id="c1", amount=40, timestamp=T0 + timedelta(days=3), user_id="u2"),
    ]
    return CampaignSnapshot(campaign_id="c1", lobbies=lobbies, pledges=pledges, visits=visits, orders=orders)


class TestRates:
    def test_zero_denominator_yields_zero(self):
        assert conversion_rate(5, 0) == 0
        assert overall_conversion(3, 0) == 0

    def test_rates_are_percentages(self):
        assert conversion_rate(1, 4) == 25
        assert overall_conversion(2, 1000) == pytest.approx(0.2)

    def test_rates_clamped_to_hundred(self):
        # pledgers without a lobby can exceed lobbyists in pre-aggregated data
        assert conversion_rate(12, 10) == 100

    @pytest.mark.parametrize("visitors,lobbyists,pledgers,orderers", [
        (0, 0, 0, 0),
        (0, 5, 3, 1),
        (10, 20, 30, 40),
        (1000, 17, 5, 2),
        (1, 1, 1, 1),
    ])
    def test_every_rate_within_bounds(self, visitors, lobbyists, pledgers, orderers):
        result = calculate_conversion_funnel(
            FunnelCounts(visitors=visitors, lobbyists=lobbyists, pledgers=pledgers, orderers=orderers)
        )
        rates = result.rates
        for value in (rates.visit_to_lobby, rates.lobby_to_pledge, rates.pledge_to_order, rates.overall_conversion):
            assert 0 <= value <= 100
        if visitors == 0:
            assert rates.overall_conversion == 0


class TestBenchmark:
    @pytest.mark.parametrize("overall,label", [
        (0.0, "below"),
        (2.49, "below"),
        (2.5, "average"),
        (3.74, "average"),
        (3.75, "above"),
        (7.49, "above"),
        (7.5, "exceptional"),
        (40.0, "exceptional"),
    ])
    def test_thresholds(self, overall, label):
        assert classify_performance(overall) == label

    def test_configurable_industry_average(self):
        settings = EngineSettings(industry_avg_conversion=0.1)
        assert classify_performance(0.2, settings) == "above"

    def test_benchmarks_in_result(self):
        result = calculate_conversion_funnel(FunnelCounts(visitors=1000, lobbyists=17, pledgers=5, orderers=2))
        assert result.benchmarks.industry_avg == 2.5
        assert result.benchmarks.campaign_performance == "below"


class TestDerivedFunnel:
    def test_distinct_people_per_stage(self):
        counts = derive_funnel_counts(_snapshot())
        assert counts.visitors == 10
        assert counts.lobbyists == 3
        assert counts.pledgers == 2
        assert counts.orderers == 1

    def test_orderers_attributed_to_earliest_lobby_intensity(self):
        counts = derive_funnel_counts(_snapshot())
        assert counts.take_my_money.count == 2
        assert counts.take_my_money.converted == 1
        assert counts.neat_idea.count == 1
        assert counts.neat_idea.converted == 0
        assert counts.probably_buy.count == 0

    def test_orderers_who_never_lobbied_do_not_convert_a_cohort(self):
        snap = CampaignSnapshot(
            lobbies=[LobbySignal(id="l1", intensity="NEAT_IDEA", created_at=T0, user_id="u1")],
            orders=[OrderEvent(campaign_id="c1", amount=10, timestamp=T0, user_id="stranger")],
        )
        counts = derive_funnel_counts(snap)
        assert counts.orderers == 1
        assert counts.neat_idea.converted == 0

    def test_anonymous_records_count_individually(self):
        snap = CampaignSnapshot(
            lobbies=[LobbySignal(id=f"l{i}", intensity="NEAT_IDEA", created_at=T0) for i in range(3)],
        )
        counts = derive_funnel_counts(snap)
        assert counts.lobbyists == 3
        assert counts.neat_idea.count == 3

    def test_by_intensity_rates(self):
        result = funnel_for_snapshot(_snapshot())
        assert result.by_intensity.take_my_money.rate == 50
        assert result.by_intensity.neat_idea.rate == 0
        assert result.rates.visit_to_lobby == 30
        assert result.rates.overall_conversion == 10
        assert result.benchmarks.campaign_performance == "exceptional"

    def test_pre_aggregated_counts_take_precedence(self):
        snap = CampaignSnapshot(
            funnel=FunnelCounts(
                visitors=200,
                lobbyists=20,
                pledgers=10,
                orderers=4,
                take_my_money=IntensityCohortCounts(count=5, converted=3),
            ),
            trends=[TrendPoint(date="2026-03-01", visitors=5, lobbies=1)],
        )
        result = funnel_for_snapshot(snap)
        assert result.funnel.visitors == 200
        assert result.rates.overall_conversion == 2
        assert result.by_intensity.take_my_money.rate == 60
        assert [t.date for t in result.trends] == ["2026-03-01"]


class TestTrends:
    def test_thirty_zero_filled_days_ending_on_as_of(self):
        as_of = datetime(2026, 3, 30, 12, 0)
        snap = CampaignSnapshot(
            lobbies=[
                LobbySignal(id="a", intensity="NEAT_IDEA", created_at=datetime(2026, 3, 30, 8, 0)),
                LobbySignal(id="b", intensity="NEAT_IDEA", created_at=datetime(2026, 3, 1, 8, 0)),
                LobbySignal(id="c", intensity="NEAT_IDEA", created_at=datetime(2026, 2, 28, 8, 0)),
            ],
            visits=[VisitEvent(campaign_id="c", timestamp=datetime(2026, 3, 15, 1, 0))] * 3,
        )
        series = build_trend_series(snap, as_of)

        assert len(series) == 30
        assert series[0].date == "2026-03-01"
        assert series[-1].date == "2026-03-30"
        assert series[0].lobbies == 1
        assert series[-1].lobbies == 1
        assert sum(p.lobbies for p in series) == 2
        assert sum(p.visitors for p in series) == 3

    def test_as_of_defaults_to_latest_record(self):
        snap = _snapshot()
        assert resolve_as_of(snap) == (T0 + timedelta(days=3)).replace(tzinfo=None)

    def test_empty_snapshot_has_no_trends(self):
        snap = CampaignSnapshot()
        assert resolve_as_of(snap) is None
        assert funnel_for_snapshot(snap).trends == []
