"""Campaign signal score and ranking tests."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timedelta

import pytest

from demand_engine.errors import InvalidInput
from demand_engine.schemas.signal_schema import CampaignSnapshot, LobbySignal, PledgeSignal
from demand_engine.schemas.signal_score_schema import SignalScoreInputs
from demand_engine.services.signal_score import (
    compute_signal_score,
    rank_campaigns,
    signal_inputs_from_snapshot,
    signal_tier,
)

AS_OF = datetime(2026, 5, 20, 12, 0)


class TestComputeSignalScore:
    def test_no_signals_scores_zero(self):
        result = compute_signal_score(SignalScoreInputs())
        assert result.score == 0
        assert result.tier == "low"
        assert not any(result.flags.model_dump().values())

    def test_known_components(self):
        inputs = SignalScoreInputs(
            intent_count=9,
            support_count=9,
            intent_last_7_days=2,
            intent_prev_7_days=1,
        )
        result = compute_signal_score(inputs)
        # 8·log10(10) + 3·log10(10) + 6·2 = 23
        assert result.score == pytest.approx(23.0)
        assert result.momentum == 2
        assert result.demand_value == 0

    def test_completeness_multiplier(self):
        inputs = SignalScoreInputs(
            intent_count=9,
            support_count=9,
            intent_last_7_days=2,
            intent_prev_7_days=1,
            completeness_score=100,
        )
        assert compute_signal_score(inputs).score == pytest.approx(29.9)

    def test_momentum_is_capped(self):
        result = compute_signal_score(SignalScoreInputs(intent_count=10, intent_last_7_days=10))
        assert result.momentum == 2

    def test_lobby_conviction_uses_intensity_weights(self):
        result = compute_signal_score(SignalScoreInputs(neat_idea_count=1, take_my_money_count=1))
        assert result.lobby_conviction == pytest.approx(3.0)

    def test_fraud_penalty_clamps_at_zero(self):
        result = compute_signal_score(SignalScoreInputs(support_count=1, fraud_risk_score=1.0))
        assert result.score == 0

    def test_strong_campaign_reaches_high_tiers(self):
        inputs = SignalScoreInputs(
            intent_count=400,
            intent_verified_count=200,
            median_price_ceiling=120,
            support_count=300,
            intent_last_7_days=60,
            intent_prev_7_days=30,
            take_my_money_count=300,
            probably_buy_count=100,
            completeness_score=90,
        )
        result = compute_signal_score(inputs)
        assert result.score <= 100
        assert result.tier == "very_high"
        assert result.flags.suggest_offer and result.flags.trending

    @pytest.mark.parametrize("score,tier", [(0, "low"), (34.9, "low"), (35, "medium"), (55, "high"), (80, "very_high")])
    def test_tiers(self, score, tier):
        assert signal_tier(score) == tier


class TestSnapshotInputs:
    def test_aggregates_snapshot(self):
        snapshot = CampaignSnapshot(
            campaign_id="c1",
            as_of=AS_OF,
            lobbies=[
                LobbySignal(id="l1", intensity="TAKE_MY_MONEY", verified=True, created_at=AS_OF),
                LobbySignal(id="l2", intensity="NEAT_IDEA", verified=False, created_at=AS_OF),
            ],
            pledges=[
                PledgeSignal(id="p1", type="INTENT", price_ceiling=30, verified=True,
                             created_at=AS_OF - timedelta(days=3)),
                PledgeSignal(id="p2", type="INTENT", price_ceiling=50,
                             created_at=AS_OF - timedelta(days=10)),
                PledgeSignal(id="p3", type="SUPPORT", price_ceiling=999, created_at=AS_OF),
            ],
            completeness_score=60,
        )
        inputs = signal_inputs_from_snapshot(snapshot)

        assert inputs.take_my_money_count == 1
        assert inputs.neat_idea_count == 0  # unverified lobbies excluded
        assert inputs.intent_count == 2
        assert inputs.intent_verified_count == 1
        assert inputs.support_count == 1
        assert inputs.median_price_ceiling == 40  # intent pledges only
        assert inputs.intent_last_7_days == 1
        assert inputs.intent_prev_7_days == 1
        assert inputs.completeness_score == 60


class TestRanking:
    def _campaign(self, campaign_id, intents):
        return CampaignSnapshot(
            campaign_id=campaign_id,
            pledges=[
                PledgeSignal(id=f"{campaign_id}-{i}", type="INTENT", price_ceiling=25, created_at=AS_OF)
                for i in range(intents)
            ],
        )

    def test_orders_by_score_descending(self):
        ranking = rank_campaigns([self._campaign("a", 1), self._campaign("b", 50), self._campaign("c", 10)])
        assert [c.campaign_id for c in ranking.campaigns] == ["b", "c", "a"]
        assert [c.rank for c in ranking.campaigns] == [1, 2, 3]

    def test_ties_break_by_campaign_id(self):
        ranking = rank_campaigns([self._campaign("z", 0), self._campaign("m", 0)])
        assert [c.campaign_id for c in ranking.campaigns] == ["m", "z"]

    def test_limit(self):
        ranking = rank_campaigns([self._campaign(x, 1) for x in "abcde"], limit=2)
        assert len(ranking.campaigns) == 2

    def test_missing_campaign_id_rejected(self):
        with pytest.raises(InvalidInput):
            rank_campaigns([CampaignSnapshot()])


class TestRevenueProjection:
    def test_projected_customers_and_revenue(self):
        inputs = SignalScoreInputs(
            neat_idea_count=10,
            probably_buy_count=5,
            take_my_money_count=2,
            intent_count=5,
            median_price_ceiling=70,
        )
        result = compute_signal_score(inputs)
        # 0.5 + 1.0 + 1.2 + 2.0 = 4.7
        assert result.projected_customers == 5
        assert result.projected_revenue == 350

    def test_no_signals_projects_nothing(self):
        result = compute_signal_score(SignalScoreInputs())
        assert result.projected_customers == 0
        assert result.projected_revenue == 0
