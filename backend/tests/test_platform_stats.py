"""Platform summary tests — totals across campaigns and top performers."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from demand_engine.errors import InvalidInput
from demand_engine.schemas.signal_schema import CampaignSnapshot, FunnelCounts
from demand_engine.services.platform_stats import summarize_platform


def _campaign(campaign_id, visitors, lobbyists, pledgers, orderers):
    return CampaignSnapshot(
        campaign_id=campaign_id,
        funnel=FunnelCounts(visitors=visitors, lobbyists=lobbyists, pledgers=pledgers, orderers=orderers),
    )


class TestSummarizePlatform:
    def setup_method(self):
        self.stats = summarize_platform(
            [
                _campaign("alpha", 1000, 50, 10, 5),
                _campaign("beta", 200, 20, 8, 6),
                _campaign("gamma", 0, 0, 0, 0),
            ]
        )

    def test_totals(self):
        assert self.stats.total_campaigns == 3
        assert self.stats.active_campaigns == 2
        assert self.stats.total_visitors == 1200
        assert self.stats.total_lobbyists == 70
        assert self.stats.total_pledgers == 18
        assert self.stats.total_orders == 11

    def test_average_conversion_is_pooled(self):
        assert self.stats.average_conversion_rate == pytest.approx(0.92)

    def test_top_performers_ordered(self):
        assert [c.campaign_id for c in self.stats.top_performing] == ["beta", "alpha", "gamma"]
        assert self.stats.top_performing[0].conversion_rate == pytest.approx(3.0)

    def test_top_n(self):
        stats = summarize_platform([_campaign(f"c{i}", 100, 10, 5, i) for i in range(8)], top_n=3)
        assert [c.campaign_id for c in stats.top_performing] == ["c7", "c6", "c5"]

    def test_empty_batch(self):
        stats = summarize_platform([])
        assert stats.total_campaigns == 0
        assert stats.average_conversion_rate == 0
        assert stats.top_performing == []

    def test_requires_campaign_ids(self):
        with pytest.raises(InvalidInput):
            summarize_platform([CampaignSnapshot()])
