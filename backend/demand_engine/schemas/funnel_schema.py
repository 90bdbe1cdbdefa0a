from typing import List, Literal

from pydantic import Field

from .base import CamelModel
from .signal_schema import TrendPoint

CampaignPerformance = Literal["below", "average", "above", "exceptional"]


class Funnel(CamelModel):
    visitors: int = 0
    lobbyists: int = 0
    pledgers: int = 0
    orderers: int = 0


class ConversionRates(CamelModel):
    """Stage-to-stage conversion, expressed as percentages in [0, 100]."""

    visit_to_lobby: float = Field(0.0, ge=0.0, le=100.0)
    lobby_to_pledge: float = Field(0.0, ge=0.0, le=100.0)
    pledge_to_order: float = Field(0.0, ge=0.0, le=100.0)
    overall_conversion: float = Field(0.0, ge=0.0, le=100.0)


class IntensityConversion(CamelModel):
    count: int = 0
    converted: int = 0
    rate: float = Field(0.0, ge=0.0, le=100.0)


class ByIntensity(CamelModel):
    """Of users who lobbied at each intensity, what share ultimately ordered."""

    neat_idea: IntensityConversion = Field(default_factory=IntensityConversion)
    probably_buy: IntensityConversion = Field(default_factory=IntensityConversion)
    take_my_money: IntensityConversion = Field(default_factory=IntensityConversion)


class Benchmarks(CamelModel):
    industry_avg: float
    campaign_performance: CampaignPerformance


class ConversionFunnelResult(CamelModel):
    funnel: Funnel
    rates: ConversionRates
    by_intensity: ByIntensity
    trends: List[TrendPoint] = Field(default_factory=list)
    benchmarks: Benchmarks


GrowthTrend = Literal["declining", "flat", "growing", "accelerating"]


class LobbyGrowth(CamelModel):
    """Recent lobby velocity against the trailing monthly average."""

    lobbies_last_7_days: int = Field(0, ge=0)
    lobbies_last_30_days: int = Field(0, ge=0)
    growth_rate: float = Field(
        0.0,
        description="Percent change of the last week against an average week of the last 30 days",
    )
    trend: GrowthTrend = "flat"


class TopCampaign(CamelModel):
    campaign_id: str
    conversion_rate: float = Field(0.0, ge=0.0, le=100.0)


class PlatformConversionStats(CamelModel):
    """Funnel totals across many campaigns."""

    total_campaigns: int = 0
    active_campaigns: int = Field(
        0,
        description="Campaigns with at least one lobbyist or pledger",
    )
    average_conversion_rate: float = Field(
        0.0,
        ge=0.0,
        le=100.0,
        description="Total orderers as a percent of total visitors",
    )
    total_visitors: int = 0
    total_lobbyists: int = 0
    total_pledgers: int = 0
    total_orders: int = 0
    top_performing: List[TopCampaign] = Field(default_factory=list)
