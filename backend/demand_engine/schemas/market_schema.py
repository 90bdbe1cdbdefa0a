from typing import List

from pydantic import Field

from .base import CamelModel


class LobbyBreakdown(CamelModel):
    neat_idea: int = 0
    probably_buy: int = 0
    take_my_money: int = 0
    total: int = 0
    weighted: int = Field(0, description="Intensity-weighted lobby demand only")


class PledgeBreakdown(CamelModel):
    support: int = 0
    intent: int = 0
    total: int = 0
    weighted: int = Field(0, description="Type-weighted pledge demand only")


class MarketSizing(CamelModel):
    """Counts and weighted sums over a campaign's signals."""

    total_demand_signals: int = Field(0, ge=0)
    weighted_demand: int = Field(
        0,
        ge=0,
        description=(
            "Σ lobby weight × count + Σ pledge weight × count; the lobby-only "
            "figure is lobbyBreakdown.weighted"
        ),
    )
    lobby_breakdown: LobbyBreakdown = Field(default_factory=LobbyBreakdown)
    pledge_breakdown: PledgeBreakdown = Field(default_factory=PledgeBreakdown)


class PriceRange(CamelModel):
    min: float = 0.0
    max: float = 0.0


class PriceBracket(CamelModel):
    bracket: str
    count: int = 0
    percentage: int = Field(0, ge=0, le=100)


class TieredPricePoints(CamelModel):
    """25th / 50th / 75th percentile of stated price ceilings."""

    economy: float = 0.0
    standard: float = 0.0
    premium: float = 0.0


class DemandPoint(CamelModel):
    """Pledgers whose ceiling is at or above *price*."""

    price: float
    estimated_buyers: int = Field(0, ge=0)


class IntensityPrice(CamelModel):
    avg: float = 0.0
    count: int = Field(0, ge=0)


class IntensityPricing(CamelModel):
    """Average price ceiling of pledgers, grouped by their earliest lobby intensity."""

    neat_idea: IntensityPrice = Field(default_factory=IntensityPrice)
    probably_buy: IntensityPrice = Field(default_factory=IntensityPrice)
    take_my_money: IntensityPrice = Field(default_factory=IntensityPrice)


class PricingInsights(CamelModel):
    """Statistics over pledges that carry a non-null price ceiling."""

    avg_price_ceiling: float = 0.0
    median_price_ceiling: float = 0.0
    mode_price_ceiling: float = 0.0
    price_range: PriceRange = Field(default_factory=PriceRange)
    suggested_price_point: float = 0.0
    suggested_price_reasoning: str = ""
    price_ceiling_data_points: int = Field(0, ge=0)
    distribution: List[PriceBracket] = Field(default_factory=list)
    tiered_price_points: TieredPricePoints = Field(default_factory=TieredPricePoints)
    p90_price_ceiling: float = 0.0
    by_intensity: IntensityPricing = Field(default_factory=IntensityPricing)
    demand_curve: List[DemandPoint] = Field(default_factory=list)
    optimal_price: float = Field(
        0.0,
        description="Price maximizing price × buyers at or above it",
    )
    max_revenue: float = 0.0
