from typing import List, Literal, Optional

from pydantic import Field

from .base import CamelModel
from .funnel_schema import ByIntensity, Benchmarks, ConversionRates, Funnel, LobbyGrowth
from .market_schema import MarketSizing, PricingInsights
from .signal_schema import TrendPoint

ConfidenceLevel = Literal["low", "medium", "high", "very_high"]
ScenarioName = Literal["conservative", "moderate", "optimistic"]


class CohortRates(CamelModel):
    """Conversion fractions (0-1) applied to each signal cohort."""

    neat_idea: float = Field(0.0, ge=0.0, le=1.0)
    probably_buy: float = Field(0.0, ge=0.0, le=1.0)
    take_my_money: float = Field(0.0, ge=0.0, le=1.0)
    intent: float = Field(0.0, ge=0.0, le=1.0)
    support: float = Field(0.0, ge=0.0, le=1.0)


class ScenarioProjection(CamelModel):
    """Revenue projection for one scenario.

    ``profit_margin`` is a fixed per-scenario modeling assumption
    (percent), not a measured figure.
    """

    scenario: ScenarioName
    description: str
    customers: int = Field(0, ge=0)
    revenue: float = Field(0.0, ge=0.0)
    profit_margin: float = Field(..., ge=0.0, le=100.0)
    conversion_rates: CohortRates


class RevenueProjections(CamelModel):
    conservative: ScenarioProjection
    moderate: ScenarioProjection
    optimistic: ScenarioProjection
    rate_source: Literal["observed", "default"] = Field(
        ...,
        description="Whether lobby conversion rates came from funnel data or defaults",
    )


class ConfidenceAssessment(CamelModel):
    confidence_score: int = Field(0, ge=0, le=100)
    confidence_level: ConfidenceLevel = "low"
    data_sufficiency: str = ""


class DataQuality(ConfidenceAssessment):
    price_ceiling_data_points: int = 0
    total_signals: int = 0


class BreakEvenAnalysis(CamelModel):
    units_sold_to_break_even: Optional[int] = None
    revenue_needed: Optional[float] = None
    estimated_timeframe: str
    per_unit_cost: float = 0.0
    fixed_cost_baseline: float = 0.0
    warning: Optional[str] = None


class ConversionMetrics(CamelModel):
    """Observed funnel plus the projection assumptions derived from it."""

    funnel: Funnel
    rates: ConversionRates
    by_intensity: ByIntensity
    trends: List[TrendPoint] = Field(default_factory=list)
    benchmarks: Benchmarks
    projection_rates: CohortRates
    estimated_customers: int = 0
    projected_conversion_rate: float = Field(
        0.0,
        ge=0.0,
        le=100.0,
        description="Moderate customers as a percent of total demand signals",
    )


class Insights(CamelModel):
    has_strong_signals: bool
    has_pricing_data: bool
    has_high_confidence: bool
    recommended_action: str
    show_survey_cta: bool = Field(
        ...,
        description="UI survey call-to-action; always the negation of has_high_confidence",
    )


class BusinessCaseReport(CamelModel):
    """Ephemeral business case.  Recomputed per request, never persisted."""

    campaign_id: str
    market_sizing: MarketSizing
    revenue_projections: RevenueProjections
    pricing_insights: PricingInsights
    conversion_metrics: ConversionMetrics
    data_quality: DataQuality
    break_even_analysis: BreakEvenAnalysis
    growth: LobbyGrowth = Field(default_factory=LobbyGrowth)
    insights: Insights
    warnings: List[str] = Field(default_factory=list)
