from typing import List, Literal

from pydantic import Field

from ..constants import MAX_PRICE
from .base import CamelModel

SignalTier = Literal["low", "medium", "high", "very_high"]


class SignalScoreInputs(CamelModel):
    """Aggregates feeding the campaign ranking score."""

    support_count: int = Field(0, ge=0)
    intent_count: int = Field(0, ge=0)
    intent_verified_count: int = Field(0, ge=0)
    median_price_ceiling: float = Field(0.0, ge=0.0, le=MAX_PRICE)
    intent_last_7_days: int = Field(0, ge=0)
    intent_prev_7_days: int = Field(0, ge=0)
    fraud_risk_score: float = Field(0.0, ge=0.0, le=1.0)
    neat_idea_count: int = Field(0, ge=0)
    probably_buy_count: int = Field(0, ge=0)
    take_my_money_count: int = Field(0, ge=0)
    completeness_score: float = Field(0.0, ge=0.0, le=100.0)


class SignalThresholdFlags(CamelModel):
    trending: bool = False
    notify_brand: bool = False
    high_signal: bool = False
    suggest_offer: bool = False


class SignalScoreResult(CamelModel):
    score: float = Field(..., ge=0.0, le=100.0)
    tier: SignalTier
    demand_value: float
    weighted_intent: float
    momentum: float = Field(..., ge=0.0, le=2.0)
    lobby_conviction: float = Field(..., ge=0.0)
    projected_customers: int = Field(0, ge=0)
    projected_revenue: int = Field(
        0,
        ge=0,
        description="Projected customers × median intent price ceiling, whole currency units",
    )
    flags: SignalThresholdFlags
    inputs: SignalScoreInputs


class RankedCampaign(CamelModel):
    rank: int = Field(..., ge=1)
    campaign_id: str
    score: float
    tier: SignalTier


class CampaignRanking(CamelModel):
    campaigns: List[RankedCampaign] = Field(default_factory=list)
