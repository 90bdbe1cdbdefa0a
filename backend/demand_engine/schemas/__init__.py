# Schemas package
from .signal_schema import (
    CampaignSnapshot,
    FunnelCounts,
    LobbyIntensity,
    LobbySignal,
    OrderEvent,
    PledgeSignal,
    PledgeType,
    TrendPoint,
    VisitEvent,
)
from .market_schema import MarketSizing, PricingInsights
from .funnel_schema import ConversionFunnelResult, LobbyGrowth, PlatformConversionStats
from .business_case_schema import BusinessCaseReport, ScenarioProjection
from .signal_score_schema import CampaignRanking, SignalScoreInputs, SignalScoreResult

__all__ = [
    "CampaignSnapshot",
    "FunnelCounts",
    "LobbyIntensity",
    "LobbySignal",
    "OrderEvent",
    "PledgeSignal",
    "PledgeType",
    "TrendPoint",
    "VisitEvent",
    "MarketSizing",
    "PricingInsights",
    "ConversionFunnelResult",
    "LobbyGrowth",
    "PlatformConversionStats",
    "BusinessCaseReport",
    "ScenarioProjection",
    "CampaignRanking",
    "SignalScoreInputs",
    "SignalScoreResult",
]
