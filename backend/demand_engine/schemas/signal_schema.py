from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from ..constants import MAX_PRICE
from .base import CamelModel


class LobbyIntensity(str, Enum):
    """Conviction tier declared when lobbying for a product."""

    NEAT_IDEA = "NEAT_IDEA"
    PROBABLY_BUY = "PROBABLY_BUY"
    TAKE_MY_MONEY = "TAKE_MY_MONEY"


class PledgeType(str, Enum):
    """SUPPORT is informal backing; INTENT is a binding-ish commitment."""

    SUPPORT = "SUPPORT"
    INTENT = "INTENT"


class LobbySignal(CamelModel):
    """A declared interest at one of three conviction levels."""

    id: str
    intensity: LobbyIntensity
    verified: bool = False
    created_at: datetime
    user_id: Optional[str] = Field(
        default=None,
        description="Lobbyist identity, used for distinct-person funnel counts",
    )


class PledgeSignal(CamelModel):
    """A pledge, optionally carrying the price a user would pay."""

    id: str
    type: PledgeType
    price_ceiling: Optional[float] = Field(default=None, ge=0, le=MAX_PRICE)
    timeframe_days: Optional[int] = Field(default=None, ge=0)
    created_at: datetime
    user_id: Optional[str] = None
    verified: bool = Field(
        default=False,
        description="Pledger passed phone verification",
    )


class VisitEvent(CamelModel):
    """A campaign page view.  Funnel denominator only."""

    campaign_id: str
    timestamp: datetime
    user_id: Optional[str] = None


class OrderEvent(CamelModel):
    """A realized conversion at the final funnel stage."""

    campaign_id: str
    amount: float = Field(..., ge=0, le=MAX_PRICE)
    timestamp: datetime
    user_id: Optional[str] = None


class IntensityCohortCounts(CamelModel):
    """Lobbyists at one intensity and how many of them ordered."""

    count: int = Field(0, ge=0)
    converted: int = Field(0, ge=0)


class FunnelCounts(CamelModel):
    """Pre-aggregated funnel counters supplied by the data store."""

    visitors: int = Field(0, ge=0)
    lobbyists: int = Field(0, ge=0)
    pledgers: int = Field(0, ge=0)
    orderers: int = Field(0, ge=0)
    neat_idea: IntensityCohortCounts = Field(default_factory=IntensityCohortCounts)
    probably_buy: IntensityCohortCounts = Field(default_factory=IntensityCohortCounts)
    take_my_money: IntensityCohortCounts = Field(default_factory=IntensityCohortCounts)


class TrendPoint(CamelModel):
    """One day of funnel activity (UTC date)."""

    date: str = Field(..., description="ISO date, YYYY-MM-DD")
    visitors: int = Field(0, ge=0)
    lobbies: int = Field(0, ge=0)
    pledges: int = Field(0, ge=0)
    orders: int = Field(0, ge=0)


class CampaignSnapshot(CamelModel):
    """Immutable per-request view of everything known about one campaign.

    ``funnel`` and ``trends`` may be pre-aggregated by the data store;
    when omitted they are derived from ``visits``/``orders`` and the
    signal records.  ``as_of`` anchors the trailing trend window and the
    momentum window; it defaults to the latest record timestamp so the
    engine never reads the wall clock.
    """

    campaign_id: Optional[str] = None
    lobbies: List[LobbySignal] = Field(default_factory=list)
    pledges: List[PledgeSignal] = Field(default_factory=list)
    visits: List[VisitEvent] = Field(default_factory=list)
    orders: List[OrderEvent] = Field(default_factory=list)
    funnel: Optional[FunnelCounts] = None
    trends: Optional[List[TrendPoint]] = None
    as_of: Optional[datetime] = None
    completeness_score: float = Field(0.0, ge=0.0, le=100.0)
    fraud_risk_score: float = Field(0.0, ge=0.0, le=1.0)
