"""Business Case Report Assembler.

Orchestrates the engines in dependency order and returns a structured
report.  No new modeling logic lives here — only wiring, insight flags
and the recommendation text.

    snapshot → aggregator → {funnel, confidence} → revenue → break-even
             → benchmark (inside funnel), lobby growth → BusinessCaseReport

The report is a pure function of (campaign_id, snapshot, settings):
no I/O, no wall clock, no shared state.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..config import DEFAULT_SETTINGS, EngineSettings
from ..constants import ACTION_PROCEED, ACTION_SURVEY, HIGH_CONFIDENCE_LEVELS
from ..errors import InvalidInput
from ..schemas.business_case_schema import (
    BreakEvenAnalysis,
    BusinessCaseReport,
    ConfidenceAssessment,
    ConversionMetrics,
    DataQuality,
    Insights,
    RevenueProjections,
)
from ..schemas.funnel_schema import ConversionFunnelResult
from ..schemas.market_schema import MarketSizing, PricingInsights
from ..schemas.signal_schema import CampaignSnapshot
from .aggregator import aggregate_signals
from .break_even import calculate_break_even
from .confidence_scorer import score_confidence
from .funnel_calculator import conversion_rate, funnel_for_snapshot
from .growth import calculate_lobby_growth
from .revenue_projector import project_revenue
from .timing import sync_timer

logger = logging.getLogger(__name__)

_CAMPAIGN_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.:\-]{0,127}$")


def require_campaign_id(campaign_id: Optional[str], snapshot: Optional[CampaignSnapshot] = None) -> str:
    """Validate the call-boundary campaign identifier.

    Raises ``InvalidInput`` when it is missing, malformed, or disagrees
    with the id carried by the snapshot.
    """
    if campaign_id is None or not isinstance(campaign_id, str) or not campaign_id.strip():
        raise InvalidInput("campaign_id", "campaign identifier is required")
    campaign_id = campaign_id.strip()
    if not _CAMPAIGN_ID_RE.match(campaign_id):
        raise InvalidInput("campaign_id", f"malformed campaign identifier {campaign_id!r}")
    if snapshot is not None and snapshot.campaign_id is not None and snapshot.campaign_id != campaign_id:
        raise InvalidInput(
            "campaign_id",
            f"snapshot belongs to campaign {snapshot.campaign_id!r}, not {campaign_id!r}",
        )
    return campaign_id


# ===================================================================== #
#  Insight flags & recommendation                                         #
# ===================================================================== #

def derive_insights(
    market: MarketSizing,
    pricing: PricingInsights,
    confidence: ConfidenceAssessment,
    settings: Optional[EngineSettings] = None,
) -> Insights:
    settings = settings or DEFAULT_SETTINGS
    high_confidence = confidence.confidence_level in HIGH_CONFIDENCE_LEVELS
    return Insights(
        has_strong_signals=market.weighted_demand >= settings.strong_signal_threshold,
        has_pricing_data=pricing.price_ceiling_data_points >= settings.pricing_data_threshold,
        has_high_confidence=high_confidence,
        recommended_action=ACTION_PROCEED if high_confidence else ACTION_SURVEY,
        # Same trigger as recommended_action; the UI CTA reads this flag.
        show_survey_cta=not high_confidence,
    )


def _collect_warnings(
    market: MarketSizing,
    pricing: PricingInsights,
    funnel: ConversionFunnelResult,
    break_even: BreakEvenAnalysis,
) -> list[str]:
    warnings: list[str] = []
    if market.total_demand_signals == 0:
        warnings.append("No lobby or pledge signals recorded; market sizing is empty.")
    if pricing.price_ceiling_data_points == 0:
        warnings.append(pricing.suggested_price_reasoning)
    if funnel.funnel.visitors == 0:
        warnings.append("No visitor data; funnel conversion rates default to 0.")
    if break_even.warning:
        warnings.append(break_even.warning)
    return warnings


def _conversion_metrics(
    funnel: ConversionFunnelResult,
    projections: RevenueProjections,
    market: MarketSizing,
) -> ConversionMetrics:
    moderate = projections.moderate
    return ConversionMetrics(
        funnel=funnel.funnel,
        rates=funnel.rates,
        by_intensity=funnel.by_intensity,
        trends=funnel.trends,
        benchmarks=funnel.benchmarks,
        projection_rates=moderate.conversion_rates,
        estimated_customers=moderate.customers,
        projected_conversion_rate=round(
            conversion_rate(moderate.customers, market.total_demand_signals), 2
        ),
    )


# ===================================================================== #
#  Entry point                                                            #
# ===================================================================== #

def build_business_case(
    campaign_id: Optional[str],
    snapshot: CampaignSnapshot,
    settings: Optional[EngineSettings] = None,
) -> BusinessCaseReport:
    """Assemble the full business case for one campaign snapshot.

    Only ``InvalidInput`` (bad campaign id) and ``UnknownSignalKind``
    (corrupt enum values) propagate; every degraded-data condition is
    absorbed into explanatory fields and ``warnings``.
    """
    campaign_id = require_campaign_id(campaign_id, snapshot)
    settings = settings or DEFAULT_SETTINGS

    with sync_timer("business_case", f"ASSEMBLE {campaign_id}"):
        # 1. Aggregate signals
        market, pricing = aggregate_signals(snapshot.lobbies, snapshot.pledges, settings)

        # 2. Funnel (+ benchmark) and confidence
        funnel = funnel_for_snapshot(snapshot, settings)
        confidence = score_confidence(
            market.total_demand_signals, pricing.price_ceiling_data_points
        )

        # 3. Revenue scenarios
        projections = project_revenue(
            market, pricing.suggested_price_point, funnel.by_intensity, settings
        )

        # 4. Break-even on the moderate scenario
        break_even = calculate_break_even(
            projections.moderate, pricing.suggested_price_point, settings
        )

        insights = derive_insights(market, pricing, confidence, settings)

        report = BusinessCaseReport(
            campaign_id=campaign_id,
            market_sizing=market,
            revenue_projections=projections,
            pricing_insights=pricing,
            conversion_metrics=_conversion_metrics(funnel, projections, market),
            data_quality=DataQuality(
                **confidence.model_dump(),
                price_ceiling_data_points=pricing.price_ceiling_data_points,
                total_signals=market.total_demand_signals,
            ),
            break_even_analysis=break_even,
            growth=calculate_lobby_growth(snapshot),
            insights=insights,
            warnings=_collect_warnings(market, pricing, funnel, break_even),
        )

    logger.info(
        "[BUSINESS_CASE] campaign=%s confidence=%d (%s) action=%r",
        campaign_id,
        report.data_quality.confidence_score,
        report.data_quality.confidence_level,
        report.insights.recommended_action,
    )
    return report
