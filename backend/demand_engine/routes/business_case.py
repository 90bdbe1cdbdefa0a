"""Business case routes — compute reports from campaign snapshots.

Endpoints:
  POST /campaigns/{campaign_id}/business-case — full business case report
  POST /campaigns/{campaign_id}/signal-score  — campaign ranking score
  POST /campaigns/rank                        — rank many campaigns by score
  POST /campaigns/platform-summary            — funnel totals across campaigns

The routes are thin: the data store sends a snapshot, all logic lives in
the services, nothing is persisted.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..config import EngineSettings, load_settings
from ..errors import InvalidInput
from ..schemas.business_case_schema import BusinessCaseReport
from ..schemas.funnel_schema import PlatformConversionStats
from ..schemas.signal_schema import CampaignSnapshot
from ..schemas.signal_score_schema import CampaignRanking, SignalScoreResult
from ..services.report_assembler import build_business_case, require_campaign_id
from ..services.platform_stats import summarize_platform
from ..services.signal_score import rank_campaigns, score_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/campaigns",
    tags=["Business Case"],
)


def _invalid(exc: InvalidInput) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"success": False, "error": "Invalid input", "field": exc.field, "detail": exc.message},
    )


@router.post(
    "/{campaign_id}/business-case",
    response_model=BusinessCaseReport,
    summary="Compute Business Case",
    response_description="Market sizing, revenue scenarios, pricing, funnel, confidence and break-even",
)
def business_case(
    campaign_id: str,
    snapshot: CampaignSnapshot,
    settings: EngineSettings = Depends(load_settings),
) -> BusinessCaseReport:
    """Answer "if a brand built this, how much could it make?" for one campaign."""
    try:
        return build_business_case(campaign_id, snapshot, settings)
    except InvalidInput as exc:
        logger.warning("[BUSINESS_CASE] rejected campaign_id=%r: %s", campaign_id, exc)
        raise _invalid(exc) from exc


@router.post(
    "/{campaign_id}/signal-score",
    response_model=SignalScoreResult,
    summary="Compute Signal Score",
)
def signal_score(campaign_id: str, snapshot: CampaignSnapshot) -> SignalScoreResult:
    try:
        require_campaign_id(campaign_id, snapshot)
    except InvalidInput as exc:
        raise _invalid(exc) from exc
    return score_snapshot(snapshot)


@router.post(
    "/rank",
    response_model=CampaignRanking,
    summary="Rank Campaigns by Signal Score",
)
def rank(
    snapshots: List[CampaignSnapshot],
    limit: Optional[int] = Query(default=None, ge=1, le=100),
) -> CampaignRanking:
    try:
        return rank_campaigns(snapshots, limit=limit)
    except InvalidInput as exc:
        raise _invalid(exc) from exc


@router.post(
    "/platform-summary",
    response_model=PlatformConversionStats,
    summary="Platform Conversion Summary",
)
def platform_summary(
    snapshots: List[CampaignSnapshot],
    top: int = Query(default=5, ge=1, le=50),
    settings: EngineSettings = Depends(load_settings),
) -> PlatformConversionStats:
    try:
        return summarize_platform(snapshots, settings, top_n=top)
    except InvalidInput as exc:
        raise _invalid(exc) from exc
