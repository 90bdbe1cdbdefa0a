"""Platform-wide conversion summary over a batch of campaign snapshots."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..config import DEFAULT_SETTINGS, EngineSettings
from ..constants import PLATFORM_TOP_PERFORMERS
from ..schemas.funnel_schema import PlatformConversionStats, TopCampaign
from ..schemas.signal_schema import CampaignSnapshot
from .funnel_calculator import funnel_for_snapshot, overall_conversion
from .report_assembler import require_campaign_id

logger = logging.getLogger(__name__)


def summarize_platform(
    snapshots: Sequence[CampaignSnapshot],
    settings: Optional[EngineSettings] = None,
    top_n: int = PLATFORM_TOP_PERFORMERS,
) -> PlatformConversionStats:
    """Sum funnel stages across campaigns and list the best converters.

    Top performers are ordered by overall conversion descending, ties by
    campaign id.  Every snapshot must carry a valid ``campaign_id``.
    """
    settings = settings or DEFAULT_SETTINGS

    visitors = lobbyists = pledgers = orders = active = 0
    performers: list[TopCampaign] = []
    for snapshot in snapshots:
        campaign_id = require_campaign_id(snapshot.campaign_id)
        result = funnel_for_snapshot(snapshot, settings)
        funnel = result.funnel

        visitors += funnel.visitors
        lobbyists += funnel.lobbyists
        pledgers += funnel.pledgers
        orders += funnel.orderers
        if funnel.lobbyists > 0 or funnel.pledgers > 0:
            active += 1
        performers.append(
            TopCampaign(campaign_id=campaign_id, conversion_rate=result.rates.overall_conversion)
        )

    performers.sort(key=lambda c: (-c.conversion_rate, c.campaign_id))
    stats = PlatformConversionStats(
        total_campaigns=len(snapshots),
        active_campaigns=active,
        average_conversion_rate=round(overall_conversion(orders, visitors), 2),
        total_visitors=visitors,
        total_lobbyists=lobbyists,
        total_pledgers=pledgers,
        total_orders=orders,
        top_performing=performers[:top_n],
    )
    logger.info(
        "[PLATFORM] campaigns=%d active=%d avg_conversion=%.2f%%",
        stats.total_campaigns,
        stats.active_campaigns,
        stats.average_conversion_rate,
    )
    return stats
