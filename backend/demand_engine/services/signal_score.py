"""Campaign Signal Score.

A 0-100 ranking score used to order campaigns and decide when to nudge
brands.  Deterministic math over aggregated signal counts:

    weighted_intent = intent + 0.2 × phone-verified intent
    demand_value    = weighted_intent × median intent price ceiling
    momentum        = clamp(intent last 7d / max(1, intent prior 7d), 0, 2)
    conviction      = mean lobby weight over verified lobbies (0-5)
    multiplier      = 1 + completeness/100 × 0.3

    raw = (18·log10(1+demand_value) + 8·log10(1+weighted_intent)
           + 3·log10(1+support) + 5·log10(1+lobbies)
           + 4·conviction + 6·momentum − 20·fraud_risk) × multiplier

Alongside the score it projects customers (default lobby conversion
rates, 40% of intent pledges) and revenue at the median intent ceiling.
"""

from __future__ import annotations

import logging
import math
from datetime import timedelta
from typing import Optional, Sequence

from ..constants import (
    DEFAULT_LOBBY_CONVERSION,
    LOBBY_INTENSITY_WEIGHTS,
    MOMENTUM_WINDOW_DAYS,
    SIGNAL_INTENT_CONVERSION,
    SIGNAL_SCORE_TIERS,
    SIGNAL_THRESHOLDS,
)
from ..schemas.signal_schema import CampaignSnapshot, LobbyIntensity, PledgeType
from ..schemas.signal_score_schema import (
    CampaignRanking,
    RankedCampaign,
    SignalScoreInputs,
    SignalScoreResult,
    SignalThresholdFlags,
    SignalTier,
)
from .funnel_calculator import as_naive_utc, resolve_as_of
from .pricing_analysis import median
from .report_assembler import require_campaign_id
from .signal_classifier import resolve_intensity, resolve_pledge_type
from .timing import timed

logger = logging.getLogger(__name__)

_VERIFIED_INTENT_BONUS = 0.2
_COMPLETENESS_BOOST = 0.3


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def projected_customers(inputs: SignalScoreInputs) -> int:
    """Expected buyers if a brand built the product: default lobby rates plus intent pledges."""
    return _round_half_up(
        inputs.neat_idea_count * DEFAULT_LOBBY_CONVERSION["NEAT_IDEA"]
        + inputs.probably_buy_count * DEFAULT_LOBBY_CONVERSION["PROBABLY_BUY"]
        + inputs.take_my_money_count * DEFAULT_LOBBY_CONVERSION["TAKE_MY_MONEY"]
        + inputs.intent_count * SIGNAL_INTENT_CONVERSION
    )


def signal_tier(score: float) -> SignalTier:
    for lower_bound, tier in SIGNAL_SCORE_TIERS:
        if score >= lower_bound:
            return tier  # type: ignore[return-value]
    return "low"


def compute_signal_score(inputs: SignalScoreInputs) -> SignalScoreResult:
    """Score a campaign from pre-aggregated inputs.  Pure function."""
    weighted_intent = inputs.intent_count + _VERIFIED_INTENT_BONUS * inputs.intent_verified_count

    total_lobbies = inputs.neat_idea_count + inputs.probably_buy_count + inputs.take_my_money_count
    if total_lobbies > 0:
        lobby_conviction = (
            inputs.neat_idea_count * LOBBY_INTENSITY_WEIGHTS["NEAT_IDEA"]
            + inputs.probably_buy_count * LOBBY_INTENSITY_WEIGHTS["PROBABLY_BUY"]
            + inputs.take_my_money_count * LOBBY_INTENSITY_WEIGHTS["TAKE_MY_MONEY"]
        ) / total_lobbies
    else:
        lobby_conviction = 0.0

    demand_value = weighted_intent * inputs.median_price_ceiling
    momentum = _clamp(inputs.intent_last_7_days / max(1, inputs.intent_prev_7_days), 0.0, 2.0)
    multiplier = 1 + (inputs.completeness_score / 100) * _COMPLETENESS_BOOST

    raw = (
        18 * math.log10(1 + demand_value)
        + 8 * math.log10(1 + weighted_intent)
        + 3 * math.log10(1 + inputs.support_count)
        + 5 * math.log10(1 + total_lobbies)
        + 4 * lobby_conviction
        + 6 * momentum
        - 20 * inputs.fraud_risk_score
    ) * multiplier
    score = _clamp(round(raw, 1), 0.0, 100.0)
    customers = projected_customers(inputs)

    return SignalScoreResult(
        score=score,
        tier=signal_tier(score),
        demand_value=round(demand_value, 2),
        weighted_intent=round(weighted_intent, 2),
        momentum=round(momentum, 4),
        lobby_conviction=round(lobby_conviction, 4),
        projected_customers=customers,
        projected_revenue=_round_half_up(customers * inputs.median_price_ceiling),
        flags=SignalThresholdFlags(
            trending=score >= SIGNAL_THRESHOLDS["TRENDING"],
            notify_brand=score >= SIGNAL_THRESHOLDS["NOTIFY_BRAND"],
            high_signal=score >= SIGNAL_THRESHOLDS["HIGH_SIGNAL"],
            suggest_offer=score >= SIGNAL_THRESHOLDS["SUGGEST_OFFER"],
        ),
        inputs=inputs,
    )


def signal_inputs_from_snapshot(snapshot: CampaignSnapshot) -> SignalScoreInputs:
    """Aggregate a snapshot into signal score inputs.

    Only verified lobbies count towards conviction.  Momentum windows are
    anchored on the snapshot's ``as_of`` (or latest record).
    """
    lobbies = [l for l in snapshot.lobbies if l.verified]
    intensities = [resolve_intensity(l.intensity) for l in lobbies]

    intent = [p for p in snapshot.pledges if resolve_pledge_type(p.type) is PledgeType.INTENT]
    support_count = len(snapshot.pledges) - len(intent)
    ceilings = [p.price_ceiling for p in intent if p.price_ceiling is not None]

    last_7 = prev_7 = 0
    as_of = resolve_as_of(snapshot)
    if as_of is not None:
        anchor = as_naive_utc(as_of)
        window = timedelta(days=MOMENTUM_WINDOW_DAYS)
        for pledge in intent:
            created = as_naive_utc(pledge.created_at)
            if anchor - window < created <= anchor:
                last_7 += 1
            elif anchor - 2 * window < created <= anchor - window:
                prev_7 += 1

    return SignalScoreInputs(
        support_count=support_count,
        intent_count=len(intent),
        intent_verified_count=sum(1 for p in intent if p.verified),
        median_price_ceiling=round(median(ceilings), 2),
        intent_last_7_days=last_7,
        intent_prev_7_days=prev_7,
        fraud_risk_score=snapshot.fraud_risk_score,
        neat_idea_count=intensities.count(LobbyIntensity.NEAT_IDEA),
        probably_buy_count=intensities.count(LobbyIntensity.PROBABLY_BUY),
        take_my_money_count=intensities.count(LobbyIntensity.TAKE_MY_MONEY),
        completeness_score=snapshot.completeness_score,
    )


def score_snapshot(snapshot: CampaignSnapshot) -> SignalScoreResult:
    return compute_signal_score(signal_inputs_from_snapshot(snapshot))


@timed("signal_score")
def rank_campaigns(snapshots: Sequence[CampaignSnapshot], limit: Optional[int] = None) -> CampaignRanking:
    """Score each snapshot and order by score descending (ties by campaign id).

    Every snapshot must carry a valid ``campaign_id``.
    """
    scored = []
    for snapshot in snapshots:
        campaign_id = require_campaign_id(snapshot.campaign_id)
        scored.append((campaign_id, score_snapshot(snapshot)))

    scored.sort(key=lambda item: (-item[1].score, item[0]))
    if limit is not None:
        scored = scored[:limit]

    logger.info("[SIGNAL_SCORE] ranked %d campaigns", len(scored))
    return CampaignRanking(
        campaigns=[
            RankedCampaign(rank=i, campaign_id=cid, score=result.score, tier=result.tier)
            for i, (cid, result) in enumerate(scored, start=1)
        ]
    )
