"""Confidence Scorer.

Additive model, capped at 100:

    base  = min(total_signals × 2, 60)
    bonus = min(price_points × 4, 40)     # pricing data is scarcer
    score = clamp(base + bonus, 0, 100)

Levels: <25 low, 25-54 medium, 55-79 high, ≥80 very_high.
"""

from __future__ import annotations

from ..constants import (
    CONFIDENCE_LEVELS,
    PRICE_POINTS_CAP,
    PRICE_POINTS_PER_DATA_POINT,
    SIGNAL_POINTS_CAP,
    SIGNAL_POINTS_PER_SIGNAL,
)
from ..schemas.business_case_schema import ConfidenceAssessment, ConfidenceLevel


def _clamp(value: int, lo: int = 0, hi: int = 100) -> int:
    return max(lo, min(hi, value))


def confidence_level(score: int) -> ConfidenceLevel:
    for lower_bound, level in CONFIDENCE_LEVELS:
        if score >= lower_bound:
            return level  # type: ignore[return-value]
    return "low"


def _describe(total_signals: int, price_points: int, level: str) -> str:
    signals = f"{total_signals} demand signal{'s' if total_signals != 1 else ''}"
    points = f"{price_points} price point{'s' if price_points != 1 else ''}"
    return f"Based on {signals} and {points} — {level.replace('_', ' ')} confidence."


def score_confidence(total_signals: int, price_ceiling_data_points: int) -> ConfidenceAssessment:
    """Derive confidence score, level and a sufficiency sentence from sample sizes."""
    total_signals = max(total_signals, 0)
    price_points = max(price_ceiling_data_points, 0)

    base = min(total_signals * SIGNAL_POINTS_PER_SIGNAL, SIGNAL_POINTS_CAP)
    bonus = min(price_points * PRICE_POINTS_PER_DATA_POINT, PRICE_POINTS_CAP)
    score = _clamp(base + bonus)
    level = confidence_level(score)

    return ConfidenceAssessment(
        confidence_score=score,
        confidence_level=level,
        data_sufficiency=_describe(total_signals, price_points, level),
    )
