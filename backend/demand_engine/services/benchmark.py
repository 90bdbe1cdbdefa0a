"""Benchmark Comparator.

Classifies overall conversion (percent) against a fixed industry average.

  x < avg                       → below
  avg ≤ x < above_mult × avg    → average
  above_mult × avg ≤ x < exc    → above
  x ≥ exceptional_mult × avg    → exceptional
"""

from __future__ import annotations

from typing import Optional

from ..config import DEFAULT_SETTINGS, EngineSettings
from ..schemas.funnel_schema import Benchmarks, CampaignPerformance


def classify_performance(
    overall_conversion: float,
    settings: Optional[EngineSettings] = None,
) -> CampaignPerformance:
    settings = settings or DEFAULT_SETTINGS
    avg = settings.industry_avg_conversion
    if overall_conversion < avg:
        return "below"
    if overall_conversion < settings.above_multiplier * avg:
        return "average"
    if overall_conversion < settings.exceptional_multiplier * avg:
        return "above"
    return "exceptional"


def compare_to_benchmark(
    overall_conversion: float,
    settings: Optional[EngineSettings] = None,
) -> Benchmarks:
    settings = settings or DEFAULT_SETTINGS
    return Benchmarks(
        industry_avg=settings.industry_avg_conversion,
        campaign_performance=classify_performance(overall_conversion, settings),
    )
