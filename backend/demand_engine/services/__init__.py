
from .signal_classifier import lobby_weight, pledge_weight
from .aggregator import aggregate_signals
from .funnel_calculator import calculate_conversion_funnel, funnel_for_snapshot
from .confidence_scorer import score_confidence
from .revenue_projector import project_revenue
from .break_even import calculate_break_even, calculate_margin
from .benchmark import classify_performance
from .report_assembler import build_business_case
from .signal_score import compute_signal_score, rank_campaigns, score_snapshot
from .growth import calculate_lobby_growth
from .platform_stats import summarize_platform

__all__ = [
    "lobby_weight",
    "pledge_weight",
    "aggregate_signals",
    "calculate_conversion_funnel",
    "funnel_for_snapshot",
    "score_confidence",
    "project_revenue",
    "calculate_break_even",
    "calculate_margin",
    "classify_performance",
    "build_business_case",
    "compute_signal_score",
    "rank_campaigns",
    "score_snapshot",
    "calculate_lobby_growth",
    "summarize_platform",
]
