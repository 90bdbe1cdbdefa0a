"""Centralized modeling constants for the demand signal engine.

This module is the SINGLE SOURCE OF TRUTH for signal weights, default
conversion assumptions and threshold tables.  Anything that is a tunable
business assumption (margins, fixed costs, benchmark multipliers) lives
in ``config.EngineSettings`` instead and only its default is declared here.
"""

from __future__ import annotations

# ── Signal weights ──────────────────────────────────────────────────────
# Keys are enum *values*; the classifier resolves enums before lookup.
# LOCKED: weights must stay >= 1 so weighted demand never drops below
# the raw signal count.

LOBBY_INTENSITY_WEIGHTS: dict[str, int] = {
    "NEAT_IDEA": 1,
    "PROBABLY_BUY": 2,
    "TAKE_MY_MONEY": 5,
}

PLEDGE_TYPE_WEIGHTS: dict[str, int] = {
    "SUPPORT": 1,
    "INTENT": 3,
}

# ── Default conversion assumptions (fractions, moderate scenario) ───────
# Applied to lobby cohorts when no observed funnel conversions exist.

DEFAULT_LOBBY_CONVERSION: dict[str, float] = {
    "NEAT_IDEA": 0.05,
    "PROBABLY_BUY": 0.20,
    "TAKE_MY_MONEY": 0.60,
}

CONSERVATIVE_RATE_MULTIPLIER = 0.5
OPTIMISTIC_RATE_MULTIPLIER = 1.5
OPTIMISTIC_RATE_CAP = 0.90

# Pledges convert at flat per-scenario rates (not multiplier-derived).
PLEDGE_CONVERSION: dict[str, dict[str, float]] = {
    "conservative": {"INTENT": 0.45, "SUPPORT": 0.08},
    "moderate": {"INTENT": 0.70, "SUPPORT": 0.15},
    "optimistic": {"INTENT": 0.90, "SUPPORT": 0.25},
}

# ── Confidence model ────────────────────────────────────────────────────
SIGNAL_POINTS_PER_SIGNAL = 2
SIGNAL_POINTS_CAP = 60
PRICE_POINTS_PER_DATA_POINT = 4
PRICE_POINTS_CAP = 40

# (lower bound, level), checked top-down
CONFIDENCE_LEVELS: list[tuple[int, str]] = [
    (80, "very_high"),
    (55, "high"),
    (25, "medium"),
    (0, "low"),
]

HIGH_CONFIDENCE_LEVELS: frozenset[str] = frozenset({"high", "very_high"})

# ── Recommendation copy ─────────────────────────────────────────────────
# The survey wording also drives the UI call-to-action; keep both in sync
# through ``insights.showSurveyCta``.
ACTION_PROCEED = "High confidence: sufficient data to justify production planning."
ACTION_SURVEY = "Low confidence: run a survey to collect more data."

# ── Break-even timeframe buckets ────────────────────────────────────────
TIMEFRAME_WITHIN_CAMPAIGN = "within current campaign"
TIMEFRAME_SHORT = "3-6 months"
TIMEFRAME_MEDIUM = "6-12 months"
TIMEFRAME_LONG = "12+ months"
TIMEFRAME_UNSUSTAINABLE = "pricing unsustainable"

# ── Funnel ──────────────────────────────────────────────────────────────
TREND_WINDOW_DAYS = 30

# ── Price distribution brackets: (min, max); max=None means open-ended ─
PRICE_BRACKETS: list[tuple[int, int | None]] = [
    (0, 10),
    (10, 25),
    (25, 50),
    (50, 100),
    (100, 250),
    (250, None),
]

# ── Signal score tiers & ranking thresholds ─────────────────────────────
SIGNAL_SCORE_TIERS: list[tuple[int, str]] = [
    (80, "very_high"),
    (55, "high"),
    (35, "medium"),
    (0, "low"),
]

SIGNAL_THRESHOLDS: dict[str, int] = {
    "TRENDING": 35,
    "NOTIFY_BRAND": 55,
    "HIGH_SIGNAL": 70,
    "SUGGEST_OFFER": 80,
}

MOMENTUM_WINDOW_DAYS = 7

# Signal score revenue projection: lobbies use DEFAULT_LOBBY_CONVERSION
SIGNAL_INTENT_CONVERSION = 0.40

# ── Input bounds ────────────────────────────────────────────────────────
# Upper bound on any single price ceiling or order amount
MAX_PRICE = 1_000_000

# ── Demand curve & revenue-maximizing price ─────────────────────────────
DEMAND_CURVE_MAX_POINTS = 20
ROUND_PRICE_STEP = 5
HIGH_PRICE_PERCENTILE = 90

# ── Lobby growth ────────────────────────────────────────────────────────
GROWTH_SHORT_WINDOW_DAYS = 7
GROWTH_LONG_WINDOW_DAYS = 30
WEEKS_PER_MONTH = 4.3

# (upper bound on growth rate %, trend), checked top-down
GROWTH_TRENDS: list[tuple[float, str]] = [
    (-10, "declining"),
    (5, "flat"),
    (50, "growing"),
]
GROWTH_TREND_TOP = "accelerating"

# ── Platform summary ────────────────────────────────────────────────────
PLATFORM_TOP_PERFORMERS = 5
