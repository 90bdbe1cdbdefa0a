"""Engine configuration.

Every modeling constant that is an assumption rather than a measurement
(fixed costs, margins, benchmark thresholds, the suggested-price
percentile) is exposed here so callers can tune it without touching the
engine.  Defaults reproduce the documented behaviour.

Environment overrides (read by ``load_settings``) use the
``DEMAND_ENGINE_`` prefix, e.g. ``DEMAND_ENGINE_FIXED_COST_BASELINE=9000``.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

_ENV_PREFIX = "DEMAND_ENGINE_"


class EngineSettings(BaseModel):
    """Tunable business assumptions consumed by the services."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    # Break-even: one production run (5000) plus launch marketing (2000)
    fixed_cost_baseline: float = Field(7000.0, gt=0)

    conservative_margin: float = Field(0.20, ge=0.0, lt=1.0)
    moderate_margin: float = Field(0.35, ge=0.0, lt=1.0)
    optimistic_margin: float = Field(0.45, ge=0.0, lt=1.0)

    industry_avg_conversion: float = Field(2.5, gt=0, description="Percent")
    above_multiplier: float = Field(1.5, gt=1.0)
    exceptional_multiplier: float = Field(3.0, gt=1.0)

    suggested_price_percentile: float = Field(40.0, gt=0, lt=100)
    min_points_for_percentile: int = Field(3, ge=2)

    strong_signal_threshold: float = Field(50.0, ge=0)
    pricing_data_threshold: int = Field(5, ge=0)

    @model_validator(mode="after")
    def _check_ordering(self) -> "EngineSettings":
        if not (self.conservative_margin <= self.moderate_margin <= self.optimistic_margin):
            raise ValueError("Scenario margins must be ordered conservative <= moderate <= optimistic")
        if self.exceptional_multiplier <= self.above_multiplier:
            raise ValueError("exceptional_multiplier must exceed above_multiplier")
        return self


DEFAULT_SETTINGS = EngineSettings()


def _env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for name in EngineSettings.model_fields:
        raw = os.getenv(_ENV_PREFIX + name.upper())
        if raw is not None and raw.strip():
            overrides[name] = raw.strip()
    return overrides


@lru_cache(maxsize=1)
def load_settings() -> EngineSettings:
    """Build settings from defaults plus ``DEMAND_ENGINE_*`` env overrides.

    Cached for the process lifetime; call ``load_settings.cache_clear()``
    after changing the environment (tests do this).
    """
    overrides = _env_overrides()
    if overrides:
        logger.info("[CONFIG] Engine overrides from environment: %s", sorted(overrides))
    return EngineSettings(**overrides)
