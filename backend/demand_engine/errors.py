"""Typed failures raised by the demand signal engine.

Only two kinds ever reach a caller:

- ``UnknownSignalKind`` — an enum value outside the known set reached the
  classifier.  Upstream data is corrupt; never recovered from.
- ``InvalidInput`` — the call boundary was misused (blank or mismatched
  campaign identifier).

``UneconomicPricing`` is raised internally by the break-even computation
and absorbed into a ``null`` result plus a warning.
"""

from __future__ import annotations


class DemandEngineError(Exception):
    """Base class for all engine errors."""


class UnknownSignalKind(DemandEngineError):
    """A lobby intensity or pledge type value is not part of the schema."""

    def __init__(self, kind: str, value: object):
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind}: {value!r}")


class InvalidInput(DemandEngineError):
    """Missing or malformed input at the engine's call boundary."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class UneconomicPricing(DemandEngineError):
    """Suggested price is at or below the per-unit cost."""

    def __init__(self, price: float, unit_cost: float):
        self.price = price
        self.unit_cost = unit_cost
        super().__init__(
            f"Price {price:.2f} does not cover per-unit cost {unit_cost:.2f}"
        )
