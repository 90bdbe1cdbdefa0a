"""Signal Classifier.

Maps lobby intensity and pledge type enums to numeric conviction weights.
Pure lookup tables, no side effects.  An unknown value means the schema
drifted upstream, so it raises ``UnknownSignalKind`` instead of guessing.
"""

from __future__ import annotations

from typing import Union

from ..constants import LOBBY_INTENSITY_WEIGHTS, PLEDGE_TYPE_WEIGHTS
from ..errors import UnknownSignalKind
from ..schemas.signal_schema import LobbyIntensity, PledgeType


def resolve_intensity(value: Union[LobbyIntensity, str]) -> LobbyIntensity:
    """Coerce *value* to a ``LobbyIntensity`` or raise ``UnknownSignalKind``."""
    try:
        return LobbyIntensity(value)
    except ValueError:
        raise UnknownSignalKind("lobby intensity", value) from None


def resolve_pledge_type(value: Union[PledgeType, str]) -> PledgeType:
    """Coerce *value* to a ``PledgeType`` or raise ``UnknownSignalKind``."""
    try:
        return PledgeType(value)
    except ValueError:
        raise UnknownSignalKind("pledge type", value) from None


def lobby_weight(intensity: Union[LobbyIntensity, str]) -> int:
    """NEAT_IDEA → 1, PROBABLY_BUY → 2, TAKE_MY_MONEY → 5."""
    return LOBBY_INTENSITY_WEIGHTS[resolve_intensity(intensity).value]


def pledge_weight(pledge_type: Union[PledgeType, str]) -> int:
    """SUPPORT → 1, INTENT → 3."""
    return PLEDGE_TYPE_WEIGHTS[resolve_pledge_type(pledge_type).value]
