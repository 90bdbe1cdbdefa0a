"""Signal classifier tests — weight tables and schema-drift failures."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from demand_engine.errors import UnknownSignalKind
from demand_engine.schemas.signal_schema import LobbyIntensity, PledgeType
from demand_engine.services.signal_classifier import (
    lobby_weight,
    pledge_weight,
    resolve_intensity,
    resolve_pledge_type,
)


class TestLobbyWeights:
    def test_weight_table(self):
        assert lobby_weight(LobbyIntensity.NEAT_IDEA) == 1
        assert lobby_weight(LobbyIntensity.PROBABLY_BUY) == 2
        assert lobby_weight(LobbyIntensity.TAKE_MY_MONEY) == 5

    def test_accepts_raw_string_values(self):
        assert lobby_weight("TAKE_MY_MONEY") == 5

    def test_every_weight_at_least_one(self):
        assert all(lobby_weight(i) >= 1 for i in LobbyIntensity)

    def test_unknown_intensity_raises(self):
        with pytest.raises(UnknownSignalKind) as exc_info:
            lobby_weight("MAYBE_LATER")
        assert exc_info.value.value == "MAYBE_LATER"
        assert "lobby intensity" in str(exc_info.value)


class TestPledgeWeights:
    def test_weight_table(self):
        assert pledge_weight(PledgeType.SUPPORT) == 1
        assert pledge_weight(PledgeType.INTENT) == 3

    def test_unknown_type_raises(self):
        with pytest.raises(UnknownSignalKind):
            pledge_weight("DONATION")

    def test_lowercase_is_not_silently_accepted(self):
        with pytest.raises(UnknownSignalKind):
            resolve_pledge_type("intent")


class TestResolve:
    def test_resolves_to_enum(self):
        assert resolve_intensity("NEAT_IDEA") is LobbyIntensity.NEAT_IDEA
        assert resolve_pledge_type(PledgeType.INTENT) is PledgeType.INTENT
