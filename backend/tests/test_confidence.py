"""Confidence scorer tests."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from demand_engine.services.confidence_scorer import confidence_level, score_confidence


class TestConfidenceScore:
    def test_documented_example(self):
        result = score_confidence(22, 5)
        assert result.confidence_score == 64
        assert result.confidence_level == "high"

    def test_zero_data_is_low(self):
        result = score_confidence(0, 0)
        assert result.confidence_score == 0
        assert result.confidence_level == "low"

    def test_caps(self):
        assert score_confidence(30, 0).confidence_score == 60
        assert score_confidence(1000, 0).confidence_score == 60
        assert score_confidence(0, 10).confidence_score == 40
        assert score_confidence(1000, 1000).confidence_score == 100

    @pytest.mark.parametrize("price_points", [0, 1, 4, 10, 50])
    def test_monotonic_in_signals_and_clamped(self, price_points):
        scores = [score_confidence(n, price_points).confidence_score for n in range(0, 80)]
        assert scores == sorted(scores)
        assert all(0 <= s <= 100 for s in scores)

    def test_negative_inputs_are_treated_as_zero(self):
        assert score_confidence(-5, -1).confidence_score == 0


class TestConfidenceLevel:
    @pytest.mark.parametrize("score,level", [
        (0, "low"),
        (24, "low"),
        (25, "medium"),
        (54, "medium"),
        (55, "high"),
        (79, "high"),
        (80, "very_high"),
        (100, "very_high"),
    ])
    def test_thresholds(self, score, level):
        assert confidence_level(score) == level


class TestDataSufficiency:
    def test_sentence_names_counts_and_level(self):
        text = score_confidence(42, 11).data_sufficiency
        assert text == "Based on 42 demand signals and 11 price points — very high confidence."

    def test_singular_forms(self):
        text = score_confidence(1, 1).data_sufficiency
        assert "1 demand signal and 1 price point" in text
