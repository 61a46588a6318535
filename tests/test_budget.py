"""Tests for summary budgets."""

import pytest

from config import BudgetSettings
from models.summary import LengthTier, SummaryParams
from processing.budget import allocate_cluster_budget, get_summary_parameters, parse_length, scale_for_clusters


class TestGetSummaryParameters:

    @pytest.mark.parametrize(
        "length, tokens, words",
        [
            ("short", 400, "200-300"),
            ("medium", 800, "400-600"),
            ("long", 1200, "600-900"),
            ("LONG", 1200, "600-900"),
            (LengthTier.MEDIUM, 800, "400-600"),
        ],
    )
    def test_tiers(self, length, tokens, words):
        params = get_summary_parameters(length)
        assert params.max_tokens == tokens
        assert params.target_words == words

    @pytest.mark.parametrize("length", ["huge", "", None])
    def test_unknown_length_falls_back_to_short(self, length):
        assert parse_length(length) == LengthTier.SHORT
        assert get_summary_parameters(length).max_tokens == 400


class TestScaleForClusters:

    def test_single_cluster_uses_base_multiplier_and_floors(self):
        params = scale_for_clusters(get_summary_parameters("short"), 1)
        assert params == SummaryParams(max_tokens=480, min_words=300, max_words=500)

    def test_token_cap(self):
        params = scale_for_clusters(get_summary_parameters("long"), 5)
        assert params.max_tokens == 1200
        assert params.min_words == 2100
        assert params.max_words == 3600

    def test_zero_clusters_treated_as_one(self):
        base = get_summary_parameters("short")
        assert scale_for_clusters(base, 0) == scale_for_clusters(base, 1)

    def test_custom_settings(self):
        settings = BudgetSettings(token_cap=500)
        params = scale_for_clusters(get_summary_parameters("long"), 1, settings)
        assert params.max_tokens == 500


class TestAllocateClusterBudget:

    def test_even_share(self):
        params = SummaryParams(max_tokens=1200, min_words=2100, max_words=3600)
        share = allocate_cluster_budget(params, 4)
        assert share == SummaryParams(max_tokens=300, min_words=525, max_words=900)

    def test_floors(self):
        params = SummaryParams(max_tokens=480, min_words=300, max_words=500)
        share = allocate_cluster_budget(params, 10)
        assert share.max_tokens == 120
        assert share.min_words == 100
        assert share.max_words == 100

    @pytest.mark.parametrize("length", ["short", "medium", "long"])
    def test_shares_stay_within_bounds(self, length):
        settings = BudgetSettings()
        for n in range(1, 11):
            scaled = scale_for_clusters(get_summary_parameters(length), n, settings)
            share = allocate_cluster_budget(scaled, n, settings)
            assert settings.min_tokens_per_cluster <= share.max_tokens <= settings.token_cap
            assert share.max_words >= share.min_words >= settings.min_words_per_cluster
