"""Weighting engine tests: base table and single override profile."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from viability.constants import BASE_WEIGHTS
from viability.schemas import BusinessDNA
from viability.services.weighting_engine import compute_weights


def _dna(**overrides):
    fields = dict(
        industry="technology", sub_industry="general", business_model="direct-sales",
        customer_type="b2c", stage="idea", scale="local", capital_intensity="medium",
        regulatory_complexity="low", network_effects="none", confidence=0.7,
    )
    fields.update(overrides)
    return BusinessDNA(**fields)


class TestWeights:
    def test_base_table_sums_to_100(self):
        weights = compute_weights(_dna())
        assert weights.profile == "base"
        assert weights.total == 100
        assert len(weights.weights) == 10
        assert dict(weights.weights) == dict(BASE_WEIGHTS)

    def test_marketplace_adds_sparse_dimensions(self):
        weights = compute_weights(_dna(customer_type="marketplace", network_effects="strong"))
        assert weights.profile == "marketplace"
        assert weights["network_effects"] == 18
        assert weights["supply_demand_balance"] == 15
        assert weights["problem"] == 8
        assert weights["gtm"] == 8
        assert "viral_potential" not in weights

    def test_regulation_beats_subscription(self):
        weights = compute_weights(
            _dna(industry="fintech", business_model="subscription", regulatory_complexity="high")
        )
        assert weights.profile == "regulated"
        assert weights["regulatory_compliance"] == 15
        assert weights["willingness_to_pay"] == 8

    def test_saas_industry_uses_subscription_profile(self):
        weights = compute_weights(_dna(industry="saas"))
        assert weights.profile == "subscription"
        assert weights["willingness_to_pay"] == 12
        assert weights["demand_signals"] == 16

    def test_strong_network_effects(self):
        weights = compute_weights(_dna(network_effects="strong"))
        assert weights.profile == "network"
        assert weights["network_effects"] == 20
        assert weights["viral_potential"] == 15

    def test_overrides_are_not_cumulative(self):
        weights = compute_weights(
            _dna(customer_type="marketplace", regulatory_complexity="high", network_effects="strong")
        )
        assert weights.profile == "marketplace"
        assert "regulatory_compliance" not in weights
        assert "viral_potential" not in weights

    def test_all_weights_positive(self):
        for dna in (
            _dna(),
            _dna(customer_type="marketplace"),
            _dna(regulatory_complexity="high"),
            _dna(business_model="subscription"),
            _dna(network_effects="strong"),
        ):
            assert all(w > 0 for _, w in compute_weights(dna).items())
