"""Weighting Engine.

Selects per-dimension weights for an idea from its ``BusinessDNA``.

Rules
-----
- Base table: ten dimensions summing to 100
- At most ONE override profile, first matching predicate wins:
    marketplace customer type
    -> high regulatory complexity
    -> subscription model or saas industry
    -> strong network effects
- Overrides are NOT cumulative
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping

from ..constants import (
    BASE_WEIGHTS,
    DEMAND_SIGNALS,
    DIFFERENTIATION,
    EXECUTION,
    FEASIBILITY,
    GTM,
    MARKET_QUALITY,
    NETWORK_EFFECTS,
    PROBLEM,
    REGULATORY_COMPLIANCE,
    RISK,
    SUPPLY_DEMAND_BALANCE,
    VIRAL_POTENTIAL,
    WILLINGNESS_TO_PAY,
)
from ..schemas.business_dna_schema import BusinessDNA
from ..schemas.validation_schema import IndustryWeights

BASE_PROFILE = "base"

# (profile name, predicate, weights replacing / extending the base table)
OVERRIDE_PROFILES: tuple[tuple[str, Callable[[BusinessDNA], bool], Mapping[str, float]], ...] = (
    (
        "marketplace",
        lambda dna: dna.customer_type == "marketplace",
        MappingProxyType({
            SUPPLY_DEMAND_BALANCE: 15,
            NETWORK_EFFECTS: 18,
            DEMAND_SIGNALS: 18,
            MARKET_QUALITY: 15,
            PROBLEM: 8,
            GTM: 8,
        }),
    ),
    (
        "regulated",
        lambda dna: dna.regulatory_complexity == "high",
        MappingProxyType({
            REGULATORY_COMPLIANCE: 15,
            EXECUTION: 15,
            RISK: 12,
            FEASIBILITY: 8,
        }),
    ),
    (
        "subscription",
        lambda dna: dna.business_model == "subscription" or dna.industry == "saas",
        MappingProxyType({
            WILLINGNESS_TO_PAY: 12,
            DEMAND_SIGNALS: 16,
            MARKET_QUALITY: 12,
            DIFFERENTIATION: 12,
            GTM: 12,
        }),
    ),
    (
        "network",
        lambda dna: dna.network_effects == "strong",
        MappingProxyType({
            NETWORK_EFFECTS: 20,
            VIRAL_POTENTIAL: 15,
            DEMAND_SIGNALS: 15,
            DIFFERENTIATION: 15,
            PROBLEM: 8,
        }),
    ),
)


def compute_weights(dna: BusinessDNA) -> IndustryWeights:
    """Return the weight table for *dna*."""
    for profile, predicate, overrides in OVERRIDE_PROFILES:
        if predicate(dna):
            return IndustryWeights(profile=profile, weights={**BASE_WEIGHTS, **overrides})
    return IndustryWeights(profile=BASE_PROFILE, weights=dict(BASE_WEIGHTS))


class WeightingEngine:
    def weights(self, dna: BusinessDNA) -> IndustryWeights:
        return compute_weights(dna)
