"""Scoring engine tests: ranges, monotonicity, audit replay, penalty point."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from viability.constants import SaturationPenaltyPoint
from viability.registries import DEFAULT_REGISTRIES
from viability.schemas import AdjustmentKind, BusinessDNA, RawSignals, replay_adjustments
from viability.services.classifier import classify
from viability.services.competitive_intelligence import CompetitiveIntelligenceLookup, default_intelligence
from viability.services.scoring_engine import (
    STAGE_AGGREGATE_PENALTY,
    STAGE_COMPETITIVE_PENALTY,
    STAGE_REALITY_CHECK,
    STAGE_SATURATION_DAMPENING,
    ScoringEngine,
    aggregate_overall,
    base_dimension_scores,
    saturation_factors,
)
from viability.services.market_intelligence import MarketIntelligenceLookup
from viability.services.weighting_engine import compute_weights


def _dna(**overrides):
    fields = dict(
        industry="food", sub_industry="general", business_model="subscription",
        customer_type="b2b", stage="idea", scale="local", capital_intensity="low",
        regulatory_complexity="medium", network_effects="none", confidence=0.75,
    )
    fields.update(overrides)
    return BusinessDNA(**fields)


STRONG = RawSignals(
    unavoidable=9, urgency=9, pain_gain_ratio=9, whitespace=8, underserved=8, feasibility=8,
    competition_density=2,
    attributes={"Disruptive": 7, "Defensible": 7, "Discontinuous": 6,
                "SocialNeed": 6, "Growth": 8, "Achievement": 7},
    interviews=15, interviews_positive_pct=80, waitlist_conv_rate_pct=70, lois=5, preorders=20,
    willingness_to_pay=8, price_point=79, channels_clarity=8, ltv_estimate=3000, cac_estimate=400,
    team_experience=8, capital_runway_months=12, regulatory_risk=2, platform_dependency_risk=2,
    safety_risk=1, tam_quality=8, growth_rate_quality=8,
)
WEAK = RawSignals(
    unavoidable=0, urgency=0, pain_gain_ratio=0, whitespace=0, underserved=0, feasibility=0,
    competition_density=10, willingness_to_pay=0, channels_clarity=0, team_experience=0,
    regulatory_risk=10, platform_dependency_risk=10, safety_risk=10, tam_quality=0,
    growth_rate_quality=0,
)
MAXED = RawSignals(
    unavoidable=True, urgency=True, pain_gain_ratio=True, whitespace=True, underserved=True,
    feasibility=True, competition_density=False, willingness_to_pay=99, price_point=500,
    interviews=1000, interviews_positive_pct=250, waitlist_conv_rate_pct=100, lois=50,
    preorders=900, channels_clarity=10, ltv_estimate=1e6, cac_estimate=1, team_experience=10,
    capital_runway_months=48, regulatory_risk=0, platform_dependency_risk=0, safety_risk=0,
    tam_quality=10, growth_rate_quality=10,
    attributes={k: 10 for k in ("Disruptive", "Defensible", "Discontinuous", "SocialNeed",
                                "Growth", "Achievement", "Recognition")},
)

FOOD = DEFAULT_REGISTRIES.benchmarks["food"]
SAAS = DEFAULT_REGISTRIES.benchmarks["saas"]
PROJECT_MANAGEMENT = DEFAULT_REGISTRIES.fingerprint("project-management").intelligence
PM_IDEA = "Generic project management tool with kanban boards and Slack integration, $29/month"
BAKERY_IDEA = "Software that predicts daily bread demand for independent bakeries"


def _score(raw=STRONG, dna=None, market=FOOD, competitive=None, text=BAKERY_IDEA,
           point=SaturationPenaltyPoint.DIMENSIONS):
    dna = dna or _dna()
    competitive = competitive or default_intelligence(dna)
    engine = ScoringEngine(penalty_point=point)
    return engine.score(raw, dna, market, compute_weights(dna), competitive, idea_text=text)


class TestBaseScores:
    def test_problem_blend(self):
        base = base_dimension_scores(STRONG, BAKERY_IDEA.lower(), 79)
        assert base["problem"] == pytest.approx(8.85)
        assert base["feasibility"] == 8
        assert base["economics"] == 6

    def test_generic_feature_penalty_floor(self):
        base = base_dimension_scores(RawSignals(), "kanban dashboard for teams", 0)
        assert base["differentiation"] == 0.5

    def test_project_management_extra_penalty(self):
        base = base_dimension_scores(RawSignals(), "project management with kanban", 0)
        assert base["differentiation"] == 0.3

    def test_crowded_market_reduces_wtp_and_gtm(self):
        plain = base_dimension_scores(STRONG, "bakery forecasting", 79)
        crowded = base_dimension_scores(STRONG, "crm for bakeries", 79)
        assert crowded["willingness_to_pay"] < plain["willingness_to_pay"]
        assert crowded["gtm"] < plain["gtm"]

    def test_sparse_dimensions_follow_dna(self):
        outcome = _score(dna=_dna(customer_type="marketplace", network_effects="strong"))
        assert "supply_demand_balance" in outcome.scores
        assert "network_effects" in outcome.scores
        assert "viral_potential" in outcome.scores
        assert "regulatory_compliance" not in outcome.scores

        plain = _score()
        assert "network_effects" not in plain.scores
        assert "supply_demand_balance" not in plain.scores


class TestRanges:
    @pytest.mark.parametrize("raw", [STRONG, WEAK, MAXED, RawSignals()])
    @pytest.mark.parametrize("point", list(SaturationPenaltyPoint))
    @pytest.mark.parametrize("text,competitive", [
        (BAKERY_IDEA, None),
        (PM_IDEA, PROJECT_MANAGEMENT),
    ])
    def test_scores_in_range(self, raw, point, text, competitive):
        outcome = _score(raw=raw, point=point, text=text, competitive=competitive)
        for value in outcome.scores.dimensions.values():
            assert 0 <= value <= 10
        assert 0 <= outcome.scores.overall <= 100


class TestMonotonicity:
    def test_feasibility_never_decreases_base(self):
        previous = -1.0
        for level in range(0, 11):
            raw = STRONG.model_copy(update={"feasibility": float(level)})
            feasibility = _score(raw=raw).base_scores["feasibility"]
            assert feasibility >= previous
            previous = feasibility


class TestAuditTrail:
    @pytest.mark.parametrize("point", list(SaturationPenaltyPoint))
    @pytest.mark.parametrize("raw", [STRONG, WEAK, RawSignals()])
    def test_replay_reproduces_final_scores(self, point, raw):
        outcome = _score(raw=raw, point=point, text=PM_IDEA, competitive=PROJECT_MANAGEMENT,
                         dna=_dna(industry="saas"), market=SAAS)
        replayed = replay_adjustments(outcome.base_scores, outcome.adjustments)
        assert replayed == outcome.scores.as_flat_dict()

    def test_every_adjustment_changes_value(self):
        outcome = _score(text=PM_IDEA, competitive=PROJECT_MANAGEMENT, market=SAAS)
        assert outcome.adjustments
        assert all(adj.before != adj.after for adj in outcome.adjustments)

    def test_neutral_market_only_rescores(self):
        outcome = _score()
        kinds = {adj.kind for adj in outcome.adjustments}
        assert kinds <= {AdjustmentKind.RESCORE}


class TestPenaltyPoint:
    def test_neutral_saturation_has_no_factor(self):
        factors = saturation_factors(default_intelligence(_dna()))
        assert all(f == 1.0 for f in factors.values())

    def test_dimensions_mode(self):
        outcome = _score(competitive=PROJECT_MANAGEMENT)
        stages = {adj.stage for adj in outcome.adjustments}
        assert STAGE_COMPETITIVE_PENALTY in stages
        assert STAGE_SATURATION_DAMPENING in stages
        assert STAGE_AGGREGATE_PENALTY not in stages
        scores = outcome.scores
        assert scores["problem"] <= 6
        assert scores["gtm"] <= 3
        assert scores["willingness_to_pay"] <= 3
        assert scores["differentiation"] <= 4

    def test_aggregate_mode(self):
        outcome = _score(competitive=PROJECT_MANAGEMENT, point=SaturationPenaltyPoint.AGGREGATE)
        stages = {adj.stage for adj in outcome.adjustments}
        assert STAGE_AGGREGATE_PENALTY in stages
        assert STAGE_COMPETITIVE_PENALTY not in stages
        assert STAGE_SATURATION_DAMPENING not in stages

    def test_aggregate_penalty_floor_and_never_raises(self):
        for raw in (STRONG, WEAK, RawSignals()):
            outcome = _score(raw=raw, competitive=PROJECT_MANAGEMENT,
                             point=SaturationPenaltyPoint.AGGREGATE)
            for adj in outcome.adjustments:
                if adj.stage == STAGE_AGGREGATE_PENALTY:
                    assert adj.after < adj.before
                    assert adj.after >= min(adj.before, 10)

    def test_addressable_cap_applies_in_both_modes(self):
        for point in SaturationPenaltyPoint:
            outcome = _score(competitive=PROJECT_MANAGEMENT, point=point)
            assert outcome.scores["market_quality"] <= 2


class TestEconomicsAndOverrides:
    def test_generic_project_management(self):
        outcome = _score(raw=RawSignals(), dna=_dna(industry="saas"), market=SAAS,
                         competitive=PROJECT_MANAGEMENT, text=PM_IDEA)
        assert outcome.scores.overall <= 20
        assert outcome.scores["differentiation"] <= 2
        assert outcome.scores["economics"] <= 3
        assert outcome.scores["market_quality"] <= 2

    def test_economics_neutral_for_uncrowded_idea(self):
        assert _score().scores["economics"] == 6

    def test_extreme_density_caps_economics(self):
        raw = STRONG.model_copy(update={"competition_density": 9.0})
        assert _score(raw=raw).scores["economics"] <= 3

    def test_economics_kept_apart_from_wtp(self):
        scores = _score().scores
        assert scores["willingness_to_pay"] != scores["economics"]

    def test_video_conferencing_override(self):
        outcome = _score(text="Video conferencing for remote yoga classes")
        assert outcome.scores.overall <= 15
        assert outcome.scores["differentiation"] <= 1


class TestAggregation:
    def test_half_up_rounding(self):
        weights = compute_weights(_dna(business_model="direct-sales", industry="technology",
                                       regulatory_complexity="low"))
        values = {name: 7.25 for name, _ in weights.items()}
        assert aggregate_overall(values, weights) == 73

    def test_only_present_dimensions_count(self):
        weights = compute_weights(_dna(customer_type="marketplace"))
        values = {name: 8.0 for name, _ in weights.items() if name != "network_effects"}
        assert aggregate_overall(values, weights) == 80


class TestStrongUncrowdedIdea:
    def test_strong_idea_scores_high(self):
        outcome = _score()
        assert outcome.scores.overall >= 75
        assert outcome.scores["problem"] >= 8
        assert outcome.scores["demand_signals"] >= 7


class TestRealityChecks:
    def test_only_first_matching_check_applies(self):
        text = "CRM with dashboard plus video calls"
        dna = classify(text)
        competitive = CompetitiveIntelligenceLookup().lookup(text, dna)
        market = MarketIntelligenceLookup().lookup(text, dna)
        outcome = _score(raw=RawSignals(), dna=dna, market=market, competitive=competitive, text=text)

        checks = [adj for adj in outcome.adjustments if adj.stage == STAGE_REALITY_CHECK]
        assert checks
        assert {adj.reason for adj in checks} == {
            DEFAULT_REGISTRIES.reality_checks[1].reason
        }
        assert DEFAULT_REGISTRIES.reality_checks[1].name == "generic-crm"
        assert 15 < outcome.scores.overall <= 25
        assert outcome.scores["economics"] <= 3
