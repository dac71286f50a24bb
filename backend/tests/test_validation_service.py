"""End-to-end tests for ValidationService."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio

import pytest

from viability.config import Settings
from viability.constants import SaturationPenaltyPoint, Status
from viability.exceptions import InsufficientSignal, ResearchProviderError
from viability.schemas import RawSignals, SimulationOptions, replay_adjustments
from viability.services.research_provider import MarketResearchProvider
from viability.services.validation_service import ValidationService

PM_IDEA = "Generic project management tool with kanban boards and Slack integration, $29/month"
BAKERY_IDEA = (
    "Software that predicts daily bread demand for independent bakeries using weather "
    "and local event data, cutting waste for small business owners. Subscription at $79 per month."
)
LENDING_IDEA = "Peer-to-peer lending app that gives small businesses instant loans using open banking data"

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


@pytest.fixture
def service():
    return ValidationService(settings=Settings())


class TestVerdicts:
    def test_generic_project_management_is_no_go(self, service):
        result = service.validate_business_idea(PM_IDEA, RawSignals())
        assert result.competitive_intelligence.fingerprint == "project-management"
        assert result.competitive_intelligence.market_saturation == pytest.approx(0.95)
        assert result.status == Status.NO_GO
        assert result.scores.overall <= 20
        assert result.scores["differentiation"] <= 2
        assert result.scores["economics"] <= 3

    def test_generic_project_management_even_with_strong_signals(self, service):
        result = service.validate_business_idea(PM_IDEA, STRONG)
        assert result.status == Status.NO_GO
        assert result.scores.overall <= 20

    def test_empty_text_is_insufficient_signal(self, service):
        with pytest.raises(InsufficientSignal):
            service.validate_business_idea("", RawSignals())

    def test_regulatory_nightmare(self, service):
        raw = STRONG.model_copy(update={"regulatory_risk": 9.0, "team_experience": 2.0})
        result = service.validate_business_idea(LENDING_IDEA, raw)
        assert result.business_dna.industry == "fintech"
        assert result.status == Status.NO_GO
        assert "regulatory-nightmare" in result.triggered_flags

    def test_strong_uncrowded_idea_is_go(self, service):
        result = service.validate_business_idea(BAKERY_IDEA, STRONG)
        assert result.competitive_intelligence.fingerprint is None
        assert result.status == Status.GO
        assert result.scores.overall >= 70
        assert any("(problem " in h for h in result.highlights)
        assert any("(demand_signals " in h for h in result.highlights)


class TestProperties:
    def test_identical_inputs_identical_results(self, service):
        options = SimulationOptions(runs=300, seed=42)
        first = service.validate_business_idea(BAKERY_IDEA, STRONG, simulation=options)
        second = ValidationService(settings=Settings()).validate_business_idea(
            BAKERY_IDEA, STRONG, simulation=options
        )
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    @pytest.mark.parametrize("idea", [
        "CRM for dentists to manage patient follow-ups",
        "Video conferencing app for remote yoga classes",
        "Kanban boards for wedding planners",
    ])
    @pytest.mark.parametrize("point", list(SaturationPenaltyPoint))
    def test_saturation_gate(self, idea, point):
        service = ValidationService(penalty_point=point, settings=Settings())
        result = service.validate_business_idea(idea, STRONG)
        assert result.competitive_intelligence.market_saturation > 0.8
        assert result.status == Status.NO_GO

    @pytest.mark.parametrize("idea", [PM_IDEA, BAKERY_IDEA, LENDING_IDEA])
    def test_adjustments_replay(self, service, idea):
        result = service.validate_business_idea(idea, STRONG)
        assert all(adj.before != adj.after for adj in result.adjustments)
        assert replay_adjustments(result.base_scores, result.adjustments) == result.scores.as_flat_dict()

    def test_result_is_self_explaining(self, service):
        result = service.validate_business_idea(BAKERY_IDEA, STRONG)
        assert result.title == BAKERY_IDEA[:80]
        assert result.target_market == "B2B food (local scale)"
        assert "subscription weight profile" in result.methodology
        assert "food waste reduction" in result.value_proposition
        assert result.unit_economics.ltv_cac_ratio.value == 7.5

    def test_target_customer_drives_narratives(self, service):
        raw = STRONG.model_copy(update={"target_customer": "independent bakeries"})
        result = service.validate_business_idea(BAKERY_IDEA, raw)
        assert result.target_market == "B2B - independent bakeries"
        assert "targeting independent bakeries in the food industry" in result.value_proposition

    def test_missing_signals_use_defaults(self, service):
        assert service.validate_business_idea(BAKERY_IDEA).status in set(Status)


class _FailingProvider(MarketResearchProvider):
    async def research(self, text, dna):
        raise ResearchProviderError("provider offline")


class TestAsync:
    def test_async_matches_sync_without_provider(self, service):
        sync_result = service.validate_business_idea(BAKERY_IDEA, STRONG)
        async_result = asyncio.run(service.avalidate_business_idea(BAKERY_IDEA, STRONG))
        assert sync_result == async_result

    def test_failing_provider_falls_back(self):
        service = ValidationService(research_provider=_FailingProvider(), settings=Settings())
        result = asyncio.run(service.avalidate_business_idea(BAKERY_IDEA, STRONG))
        assert result.market_intelligence.source == "benchmark"
        assert result.status == Status.GO
