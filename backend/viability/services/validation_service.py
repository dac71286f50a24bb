"""Validation Service (orchestrator).

Sequences classifier -> competitive lookup -> market lookup -> weights
-> scoring -> decision and assembles the ``ValidationResult``.

Rules
-----
- Every entity is built fresh per request; only the registries are shared
- No ids / timestamps: identical inputs give identical results
- ``InsufficientSignal`` propagates unchanged to the caller
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import Settings, get_settings
from ..constants import SaturationPenaltyPoint
from ..registries import DEFAULT_REGISTRIES, Registries
from ..schemas.business_dna_schema import BusinessDNA
from ..schemas.economics_schema import SimulationOptions
from ..schemas.intelligence_schema import CompetitiveIntelligence, MarketIntelligence
from ..schemas.signals_schema import RawSignals
from ..schemas.validation_schema import IndustryWeights, ValidationResult
from ..timing import StepTimer
from .classifier import TextClassifier
from .competitive_intelligence import CompetitiveIntelligenceLookup
from .decision_engine import DecisionEngine
from .market_intelligence import MarketIntelligenceLookup
from .research_provider import MarketResearchProvider, get_research_provider
from .scoring_engine import ScoringEngine
from .unit_economics import compute_unit_economics
from .weighting_engine import WeightingEngine

logger = logging.getLogger(__name__)

_TITLE_LENGTH = 80


# ── Narrative helpers ───────────────────────────────────────────────────

def value_proposition(
    idea_text: str,
    dna: BusinessDNA,
    market: MarketIntelligence,
    target_customer: Optional[str] = None,
) -> str:
    core = idea_text.strip().rstrip(".") or "This business"
    customer = "businesses" if dna.customer_type in ("b2b", "b2b2c") else "consumers"
    if dna.customer_type == "marketplace":
        customer = "buyers and sellers"
    if target_customer:
        customer = target_customer
    if market.key_trends:
        driver = f"capitalizes on {market.key_trends[0].lower()}"
    elif dna.network_effects == "strong":
        driver = "leverages network effects for competitive advantage"
    else:
        driver = f"serves an underserved {dna.industry} market"
    return f"{core}, targeting {customer} in the {dna.industry} industry, {driver}."


def target_market(dna: BusinessDNA, target_customer: Optional[str] = None) -> str:
    if target_customer:
        return f"{dna.customer_type.upper()} - {target_customer}"
    return f"{dna.customer_type.upper()} {dna.industry} ({dna.scale} scale)"


def methodology(
    dna: BusinessDNA,
    weights: IndustryWeights,
    competitive: CompetitiveIntelligence,
    penalty_point: SaturationPenaltyPoint,
) -> str:
    total = weights.total
    top = sorted(weights.items(), key=lambda kv: -kv[1])[:3]
    key_factors = ", ".join(f"{name} ({weight / total:.0%})" for name, weight in top)
    return (
        f"Validation adapted for {dna.industry} {dna.business_model} business "
        f"using the {weights.profile} weight profile. Key factors: {key_factors}. "
        f"Classification confidence: {dna.confidence:.0%}. "
        f"Competitive analysis: {competitive.market_category} market with "
        f"{competitive.market_saturation:.0%} saturation and "
        f"{competitive.entry_difficulty:g}/10 entry difficulty; saturation is "
        f"penalised at the {penalty_point.value} level."
    )


# ── Orchestrator ────────────────────────────────────────────────────────

class ValidationService:
    def __init__(
        self,
        registries: Registries = DEFAULT_REGISTRIES,
        penalty_point: Optional[SaturationPenaltyPoint] = None,
        research_provider: Optional[MarketResearchProvider] = None,
        research_timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.classifier = TextClassifier(registries)
        self.competitive = CompetitiveIntelligenceLookup(registries)
        self.market = MarketIntelligenceLookup(
            registries,
            provider=research_provider,
            research_timeout=(
                research_timeout if research_timeout is not None else settings.market_research_timeout
            ),
        )
        self.weighting = WeightingEngine()
        self.scoring = ScoringEngine(
            registries,
            penalty_point=penalty_point or settings.saturation_penalty_point,
        )
        self.decision = DecisionEngine()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ValidationService":
        """Service wired with the research provider configured in the environment."""
        settings = settings or get_settings()
        return cls(research_provider=get_research_provider(settings), settings=settings)

    def validate_business_idea(
        self,
        idea_text: str,
        raw_signals: Optional[RawSignals] = None,
        simulation: Optional[SimulationOptions] = None,
    ) -> ValidationResult:
        """Synchronous validation using the static market benchmarks."""
        timer = StepTimer("validation")
        with timer.step("classify"):
            dna = self.classifier.classify(idea_text)
        with timer.step("competitive_lookup"):
            competitive = self.competitive.lookup(idea_text, dna)
        with timer.step("market_lookup"):
            market = self.market.lookup(idea_text, dna)
        result = self._finish(idea_text, raw_signals, simulation, dna, competitive, market, timer)
        timer.summary()
        return result

    async def avalidate_business_idea(
        self,
        idea_text: str,
        raw_signals: Optional[RawSignals] = None,
        simulation: Optional[SimulationOptions] = None,
    ) -> ValidationResult:
        """Async validation; market data may come from the research provider."""
        timer = StepTimer("validation")
        with timer.step("classify"):
            dna = self.classifier.classify(idea_text)
        with timer.step("competitive_lookup"):
            competitive = self.competitive.lookup(idea_text, dna)
        async with timer.async_step("market_lookup"):
            market = await self.market.alookup(idea_text, dna)
        result = self._finish(idea_text, raw_signals, simulation, dna, competitive, market, timer)
        timer.summary()
        return result

    def _finish(
        self,
        idea_text: str,
        raw_signals: Optional[RawSignals],
        simulation: Optional[SimulationOptions],
        dna: BusinessDNA,
        competitive: CompetitiveIntelligence,
        market: MarketIntelligence,
        timer: StepTimer,
    ) -> ValidationResult:
        raw = raw_signals or RawSignals()

        with timer.step("weights"):
            weights = self.weighting.weights(dna)
        with timer.step("unit_economics"):
            economics = compute_unit_economics(raw, idea_text, market, simulation)
        with timer.step("scoring"):
            outcome = self.scoring.score(raw, dna, market, weights, competitive, idea_text=idea_text)
        with timer.step("decision"):
            decision = self.decision.decide(
                outcome.scores, dna, market, raw, competitive,
                unit_economics=economics, weights=weights,
            )

        logger.info(
            "[VALIDATION] %s overall=%d industry=%s", decision.status.value, outcome.scores.overall, dna.industry
        )
        return ValidationResult(
            status=decision.status,
            reasoning=decision.reasoning,
            risks=decision.risks,
            highlights=decision.highlights,
            scores=outcome.scores,
            business_dna=dna,
            market_intelligence=market,
            competitive_intelligence=competitive,
            adjustments=outcome.adjustments,
            base_scores=outcome.base_scores,
            weights=weights,
            unit_economics=economics,
            triggered_flags=decision.triggered_flags,
            title=idea_text.strip()[:_TITLE_LENGTH],
            value_proposition=value_proposition(idea_text, dna, market, raw.target_customer),
            target_market=target_market(dna, raw.target_customer),
            methodology=methodology(dna, weights, competitive, self.scoring.penalty_point),
        )
