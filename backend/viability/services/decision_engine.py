"""Decision Engine.

Maps computed scores plus context to GO / REVIEW / NO-GO.

Evaluated in order, first applicable rule wins:

1. kill red flags            -> NO-GO listing every triggered kill
2. saturation > 0.8          -> NO-GO, regardless of ``overall``
3. industry thresholds       -> GO / REVIEW (weak dimensions named) / NO-GO

Rules
-----
- Total and deterministic: always exactly one status
- An undefined LTV:CAC ratio counts as failing, never as a crash
- Non-kill flags and quality-control rules only add risks
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..constants import (
    DEFAULT_THRESHOLDS,
    DEMAND_SIGNALS,
    DIFFERENTIATION,
    FEASIBILITY,
    HIGH_REGULATION_INDUSTRIES,
    HIGHLIGHT_RULES,
    INDUSTRY_THRESHOLDS,
    MARKETPLACE_THRESHOLDS,
    PROBLEM,
    SATURATION_NO_GO,
    SUPPLY_DEMAND_BALANCE,
    UNDERSERVED,
    VIRAL_POTENTIAL,
    WEAK_DIMENSION_CUTOFF,
    WILLINGNESS_TO_PAY,
    Status,
)
from ..schemas.business_dna_schema import BusinessDNA
from ..schemas.economics_schema import UnitEconomics
from ..schemas.intelligence_schema import CompetitiveIntelligence, MarketIntelligence
from ..schemas.score_schema import ComputedScores
from ..schemas.signals_schema import RawSignals
from ..schemas.validation_schema import Decision, IndustryWeights

logger = logging.getLogger(__name__)

_LONG_PAYBACK_MONTHS = 24
_LOW_PRICE = 35.0


@dataclass(frozen=True)
class DecisionContext:
    scores: ComputedScores
    dna: BusinessDNA
    market: MarketIntelligence
    raw: RawSignals
    competitive: CompetitiveIntelligence
    unit_economics: Optional[UnitEconomics] = None

    def score(self, dimension: str, default: float = 10.0) -> float:
        """Score of *dimension*; absent sparse dimensions never trigger a rule."""
        value = self.scores.get(dimension)
        return default if value is None else value


@dataclass(frozen=True)
class RedFlag:
    id: str
    message: str
    kill: bool
    when: Callable[[DecisionContext], bool]


@dataclass(frozen=True)
class QCRule:
    id: str
    message: str
    severity: str
    when: Callable[[DecisionContext], bool]


# ── Red flags ───────────────────────────────────────────────────────────

def _unsustainable_economics(ctx: DecisionContext) -> bool:
    ue = ctx.unit_economics
    if ue is None or not ue.supplied:
        return False
    ratio = ue.ltv_cac_ratio
    return not ratio.is_defined or ratio.value < 1


def _long_payback(ctx: DecisionContext) -> bool:
    ue = ctx.unit_economics
    if ue is None or ctx.raw.cac_estimate <= 0:
        return False
    payback = ue.payback_months
    return not payback.is_defined or payback.value > _LONG_PAYBACK_MONTHS


def _unrealistic_pricing(ctx: DecisionContext) -> bool:
    price = ctx.unit_economics.price_point if ctx.unit_economics else ctx.raw.price_point
    return ctx.competitive.fingerprint is not None and 0 < price < _LOW_PRICE


RED_FLAGS: tuple[RedFlag, ...] = (
    RedFlag(
        "illegal", "Illegal or prohibited domain", True,
        lambda ctx: ctx.raw.illegal_or_prohibited,
    ),
    RedFlag(
        "impossible", "Not feasible with reasonable resources", True,
        lambda ctx: ctx.score(FEASIBILITY) < 2,
    ),
    RedFlag(
        "no-problem", "No compelling problem identified", True,
        lambda ctx: ctx.score(PROBLEM) < 3 and ctx.score(UNDERSERVED) < 3,
    ),
    RedFlag(
        "regulatory-nightmare", "High regulatory risk without domain expertise", True,
        lambda ctx: ctx.dna.industry in HIGH_REGULATION_INDUSTRIES
        and ctx.raw.regulatory_risk >= 8
        and ctx.raw.team_experience < 4,
    ),
    RedFlag(
        "unsustainable-unit-economics", "LTV:CAC below 1 or undefined: each customer loses money", True,
        _unsustainable_economics,
    ),
    RedFlag(
        "incumbent-domination", "Market dominated by well-funded incumbents", False,
        lambda ctx: len(ctx.competitive.incumbents) >= 3,
    ),
    RedFlag(
        "generic-feature-set", "Generic features in crowded market: unclear path to customer acquisition", False,
        lambda ctx: ctx.score(DIFFERENTIATION) < 3 and ctx.raw.competition_density >= 7,
    ),
    RedFlag(
        "pricing-unrealistic", "Pricing below market leaders suggests unsustainable unit economics", False,
        _unrealistic_pricing,
    ),
    RedFlag(
        "long-payback", f"CAC payback beyond {_LONG_PAYBACK_MONTHS} months or never", False,
        _long_payback,
    ),
    RedFlag(
        "chicken-egg-unsolved", "No clear solution to marketplace chicken-and-egg problem", False,
        lambda ctx: ctx.dna.customer_type == "marketplace" and ctx.score(SUPPLY_DEMAND_BALANCE) < 3,
    ),
)

QC_RULES: tuple[QCRule, ...] = (
    QCRule(
        "low-urgency", "Low customer urgency: validate problem intensity", "med",
        lambda ctx: ctx.score(PROBLEM) < 4,
    ),
    QCRule(
        "weak-demand", "Insufficient demand validation: run more customer interviews", "high",
        lambda ctx: ctx.score(DEMAND_SIGNALS) < 5,
    ),
    QCRule(
        "subscription-retention-risk", "Subscription model requires strong value proposition", "high",
        lambda ctx: ctx.dna.business_model == "subscription"
        and ctx.score(WILLINGNESS_TO_PAY) < 6
        and ctx.score(PROBLEM) < 7,
    ),
    QCRule(
        "network-effects-strategy", "Network business needs clearer viral/growth strategy", "med",
        lambda ctx: ctx.dna.network_effects == "strong" and ctx.score(VIRAL_POTENTIAL) < 5,
    ),
)


# ── Helpers ─────────────────────────────────────────────────────────────

def thresholds_for(dna: BusinessDNA) -> tuple[int, int]:
    """(go cutoff, review cutoff) for *dna*."""
    if dna.industry in INDUSTRY_THRESHOLDS:
        return INDUSTRY_THRESHOLDS[dna.industry]
    if dna.customer_type == "marketplace":
        return MARKETPLACE_THRESHOLDS
    return DEFAULT_THRESHOLDS


def competitive_risks(competitive: CompetitiveIntelligence) -> List[str]:
    risks = []
    if competitive.switching_costs == "high":
        risks.append("High customer switching costs favor incumbents")
    if competitive.network_effects == "strong":
        risks.append("Strong network effects create winner-take-all dynamics")
    if competitive.capital_requirements == "high":
        risks.append("High capital requirements for competitive feature parity")
    return risks


def generate_highlights(scores: ComputedScores) -> List[str]:
    highlights = []
    for dimension, minimum, label in HIGHLIGHT_RULES:
        value = scores.get(dimension)
        if value is not None and value >= minimum:
            highlights.append(f"{label} ({dimension} {value:.1f}/10)")
    return highlights


def weak_dimensions(scores: ComputedScores, weights: Optional[IndustryWeights]) -> List[str]:
    """Weighted dimensions present below the weak cutoff, heaviest first."""
    if weights is None:
        candidates = list(scores.dimensions)
    else:
        candidates = sorted(
            (d for d, _ in weights.items() if d in scores),
            key=lambda d: -weights[d],
        )
    return [f"{d} ({scores[d]:.1f})" for d in candidates if scores[d] < WEAK_DIMENSION_CUTOFF]


# ── Public API ──────────────────────────────────────────────────────────

class DecisionEngine:
    def decide(
        self,
        scores: ComputedScores,
        dna: BusinessDNA,
        market: MarketIntelligence,
        raw: RawSignals,
        competitive: CompetitiveIntelligence,
        unit_economics: Optional[UnitEconomics] = None,
        weights: Optional[IndustryWeights] = None,
    ) -> Decision:
        ctx = DecisionContext(scores, dna, market, raw, competitive, unit_economics)
        triggered = [flag for flag in RED_FLAGS if flag.when(ctx)]
        killers = [flag for flag in triggered if flag.kill]
        triggered_qc = [rule for rule in QC_RULES if rule.when(ctx)]
        flag_ids = [flag.id for flag in triggered]

        # 1. Hard stops
        if killers:
            logger.info("[DECISION] NO-GO: kill flags %s", [k.id for k in killers])
            return Decision(
                status=Status.NO_GO,
                reasoning="Critical issues identified: " + "; ".join(k.message for k in killers),
                risks=[flag.message for flag in triggered] + [rule.message for rule in triggered_qc],
                highlights=[],
                triggered_flags=flag_ids,
            )

        # 2. Saturation short-circuit
        if competitive.market_saturation > SATURATION_NO_GO:
            incumbents = competitive.incumbents
            logger.info("[DECISION] NO-GO: market %.0f%% saturated", competitive.market_saturation * 100)
            return Decision(
                status=Status.NO_GO,
                reasoning=(
                    f"Entering oversaturated {competitive.market_category} market "
                    f"({competitive.market_saturation:.0%} saturated) with {len(incumbents)} major "
                    f"incumbents including {', '.join(incumbents[:2])}. "
                    f"Entry difficulty: {competitive.entry_difficulty:g}/10."
                ),
                risks=[
                    f"Market oversaturation: {competitive.market_category} has "
                    f"{len(incumbents)} established players",
                    f"High entry barriers: {competitive.entry_difficulty:g}/10 difficulty score",
                    f"Major incumbents: {', '.join(incumbents[:3])}",
                    *(flag.message for flag in triggered),
                    *competitive_risks(competitive),
                ],
                highlights=[],
                triggered_flags=flag_ids,
            )

        # 3. Industry thresholds
        go_cutoff, review_cutoff = thresholds_for(dna)
        overall = scores.overall
        if overall >= go_cutoff:
            status = Status.GO
            reasoning = (
                f"Strong validation across key dimensions with {overall}% overall score "
                f"(GO cutoff {go_cutoff}). {dna.industry} market conditions favorable."
            )
        elif overall >= review_cutoff:
            status = Status.REVIEW
            weak = weak_dimensions(scores, weights)
            focus = ", ".join(weak) if weak else "no single dimension below 6; strengthen the weakest evidence"
            reasoning = f"Moderate potential ({overall}%) but address: {focus}"
        else:
            status = Status.NO_GO
            reasoning = (
                f"Significant challenges with {overall}% score (REVIEW cutoff {review_cutoff}). "
                "Consider pivot or alternative approach."
            )

        logger.info("[DECISION] %s at overall=%d (cutoffs %d/%d)", status.value, overall, go_cutoff, review_cutoff)
        return Decision(
            status=status,
            reasoning=reasoning,
            risks=[flag.message for flag in triggered] + [rule.message for rule in triggered_qc],
            highlights=generate_highlights(scores),
            triggered_flags=flag_ids,
        )


def decide(
    scores: ComputedScores,
    dna: BusinessDNA,
    market: MarketIntelligence,
    raw: RawSignals,
    competitive: CompetitiveIntelligence,
    unit_economics: Optional[UnitEconomics] = None,
    weights: Optional[IndustryWeights] = None,
) -> Decision:
    return DecisionEngine().decide(scores, dna, market, raw, competitive, unit_economics, weights)
