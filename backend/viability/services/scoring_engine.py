"""Deterministic Scoring Engine.

Converts raw caller signals plus classifier / lookup context into
per-dimension scores (0-10) and a weighted ``overall`` (0-100).

Stages, in fixed order (each reads the previous stage's output):

1. base per-dimension scores
2. competitive-saturation multiplicative penalty
3. market-quality re-scoring + addressable-opportunity caps
4. standalone economics score
5. dimension-wide saturation dampening
6. weighted aggregation
7. post-hoc competitive penalty on ``overall``
8. category reality-check overrides (first match only)

Saturation is charged at exactly one point per run: ``dimensions``
(stages 2 and 5) or ``aggregate`` (stage 7).  Stages 3 and 8 always run.

Rules
-----
- NO API calls
- NO LLMs
- Every value changed after stage 1 is recorded as an ``Adjustment``
- Replaying the adjustments over the base scores yields the final scores
- Pure deterministic math
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, NamedTuple, Optional

from ..constants import (
    DEMAND_SIGNALS,
    DIFFERENTIATION,
    ECONOMICS,
    EXECUTION,
    FEASIBILITY,
    GTM,
    MARKET_QUALITY,
    NETWORK_EFFECTS,
    OVERALL,
    OVERALL_MAX,
    OVERALL_MIN,
    PROBLEM,
    REGULATORY_COMPLIANCE,
    RISK,
    SCORE_MAX,
    SCORE_MIN,
    SUPPLY_DEMAND_BALANCE,
    UNDERSERVED,
    VIRAL_POTENTIAL,
    WILLINGNESS_TO_PAY,
    SaturationPenaltyPoint,
)
from ..registries import DEFAULT_REGISTRIES, Registries, compile_term
from ..schemas.business_dna_schema import BusinessDNA
from ..schemas.intelligence_schema import CompetitiveIntelligence, MarketIntelligence
from ..schemas.score_schema import Adjustment, AdjustmentKind, ComputedScores
from ..schemas.signals_schema import RawSignals
from ..schemas.validation_schema import IndustryWeights
from .unit_economics import effective_price

logger = logging.getLogger(__name__)

STAGE_COMPETITIVE_PENALTY = "competitive_saturation_penalty"
STAGE_MARKET_QUALITY = "market_quality_rescore"
STAGE_ECONOMICS = "economics"
STAGE_SATURATION_DAMPENING = "saturation_dampening"
STAGE_AGGREGATION = "aggregation"
STAGE_AGGREGATE_PENALTY = "aggregate_competitive_penalty"
STAGE_REALITY_CHECK = "reality_check"

_NEUTRAL_ECONOMICS = 6.0
_UNCROWDED_REALITY = 6.0
_PREMIUM_PRICE = 50.0
_LOW_PRICE = 35.0
_PM_PRICE = 29.0
_HIGH_SATURATION = 0.8

# Ceilings applied when saturation exceeds _HIGH_SATURATION (stage 5)
_SATURATION_DAMPENING_CAPS: Mapping[str, float] = {
    PROBLEM: 6.0,
    GTM: 3.0,
    WILLINGNESS_TO_PAY: 3.0,
    DIFFERENTIATION: 4.0,
}

_PROJECT_MANAGEMENT = compile_term("project management")
_KANBAN = compile_term("kanban")


def _clamp(value: float, lo: float = SCORE_MIN, hi: float = SCORE_MAX) -> float:
    """Clamp *value* to [lo, hi]."""
    return max(lo, min(hi, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ===================================================================== #
#  Audit ledger                                                           #
# ===================================================================== #

class ScoreLedger:
    """Working copy of the scores that records every change it applies."""

    def __init__(self, base: Mapping[str, float]):
        self._values: Dict[str, float] = dict(base)
        self.adjustments: List[Adjustment] = []

    def __contains__(self, dimension: object) -> bool:
        return dimension in self._values

    def __getitem__(self, dimension: str) -> float:
        return self._values[dimension]

    def snapshot(self) -> Dict[str, float]:
        return dict(self._values)

    def set(
        self,
        stage: str,
        dimension: str,
        value: float,
        kind: AdjustmentKind,
        reason: str,
    ) -> None:
        """Store *value* (clamped, rounded); unchanged values are not recorded."""
        if dimension == OVERALL:
            new = float(_clamp(_round_half_up(value), OVERALL_MIN, OVERALL_MAX))
        else:
            new = round(_clamp(value), 2)
        old = self._values[dimension]
        if new == old:
            return
        self.adjustments.append(
            Adjustment(stage=stage, dimension=dimension, kind=kind, reason=reason, before=old, after=new)
        )
        self._values[dimension] = new

    def cap(self, stage: str, dimension: str, ceiling: float, reason: str) -> None:
        if dimension in self._values and self._values[dimension] > ceiling:
            self.set(stage, dimension, ceiling, AdjustmentKind.CAP, reason)

    def reduce(self, stage: str, dimension: str, candidate: float, reason: str) -> None:
        """Lower *dimension* to *candidate*; never raises the value."""
        if dimension in self._values and candidate < self._values[dimension]:
            self.set(stage, dimension, candidate, AdjustmentKind.PENALTY, reason)


# ===================================================================== #
#  Stage 1: base scores                                                   #
# ===================================================================== #

def _attribute_blend(raw: RawSignals) -> float:
    social = (raw.attribute("SocialNeed") + raw.attribute("Growth") + raw.attribute("Achievement")) / 3
    return (
        raw.attribute("Disruptive") * 0.35
        + raw.attribute("Defensible") * 0.35
        + raw.attribute("Discontinuous") * 0.15
        + social * 0.15
    )


def _largest_weight(text: str, terms) -> float:
    return max((t.weight for t in terms if t.found_in(text)), default=0.0)


def _economics_reality(text: str, price: float, registries: Registries) -> float:
    """0-10 economics reality for a new entrant; 6 means uncrowded."""
    crowded = _largest_weight(text, registries.crowded_market_reality)
    if crowded <= 0:
        return _UNCROWDED_REALITY
    return crowded + (0.4 if price > _PREMIUM_PRICE else 0.0)


def _ltv_cac_gtm_score(raw: RawSignals) -> float:
    if raw.ltv_estimate > 0 and raw.cac_estimate > 0:
        return 9.0 if raw.ltv_estimate / raw.cac_estimate >= 3 else 2.0
    return 5.0


def _runway_score(months: float) -> float:
    if months >= 12:
        return 10.0
    if months >= 6:
        return 8.0
    return _clamp(months / 2)


def base_dimension_scores(
    raw: RawSignals,
    text: str,
    price: float,
    registries: Registries = DEFAULT_REGISTRIES,
) -> Dict[str, float]:
    """Core ten dimensions plus the neutral ``economics`` score."""

    problem = (
        raw.unavoidable * 0.35
        + raw.urgency * 0.25
        + raw.pain_gain_ratio * 0.25
        + raw.whitespace * 0.15
    )

    # Commodity features are not moats: subtract the largest penalty.
    differentiation = _clamp((10 - raw.competition_density) * 0.5 + _clamp(_attribute_blend(raw)) * 0.5)
    generic_penalty = _largest_weight(text, registries.generic_feature_penalties)
    if generic_penalty > 0:
        differentiation = max(0.5, differentiation - generic_penalty)
    if _PROJECT_MANAGEMENT.search(text):
        differentiation = max(0.3, differentiation - 2.0)

    demand_signals = (
        _clamp(raw.interviews / 2) * 0.25
        + raw.interviews_positive_pct / 10 * 0.20
        + raw.waitlist_conv_rate_pct / 10 * 0.25
        + _clamp(raw.lois * 2) * 0.15
        + _clamp(raw.preorders / 2) * 0.15
    )

    reality_factor = _economics_reality(text, price, registries) / _UNCROWDED_REALITY
    willingness_to_pay = _clamp(
        raw.willingness_to_pay * 0.7 + (7.0 if price > 0 else 0.0) * 0.3
    ) * reality_factor
    gtm = _clamp(raw.channels_clarity * 0.6 + _ltv_cac_gtm_score(raw) * 0.4) * reality_factor

    execution = raw.team_experience * 0.7 + _runway_score(raw.capital_runway_months) * 0.3
    risk = 10 - (
        raw.regulatory_risk * 0.5
        + raw.platform_dependency_risk * 0.25
        + raw.safety_risk * 0.25
    )
    market_quality = raw.tam_quality * 0.5 + raw.growth_rate_quality * 0.5

    scores = {
        PROBLEM: problem,
        UNDERSERVED: raw.underserved,
        FEASIBILITY: raw.feasibility,
        DIFFERENTIATION: differentiation,
        DEMAND_SIGNALS: demand_signals,
        WILLINGNESS_TO_PAY: willingness_to_pay,
        MARKET_QUALITY: market_quality,
        GTM: gtm,
        EXECUTION: execution,
        RISK: risk,
        ECONOMICS: _NEUTRAL_ECONOMICS,
    }
    return {name: round(_clamp(value), 2) for name, value in scores.items()}


def business_specific_scores(
    raw: RawSignals,
    dna: BusinessDNA,
    market: MarketIntelligence,
) -> Dict[str, float]:
    """Sparse dimensions that only exist for certain business types."""
    scores: Dict[str, float] = {}

    if dna.customer_type == "marketplace":
        early_demand = raw.interviews + raw.waitlist_signups
        scores[SUPPLY_DEMAND_BALANCE] = (8.0 if early_demand > 20 else 4.0) + raw.feasibility * 0.6

    if dna.customer_type == "marketplace" or dna.network_effects == "strong":
        if dna.network_effects == "strong":
            scores[NETWORK_EFFECTS] = 7 + (raw.attribute("Growth") + raw.attribute("Recognition")) * 0.3
        else:
            scores[NETWORK_EFFECTS] = 5.0 if dna.network_effects == "weak" else 2.0

    if dna.regulatory_complexity == "high":
        scores[REGULATORY_COMPLIANCE] = (
            (10 - raw.regulatory_risk) * 0.4
            + raw.team_experience * 0.4
            + _clamp(10 - len(market.regulatory_barriers)) * 0.2
        )

    if dna.network_effects != "none":
        social = raw.attribute("Recognition") + raw.attribute("Growth") + raw.attribute("SocialNeed")
        potential = 8.0 if dna.network_effects == "strong" else 5.0
        scores[VIRAL_POTENTIAL] = (social / 3) * 0.6 + potential * 0.4

    return {name: round(_clamp(value), 2) for name, value in scores.items()}


# ===================================================================== #
#  Stage helpers                                                          #
# ===================================================================== #

def aggregate_overall(values: Mapping[str, float], weights: IndustryWeights) -> int:
    """``round(10 * Σ score·weight / Σ weight)`` over weighted dimensions present."""
    total = 0.0
    weight_sum = 0.0
    for dimension, weight in weights.items():
        if dimension in values and dimension != OVERALL:
            total += values[dimension] * weight
            weight_sum += weight
    if weight_sum <= 0:
        return 0
    return int(_clamp(_round_half_up(10 * total / weight_sum), OVERALL_MIN, OVERALL_MAX))


def saturation_factors(competitive: CompetitiveIntelligence) -> Dict[str, float]:
    """Multiplicative penalties; neutral (1.0) up to moderate saturation."""
    saturation = competitive.market_saturation
    difficulty = competitive.entry_difficulty / 10

    if saturation <= 0.5:
        demand = 1.0
    elif saturation <= _HIGH_SATURATION:
        demand = 1 - (saturation - 0.5)
    else:
        demand = max(0.1, 0.7 - (saturation - _HIGH_SATURATION) * 4)

    if difficulty <= 0.5:
        differentiation = 1.0
    elif difficulty <= 0.7:
        differentiation = 1 - (difficulty - 0.5)
    else:
        differentiation = max(0.1, 0.8 - (difficulty - 0.7) * 2.5)

    return {
        DEMAND_SIGNALS: demand,
        DIFFERENTIATION: differentiation,
        MARKET_QUALITY: max(0.2, 1 - max(0.0, saturation - 0.5) * 1.6),
        EXECUTION: max(0.5, 1 - max(0.0, difficulty - 0.5)),
    }


def tam_score(tam_usd: float, scale: str) -> float:
    billions = tam_usd / 1_000_000_000
    if scale == "global":
        tiers = ((100, 10.0), (50, 8.0), (20, 6.0))
        floor = 4.0
    elif scale == "national":
        tiers = ((10, 10.0), (5, 8.0), (1, 6.0))
        floor = 4.0
    else:
        tiers = ((1, 10.0), (0.5, 8.0))
        floor = 6.0
    for threshold, score in tiers:
        if billions > threshold:
            return score
    return floor


def growth_score(growth_rate: float) -> float:
    if growth_rate > 0.20:
        return 10.0
    if growth_rate > 0.15:
        return 8.0
    if growth_rate > 0.10:
        return 6.0
    if growth_rate > 0.05:
        return 4.0
    return 2.0


def addressable_cap(competitive: CompetitiveIntelligence) -> Optional[float]:
    """Ceiling on market quality for a new entrant, or None."""
    saturation = competitive.market_saturation
    difficulty = competitive.entry_difficulty
    if saturation >= 0.9 and difficulty >= 8:
        return 2.0
    if saturation >= 0.8 and difficulty >= 7:
        return 3.0
    if saturation >= 0.7 and len(competitive.incumbents) >= 5:
        return 4.0
    return None


# ===================================================================== #
#  Public API                                                             #
# ===================================================================== #

class ScoringOutcome(NamedTuple):
    scores: ComputedScores
    adjustments: List[Adjustment]
    base_scores: Dict[str, float]


class ScoringEngine:
    def __init__(
        self,
        registries: Registries = DEFAULT_REGISTRIES,
        penalty_point: SaturationPenaltyPoint = SaturationPenaltyPoint.DIMENSIONS,
    ):
        self._registries = registries
        self._penalty_point = SaturationPenaltyPoint(penalty_point)

    @property
    def penalty_point(self) -> SaturationPenaltyPoint:
        return self._penalty_point

    def score(
        self,
        raw: RawSignals,
        dna: BusinessDNA,
        market: MarketIntelligence,
        weights: IndustryWeights,
        competitive: CompetitiveIntelligence,
        idea_text: str = "",
    ) -> ScoringOutcome:
        """Run all stages and return scores, audit trail and base scores."""
        text = (idea_text or "").lower()
        price = effective_price(raw, idea_text)
        by_dimensions = self._penalty_point is SaturationPenaltyPoint.DIMENSIONS

        # 1. Base scores
        base = base_dimension_scores(raw, text, price, self._registries)
        base.update(business_specific_scores(raw, dna, market))
        base[OVERALL] = float(aggregate_overall(base, weights))
        ledger = ScoreLedger(base)

        # 2. Competitive-saturation penalty
        if by_dimensions:
            self._apply_saturation_penalty(ledger, competitive)

        # 3. Market quality -> addressable opportunity
        self._rescore_market_quality(ledger, dna, market, competitive)

        # 4. Economics
        self._score_economics(ledger, text, price, raw, market)

        # 5. Saturation dampening
        if by_dimensions and competitive.market_saturation > _HIGH_SATURATION:
            reason = f"Market {competitive.market_saturation:.0%} saturated"
            for dimension, ceiling in _SATURATION_DAMPENING_CAPS.items():
                ledger.cap(STAGE_SATURATION_DAMPENING, dimension, ceiling, reason)

        # 6. Aggregation
        ledger.set(
            STAGE_AGGREGATION,
            OVERALL,
            aggregate_overall(ledger.snapshot(), weights),
            AdjustmentKind.RESCORE,
            f"Weighted aggregate ({weights.profile} profile)",
        )

        # 7. Post-hoc penalty on the aggregate
        if not by_dimensions:
            self._apply_aggregate_penalty(ledger, competitive)

        # 8. Reality-check overrides
        self._apply_reality_check(ledger, text)

        final = ledger.snapshot()
        overall = int(final.pop(OVERALL))
        scores = ComputedScores(dimensions=final, overall=overall)
        logger.info(
            "[SCORING] overall=%d (base %d) adjustments=%d point=%s",
            overall, int(base[OVERALL]), len(ledger.adjustments), self._penalty_point.value,
        )
        return ScoringOutcome(scores=scores, adjustments=ledger.adjustments, base_scores=base)

    # ------------------------------------------------------------------ #
    #  Stages                                                              #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _apply_saturation_penalty(ledger: ScoreLedger, competitive: CompetitiveIntelligence) -> None:
        reason = (
            f"Saturation {competitive.market_saturation:.0%}, "
            f"entry difficulty {competitive.entry_difficulty:g}/10"
        )
        for dimension, factor in saturation_factors(competitive).items():
            if factor < 1.0:
                ledger.reduce(STAGE_COMPETITIVE_PENALTY, dimension, ledger[dimension] * factor, reason)

    @staticmethod
    def _rescore_market_quality(
        ledger: ScoreLedger,
        dna: BusinessDNA,
        market: MarketIntelligence,
        competitive: CompetitiveIntelligence,
    ) -> None:
        addressable = (
            ledger[MARKET_QUALITY] * 0.4
            + tam_score(market.tam_usd, dna.scale) * 0.3
            + growth_score(market.growth_rate) * 0.2
            + market.competition_level * 0.1
        )
        ledger.set(
            STAGE_MARKET_QUALITY,
            MARKET_QUALITY,
            addressable,
            AdjustmentKind.RESCORE,
            f"Addressable opportunity from {market.source} market data",
        )
        ceiling = addressable_cap(competitive)
        if ceiling is not None:
            ledger.cap(
                STAGE_MARKET_QUALITY,
                MARKET_QUALITY,
                ceiling,
                f"{competitive.market_category} dominated by {len(competitive.incumbents)} incumbents",
            )

    def _score_economics(
        self,
        ledger: ScoreLedger,
        text: str,
        price: float,
        raw: RawSignals,
        market: MarketIntelligence,
    ) -> None:
        reg = self._registries

        penalty = _largest_weight(text, reg.economics_saturation_penalties)
        if penalty > 0:
            ledger.reduce(
                STAGE_ECONOMICS, ECONOMICS, max(2.0, ledger[ECONOMICS] - penalty),
                "Saturated category compresses margins for new entrants",
            )

        if raw.competition_density >= 8:
            ledger.cap(STAGE_ECONOMICS, ECONOMICS, 3.0, "Extreme competition density")

        generic_count = sum(1 for t in reg.economics_generic_terms if t.found_in(text))
        if generic_count >= 3:
            ledger.reduce(
                STAGE_ECONOMICS, ECONOMICS, max(2.0, ledger[ECONOMICS] - 0.5),
                f"{generic_count} commodity features imply price pressure",
            )

        if 0 < price < _LOW_PRICE:
            ledger.reduce(
                STAGE_ECONOMICS, ECONOMICS, max(1.5, ledger[ECONOMICS] - 1.0),
                f"Low price point (${price:g}) strains unit economics",
            )
            if price <= _PM_PRICE and (_PROJECT_MANAGEMENT.search(text) or _KANBAN.search(text)):
                ledger.reduce(
                    STAGE_ECONOMICS, ECONOMICS, max(1.0, ledger[ECONOMICS] - 0.5),
                    "Commodity project-management pricing",
                )

        if market.customer_acquisition_difficulty >= 7:
            ledger.reduce(
                STAGE_ECONOMICS, ECONOMICS, max(1.5, ledger[ECONOMICS] - 1.0),
                f"High customer acquisition difficulty ({market.customer_acquisition_difficulty:g}/10)",
            )

    @staticmethod
    def _apply_aggregate_penalty(ledger: ScoreLedger, competitive: CompetitiveIntelligence) -> None:
        overall = ledger[OVERALL]
        penalty = competitive.market_saturation * 12 + max(0.0, competitive.entry_difficulty - 7) * 2
        candidate = max(float(_round_half_up(overall - penalty)), min(overall, 10.0))
        if candidate < overall:
            ledger.set(
                STAGE_AGGREGATE_PENALTY,
                OVERALL,
                candidate,
                AdjustmentKind.PENALTY,
                f"Competitive penalty of {penalty:.1f} points",
            )

    def _apply_reality_check(self, ledger: ScoreLedger, text: str) -> None:
        for check in self._registries.reality_checks:
            if check.predicate(text):
                logger.info("[SCORING] Reality check %s applied", check.name)
                for dimension, ceiling in check.caps.items():
                    ledger.cap(STAGE_REALITY_CHECK, dimension, ceiling, check.reason)
                return
