"""Text Classifier.

Maps free idea text to a ``BusinessDNA`` taxonomy record.

Rules
-----
- NO API calls
- NO LLMs
- Keyword axes: weighted word-start matches, highest total wins
- Ties go to the candidate declared first in the registry
- A candidate needs a score >= MIN_CANDIDATE_SCORE, else the axis default
- Confidence < MIN_CLASSIFICATION_CONFIDENCE raises ``InsufficientSignal``
"""

from __future__ import annotations

import logging
from typing import Optional

from ..constants import (
    DEFAULT_BUSINESS_MODEL,
    DEFAULT_CUSTOMER_TYPE,
    DEFAULT_INDUSTRY,
    DEFAULT_SUB_INDUSTRY,
    HIGH_CAPITAL_INDUSTRIES,
    HIGH_REGULATION_INDUSTRIES,
    MAX_CLASSIFICATION_CONFIDENCE,
    MEDIUM_REGULATION_INDUSTRIES,
    MIN_CANDIDATE_SCORE,
    MIN_CLASSIFICATION_CONFIDENCE,
)
from ..exceptions import InsufficientSignal
from ..registries import DEFAULT_REGISTRIES, KeywordCandidate, Registries, compile_term
from ..schemas.business_dna_schema import BusinessDNA

logger = logging.getLogger(__name__)


def _has(text: str, *terms: str) -> bool:
    return any(compile_term(t).search(text) for t in terms)


def best_candidate(
    text: str,
    candidates: tuple[KeywordCandidate, ...],
    default: str,
) -> tuple[str, float]:
    """Return ``(label, score)`` of the top-scoring candidate.

    Iterates in declaration order and only replaces the leader on a
    strictly higher score, so the earliest candidate wins a tie.
    """
    best_label, best_score = default, 0.0
    for candidate in candidates:
        score = candidate.score(text)
        if score > best_score:
            best_label, best_score = candidate.label, score
    if best_score < MIN_CANDIDATE_SCORE:
        return default, best_score
    return best_label, best_score


# ── Single-pass structural axes ─────────────────────────────────────────

def infer_stage(text: str) -> str:
    if _has(text, "launched", "selling", "customers", "revenue"):
        return "launched"
    if _has(text, "mvp", "minimum viable"):
        return "mvp"
    if _has(text, "prototype", "beta", "testing"):
        return "prototype"
    return "idea"


def infer_scale(text: str) -> str:
    if _has(text, "global", "worldwide", "international"):
        return "global"
    if _has(text, "national", "nationwide", "country"):
        return "national"
    if _has(text, "regional", "state", "statewide"):
        return "regional"
    return "local"


def infer_capital_intensity(text: str, industry: str) -> str:
    if industry in HIGH_CAPITAL_INDUSTRIES or _has(text, "manufacturing", "hardware", "factory"):
        return "high"
    if _has(text, "software", "app", "digital", "online", "service"):
        return "low"
    return "medium"


def infer_regulatory_complexity(industry: str) -> str:
    if industry in HIGH_REGULATION_INDUSTRIES:
        return "high"
    if industry in MEDIUM_REGULATION_INDUSTRIES:
        return "medium"
    return "low"


def infer_network_effects(business_model: str, customer_type: str, text: str) -> str:
    if business_model == "marketplace" or customer_type == "marketplace" or _has(text, "network", "viral"):
        return "strong"
    if _has(text, "community", "sharing", "social"):
        return "weak"
    return "none"


class TextClassifier:
    """Keyword classifier over the injected registries."""

    def __init__(self, registries: Registries = DEFAULT_REGISTRIES):
        self._registries = registries

    def confidence(self, text: str, any_axis_matched: bool) -> float:
        """Bounded function of text length and explicit indicator words."""
        length = len(text)
        score = 0.30
        if length >= 20:
            score += 0.15
        if length > 100:
            score += 0.20
        if length > 200:
            score += 0.10
        if any(t.found_in(text) for t in self._registries.indicator_terms):
            score += 0.10
        if any_axis_matched:
            score += 0.10
        return round(min(score, MAX_CLASSIFICATION_CONFIDENCE), 2)

    def classify(self, text: Optional[str]) -> BusinessDNA:
        """Classify *text*.

        Raises
        ------
        InsufficientSignal
            When the computed confidence is below the minimum.
        """
        normalized = (text or "").lower().strip()
        reg = self._registries

        industry, industry_score = best_candidate(normalized, reg.industries, DEFAULT_INDUSTRY)
        sub_industry, _ = best_candidate(
            normalized, reg.sub_industries.get(industry, ()), DEFAULT_SUB_INDUSTRY
        )
        business_model, model_score = best_candidate(
            normalized, reg.business_models, DEFAULT_BUSINESS_MODEL
        )
        customer_type, customer_score = best_candidate(
            normalized, reg.customer_types, DEFAULT_CUSTOMER_TYPE
        )

        any_axis_matched = (
            industry != DEFAULT_INDUSTRY
            or business_model != DEFAULT_BUSINESS_MODEL
            or customer_type != DEFAULT_CUSTOMER_TYPE
        )
        confidence = self.confidence(normalized, any_axis_matched)

        if confidence < MIN_CLASSIFICATION_CONFIDENCE:
            logger.info("[CLASSIFIER] Insufficient signal (confidence=%.2f)", confidence)
            raise InsufficientSignal(confidence)

        dna = BusinessDNA(
            industry=industry,
            sub_industry=sub_industry,
            business_model=business_model,
            customer_type=customer_type,
            stage=infer_stage(normalized),
            scale=infer_scale(normalized),
            capital_intensity=infer_capital_intensity(normalized, industry),
            regulatory_complexity=infer_regulatory_complexity(industry),
            network_effects=infer_network_effects(business_model, customer_type, normalized),
            confidence=confidence,
        )
        logger.info(
            "[CLASSIFIER] industry=%s (%.0f) model=%s (%.0f) customer=%s (%.0f) confidence=%.2f",
            dna.industry, industry_score, dna.business_model, model_score,
            dna.customer_type, customer_score, dna.confidence,
        )
        return dna


def classify(text: Optional[str], registries: Registries = DEFAULT_REGISTRIES) -> BusinessDNA:
    """Module-level convenience wrapper around :class:`TextClassifier`."""
    return TextClassifier(registries).classify(text)
