"""Centralized constants shared across the scoring pipeline.

This module is the SINGLE SOURCE OF TRUTH for the business taxonomy
vocabularies, scoring dimension names, base weights, and decision
thresholds.  Keyword tables live in ``registries`` because they are
injected into the engines; the values here are plain enumerations.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


# ── Taxonomy vocabularies ───────────────────────────────────────────────

CUSTOMER_TYPES: tuple[str, ...] = ("b2b", "b2c", "b2b2c", "marketplace")
STAGES: tuple[str, ...] = ("idea", "prototype", "mvp", "launched")
SCALES: tuple[str, ...] = ("local", "regional", "national", "global")
LEVELS: tuple[str, ...] = ("low", "medium", "high")
NETWORK_LEVELS: tuple[str, ...] = ("none", "weak", "strong")

DEFAULT_INDUSTRY = "technology"
DEFAULT_SUB_INDUSTRY = "general"
DEFAULT_BUSINESS_MODEL = "direct-sales"
DEFAULT_CUSTOMER_TYPE = "b2c"

# Industries treated as heavily regulated by the classifier and red flags.
HIGH_REGULATION_INDUSTRIES: frozenset[str] = frozenset({"fintech", "healthtech"})
MEDIUM_REGULATION_INDUSTRIES: frozenset[str] = frozenset({"food", "beauty", "real-estate"})
HIGH_CAPITAL_INDUSTRIES: frozenset[str] = frozenset({"manufacturing", "hardware", "biotech", "real-estate"})

# Classifier tuning
MIN_CANDIDATE_SCORE = 2
MIN_CLASSIFICATION_CONFIDENCE = 0.4
MAX_CLASSIFICATION_CONFIDENCE = 0.95


# ── Scoring dimensions ──────────────────────────────────────────────────

PROBLEM = "problem"
UNDERSERVED = "underserved"
FEASIBILITY = "feasibility"
DIFFERENTIATION = "differentiation"
DEMAND_SIGNALS = "demand_signals"
WILLINGNESS_TO_PAY = "willingness_to_pay"
MARKET_QUALITY = "market_quality"
GTM = "gtm"
EXECUTION = "execution"
RISK = "risk"
ECONOMICS = "economics"

# Sparse, business-type dependent dimensions
NETWORK_EFFECTS = "network_effects"
REGULATORY_COMPLIANCE = "regulatory_compliance"
SUPPLY_DEMAND_BALANCE = "supply_demand_balance"
VIRAL_POTENTIAL = "viral_potential"

OVERALL = "overall"

CORE_DIMENSIONS: tuple[str, ...] = (
    PROBLEM,
    UNDERSERVED,
    FEASIBILITY,
    DIFFERENTIATION,
    DEMAND_SIGNALS,
    WILLINGNESS_TO_PAY,
    MARKET_QUALITY,
    GTM,
    EXECUTION,
    RISK,
)

# Base weights (sum = 100).  ``economics`` is scored but never weighted.
BASE_WEIGHTS: Mapping[str, float] = MappingProxyType({
    PROBLEM: 12,
    UNDERSERVED: 10,
    FEASIBILITY: 12,
    DIFFERENTIATION: 10,
    DEMAND_SIGNALS: 14,
    WILLINGNESS_TO_PAY: 8,
    MARKET_QUALITY: 10,
    GTM: 10,
    EXECUTION: 8,
    RISK: 6,
})

SCORE_MIN = 0.0
SCORE_MAX = 10.0
OVERALL_MIN = 0
OVERALL_MAX = 100


class SaturationPenaltyPoint(str, Enum):
    """Where the competitive-saturation signal is charged.

    ``dimensions``: multiplicative per-dimension penalty plus the >0.8
    dampening caps.  ``aggregate``: a single percentage-point subtraction
    from ``overall``.  Exactly one is active per run.
    """

    DIMENSIONS = "dimensions"
    AGGREGATE = "aggregate"


# ── Decision engine ─────────────────────────────────────────────────────

class Status(str, Enum):
    GO = "GO"
    REVIEW = "REVIEW"
    NO_GO = "NO-GO"


# (go cutoff, review cutoff) on the 0-100 overall score
INDUSTRY_THRESHOLDS: Mapping[str, tuple[int, int]] = MappingProxyType({
    "fintech": (75, 60),
    "healthtech": (75, 60),
    "saas": (70, 55),
    "beauty": (65, 50),
    "ecommerce": (65, 50),
})
MARKETPLACE_THRESHOLDS: tuple[int, int] = (70, 55)
DEFAULT_THRESHOLDS: tuple[int, int] = (70, 55)

SATURATION_NO_GO = 0.8
WEAK_DIMENSION_CUTOFF = 6.0

# dimension -> (minimum score, highlight label)
HIGHLIGHT_RULES: tuple[tuple[str, float, str], ...] = (
    (PROBLEM, 8.0, "Strong problem-solution fit identified"),
    (MARKET_QUALITY, 8.0, "Attractive market opportunity"),
    (DEMAND_SIGNALS, 7.0, "Positive early demand indicators"),
    (DIFFERENTIATION, 7.0, "Clear competitive advantages"),
    (EXECUTION, 8.0, "Strong execution capability"),
    (NETWORK_EFFECTS, 8.0, "Strong network effects potential"),
    (VIRAL_POTENTIAL, 7.0, "High viral growth potential"),
)
