# Services package
from .classifier import TextClassifier, classify
from .competitive_intelligence import CompetitiveIntelligenceLookup
from .decision_engine import DecisionEngine, decide
from .market_intelligence import MarketIntelligenceLookup
from .research_provider import HttpResearchProvider, MarketResearchProvider
from .scoring_engine import ScoringEngine, ScoringOutcome
from .validation_service import ValidationService
from .weighting_engine import WeightingEngine, compute_weights

__all__ = [
    "TextClassifier",
    "classify",
    "CompetitiveIntelligenceLookup",
    "DecisionEngine",
    "decide",
    "MarketIntelligenceLookup",
    "HttpResearchProvider",
    "MarketResearchProvider",
    "ScoringEngine",
    "ScoringOutcome",
    "ValidationService",
    "WeightingEngine",
    "compute_weights",
]
