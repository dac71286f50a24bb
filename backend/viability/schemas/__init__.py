# Schemas package
from .business_dna_schema import BusinessDNA
from .intelligence_schema import CompetitiveIntelligence, MarketIntelligence
from .signals_schema import RawSignals
from .score_schema import Adjustment, AdjustmentKind, ComputedScores, replay_adjustments
from .economics_schema import (
    EconomicRatio,
    EconomicsSimulation,
    LtvCacSimulation,
    PaybackSimulation,
    SimulationOptions,
    UnitEconomics,
)
from .validation_schema import Decision, IndustryWeights, ValidationRequest, ValidationResult

__all__ = [
    "BusinessDNA",
    "CompetitiveIntelligence",
    "MarketIntelligence",
    "RawSignals",
    "Adjustment",
    "AdjustmentKind",
    "ComputedScores",
    "replay_adjustments",
    "EconomicRatio",
    "EconomicsSimulation",
    "LtvCacSimulation",
    "PaybackSimulation",
    "SimulationOptions",
    "UnitEconomics",
    "Decision",
    "IndustryWeights",
    "ValidationRequest",
    "ValidationResult",
]
