from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constants import Status
from .business_dna_schema import BusinessDNA
from .economics_schema import SimulationOptions, UnitEconomics
from .intelligence_schema import CompetitiveIntelligence, MarketIntelligence
from .score_schema import Adjustment, ComputedScores
from .signals_schema import RawSignals


class IndustryWeights(BaseModel):
    """Per-dimension weights for one idea, plus the profile that produced them."""

    model_config = ConfigDict(frozen=True)

    profile: str = Field(..., description="'base' or the single override profile applied")
    weights: Dict[str, float]

    def items(self):
        return self.weights.items()

    def __contains__(self, dimension: object) -> bool:
        return dimension in self.weights

    def __getitem__(self, dimension: str) -> float:
        return self.weights[dimension]

    @property
    def total(self) -> float:
        return float(sum(self.weights.values()))


class Decision(BaseModel):
    """Output of the Decision Engine."""

    model_config = ConfigDict(frozen=True)

    status: Status
    reasoning: str
    risks: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)
    triggered_flags: List[str] = Field(
        default_factory=list,
        description="Ids of every red flag that fired, killing or not",
    )


class ValidationResult(BaseModel):
    """Complete, self-explaining verdict for one idea.

    Built fresh per request; contains no identifiers or timestamps so that
    identical inputs always yield an identical result.
    """

    model_config = ConfigDict(frozen=True)

    status: Status
    reasoning: str
    risks: List[str]
    highlights: List[str]
    scores: ComputedScores
    business_dna: BusinessDNA
    market_intelligence: MarketIntelligence
    competitive_intelligence: CompetitiveIntelligence
    adjustments: List[Adjustment]
    base_scores: Dict[str, float] = Field(
        ...,
        description="Stage-1 scores (with base overall); replaying adjustments over these yields scores",
    )
    weights: IndustryWeights
    unit_economics: UnitEconomics
    triggered_flags: List[str] = Field(default_factory=list)
    title: str
    value_proposition: str
    target_market: str
    methodology: str


class ValidationRequest(BaseModel):
    """Request body for ``POST /validate``."""

    idea_text: str = Field(
        ...,
        max_length=5000,
        description="Free-text description of the business idea",
        examples=[
            "Subscription software that predicts daily bread demand for independent bakeries",
        ],
    )
    signals: RawSignals = Field(default_factory=RawSignals)
    simulation: Optional[SimulationOptions] = None
