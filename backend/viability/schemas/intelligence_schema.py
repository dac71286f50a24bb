from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CompetitiveIntelligence(BaseModel):
    """Saturation and incumbent profile of the market an idea enters.

    Either a precomputed registry fingerprint or a default derived from
    the idea's ``BusinessDNA``.
    """

    model_config = ConfigDict(frozen=True)

    market_category: str
    fingerprint: Optional[str] = Field(
        default=None,
        description="Registry key of the matched crowded market; None when defaulted",
    )
    incumbents: tuple[str, ...] = Field(
        default=(),
        description="Established players, strongest first",
    )
    market_saturation: float = Field(..., ge=0.0, le=1.0)
    entry_difficulty: float = Field(..., ge=0.0, le=10.0)
    switching_costs: Literal["none", "low", "medium", "high", "weak", "strong"]
    network_effects: Literal["none", "low", "medium", "high", "weak", "strong"]
    capital_requirements: Literal["none", "low", "medium", "high", "weak", "strong"]
    brand_importance: Literal["none", "low", "medium", "high", "weak", "strong"]
    confidence: float = Field(..., ge=0.0, le=1.0)


class MarketIntelligence(BaseModel):
    """Market-size, growth and margin benchmarks for an idea's industry.

    The same contract is honoured by the static benchmark table and by
    any external research provider plugged into the lookup.
    """

    model_config = ConfigDict(frozen=True)

    tam_usd: float = Field(..., ge=0.0, description="Total addressable market in USD")
    growth_rate: float = Field(..., description="Annual growth as a fraction, e.g. 0.15")
    competition_level: float = Field(
        ...,
        ge=0.0,
        le=10.0,
        description="Room for a new entrant: 10 = little competition, 0 = crowded",
    )
    key_trends: tuple[str, ...] = Field(default=())
    regulatory_barriers: tuple[str, ...] = Field(default=())
    typical_margins: float = Field(..., ge=0.0, le=1.0, description="Typical gross margin")
    customer_acquisition_difficulty: float = Field(..., ge=0.0, le=10.0)
    confidence: float = Field(..., ge=0.0, le=1.0)
    source: Literal["benchmark", "fallback", "research"] = "benchmark"
