from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EconomicRatio(BaseModel):
    """A ratio that may be mathematically undefined.

    ``value`` is None exactly when the denominator was non-positive; the
    reason says why.  NaN and infinity never appear here.
    """

    model_config = ConfigDict(frozen=True)

    value: Optional[float] = None
    undefined_reason: Optional[str] = None

    @property
    def is_defined(self) -> bool:
        return self.value is not None

    @classmethod
    def undefined(cls, reason: str) -> "EconomicRatio":
        return cls(value=None, undefined_reason=reason)


class SimulationOptions(BaseModel):
    """Explicit, reproducible settings for the Monte Carlo estimators."""

    model_config = ConfigDict(frozen=True)

    runs: int = Field(2000, ge=1, le=100_000)
    seed: int = Field(..., description="Random seed; required so results are reproducible")


class PaybackSimulation(BaseModel):
    model_config = ConfigDict(frozen=True)

    p50_months: Optional[int] = Field(None, description="Median payback; None = beyond horizon")
    p90_months: Optional[int] = Field(None, description="Slow-case payback; None = beyond horizon")
    prob_payback_within_12: float = Field(..., ge=0.0, le=1.0)


class LtvCacSimulation(BaseModel):
    model_config = ConfigDict(frozen=True)

    p10: float
    p50: float
    p90: float


class EconomicsSimulation(BaseModel):
    model_config = ConfigDict(frozen=True)

    runs: int
    seed: int
    payback: Optional[PaybackSimulation] = None
    ltv_cac: Optional[LtvCacSimulation] = None


class UnitEconomics(BaseModel):
    """LTV:CAC and CAC payback derived from caller signals and benchmarks."""

    model_config = ConfigDict(frozen=True)

    supplied: bool = Field(..., description="True when the caller gave an LTV or CAC estimate")
    price_point: float = Field(..., ge=0.0, description="Effective monthly price used")
    monthly_contribution: float = Field(..., ge=0.0)
    ltv_cac_ratio: EconomicRatio
    payback_months: EconomicRatio
    simulation: Optional[EconomicsSimulation] = None
