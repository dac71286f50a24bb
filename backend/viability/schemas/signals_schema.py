import math
import sys
from collections.abc import Mapping
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

_RATING_FIELDS = (
    "unavoidable",
    "urgency",
    "underserved",
    "feasibility",
    "pain_gain_ratio",
    "whitespace",
    "competition_density",
    "willingness_to_pay",
    "channels_clarity",
    "team_experience",
    "regulatory_risk",
    "platform_dependency_risk",
    "safety_risk",
    "tam_quality",
    "growth_rate_quality",
)
_PERCENT_FIELDS = ("interviews_positive_pct", "waitlist_conv_rate_pct")
_NON_NEGATIVE_FIELDS = (
    "interviews",
    "lois",
    "preorders",
    "waitlist_signups",
    "price_point",
    "ltv_estimate",
    "cac_estimate",
    "capital_runway_months",
)

ATTRIBUTE_KEYS = (
    "Disruptive",
    "Defensible",
    "Growth",
    "Discontinuous",
    "SocialNeed",
    "Achievement",
    "Recognition",
)


def _as_number(value: Any, default: float) -> float:
    """Coerce *value* to a finite float.  None / NaN / ±inf → *default*."""
    if value is None:
        return default
    try:
        number = float(value)
    except OverflowError:
        # Integers beyond float range saturate; callers clamp to the field range.
        return sys.float_info.max if value > 0 else -sys.float_info.max
    if not math.isfinite(number):
        return default
    return number


class RawSignals(BaseModel):
    """Caller-supplied viability indicators.

    Never rejected for being out of range: ratings are clamped to 0-10,
    percentages to 0-100, counts and money floored at 0.  Missing values
    take the documented defaults below (neutral 5 for ratings, 0 for
    evidence counts and money).
    """

    model_config = ConfigDict(frozen=True)

    # Problem
    unavoidable: float = Field(5.0, description="How unavoidable the problem is (0-10)")
    urgency: float = Field(5.0, description="How urgently customers need a fix (0-10)")
    underserved: float = Field(5.0, description="How poorly current solutions serve it (0-10)")
    feasibility: float = Field(5.0, description="Buildability with reasonable resources (0-10)")
    pain_gain_ratio: float = Field(5.0, description="Pain relieved vs. effort to adopt (0-10)")
    whitespace: float = Field(5.0, description="Room left by existing solutions (0-10)")

    # Market
    competition_density: float = Field(5.0, description="How crowded the space is (0-10, 10 = packed)")
    tam_quality: float = Field(5.0, description="Self-assessed market size quality (0-10)")
    growth_rate_quality: float = Field(5.0, description="Self-assessed market growth quality (0-10)")

    # Economics
    willingness_to_pay: float = Field(5.0, description="Evidence customers will pay (0-10)")
    price_point: float = Field(0.0, description="Monthly price in USD; 0 = not supplied")
    ltv_estimate: float = Field(0.0, description="Customer lifetime value in USD; 0 = not supplied")
    cac_estimate: float = Field(0.0, description="Customer acquisition cost in USD; 0 = not supplied")

    # Demand evidence
    interviews: float = Field(0.0, description="Customer interviews run")
    interviews_positive_pct: float = Field(0.0, description="Share of interviews that were positive (0-100)")
    waitlist_signups: float = Field(0.0, description="Waitlist sign-ups")
    waitlist_conv_rate_pct: float = Field(0.0, description="Waitlist conversion rate (0-100)")
    lois: float = Field(0.0, description="Letters of intent")
    preorders: float = Field(0.0, description="Paid pre-orders")

    # Go-to-market & execution
    channels_clarity: float = Field(5.0, description="Clarity of acquisition channels (0-10)")
    team_experience: float = Field(5.0, description="Relevant team experience (0-10)")
    capital_runway_months: float = Field(0.0, description="Months of funded runway")

    # Risk
    regulatory_risk: float = Field(5.0, description="Regulatory exposure (0-10)")
    platform_dependency_risk: float = Field(5.0, description="Dependence on third-party platforms (0-10)")
    safety_risk: float = Field(5.0, description="Physical / safety exposure (0-10)")
    illegal_or_prohibited: bool = Field(False, description="Idea operates in an illegal or prohibited domain")
    target_customer: Optional[str] = Field(
        None,
        description="Who the idea is for, in the caller's words; overrides the inferred audience",
    )

    attributes: Dict[str, float] = Field(
        default_factory=dict,
        description="Free-form attribute bag (Disruptive, Defensible, Growth, ...), each 0-10",
    )

    @field_validator(*_RATING_FIELDS, mode="before")
    @classmethod
    def _clamp_rating(cls, v: Any, info: ValidationInfo) -> float:
        default = cls.model_fields[info.field_name].default
        if isinstance(v, bool):
            return 10.0 if v else 0.0
        return max(0.0, min(10.0, _as_number(v, default)))

    @field_validator(*_PERCENT_FIELDS, mode="before")
    @classmethod
    def _clamp_percent(cls, v: Any, info: ValidationInfo) -> float:
        default = cls.model_fields[info.field_name].default
        return max(0.0, min(100.0, _as_number(v, default)))

    @field_validator(*_NON_NEGATIVE_FIELDS, mode="before")
    @classmethod
    def _floor_at_zero(cls, v: Any, info: ValidationInfo) -> float:
        default = cls.model_fields[info.field_name].default
        return max(0.0, _as_number(v, default))

    @field_validator("illegal_or_prohibited", mode="before")
    @classmethod
    def _missing_flag_is_false(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("target_customer", mode="before")
    @classmethod
    def _blank_customer_is_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()[:200]
        return v or None

    @field_validator("attributes", mode="before")
    @classmethod
    def _clamp_attributes(cls, v: Any) -> Dict[str, float]:
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError("attributes must be a mapping of name to score")
        return {
            str(key): max(0.0, min(10.0, _as_number(value, 0.0)))
            for key, value in v.items()
        }

    def attribute(self, name: str) -> float:
        """Attribute value by name; missing attributes read as 0."""
        return self.attributes.get(name, 0.0)
