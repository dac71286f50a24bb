from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class BusinessDNA(BaseModel):
    """Structured business taxonomy inferred from the idea text.

    Produced once by the Text Classifier and consumed read-only by every
    downstream stage.
    """

    model_config = ConfigDict(frozen=True)

    industry: str = Field(..., description="Primary industry, e.g. 'fintech', 'saas'")
    sub_industry: str = Field(..., description="Industry segment, or 'general'")
    business_model: str = Field(..., description="Revenue model, e.g. 'subscription', 'marketplace'")
    customer_type: Literal["b2b", "b2c", "b2b2c", "marketplace"]
    stage: Literal["idea", "prototype", "mvp", "launched"]
    scale: Literal["local", "regional", "national", "global"]
    capital_intensity: Literal["low", "medium", "high"]
    regulatory_complexity: Literal["low", "medium", "high"]
    network_effects: Literal["none", "weak", "strong"]
    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Classification confidence; below 0.4 the classifier refuses",
    )
