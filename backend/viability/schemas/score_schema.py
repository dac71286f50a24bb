from enum import Enum
from typing import Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class AdjustmentKind(str, Enum):
    """How a stage changed a score."""

    CAP = "cap"              # value lowered to a ceiling
    FLOOR = "floor"          # value raised to a floor
    PENALTY = "penalty"      # multiplicative / subtractive reduction
    RESCORE = "rescore"      # stage replaced the value (recomputation, aggregation)


class Adjustment(BaseModel):
    """One audited change to a score.

    The adjustment list is append-only: replaying it in order over the
    base scores reproduces the final ``ComputedScores``.
    """

    model_config = ConfigDict(frozen=True)

    stage: str = Field(..., description="Pipeline stage that made the change")
    dimension: str = Field(..., description="Scored dimension, or 'overall'")
    kind: AdjustmentKind
    reason: str
    before: float
    after: float

    @model_validator(mode="after")
    def _must_change(self) -> "Adjustment":
        if self.before == self.after:
            raise ValueError(
                f"Adjustment on {self.dimension!r} does not change the value ({self.before})"
            )
        return self


class ComputedScores(BaseModel):
    """Per-dimension scores (0-10) plus the weighted ``overall`` (0-100).

    ``dimensions`` is sparse: business-type specific dimensions such as
    ``network_effects`` only appear when the idea's DNA calls for them.
    """

    model_config = ConfigDict(frozen=True)

    dimensions: Dict[str, float] = Field(..., description="dimension -> score in [0, 10]")
    overall: int = Field(..., ge=0, le=100, description="Weighted aggregate in [0, 100]")

    @field_validator("dimensions")
    @classmethod
    def _scores_in_range(cls, v: Dict[str, float]) -> Dict[str, float]:
        for name, score in v.items():
            if not 0.0 <= score <= 10.0:
                raise ValueError(f"Score for {name!r} out of range: {score}")
        return v

    def get(self, dimension: str, default: Optional[float] = None) -> Optional[float]:
        return self.dimensions.get(dimension, default)

    def __getitem__(self, dimension: str) -> float:
        return self.dimensions[dimension]

    def __contains__(self, dimension: object) -> bool:
        return dimension in self.dimensions

    def as_flat_dict(self) -> Dict[str, float]:
        """Dimensions plus ``overall`` in a single mapping."""
        flat: Dict[str, float] = dict(self.dimensions)
        flat["overall"] = float(self.overall)
        return flat


def replay_adjustments(
    base: Dict[str, float],
    adjustments: Iterable[Adjustment],
) -> Dict[str, float]:
    """Apply *adjustments* in order to a copy of *base* and return it.

    Raises ``ValueError`` if an adjustment's ``before`` does not match the
    value it is applied to, i.e. the trail is not a faithful history.
    """
    state = dict(base)
    for adj in adjustments:
        current = state.get(adj.dimension)
        if current != adj.before:
            raise ValueError(
                f"Adjustment {adj.stage}/{adj.dimension} expected before={adj.before}, found {current}"
            )
        state[adj.dimension] = adj.after
    return state
