"""Domain exceptions raised by the viability pipeline."""

from __future__ import annotations


class ViabilityError(Exception):
    """Base class for expected, caller-facing pipeline failures."""


class InsufficientSignal(ViabilityError):
    """The idea text is too thin to classify with any confidence.

    Not a crash condition: the caller should ask the user for more detail.
    """

    def __init__(self, confidence: float, message: str | None = None):
        self.confidence = confidence
        super().__init__(
            message
            or (
                f"Unable to clearly classify business type (confidence {confidence:.2f}). "
                "Please provide more specific details."
            )
        )


class ResearchProviderError(ViabilityError):
    """An external market-research provider failed or returned unusable data."""
