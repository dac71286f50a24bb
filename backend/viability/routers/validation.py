"""
Validation Router with Timing Instrumentation

Handles the /validate endpoint for business-idea viability scoring.
"""

import logging
import time
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status

from ..exceptions import InsufficientSignal
from ..schemas.validation_schema import ValidationRequest, ValidationResult
from ..services.validation_service import ValidationService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/validate",
    tags=["Validation"],
    responses={
        422: {"description": "Idea text too thin to classify; provide more detail"},
    },
)


@lru_cache(maxsize=1)
def get_validation_service() -> ValidationService:
    """Process-wide service; registries are shared read-only."""
    return ValidationService.from_settings()


@router.post(
    "",
    response_model=ValidationResult,
    status_code=status.HTTP_200_OK,
    summary="Validate a Business Idea",
    response_description="Status, reasoning, scores and the full adjustment trail",
)
async def validate_idea(
    request: ValidationRequest,
    service: ValidationService = Depends(get_validation_service),
) -> ValidationResult:
    """Score an idea and return GO / REVIEW / NO-GO with its audit trail."""
    start_time = time.perf_counter()
    logger.info("[TIMING] validate_endpoint: START")

    try:
        result = await service.avalidate_business_idea(
            request.idea_text,
            request.signals,
            simulation=request.simulation,
        )
    except InsufficientSignal as exc:
        total_duration = (time.perf_counter() - start_time) * 1000
        logger.info("[TIMING] validate_endpoint: INSUFFICIENT SIGNAL after %.0fms", total_duration)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error": str(exc), "confidence": exc.confidence},
        ) from exc

    total_duration = (time.perf_counter() - start_time) * 1000
    logger.info("[TIMING] validate_endpoint: END duration=%.0fms", total_duration)
    return result


@router.get(
    "/health",
    summary="Health Check",
    description="Check if the validation service is running",
    response_description="Health status",
)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "healthy", "service": "viability-validation"}
