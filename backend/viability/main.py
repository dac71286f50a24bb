import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_settings
from .exceptions import InsufficientSignal
from .routers.validation import router as validation_router

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup
    logger.info("Starting Business Viability Validator")
    logger.info("   Saturation penalty point: %s", settings.saturation_penalty_point.value)
    logger.info(
        "   Market research: %s",
        "Configured" if settings.market_research_url else "Not set (using static benchmarks)",
    )
    logger.info("   Ready to validate business ideas!")

    yield

    logger.info("Shutting down Business Viability Validator")


app = FastAPI(
    title="Adaptive Business-Viability Scoring Service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.include_router(validation_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Business Viability Validator",
        "version": __version__,
        "description": "Deterministic GO / REVIEW / NO-GO scoring with an adjustment audit trail",
        "docs": "/docs",
        "endpoints": {
            "validate": "POST /validate - Validate a business idea",
            "health": "GET /validate/health - Service health check"
        }
    }


@app.get(
    "/health",
    summary="Global Health Check",
    description="Check if the API server is running",
    tags=["General"]
)
async def health():
    """Global health check endpoint."""
    return {
        "status": "healthy",
        "service": "viability-validator",
        "version": __version__
    }


@app.exception_handler(InsufficientSignal)
async def insufficient_signal_handler(request: Request, exc: InsufficientSignal):
    """Thin descriptions are a client problem, not a server error."""
    return JSONResponse(
        status_code=422,
        content={"detail": {"error": str(exc), "confidence": exc.confidence}},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "viability.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
