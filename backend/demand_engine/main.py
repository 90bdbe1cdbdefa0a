import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import load_settings
from .errors import UnknownSignalKind
from .routes.business_case import router as business_case_router


# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = load_settings()
    logger.info("Starting Demand Signal & Business Case Engine v%s", __version__)
    logger.info(
        "   Fixed cost baseline: %.2f | industry avg conversion: %.2f%%",
        settings.fixed_cost_baseline,
        settings.industry_avg_conversion,
    )

    yield

    logger.info("Shutting down Demand Signal & Business Case Engine")


app = FastAPI(
    title="Demand Signal & Business Case Engine",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(business_case_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Demand Signal & Business Case Engine",
        "version": __version__,
        "description": "Turns lobbies, pledges, visits and orders into business cases for brands",
        "docs": "/docs",
        "endpoints": {
            "business_case": "POST /campaigns/{campaign_id}/business-case",
            "signal_score": "POST /campaigns/{campaign_id}/signal-score",
            "rank": "POST /campaigns/rank",
            "platform_summary": "POST /campaigns/platform-summary",
            "health": "GET /health",
        },
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
        "service": "demand-engine",
        "version": __version__,
    }


@app.exception_handler(UnknownSignalKind)
async def unknown_signal_handler(request, exc: UnknownSignalKind):
    """Schema drift upstream: never recoverable, surfaced as a server error."""
    logger.error("[SCHEMA] %s", exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Unknown signal kind", "detail": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if os.getenv("DEBUG", "false").lower() == "true" else "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "demand_engine.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("DEBUG", "true").lower() == "true",
    )
