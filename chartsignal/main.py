"""
ChartSignal Engine - FastAPI Application

Main entry point for the signal API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chartsignal.core.config import settings
from chartsignal.api.v1 import router as api_v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(
        f"Composition: {settings.pattern_weight:.0%} patterns / "
        f"{settings.indicator_weight:.0%} indicators, threshold {settings.action_threshold}%"
    )

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ChartSignal Engine API

    ## Architecture
    - **Indicator Engine**: SMA, EMA, RSI, MACD, Bollinger Bands, Stochastic (pure Python/NumPy)
    - **Pattern Scorer**: Weighs candlestick pattern detections
    - **Signal Composer**: Fuses pattern and indicator evidence
    - **Risk Calculator**: Stop-loss / take-profit from confidence and risk profile

    ## Core Principles
    - The engine suggests, the human decides
    - Deterministic: identical inputs give identical signals
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "ChartSignal Engine API",
        "docs": "/docs",
        "health": "/health",
    }
