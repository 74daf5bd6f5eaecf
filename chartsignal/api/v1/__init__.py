"""
API v1 Router

All API endpoints for the signal engine.
"""

from fastapi import APIRouter

from chartsignal.api.v1.endpoints import indicators, patterns, signals

router = APIRouter()

# Include all endpoint routers
router.include_router(indicators.router, prefix="/indicators", tags=["Indicators"])
router.include_router(patterns.router, prefix="/patterns", tags=["Patterns"])
router.include_router(signals.router, prefix="/signals", tags=["Signals"])
