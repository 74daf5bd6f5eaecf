"""
Market Data

Synthetic price series for demos and tests. Real data feeds live
outside the engine; callers pass PriceSeries in.
"""

from chartsignal.services.market_data.mock_data import (
    generate_mock_bars,
    generate_mock_price_series,
)

__all__ = [
    "generate_mock_bars",
    "generate_mock_price_series",
]
