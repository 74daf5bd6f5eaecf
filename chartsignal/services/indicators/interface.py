"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod

from chartsignal.services.base import BaseService
from chartsignal.schemas.market import PriceSeries
from chartsignal.schemas.indicators import AggregateIndicatorResult


class IndicatorServiceInterface(BaseService[PriceSeries, AggregateIndicatorResult]):
    """
    Indicator Engine Service Contract.

    INPUT: PriceSeries
        - bars: chronological OHLC bars

    OUTPUT: AggregateIndicatorResult
        - indicators: SMA, EMA, RSI, MACD, Bollinger Bands, Stochastic
        - bullish/bearish/neutral vote counts
        - aggregate direction and confidence (0-95)

    Short series never fail: indicators that cannot be computed report
    insufficient data and vote neutral.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    def execute(self, input_data: PriceSeries) -> AggregateIndicatorResult:
        """Calculate and aggregate all indicators for a series."""
        pass
