"""ChartSignal: chart-pattern and technical-indicator signal engine."""

__version__ = "0.1.0"
