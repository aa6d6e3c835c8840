"""Trade journal analytics: risk, outcome and performance metrics for logged trades."""

__version__ = "0.1.0"
