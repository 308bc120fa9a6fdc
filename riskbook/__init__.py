"""riskbook: portfolio bookkeeping and mean-variance risk statistics."""

__version__ = "0.1.0"
