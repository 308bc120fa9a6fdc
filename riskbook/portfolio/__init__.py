"""Portfolio bookkeeping and mean-variance risk.

Public API::

    from riskbook.portfolio import (
        Asset,
        Position,
        Portfolio,
        merge,
        validate_correlation_matrix,
        parse_matrix_text,
        correlation_matrix_from_returns,
        run_what_if,
    )
"""

from riskbook.portfolio.assets import Asset, Position
from riskbook.portfolio.book import Portfolio, merge
from riskbook.portfolio.correlation import (
    correlation_matrix_from_returns,
    parse_matrix_text,
    pearson_correlation,
    validate_correlation_matrix,
)
from riskbook.portfolio.whatif import (
    WhatIfResult,
    run_what_if,
    simulate_quantity_change,
)

__all__ = [
    "Asset",
    "Position",
    "Portfolio",
    "merge",
    "validate_correlation_matrix",
    "parse_matrix_text",
    "pearson_correlation",
    "correlation_matrix_from_returns",
    "WhatIfResult",
    "run_what_if",
    "simulate_quantity_change",
]
