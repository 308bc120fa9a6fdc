"""Default values for the portfolio risk engine and its data sources.

The tolerances are part of the bookkeeping contract: portfolios built
from the same inputs must accept and reject the same operations.
"""

# ---------------------------------------------------------------------------
# Bookkeeping tolerances
# ---------------------------------------------------------------------------
ASSET_MATCH_TOLERANCE = 1e-12  # mu/sigma agreement for a repeated asset name
MATRIX_TOLERANCE = 1e-10       # unit diagonal and symmetry checks

# ---------------------------------------------------------------------------
# Market data (yfinance)
# ---------------------------------------------------------------------------
MARKET_DATA = {
    "period": "1y",
    "interval": "1d",
    "trading_days": 252,  # annualization factor for daily log returns
    "min_closes": 30,
    "min_returns": 20,
}

# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------
OUTPUT = {
    "precision": 6,
    "matrix_precision": 3,
    "percent_precision": 2,
}

# ---------------------------------------------------------------------------
# Bulk import/export
# ---------------------------------------------------------------------------
CSV_COLUMNS = ("name", "price", "mu", "sigma", "qty")
CSV_EXPORT_COLUMNS = ("name", "price", "mu", "sigma", "qty", "value")
CSV_HEADER_NAMES = frozenset({"name", "asset"})
