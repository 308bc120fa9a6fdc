"""Shared test fixtures for riskbook.

Provides reusable portfolios, correlation matrices, return series and
CSV files across all test modules.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from riskbook.config.schema import RiskbookConfig
from riskbook.portfolio import Asset, Portfolio

# ---------------------------------------------------------------------------
# Core infrastructure
# ---------------------------------------------------------------------------

@pytest.fixture
def test_config() -> RiskbookConfig:
    """Default config."""
    return RiskbookConfig()


# ---------------------------------------------------------------------------
# Portfolios
# ---------------------------------------------------------------------------

@pytest.fixture
def aapl() -> Asset:
    return Asset("AAPL", 200.0, 0.10, 0.20)


@pytest.fixture
def bond() -> Asset:
    return Asset("BOND", 100.0, 0.02, 0.05)


@pytest.fixture
def sample_portfolio(aapl, bond) -> Portfolio:
    """AAPL value 2000 + BOND value 2000 (equal weights)."""
    p = Portfolio()
    p.add_position(aapl, 10)
    p.add_position(bond, 20)
    return p


@pytest.fixture
def three_asset_portfolio() -> Portfolio:
    """Three assets added out of lexical order."""
    p = Portfolio()
    p.add_position(Asset("MSFT", 400.0, 0.09, 0.25), 5)    # 2000
    p.add_position(Asset("GLD", 180.0, 0.04, 0.15), 10)    # 1800
    p.add_position(Asset("BND", 72.0, 0.03, 0.06), 50)     # 3600
    return p


# ---------------------------------------------------------------------------
# Correlation matrices
# ---------------------------------------------------------------------------

@pytest.fixture
def identity_2() -> list[list[float]]:
    return [[1.0, 0.0], [0.0, 1.0]]


@pytest.fixture
def corr_3() -> list[list[float]]:
    """Valid 3x3 matrix in BND, GLD, MSFT order."""
    return [
        [1.0, 0.1, -0.2],
        [0.1, 1.0, 0.3],
        [-0.2, 0.3, 1.0],
    ]


# ---------------------------------------------------------------------------
# Price / return series generators (deterministic)
# ---------------------------------------------------------------------------

@pytest.fixture
def close_history_252() -> pd.DataFrame:
    """252-bar price history shaped like yfinance Ticker.history() (seed=42)."""
    np.random.seed(42)
    n = 252
    close = 100 * np.cumprod(1 + np.random.normal(0.0005, 0.01, n))
    dates = pd.date_range("2024-01-01", periods=n, freq="B")
    return pd.DataFrame(
        {"Open": close, "High": close, "Low": close, "Close": close,
         "Volume": np.random.uniform(500_000, 2_000_000, n)},
        index=dates,
    )


@pytest.fixture
def correlated_returns() -> list[list[float]]:
    """Three 250-day return series sharing a common factor (seed=42)."""
    np.random.seed(42)
    n = 250
    market = np.random.normal(0.0005, 0.01, n)
    series = []
    for beta, idio in [(1.0, 0.005), (1.2, 0.008), (-0.3, 0.003)]:
        series.append(list(beta * market + np.random.normal(0, idio, n)))
    return series


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

@pytest.fixture
def portfolio_csv(tmp_path: Path) -> Path:
    path = tmp_path / "portfolio.csv"
    path.write_text(
        "name,price,mu,sigma,qty\n"
        "BOND,100,0.02,0.05,20\n"
        "AAPL,200,0.10,0.20,10\n"
    )
    return path


@pytest.fixture
def identity_matrix_file(tmp_path: Path) -> Path:
    path = tmp_path / "corr.txt"
    path.write_text("1 0\n0 1\n")
    return path
