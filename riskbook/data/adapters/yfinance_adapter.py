"""yfinance data adapter: last price, annualized mu/sigma and return series.

Statistics come from daily log returns over the configured history
window (one year by default), annualized with 252 trading days.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
import pandas as pd
import yfinance as yf

from riskbook.config.defaults import MARKET_DATA
from riskbook.portfolio.assets import Asset
from riskbook.portfolio.correlation import correlation_matrix_from_returns

logger = logging.getLogger(__name__)


class MarketDataError(RuntimeError):
    """Price history could not be fetched or is too short to use."""


def fetch_closes(
    ticker: str,
    period: str = MARKET_DATA["period"],
    interval: str = MARKET_DATA["interval"],
    min_closes: int = MARKET_DATA["min_closes"],
) -> list[float]:
    """Fetch daily closes for ``ticker``, oldest first, gaps removed."""
    try:
        history = yf.Ticker(ticker).history(
            period=period,
            interval=interval,
            auto_adjust=True,
        )
    except Exception as e:
        logger.error("yfinance history download failed for %s: %s", ticker, e)
        raise MarketDataError(f"failed to download history for {ticker}: {e}") from e

    if history is None or history.empty or "Close" not in history.columns:
        raise MarketDataError(f"no price history returned for {ticker}")

    closes = pd.to_numeric(history["Close"], errors="coerce").dropna()
    if len(closes) < min_closes:
        raise MarketDataError(
            f"not enough close prices for {ticker}: got {len(closes)}, need {min_closes}"
        )
    logger.debug("Fetched %d closes for %s", len(closes), ticker)
    return [float(c) for c in closes]


def closes_to_log_returns(
    closes: Sequence[float],
    min_returns: int = MARKET_DATA["min_returns"],
) -> list[float]:
    """Daily log returns ln(c[i] / c[i-1]); pairs with a non-positive close are skipped."""
    returns = [
        math.log(cur / prev)
        for prev, cur in zip(closes, closes[1:])
        if prev > 0.0 and cur > 0.0
    ]
    if len(returns) < min_returns:
        raise MarketDataError(
            f"not enough valid returns to compute stats: got {len(returns)}, need {min_returns}"
        )
    return returns


def annualize(
    returns: Sequence[float],
    trading_days: int = MARKET_DATA["trading_days"],
) -> tuple[float, float]:
    """Annualized (mu, sigma) from daily returns, sigma with ddof=1."""
    r = np.asarray(returns, dtype=float)
    mean = float(r.mean())
    stdev = float(r.std(ddof=1)) if len(r) > 1 else 0.0
    return mean * trading_days, stdev * math.sqrt(trading_days)


def fetch_daily_log_returns(
    ticker: str,
    period: str = MARKET_DATA["period"],
    interval: str = MARKET_DATA["interval"],
    min_closes: int = MARKET_DATA["min_closes"],
    min_returns: int = MARKET_DATA["min_returns"],
) -> list[float]:
    """Daily log returns for ``ticker`` over the history window."""
    closes = fetch_closes(ticker, period=period, interval=interval, min_closes=min_closes)
    return closes_to_log_returns(closes, min_returns=min_returns)


def fetch_asset(
    ticker: str,
    period: str = MARKET_DATA["period"],
    interval: str = MARKET_DATA["interval"],
    trading_days: int = MARKET_DATA["trading_days"],
    min_closes: int = MARKET_DATA["min_closes"],
    min_returns: int = MARKET_DATA["min_returns"],
) -> Asset:
    """Build an Asset from the last close and annualized log-return stats."""
    closes = fetch_closes(ticker, period=period, interval=interval, min_closes=min_closes)
    returns = closes_to_log_returns(closes, min_returns=min_returns)
    mu, sigma = annualize(returns, trading_days=trading_days)
    logger.info("Fetched %s: price=%.4f mu=%.4f sigma=%.4f", ticker, closes[-1], mu, sigma)
    return Asset(ticker, closes[-1], mu, sigma)


def correlation_matrix_for(
    tickers: Sequence[str],
    period: str = MARKET_DATA["period"],
    interval: str = MARKET_DATA["interval"],
    min_closes: int = MARKET_DATA["min_closes"],
    min_returns: int = MARKET_DATA["min_returns"],
) -> list[list[float]]:
    """Correlation matrix of daily log returns, in the order of ``tickers``.

    Series are trimmed to the tail of the shortest one before the
    pairwise Pearson correlations are taken.
    """
    if not tickers:
        return []

    series = [
        fetch_daily_log_returns(
            t, period=period, interval=interval,
            min_closes=min_closes, min_returns=min_returns,
        )
        for t in tickers
    ]
    try:
        return correlation_matrix_from_returns(series, min_length=min_returns)
    except ValueError as e:
        raise MarketDataError(str(e)) from e
