"""Mean-variance risk formulas over weights, volatilities and correlations.

All functions take vectors indexed in the same asset order as the
correlation matrix. The matrix is assumed to have passed
:func:`riskbook.portfolio.correlation.validate_correlation_matrix`.

    variance      = sum_i sum_j w_i w_j C_ij s_i s_j
    contribution_i = w_i * sum_j C_ij s_i s_j w_j

Contributions sum to the variance.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def covariance_matrix(
    volatilities: Sequence[float] | np.ndarray,
    corr: np.ndarray,
) -> np.ndarray:
    """Covariance from volatilities and correlations: C_ij * s_i * s_j."""
    sigma = np.asarray(volatilities, dtype=float)
    return np.asarray(corr, dtype=float) * np.outer(sigma, sigma)


def portfolio_variance(
    weights: Sequence[float] | np.ndarray,
    volatilities: Sequence[float] | np.ndarray,
    corr: np.ndarray,
) -> float:
    """Quadratic form w' Sigma w, evaluated as the full double sum."""
    w = np.asarray(weights, dtype=float)
    if w.size == 0:
        return 0.0
    cov = covariance_matrix(volatilities, corr)
    return float(np.sum(np.outer(w, w) * cov))


def portfolio_volatility(
    weights: Sequence[float] | np.ndarray,
    volatilities: Sequence[float] | np.ndarray,
    corr: np.ndarray,
) -> float:
    """Square root of the variance, floored at zero for numerical noise."""
    return float(np.sqrt(max(0.0, portfolio_variance(weights, volatilities, corr))))


def variance_contributions(
    weights: Sequence[float] | np.ndarray,
    volatilities: Sequence[float] | np.ndarray,
    corr: np.ndarray,
) -> list[float]:
    """Per-asset covariance with the whole portfolio, weighted by w_i."""
    w = np.asarray(weights, dtype=float)
    if w.size == 0:
        return []
    cov = covariance_matrix(volatilities, corr)
    return [float(x) for x in w * (cov @ w)]


def risk_shares(contributions: Sequence[float]) -> list[float]:
    """Contributions as fractions of total variance.

    All zero when the total variance is not positive.
    """
    total = float(sum(contributions))
    if total <= 0.0:
        return [0.0] * len(contributions)
    return [c / total for c in contributions]
