"""Correlation matrices: validation gate and matrix sources.

Computes / checks:
  - Shape, unit diagonal, [-1, 1] bounds and symmetry of a positional
    correlation matrix (rejects, never repairs)
  - Matrices parsed from free text (one row per line)
  - Pairwise Pearson correlation of aligned return series
"""

from __future__ import annotations

import re
from collections.abc import Sequence

import numpy as np

from riskbook.config.defaults import MATRIX_TOLERANCE

_SEPARATORS = re.compile(r"[,\s]+")


def validate_correlation_matrix(
    matrix: Sequence[Sequence[float]] | np.ndarray,
    n: int,
    tol: float = MATRIX_TOLERANCE,
) -> np.ndarray:
    """Check that ``matrix`` is a usable n x n correlation matrix.

    Parameters:
        matrix: Row-major matrix indexed in the portfolio's asset order.
        n: Expected dimension (number of assets).
        tol: Absolute tolerance for the diagonal and symmetry checks.

    Returns:
        The matrix as a float ndarray of shape (n, n).

    Raises:
        ValueError: wrong number of rows or columns, non-finite entry,
            diagonal entry away from 1, off-diagonal entry outside
            [-1, 1], or asymmetry beyond ``tol``.
    """
    try:
        rows = len(matrix)
    except TypeError:
        raise ValueError(
            f"correlation matrix has wrong number of rows: expected {n}, got {matrix!r}."
        ) from None
    if rows != n:
        raise ValueError(
            f"correlation matrix has wrong number of rows: expected {n}, got {rows}."
        )
    for i, row in enumerate(matrix):
        if np.ndim(row) != 1:
            raise ValueError(
                f"correlation matrix row {i} has wrong number of columns: "
                f"expected a row of {n} values, got {row!r}."
            )
        if len(row) != n:
            raise ValueError(
                f"correlation matrix row {i} has wrong number of columns: "
                f"expected {n}, got {len(row)}."
            )

    corr = np.asarray(matrix, dtype=float).reshape(n, n)
    if not np.all(np.isfinite(corr)):
        raise ValueError("correlation matrix entries must be finite numbers.")

    for i in range(n):
        if abs(corr[i, i] - 1.0) > tol:
            raise ValueError(
                f"correlation matrix diagonal must be 1 (entry [{i}][{i}] = {corr[i, i]})."
            )
        for j in range(i + 1, n):
            a = corr[i, j]
            b = corr[j, i]
            if a < -1.0 or a > 1.0 or b < -1.0 or b > 1.0:
                raise ValueError(
                    f"correlation must be in [-1, 1] (entries [{i}][{j}] = {a}, [{j}][{i}] = {b})."
                )
            if abs(a - b) > tol:
                raise ValueError(
                    f"correlation matrix must be symmetric ([{i}][{j}] = {a}, [{j}][{i}] = {b})."
                )

    return corr


def parse_matrix_text(text: str) -> list[list[float]]:
    """Parse a matrix typed as text.

    Rows are separated by newlines, values by whitespace and/or commas.
    Blank lines are skipped. Rows are not required to have equal length;
    shape problems are left to :func:`validate_correlation_matrix`.

    Example (2 x 2)::

        1 0.3
        0.3, 1
    """
    rows: list[list[float]] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        tokens = [t for t in _SEPARATORS.split(line.strip()) if t]
        if not tokens:
            continue
        try:
            rows.append([float(t) for t in tokens])
        except ValueError:
            raise ValueError(f"matrix line {lineno}: invalid numeric value.") from None
    return rows


def pearson_correlation(a: Sequence[float], b: Sequence[float]) -> float:
    """Sample Pearson correlation of two equal-length series.

    Returns 0.0 when either series is constant (zero dispersion).
    """
    if len(a) != len(b) or len(a) < 2:
        raise ValueError(
            f"correlation: series size mismatch or too small ({len(a)} vs {len(b)})."
        )

    x = np.asarray(a, dtype=float)
    y = np.asarray(b, dtype=float)
    dx = x - x.mean()
    dy = y - y.mean()
    sxx = float(np.dot(dx, dx))
    syy = float(np.dot(dy, dy))
    if sxx <= 0.0 or syy <= 0.0:
        return 0.0
    return float(np.dot(dx, dy)) / np.sqrt(sxx * syy)


def correlation_matrix_from_returns(
    series: Sequence[Sequence[float]],
    min_length: int = 20,
) -> list[list[float]]:
    """Build a correlation matrix from per-asset return series.

    Series are aligned by keeping the last ``min(len)`` observations of
    each one. Each pairwise correlation is clamped into [-1, 1] and the
    diagonal is exactly 1.

    Parameters:
        series: One return series per asset, in the desired matrix order.
        min_length: Minimum number of aligned observations required.
    """
    n = len(series)
    if n == 0:
        return []

    aligned_len = min(len(s) for s in series)
    if aligned_len < min_length:
        raise ValueError(
            f"not enough aligned returns to compute correlation matrix "
            f"({aligned_len} < {min_length})."
        )
    aligned = [np.asarray(s, dtype=float)[len(s) - aligned_len:] for s in series]

    corr = [[0.0] * n for _ in range(n)]
    for i in range(n):
        corr[i][i] = 1.0
        for j in range(i + 1, n):
            c = min(1.0, max(-1.0, pearson_correlation(aligned[i], aligned[j])))
            corr[i][j] = c
            corr[j][i] = c
    return corr
