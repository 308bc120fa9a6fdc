"""Portfolio: positions keyed by asset name, plus the risk API.

Asset order is the ascending lexical order of the names. Every weight
vector, per-asset listing and correlation matrix index uses that order,
so two portfolios holding the same names always expect the same matrix
layout regardless of insertion order.

Degenerate convention: when the portfolio is empty or its total value
is not positive, expected return, variance, volatility and every
contribution are 0 rather than an error.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import numpy as np

from riskbook.config.defaults import ASSET_MATCH_TOLERANCE
from riskbook.portfolio import risk
from riskbook.portfolio.assets import Asset, Position
from riskbook.portfolio.correlation import validate_correlation_matrix

Matrix = Sequence[Sequence[float]] | np.ndarray


class Portfolio:
    """An ordered book of Positions with aggregation and risk statistics.

    Usage::

        p = Portfolio()
        p.add_position(Asset("AAPL", 200.0, 0.10, 0.20), 10)
        p.add_position(Asset("BOND", 100.0, 0.02, 0.05), 20)
        p.asset_order()                 # ["AAPL", "BOND"]
        p.volatility([[1, 0], [0, 1]])  # 0.1030776...
    """

    def __init__(self) -> None:
        self._positions: dict[str, Position] = {}

    # ------------------------------------------------------------------
    # Position management
    # ------------------------------------------------------------------

    def add_position(self, asset: Asset, quantity: float) -> None:
        """Add ``quantity`` of ``asset``, aggregating with an existing entry.

        A repeated name must carry the same expected return and
        volatility as the stored asset. The stored asset, including its
        price, is kept; only the quantity grows.
        """
        if not quantity > 0.0:
            raise ValueError(f"add_position: quantity must be > 0, got {quantity}.")

        existing = self._positions.get(asset.name)
        if existing is None:
            self._positions[asset.name] = Position(asset.copy(), quantity)
            return

        stored = existing.asset
        if (
            abs(stored.expected_return - asset.expected_return) > ASSET_MATCH_TOLERANCE
            or abs(stored.volatility - asset.volatility) > ASSET_MATCH_TOLERANCE
        ):
            raise ValueError(
                f"add_position: asset parameters mismatch for {asset.name!r} "
                f"(mu {stored.expected_return} vs {asset.expected_return}, "
                f"sigma {stored.volatility} vs {asset.volatility})."
            )
        existing.quantity += float(quantity)

    def remove_position(self, name: str, quantity: float) -> None:
        """Remove ``quantity`` units of ``name``; drop the entry at zero."""
        if not quantity > 0.0:
            raise ValueError(f"remove_position: quantity must be > 0, got {quantity}.")

        position = self._positions.get(name)
        if position is None:
            raise KeyError(f"remove_position: asset not found: {name}")
        if quantity > position.quantity:
            raise ValueError(
                f"remove_position: quantity {quantity} exceeds current position "
                f"{position.quantity} in {name}."
            )

        remaining = position.quantity - quantity
        if remaining <= 0.0:
            del self._positions[name]
        else:
            position.quantity = remaining

    def __getitem__(self, name: str) -> Position:
        try:
            return self._positions[name]
        except KeyError:
            raise KeyError(f"asset not found: {name}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[Position]:
        """Positions in asset order."""
        for name in self.asset_order():
            yield self._positions[name]

    def __add__(self, other: "Portfolio") -> "Portfolio":
        if not isinstance(other, Portfolio):
            return NotImplemented
        return merge(self, other)

    def __repr__(self) -> str:
        held = ", ".join(f"{p.name}={p.quantity:g}" for p in self)
        return f"Portfolio({held})"

    def size(self) -> int:
        return len(self._positions)

    def copy(self) -> "Portfolio":
        """Independent copy; assets are copied, not shared."""
        out = Portfolio()
        out._positions = {name: pos.copy() for name, pos in self._positions.items()}
        return out

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def asset_order(self) -> list[str]:
        """Asset names in ascending lexical order (the matrix index order)."""
        return sorted(self._positions)

    def asset_names(self) -> set[str]:
        return set(self._positions)

    def total_value(self) -> float:
        return sum(pos.value for pos in self._positions.values())

    def weights(self) -> dict[str, float]:
        """Value weights keyed by name, in asset order."""
        total = self.total_value()
        if total <= 0.0:
            return {name: 0.0 for name in self.asset_order()}
        return {pos.name: pos.value / total for pos in self}

    def expected_return(self) -> float:
        """Value-weighted mean of asset expected returns (0 if no value)."""
        total = self.total_value()
        if total <= 0.0:
            return 0.0
        return sum((pos.value / total) * pos.asset.expected_return for pos in self)

    def volatilities(self) -> list[float]:
        return [pos.asset.volatility for pos in self]

    # ------------------------------------------------------------------
    # Risk statistics
    # ------------------------------------------------------------------

    def _risk_inputs(self, corr: Matrix) -> tuple[np.ndarray, list[float], np.ndarray] | None:
        """Validated (weights, volatilities, matrix), or None if degenerate."""
        n = self.size()
        if n == 0:
            return None
        validated = validate_correlation_matrix(corr, n)
        total = self.total_value()
        if total <= 0.0:
            return None
        w = np.array([pos.value / total for pos in self])
        return w, self.volatilities(), validated

    def variance(self, corr: Matrix) -> float:
        inputs = self._risk_inputs(corr)
        if inputs is None:
            return 0.0
        return risk.portfolio_variance(*inputs)

    def volatility(self, corr: Matrix) -> float:
        return float(np.sqrt(max(0.0, self.variance(corr))))

    def variance_contributions(self, corr: Matrix) -> list[float]:
        """Per-asset share of variance in asset order; sums to variance()."""
        inputs = self._risk_inputs(corr)
        if inputs is None:
            return [0.0] * self.size()
        return risk.variance_contributions(*inputs)

    def risk_shares(self, corr: Matrix) -> list[float]:
        """Contributions as fractions of total variance, in asset order."""
        return risk.risk_shares(self.variance_contributions(corr))


def merge(lhs: Portfolio, rhs: Portfolio) -> Portfolio:
    """Copy of ``lhs`` with every position of ``rhs`` added to it.

    Same aggregation rules as :meth:`Portfolio.add_position`; where both
    hold a name, the price stored in ``lhs`` survives.
    """
    out = lhs.copy()
    for pos in rhs:
        out.add_position(pos.asset, pos.quantity)
    return out
