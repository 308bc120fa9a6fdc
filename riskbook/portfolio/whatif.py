"""What-if simulation: apply a quantity change to a copy of a portfolio."""

from __future__ import annotations

from dataclasses import dataclass, field

from riskbook.portfolio.book import Matrix, Portfolio


@dataclass
class WhatIfResult:
    """Statistics of a simulated portfolio."""

    portfolio: Portfolio
    name: str
    delta: float
    expected_return: float = 0.0
    volatility: float | None = None
    """None when no matrix of the simulated size was supplied."""
    contributions: list[float] = field(default_factory=list)


def simulate_quantity_change(portfolio: Portfolio, name: str, delta: float) -> Portfolio:
    """Return a copy of ``portfolio`` with ``delta`` units of ``name`` applied.

    A positive delta buys more of the stored asset; a negative delta
    sells ``abs(delta)`` units through ``remove_position``. The input
    portfolio is not modified.
    """
    if delta == 0.0:
        raise ValueError("simulate_quantity_change: delta must be non-zero.")

    simulated = portfolio.copy()
    if delta > 0.0:
        simulated.add_position(simulated[name].asset, delta)
    else:
        simulated.remove_position(name, abs(delta))
    return simulated


def run_what_if(
    portfolio: Portfolio,
    name: str,
    delta: float,
    corr: Matrix | None = None,
) -> WhatIfResult:
    """Simulate a quantity change and compute its statistics.

    Volatility and contributions are only computed when ``corr`` matches
    the size of the simulated portfolio (a full sale drops one asset).
    """
    simulated = simulate_quantity_change(portfolio, name, delta)
    result = WhatIfResult(
        portfolio=simulated,
        name=name,
        delta=delta,
        expected_return=simulated.expected_return(),
    )
    if corr is not None and len(corr) == simulated.size():
        result.volatility = simulated.volatility(corr)
        result.contributions = simulated.variance_contributions(corr)
    return result
