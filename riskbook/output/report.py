"""Read-only portfolio report and plain-text rendering.

The report carries every number a renderer needs (weights, totals,
risk breakdown) so that formatting code never re-derives statistics.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from riskbook.config.defaults import OUTPUT
from riskbook.portfolio.book import Matrix, Portfolio


@dataclass
class AssetRow:
    """One line of the report, in asset order."""
    index: int
    name: str
    quantity: float
    price: float
    expected_return: float
    volatility: float
    value: float
    weight: float
    contribution: float | None = None
    risk_share: float | None = None


@dataclass
class PortfolioReport:
    """Snapshot of a portfolio's statistics."""
    asset_order: list[str] = field(default_factory=list)
    rows: list[AssetRow] = field(default_factory=list)
    total_value: float = 0.0
    expected_return: float = 0.0
    variance: float | None = None
    """None when no correlation matrix was supplied."""
    volatility: float | None = None

    @property
    def has_risk(self) -> bool:
        return self.variance is not None


def build_report(portfolio: Portfolio, corr: Matrix | None = None) -> PortfolioReport:
    """Collect the statistics of ``portfolio``.

    When ``corr`` is given it is validated against the portfolio size and
    the variance, volatility, contributions and risk shares are filled in.
    """
    weights = portfolio.weights()
    rows = [
        AssetRow(
            index=i,
            name=pos.name,
            quantity=pos.quantity,
            price=pos.asset.price,
            expected_return=pos.asset.expected_return,
            volatility=pos.asset.volatility,
            value=pos.value,
            weight=weights[pos.name],
        )
        for i, pos in enumerate(portfolio)
    ]
    report = PortfolioReport(
        asset_order=portfolio.asset_order(),
        rows=rows,
        total_value=portfolio.total_value(),
        expected_return=portfolio.expected_return(),
    )

    if corr is not None:
        report.variance = portfolio.variance(corr)
        report.volatility = portfolio.volatility(corr)
        contributions = portfolio.variance_contributions(corr)
        shares = portfolio.risk_shares(corr)
        for row, c, s in zip(rows, contributions, shares):
            row.contribution = c
            row.risk_share = s

    return report


def fmt_percent(x: float, precision: int = OUTPUT["percent_precision"]) -> str:
    return f"{x * 100:.{precision}f}%"


def format_report(
    report: PortfolioReport,
    precision: int = OUTPUT["precision"],
    percent_precision: int = OUTPUT["percent_precision"],
) -> str:
    """Render a report as plain text."""
    if not report.rows:
        return "Portfolio is empty.\n"

    lines = ["Asset order for correlation matrix (stable):"]
    for row in report.rows:
        lines.append(
            f"  [{row.index}] {row.name} | qty={row.quantity:g} | price={row.price:g}"
            f" | mu={row.expected_return:g} | sigma={row.volatility:g}"
            f" | value={row.value:.{precision}g}"
        )
    lines.append(f"Total value:     {report.total_value:.{precision}g}")
    lines.append(f"Expected return: {fmt_percent(report.expected_return, percent_precision)}")

    lines.append("Weights:")
    for row in report.rows:
        lines.append(f"  {row.name:<12} {fmt_percent(row.weight, percent_precision):>10}")

    if report.has_risk:
        lines.append(f"Variance:        {report.variance:.{precision}g}")
        lines.append(f"Volatility:      {fmt_percent(report.volatility, percent_precision)}")
        lines.append("Risk breakdown (share of variance):")
        for row in report.rows:
            lines.append(
                f"  {row.name:<12} {fmt_percent(row.risk_share or 0.0, percent_precision):>10}"
                f"  (contribution {row.contribution or 0.0:.{precision}g})"
            )

    return "\n".join(lines) + "\n"


def format_matrix(
    corr: Sequence[Sequence[float]],
    labels: Sequence[str] | None = None,
    precision: int = OUTPUT["matrix_precision"],
) -> str:
    """Fixed-precision matrix text, optionally with row/column labels."""
    width = precision + 4
    out: list[str] = []
    if labels:
        label_width = max(len(lbl) for lbl in labels)
        out.append(" " * label_width + " " + " ".join(f"{lbl:>{width}}" for lbl in labels))
        for lbl, row in zip(labels, corr):
            cells = " ".join(f"{x:>{width}.{precision}f}" for x in row)
            out.append(f"{lbl:<{label_width}} {cells}")
    else:
        for row in corr:
            out.append(" ".join(f"{x:>{width}.{precision}f}" for x in row))
    return "\n".join(out) + "\n"
