"""Bulk portfolio import/export in an Excel-compatible CSV layout.

Import reads rows of ``name, price, mu, sigma, qty`` and feeds each one
through ``Portfolio.add_position``, so duplicate names aggregate and
inconsistent parameters are rejected exactly as they are interactively.
Export writes one row per asset in asset order, optionally followed by
a ``metric,value`` section.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from riskbook.config.defaults import CSV_COLUMNS, CSV_EXPORT_COLUMNS, CSV_HEADER_NAMES
from riskbook.portfolio.assets import Asset
from riskbook.portfolio.book import Matrix, Portfolio

logger = logging.getLogger(__name__)


def _detect_delimiter(first_line: str) -> str:
    """Semicolon when it outnumbers commas (European Excel), else comma."""
    return ";" if first_line.count(";") > first_line.count(",") else ","


def _parse_number(cell: str, lineno: int) -> float:
    try:
        return float(cell)
    except ValueError:
        raise ValueError(f"CSV line {lineno}: invalid numeric value {cell!r}.") from None


def _read_rows(lines: list[str], delimiter: str) -> list[list[str]]:
    """Split lines into trimmed cells, honouring double quotes."""
    width = max(line.count(delimiter) for line in lines) + 1
    frame = pd.read_csv(
        io.StringIO("\n".join(lines)),
        sep=delimiter,
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
        quotechar='"',
        engine="python",
    )
    rows: list[list[str]] = []
    for record in frame.itertuples(index=False):
        cells = [c.strip() if isinstance(c, str) else "" for c in record]
        # drop empty trailing cells; a short row keeps only the cells it had
        while cells and not cells[-1]:
            cells.pop()
        rows.append(cells)
    return rows


def portfolio_from_csv_text(text: str) -> Portfolio:
    """Build a Portfolio from CSV text.

    Blank lines are ignored. A first line whose first cell is ``name``
    or ``asset`` (and that has at least five cells) is a header. Every
    data row needs at least five cells; extra cells are ignored.

    Raises:
        ValueError: empty input, short row, non-numeric value, or any
            rejection from ``Asset`` / ``Portfolio.add_position``. Line
            numbers count non-blank lines from 1.
    """
    lines = [line.rstrip("\r") for line in text.splitlines() if line.strip()]
    if not lines:
        raise ValueError("CSV empty.")

    delimiter = _detect_delimiter(lines[0])
    rows = _read_rows(lines, delimiter)

    header = rows[0]
    has_header = len(header) >= len(CSV_COLUMNS) and header[0].lower() in CSV_HEADER_NAMES

    imported = Portfolio()
    row_count = 0
    for index in range(1 if has_header else 0, len(rows)):
        lineno = index + 1
        cols = rows[index]
        if len(cols) < len(CSV_COLUMNS):
            raise ValueError(
                f"CSV line {lineno}: expected {len(CSV_COLUMNS)} columns "
                f"({','.join(CSV_COLUMNS)})."
            )
        name = cols[0]
        price, mu, sigma, qty = (_parse_number(c, lineno) for c in cols[1:5])
        imported.add_position(Asset(name, price, mu, sigma), qty)
        row_count += 1

    if row_count == 0:
        raise ValueError("CSV contains no data row.")

    logger.debug("Imported %d rows into %d positions", row_count, imported.size())
    return imported


def load_portfolio_csv(path: str | Path) -> Portfolio:
    """Read a portfolio CSV file (UTF-8, optional BOM)."""
    path = Path(path)
    text = path.read_text(encoding="utf-8-sig")
    portfolio = portfolio_from_csv_text(text)
    logger.info("Loaded %d positions from %s", portfolio.size(), path)
    return portfolio


def portfolio_to_records(portfolio: Portfolio) -> list[dict[str, Any]]:
    """One dict per asset, in asset order, with the export columns."""
    return [
        {
            "name": pos.name,
            "price": pos.asset.price,
            "mu": pos.asset.expected_return,
            "sigma": pos.asset.volatility,
            "qty": pos.quantity,
            "value": pos.value,
        }
        for pos in portfolio
    ]


def portfolio_to_csv_text(
    portfolio: Portfolio,
    corr: Matrix | None = None,
    include_metrics: bool = True,
) -> str:
    """Export positions and, optionally, summary metrics.

    Without metrics the output can be read back by
    :func:`portfolio_from_csv_text`.

    ``volatility`` and ``risk_share_<name>`` rows are written only when
    ``corr`` has one row per asset; risk shares additionally require a
    positive total variance.
    """
    positions = pd.DataFrame(portfolio_to_records(portfolio), columns=list(CSV_EXPORT_COLUMNS))
    text = positions.to_csv(index=False, lineterminator="\n")
    if not include_metrics:
        return text

    metrics: list[tuple[str, float]] = [
        ("total_value", portfolio.total_value()),
        ("expected_return", portfolio.expected_return()),
    ]
    if corr is not None and len(corr) == portfolio.size():
        metrics.append(("volatility", portfolio.volatility(corr)))
        if portfolio.variance(corr) > 0.0:
            shares = portfolio.risk_shares(corr)
            metrics.extend(
                (f"risk_share_{name}", share)
                for name, share in zip(portfolio.asset_order(), shares)
            )
    summary = pd.DataFrame(metrics, columns=["metric", "value"])

    return text + "\n" + summary.to_csv(index=False, lineterminator="\n")


def write_portfolio_csv(
    portfolio: Portfolio,
    path: str | Path,
    corr: Matrix | None = None,
    include_metrics: bool = True,
) -> Path:
    """Write :func:`portfolio_to_csv_text` output to ``path``."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(portfolio_to_csv_text(portfolio, corr, include_metrics), encoding="utf-8")
    logger.info("Wrote %d positions to %s", portfolio.size(), path)
    return path
