"""Helpers shared by CLI commands: error reporting and matrix loading."""

from __future__ import annotations

import logging
from typing import NoReturn

import click

logger = logging.getLogger(__name__)


def fail(error: Exception) -> NoReturn:
    """Print a user-facing error and exit with status 1."""
    message = error.args[0] if isinstance(error, KeyError) and error.args else str(error)
    logger.debug("Command failed", exc_info=error)
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


def load_matrix(
    ctx: click.Context,
    asset_order: list[str],
    matrix_path: str | None,
    auto: bool,
) -> list[list[float]] | None:
    """Correlation matrix from a text file, from yfinance, or None."""
    if matrix_path and auto:
        raise click.UsageError("Use either --matrix or --auto, not both.")

    if matrix_path:
        from pathlib import Path

        from riskbook.portfolio.correlation import parse_matrix_text

        return parse_matrix_text(Path(matrix_path).read_text(encoding="utf-8"))

    if auto:
        from riskbook.config.loader import load_config
        from riskbook.data.adapters.yfinance_adapter import correlation_matrix_for

        md = load_config(ctx.obj.get("config_path")).market_data
        if not md.enabled:
            raise click.UsageError("Market data is disabled in config; use --matrix.")
        click.echo(f"Fetching returns for {', '.join(asset_order)} via yfinance...")
        return correlation_matrix_for(
            asset_order,
            period=md.period,
            interval=md.interval,
            min_closes=md.min_closes,
            min_returns=md.min_returns,
        )

    return None
