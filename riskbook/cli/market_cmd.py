"""Market data CLI commands: fetch, corr."""

from __future__ import annotations

import click

from riskbook.cli.common import fail


def _market_settings(ctx: click.Context):
    from riskbook.config.loader import load_config

    config = load_config(ctx.obj.get("config_path"))
    if not config.market_data.enabled:
        raise click.UsageError("Market data is disabled in config.")
    return config


@click.command("fetch")
@click.argument("ticker")
@click.option("--quantity", "-q", type=float, default=None,
              help="Also print the CSV row for this quantity")
@click.pass_context
def fetch_cmd(ctx: click.Context, ticker: str, quantity: float | None) -> None:
    """Fetch last price and annualized mu/sigma for TICKER via yfinance."""
    from riskbook.data.adapters.yfinance_adapter import fetch_asset

    config = _market_settings(ctx)
    md = config.market_data
    ticker = ticker.upper().strip()

    click.echo(f"Fetching {ticker} via yfinance...")
    try:
        asset = fetch_asset(
            ticker,
            period=md.period,
            interval=md.interval,
            trading_days=md.trading_days,
            min_closes=md.min_closes,
            min_returns=md.min_returns,
        )
    except (ValueError, RuntimeError) as e:
        fail(e)

    p = config.output.precision
    click.echo(f"  Price: {asset.price:.{p}g}")
    click.echo(f"  Mu:    {asset.expected_return:.{p}g}")
    click.echo(f"  Sigma: {asset.volatility:.{p}g}")
    if quantity is not None:
        if quantity <= 0:
            fail(ValueError("quantity must be > 0."))
        click.echo(f"{asset.name},{asset.price},{asset.expected_return},{asset.volatility},{quantity:g}")


@click.command("corr")
@click.argument("tickers", nargs=-1, required=True)
@click.pass_context
def corr_cmd(ctx: click.Context, tickers: tuple[str, ...]) -> None:
    """Correlation matrix of daily log returns for TICKERS.

    Tickers are sorted lexically, matching a portfolio's asset order.
    """
    from riskbook.data.adapters.yfinance_adapter import correlation_matrix_for
    from riskbook.output.report import format_matrix

    config = _market_settings(ctx)
    md = config.market_data
    order = sorted({t.upper().strip() for t in tickers})

    try:
        corr = correlation_matrix_for(
            order,
            period=md.period,
            interval=md.interval,
            min_closes=md.min_closes,
            min_returns=md.min_returns,
        )
    except (ValueError, RuntimeError) as e:
        fail(e)

    click.echo(format_matrix(corr, order, config.output.matrix_precision), nl=False)
