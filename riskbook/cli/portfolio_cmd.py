"""Portfolio CLI commands: show, metrics, merge, whatif, export.

Every command loads its portfolio from a CSV file (name,price,mu,sigma,qty)
and works on that in-memory instance; nothing is persisted between runs.
"""

from __future__ import annotations

import click

from riskbook.cli.common import fail, load_matrix

_BOUNDARY_ERRORS = (ValueError, KeyError, OSError, RuntimeError)

_matrix_option = click.option(
    "--matrix", "matrix_path", type=click.Path(exists=True, dir_okay=False), default=None,
    help="Text file with the correlation matrix, one row per line, in asset order",
)


def _output_settings(ctx: click.Context):
    from riskbook.config.loader import load_config

    return load_config(ctx.obj.get("config_path")).output


@click.command("show")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@_matrix_option
@click.pass_context
def show_cmd(ctx: click.Context, csv_path: str, matrix_path: str | None) -> None:
    """Show positions, weights and the asset order for the correlation matrix.

    CSV_PATH: portfolio file with columns name,price,mu,sigma,qty.
    """
    from riskbook.data.csv_io import load_portfolio_csv
    from riskbook.output.report import build_report, format_report

    try:
        out = _output_settings(ctx)
        portfolio = load_portfolio_csv(csv_path)
        corr = load_matrix(ctx, portfolio.asset_order(), matrix_path, auto=False)
        report = build_report(portfolio, corr)
    except _BOUNDARY_ERRORS as e:
        fail(e)

    click.echo(format_report(report, out.precision, out.percent_precision), nl=False)
    click.echo(f"Order for correlation matrix: {', '.join(report.asset_order)}")


@click.command("metrics")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@_matrix_option
@click.option("--auto", is_flag=True, help="Build the correlation matrix from yfinance returns")
@click.pass_context
def metrics_cmd(
    ctx: click.Context, csv_path: str, matrix_path: str | None, auto: bool,
) -> None:
    """Expected return, volatility and risk breakdown.

    CSV_PATH: portfolio file with columns name,price,mu,sigma,qty.
    """
    from riskbook.data.csv_io import load_portfolio_csv
    from riskbook.output.report import build_report, fmt_percent, format_matrix

    try:
        out = _output_settings(ctx)
        portfolio = load_portfolio_csv(csv_path)
        if not matrix_path and not auto:
            raise click.UsageError("A correlation matrix is required: pass --matrix or --auto.")
        order = portfolio.asset_order()
        corr = load_matrix(ctx, order, matrix_path, auto)
        report = build_report(portfolio, corr)
    except _BOUNDARY_ERRORS as e:
        fail(e)

    if auto:
        click.echo("\nAuto correlation matrix (order = asset order):")
        click.echo(format_matrix(corr, order, out.matrix_precision), nl=False)

    pp = out.percent_precision
    click.echo(f"\nExpected return: {fmt_percent(report.expected_return, pp)}")
    click.echo(f"Volatility:      {fmt_percent(report.volatility, pp)}")
    click.echo("Risk breakdown:")
    for row in report.rows:
        click.echo(f"  {row.name:<12} weight={fmt_percent(row.weight, pp):>9}"
                   f"  risk={fmt_percent(row.risk_share, pp):>9}")


@click.command("merge")
@click.argument("left", type=click.Path(exists=True, dir_okay=False))
@click.argument("right", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write the merged portfolio to this CSV file")
@click.pass_context
def merge_cmd(ctx: click.Context, left: str, right: str, output: str | None) -> None:
    """Merge RIGHT into a copy of LEFT (LEFT's prices win on shared names)."""
    from riskbook.data.csv_io import load_portfolio_csv, write_portfolio_csv
    from riskbook.output.report import build_report, format_report
    from riskbook.portfolio.book import merge

    try:
        out = _output_settings(ctx)
        merged = merge(load_portfolio_csv(left), load_portfolio_csv(right))
        if output:
            path = write_portfolio_csv(merged, output, include_metrics=False)
    except _BOUNDARY_ERRORS as e:
        fail(e)

    click.echo("Merged portfolio:")
    click.echo(format_report(build_report(merged), out.precision, out.percent_precision), nl=False)
    if output:
        click.echo(f"\nWrote {merged.size()} positions to {path}")


@click.command("whatif", context_settings={"ignore_unknown_options": True})
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("name")
@click.argument("delta", type=float)
@_matrix_option
@click.pass_context
def whatif_cmd(
    ctx: click.Context, csv_path: str, name: str, delta: float, matrix_path: str | None,
) -> None:
    """Simulate buying (DELTA > 0) or selling (DELTA < 0) units of NAME.

    The matrix, when given, must match the simulated portfolio's assets.
    """
    from riskbook.data.csv_io import load_portfolio_csv
    from riskbook.output.report import fmt_percent
    from riskbook.portfolio.whatif import run_what_if

    try:
        out = _output_settings(ctx)
        portfolio = load_portfolio_csv(csv_path)
        corr = load_matrix(ctx, portfolio.asset_order(), matrix_path, auto=False)
        result = run_what_if(portfolio, name, delta, corr)
    except _BOUNDARY_ERRORS as e:
        fail(e)

    pp = out.percent_precision
    click.echo(f"Scenario: {name} qty delta = {delta:g}")
    click.echo(f"Expected return: {fmt_percent(result.expected_return, pp)}")
    if result.volatility is None:
        click.echo("Volatility: N/A (no matrix of matching size).")
        return
    click.echo(f"Volatility: {fmt_percent(result.volatility, pp)}")
    order = result.portfolio.asset_order()
    for asset_name, share in zip(order, result.portfolio.risk_shares(corr)):
        click.echo(f"  {asset_name:<12} risk={fmt_percent(share, pp):>9}")


@click.command("export")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@_matrix_option
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Destination file (stdout when omitted)")
@click.pass_context
def export_cmd(
    ctx: click.Context, csv_path: str, matrix_path: str | None, output: str | None,
) -> None:
    """Export positions and summary metrics as CSV."""
    from riskbook.data.csv_io import (
        load_portfolio_csv,
        portfolio_to_csv_text,
        write_portfolio_csv,
    )

    try:
        portfolio = load_portfolio_csv(csv_path)
        corr = load_matrix(ctx, portfolio.asset_order(), matrix_path, auto=False)
        if output:
            path = write_portfolio_csv(portfolio, output, corr)
        else:
            text = portfolio_to_csv_text(portfolio, corr)
    except _BOUNDARY_ERRORS as e:
        fail(e)

    if output:
        click.echo(f"Exported {portfolio.size()} positions to {path}")
    else:
        click.echo(text, nl=False)
