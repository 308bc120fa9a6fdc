"""Top-level CLI entry point for riskbook."""

from __future__ import annotations

import logging

import click

from riskbook import __version__


@click.group()
@click.version_option(version=__version__, prog_name="riskbook")
@click.option(
    "--config",
    type=click.Path(),
    default=None,
    envvar="RISKBOOK_CONFIG",
    help="Path to riskbook.yaml",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """riskbook -- portfolio bookkeeping and mean-variance risk."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# Register sub-commands
from riskbook.cli.config_cmd import config_group  # noqa: E402
from riskbook.cli.market_cmd import corr_cmd, fetch_cmd  # noqa: E402
from riskbook.cli.portfolio_cmd import (  # noqa: E402
    export_cmd,
    merge_cmd,
    metrics_cmd,
    show_cmd,
    whatif_cmd,
)

cli.add_command(config_group, "config")
cli.add_command(corr_cmd, "corr")
cli.add_command(export_cmd, "export")
cli.add_command(fetch_cmd, "fetch")
cli.add_command(merge_cmd, "merge")
cli.add_command(metrics_cmd, "metrics")
cli.add_command(show_cmd, "show")
cli.add_command(whatif_cmd, "whatif")
