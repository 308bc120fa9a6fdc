"""Config CLI commands: show, validate."""

from __future__ import annotations

import click


@click.group("config")
def config_group() -> None:
    """Manage configuration."""
    pass


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the resolved configuration."""
    from riskbook.config.loader import load_config

    config = load_config(ctx.obj.get("config_path"))
    import json

    click.echo(json.dumps(config.model_dump(), indent=2, default=str))


@config_group.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate the config file against the schema."""
    from riskbook.config.loader import load_config

    try:
        config = load_config(ctx.obj.get("config_path"))
        click.echo("Config is valid.")
        click.echo(f"  Version: {config.version}")
        md = config.market_data
        click.echo(f"  Market data: enabled={md.enabled}, period={md.period}, "
                   f"interval={md.interval}, trading_days={md.trading_days}")
        click.echo(f"  Output precision: {config.output.precision}")
    except Exception as e:
        click.echo(f"Config validation failed: {e}", err=True)
        raise SystemExit(1) from None
