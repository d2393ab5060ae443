from __future__ import annotations

import click

from prices.config import get_settings
from prices.infrastructure.bootstrap import build_context
from prices.infrastructure.cli.price_commands import price_get
from prices.infrastructure.cli.timeline_commands import rule_add, timeline_show
from prices.logging import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: LOG_LEVEL or WARNING).")
@click.option("--json-logs", is_flag=True, default=False, help="Emit logs as JSON lines.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, json_logs: bool) -> None:
    """Resolve the price that applies to a product at a given date."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_logs=json_logs or settings.json_logs,
    )
    context = build_context(settings)
    ctx.obj = context
    ctx.call_on_close(context.close)


@cli.group()
def price() -> None:
    """Query prices."""


@cli.group()
def timeline() -> None:
    """Inspect price timelines."""


@cli.group()
def rule() -> None:
    """Manage pricing rules."""


# Register subcommands
price.add_command(price_get)
timeline.add_command(timeline_show)
rule.add_command(rule_add)
