"""CLI commands for timelines and their rules."""

from __future__ import annotations

import click

from prices.application.dto import TimelineDTO
from prices.domain.exceptions import DomainException
from prices.infrastructure.bootstrap import PricingContext
from prices.infrastructure.cli.price_commands import DATE_FORMATS


def _display_timeline(dto: TimelineDTO) -> None:
    click.echo(f"Product {dto.product_id}, brand {dto.brand_id}  (version={dto.version})")
    click.echo()
    click.echo(f"  {'List':>4} {'Start':<19}  {'End':<19} {'Prio':>5} {'Price':>10}")
    click.echo(f"  {'-'*62}")
    for r in dto.rules:
        click.echo(
            f"  {r.price_list:>4} {r.start_date:<19}  {r.end_date:<19} {r.priority:>5} {r.price:>10}"
        )


@click.command("show")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--brand", "brand_id", required=True, type=int, help="Brand ID.")
@click.pass_obj
def timeline_show(context: PricingContext, product_id: int, brand_id: int) -> None:
    """List every pricing rule of a product+brand, in stored order."""
    try:
        dto = context.show_timeline.handle(product_id, brand_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_timeline(dto)


@click.command("add")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--brand", "brand_id", required=True, type=int, help="Brand ID.")
@click.option("--price-list", "price_list_id", required=True, type=int, help="Price list ID.")
@click.option("--start", "start_date", required=True, type=click.DateTime(formats=DATE_FORMATS))
@click.option("--end", "end_date", required=True, type=click.DateTime(formats=DATE_FORMATS))
@click.option("--priority", required=True, type=int, help="Higher wins on overlap.")
@click.option("--amount", required=True, help="Price (e.g. 35.50).")
@click.pass_obj
def rule_add(
    context: PricingContext,
    product_id: int,
    brand_id: int,
    price_list_id: int,
    start_date,
    end_date,
    priority: int,
    amount: str,
) -> None:
    """Add a pricing rule to a product+brand timeline."""
    try:
        dto = context.add_price_rule.handle(
            product_id=product_id,
            brand_id=brand_id,
            price_list_id=price_list_id,
            start_date=start_date,
            end_date=end_date,
            priority=priority,
            amount=amount,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Price list {price_list_id} added.")
    _display_timeline(dto)
