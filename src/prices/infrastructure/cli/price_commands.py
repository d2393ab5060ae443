"""CLI commands for price resolution."""

from __future__ import annotations

import click

from prices.application.dto import PriceDTO
from prices.domain.exceptions import DomainException
from prices.infrastructure.bootstrap import PricingContext

DATE_FORMATS = ["%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M:%S"]


@click.command("get")
@click.option("--date", "application_date", required=True,
              type=click.DateTime(formats=DATE_FORMATS), help="Application date, e.g. 2020-06-14T10:00:00.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--brand", "brand_id", required=True, type=int, help="Brand ID.")
@click.pass_obj
def price_get(context: PricingContext, application_date, product_id: int, brand_id: int) -> None:
    """Show the price that applies to a product at a date."""
    try:
        price = context.get_applicable_price.handle(application_date, product_id, brand_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    dto = PriceDTO.from_domain(price)
    click.echo(f"Product:    {dto.product_id}")
    click.echo(f"Brand:      {dto.brand_id}")
    click.echo(f"Price list: {dto.price_list}")
    click.echo(f"Valid:      {dto.start_date} -> {dto.end_date}")
    click.echo(f"Price:      {dto.price}")
