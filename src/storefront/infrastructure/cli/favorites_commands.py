"""CLI commands for favorite products."""

from __future__ import annotations

import asyncio

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import Product
from storefront.infrastructure.bootstrap import Settings, catalog_client, favorites_store


async def _fetch_products(settings: Settings, product_ids: list[int]) -> list[Product]:
    async with catalog_client(settings) as client:
        return list(await asyncio.gather(*(client.fetch_product(i) for i in product_ids)))


@click.command("toggle")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def favorites_toggle(settings: Settings, product_id: int) -> None:
    """Favorite a product, or unfavorite it if it already is one."""
    try:
        (product,) = asyncio.run(_fetch_products(settings, [product_id]))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    if favorites_store(settings).toggle(product):
        click.echo(f"'{product.title}' added to favorites")
    else:
        click.echo(f"'{product.title}' removed from favorites")


@click.command("list")
@click.pass_obj
def favorites_list(settings: Settings) -> None:
    """List favorite products."""
    ids = sorted(favorites_store(settings).ids)
    if not ids:
        click.echo("No favorites yet.")
        return
    try:
        products = asyncio.run(_fetch_products(settings, ids))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"{'ID':<6} {'Title':<32} {'Price':>10}")
    click.echo("-" * 50)
    for p in products:
        click.echo(f"{p.id:<6} {p.title[:32]:<32} {str(p.price):>10}")
