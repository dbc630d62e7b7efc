"""CLI commands for the shopping cart."""

from __future__ import annotations

import asyncio

import click

from storefront.application.cart_store import CartStore
from storefront.application.dto import CartSummaryDTO
from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import Product
from storefront.infrastructure.bootstrap import Settings, cart_store, catalog_client


async def _fetch_product(settings: Settings, product_id: int) -> Product:
    async with catalog_client(settings) as client:
        return await client.fetch_product(product_id)


def _product_in_cart(store: CartStore, product_id: int) -> Product | None:
    for entry in store.entries:
        if entry.product.id == product_id:
            return entry.product
    return None


def _display_cart(dto: CartSummaryDTO) -> None:
    click.echo(f"  {'ID':<6} {'Product':<28} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*62}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<6} {line.title[:28]:<28} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*62}")
    click.echo(f"  {'Items':<35} {dto.item_count:>5}")
    click.echo(f"  {'Cart Total':<35} {dto.total:>26}")


@click.command("add")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def cart_add(settings: Settings, product_id: int) -> None:
    """Add one unit of a product to the cart."""
    store = cart_store(settings)
    try:
        product = _product_in_cart(store, product_id) or asyncio.run(
            _fetch_product(settings, product_id)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    store.add(product)
    click.echo(f"Added '{product.title}' (now {store.quantity_of(product)} in cart)")


@click.command("remove")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def cart_remove(settings: Settings, product_id: int) -> None:
    """Remove one unit of a product from the cart."""
    store = cart_store(settings)
    product = _product_in_cart(store, product_id)
    if product is None:
        click.echo(f"Product #{product_id} is not in the cart.")
        return
    store.remove(product)
    click.echo(f"Removed one '{product.title}' ({store.quantity_of(product)} left)")


@click.command("remove-all")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def cart_remove_all(settings: Settings, product_id: int) -> None:
    """Remove a product from the cart whatever its quantity."""
    store = cart_store(settings)
    product = _product_in_cart(store, product_id)
    if product is None:
        click.echo(f"Product #{product_id} is not in the cart.")
        return
    store.remove_all(product)
    click.echo(f"Removed '{product.title}' from the cart")


@click.command("clear")
@click.pass_obj
def cart_clear(settings: Settings) -> None:
    """Empty the cart."""
    cart_store(settings).clear()
    click.echo("Cart cleared.")


@click.command("show")
@click.pass_obj
def cart_show(settings: Settings) -> None:
    """Show the cart contents and total."""
    dto = cart_store(settings).summary()
    if not dto.lines:
        click.echo("Your cart is empty.")
        return
    _display_cart(dto)


@click.command("checkout")
@click.pass_obj
def cart_checkout(settings: Settings) -> None:
    """Place the order for everything in the cart and empty it."""
    try:
        dto = cart_store(settings).checkout()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)
    click.echo()
    click.echo("Order placed. Your cart is now empty.")
