import logging

import click

from storefront.infrastructure.bootstrap import Settings
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_checkout,
    cart_clear,
    cart_remove,
    cart_remove_all,
    cart_show,
)
from storefront.infrastructure.cli.catalog_commands import (
    catalog_categories,
    catalog_list,
    catalog_search,
)
from storefront.infrastructure.cli.favorites_commands import (
    favorites_list,
    favorites_toggle,
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log catalog and storage activity.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Storefront: catalog, cart and favorites."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Settings.from_env()


@cli.group()
def catalog() -> None:
    """Browse the product catalog."""


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def favorites() -> None:
    """Manage favorite products."""


# Register subcommands
catalog.add_command(catalog_categories)
catalog.add_command(catalog_list)
catalog.add_command(catalog_search)

cart.add_command(cart_add)
cart.add_command(cart_checkout)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_remove_all)
cart.add_command(cart_show)

favorites.add_command(favorites_list)
favorites.add_command(favorites_toggle)
