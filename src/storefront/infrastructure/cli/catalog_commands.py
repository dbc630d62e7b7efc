"""CLI commands for browsing the remote catalog."""

from __future__ import annotations

import asyncio

import click

from storefront.application.catalog_state import CatalogState
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    Settings,
    catalog_client,
    catalog_state,
    favorites_store,
)


def _display_products(state: CatalogState, settings: Settings) -> None:
    if not state.products:
        click.echo("No products found.")
        return
    favorites = favorites_store(settings)
    click.echo(f"  {'ID':<6} {'Title':<32} {'Category':<20} {'Price':>10}")
    click.echo(f"  {'-'*71}")
    for p in state.products:
        mark = "*" if favorites.is_favorite(p) else " "
        click.echo(f"{mark} {p.id:<6} {p.title[:32]:<32} {p.category[:20]:<20} {str(p.price):>10}")
    click.echo(f"  {'-'*71}")
    shown = f"{len(state.products)} of {state.total}"
    more = "  (more available)" if state.can_load_more() else ""
    click.echo(f"  {shown} products{more}")


async def _load_listing(settings: Settings, pages: int, category: str | None) -> CatalogState:
    async with catalog_client(settings) as client:
        state = catalog_state(settings, client)
        if category:
            await state.fetch_by_category(category)
            return state
        await state.reset_and_fetch_first_page()
        for _ in range(pages - 1):
            if not state.can_load_more():
                break
            await state.fetch_next_page()
        return state


async def _search(settings: Settings, query: str) -> CatalogState:
    async with catalog_client(settings) as client:
        state = catalog_state(settings, client)
        await state.search(query)
        return state


async def _categories(settings: Settings) -> list[str]:
    async with catalog_client(settings) as client:
        return await catalog_state(settings, client).load_categories()


@click.command("list")
@click.option("--pages", default=1, show_default=True, type=click.IntRange(min=1), help="Number of pages to load.")
@click.option("--category", default=None, help="Show one category instead of the full listing.")
@click.pass_obj
def catalog_list(settings: Settings, pages: int, category: str | None) -> None:
    """List products, page by page or for one category."""
    try:
        state = asyncio.run(_load_listing(settings, pages, category))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_products(state, settings)


@click.command("search")
@click.argument("query")
@click.pass_obj
def catalog_search(settings: Settings, query: str) -> None:
    """Search products by free text."""
    try:
        state = asyncio.run(_search(settings, query.strip()))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_products(state, settings)


@click.command("categories")
@click.pass_obj
def catalog_categories(settings: Settings) -> None:
    """List the category names known to the catalog."""
    names = asyncio.run(_categories(settings))
    if not names:
        click.echo("No categories found.")
        return
    for name in names:
        click.echo(name)
