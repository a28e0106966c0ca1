"""``flask catalog`` commands for querying the product table by hand."""

import json

import click
from flask.cli import AppGroup

from catalog.notifier import EchoNotifier
from catalog.product_service import ProductService, SORT_ORDERS


def _service() -> ProductService:
    return ProductService(notifier=EchoNotifier())


def _dump(data) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group("catalog", cls=AppGroup)
def catalog_cli() -> None:
    """Product catalog commands."""


@catalog_cli.command("list")
def list_command() -> None:
    _dump(_service().get_all())


@catalog_cli.command("show")
@click.argument("product_id")
def show_command(product_id: str) -> None:
    product = _service().get_by_id(product_id)
    if product is None:
        raise click.ClickException(f"Product {product_id} not found")
    _dump(product)


@catalog_cli.command("search")
@click.argument("query", default="")
def search_command(query: str) -> None:
    _dump(_service().search_products(query))


@catalog_cli.command("featured")
@click.option("--limit", default=12, show_default=True, type=int)
def featured_command(limit: int) -> None:
    _dump(_service().get_featured_products(limit))


@catalog_cli.command("categories")
def categories_command() -> None:
    _dump(_service().get_categories())


@catalog_cli.command("variants")
@click.argument("product_id")
def variants_command(product_id: str) -> None:
    variants = _service().get_product_variants(product_id)
    if variants is None:
        raise click.ClickException(f"Product {product_id} not found")
    _dump(variants)


@catalog_cli.command("filter")
@click.option("--search", "search_query", default=None)
@click.option("--category", default=None)
@click.option("--sort", "sort_by", default=None,
              help=f"One of {', '.join(sorted(SORT_ORDERS))}; anything else sorts as popular.")
@click.option("--min-price", type=float, default=0)
@click.option("--max-price", type=float, default=500)
def filter_command(search_query, category, sort_by, min_price, max_price) -> None:
    _dump(
        _service().filter_products(
            search_query=search_query,
            category=category,
            sort_by=sort_by,
            price_range={"min": min_price, "max": max_price},
        )
    )
