"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.list_products import ListProductsHandler
from storefront.application.restock_product import RestockProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import Category
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.cli.context import current_caller


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Initial stock.")
@click.option(
    "--category",
    default="other",
    show_default=True,
    type=click.Choice([c.value for c in Category]),
    help="Product category.",
)
@click.option("--description", default="", help="Product description.")
@click.option("--image", default=None, help="Image URL.")
def product_add(
    name: str,
    price: str,
    stock: int,
    category: str,
    description: str,
    image: str | None,
) -> None:
    """Add a new product to the catalog (admin)."""
    caller = current_caller()
    handler = AddProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            caller,
            name=name,
            price=price,
            stock=stock,
            category=category,
            description=description,
            image=image,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added at {dto.price} ({dto.stock} in stock)")


@click.command("list")
@click.option("--top", is_flag=True, default=False, help="Only the best rated products.")
def product_list(top: bool) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=product_repository())
    products = handler.handle(top_rated=top)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<12} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 58)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.category:<12} {p.price:>10} {p.stock:>6}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--name", default=None, help="New name.")
@click.option("--image", default=None, help="New image URL.")
def product_update(
    product_id: str,
    price: str | None,
    name: str | None,
    image: str | None,
) -> None:
    """Edit a product's catalog details (admin)."""
    if price is None and name is None and image is None:
        raise click.ClickException("Nothing to update; pass --price, --name or --image")

    caller = current_caller()
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            caller, product_id=product_id, new_price=price, new_name=name, new_image=image
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} updated: '{dto.name}' at {dto.price}")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Units to add (negative to remove).")
def product_restock(product_id: str, delta: int) -> None:
    """Adjust a product's stock level (admin)."""
    caller = current_caller()
    handler = RestockProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(caller, product_id=product_id, delta=delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} stock is now {dto.stock}")
