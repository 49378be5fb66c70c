"""CLI commands for the caller's cart."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.dto import CartDTO
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cart_repository, product_repository
from storefront.infrastructure.cli.context import current_caller


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Cart Total':<27} {dto.total:>20}")


@click.command("show")
def cart_show() -> None:
    """Show the contents of your cart."""
    caller = current_caller()
    handler = ShowCartHandler(cart_repo=cart_repository())

    try:
        dto = handler.handle(caller)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(product_id: str, quantity: int) -> None:
    """Add a product to your cart."""
    caller = current_caller()
    handler = AddToCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(caller, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {quantity} x product #{product_id} to cart.")
    _display_cart(dto)


@click.command("update")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def cart_update(product_id: str, quantity: int) -> None:
    """Change the quantity of a product already in your cart."""
    caller = current_caller()
    handler = UpdateCartItemHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(caller, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(product_id: str) -> None:
    """Remove a product from your cart."""
    caller = current_caller()
    handler = RemoveFromCartHandler(cart_repo=cart_repository())

    try:
        dto = handler.handle(caller, product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("clear")
def cart_clear() -> None:
    """Empty your cart."""
    caller = current_caller()
    handler = ClearCartHandler(cart_repo=cart_repository())

    try:
        handler.handle(caller)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Cart cleared successfully.")
