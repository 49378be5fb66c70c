import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_payment,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_restock,
    product_update,
)
from storefront.infrastructure.logging import configure_logging
from storefront.infrastructure.settings import load_settings


@click.group()
@click.option("--user", envvar="STOREFRONT_USER", default=None, help="Authenticated user ID.")
@click.option(
    "--role",
    envvar="STOREFRONT_ROLE",
    default="user",
    type=click.Choice(["user", "admin"]),
    help="Role of the authenticated user.",
)
@click.pass_context
def cli(ctx: click.Context, user: str | None, role: str) -> None:
    """Storefront: carts, checkout and orders."""
    settings = load_settings()
    configure_logging(settings.log_level, json=settings.log_json)
    ctx.obj = {"user": user, "role": role}


@cli.group()
def cart() -> None:
    """Manage your shopping cart."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_payment)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_update)
