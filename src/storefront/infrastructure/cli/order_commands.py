"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderDTO, ShippingAddressSpec
from storefront.application.list_orders import ListAllOrdersHandler, ListMyOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_payment_status import UpdatePaymentStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    order_repository,
    product_repository,
)
from storefront.infrastructure.cli.context import current_caller


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Payment:  {dto.payment_method}")
    if dto.paid_at:
        click.echo(f"Paid:     {dto.paid_at}")
    if dto.delivered_at:
        click.echo(f"Delivered: {dto.delivered_at}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("create")
@click.option("--address", required=True, help="Street address.")
@click.option("--city", required=True, help="City.")
@click.option("--state", required=True, help="State.")
@click.option("--postal-code", required=True, help="Postal code.")
@click.option("--phone", required=True, help="Contact phone number.")
@click.option(
    "--payment-method",
    type=click.Choice(["cod", "card"]),
    default="cod",
    show_default=True,
    help="Payment method.",
)
def order_create(
    address: str,
    city: str,
    state: str,
    postal_code: str,
    phone: str,
    payment_method: str,
) -> None:
    """Check out your cart into a new order."""
    caller = current_caller()
    handler = CreateOrderHandler(
        order_repo=order_repository(),
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )
    shipping = ShippingAddressSpec(
        address=address,
        city=city,
        state=state,
        postal_code=postal_code,
        phone=phone,
    )

    try:
        dto = handler.handle(caller, shipping_address=shipping, payment_method=payment_method)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    caller = current_caller()
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(caller, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--all", "all_orders", is_flag=True, default=False, help="Every order (admin).")
def order_list(all_orders: bool) -> None:
    """List your orders, or every order with revenue (admin)."""
    caller = current_caller()
    repo = order_repository()

    try:
        if all_orders:
            result = ListAllOrdersHandler(order_repo=repo).handle(caller)
        else:
            result = ListMyOrdersHandler(order_repo=repo).handle(caller)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<12} {'Status':<12} {'Payment':<10} {'Total':>10}")
    click.echo("-" * 54)
    for dto in result.orders:
        click.echo(
            f"{dto.id:<6} {dto.user_id:<12} {dto.status:<12} {dto.payment_status:<10} {dto.total:>10}"
        )
    click.echo("-" * 54)
    click.echo(f"{result.count} order(s)")
    if all_orders:
        click.echo(f"Total revenue: {result.total_revenue}")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel one of your orders (restores stock)."""
    caller = current_caller()
    handler = CancelOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(caller, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--set",
    "status",
    required=True,
    type=click.Choice(["processing", "shipped", "delivered", "cancelled"]),
    help="New order status.",
)
def order_status(order_id: int, status: str) -> None:
    """Move an order along its lifecycle (admin)."""
    caller = current_caller()
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(caller, order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")


@click.command("payment")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--set",
    "status",
    required=True,
    type=click.Choice(["pending", "paid", "failed", "refunded"]),
    help="New payment status.",
)
def order_payment(order_id: int, status: str) -> None:
    """Record the payment status of an order."""
    caller = current_caller()
    handler = UpdatePaymentStatusHandler(order_repo=order_repository())

    try:
        dto = handler.handle(caller, order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Payment for order #{dto.id} is now {dto.payment_status}.")
