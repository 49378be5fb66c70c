"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ShippingAddressSpec:
    """Input: shipping details as typed by the customer."""

    address: str
    city: str
    state: str
    postal_code: str
    phone: str


@dataclass(frozen=True)
class CartLineDTO:

    product_id: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:

    id: str
    user_id: str
    items: list[CartLineDTO]
    total: str


@dataclass(frozen=True)
class OrderLineDTO:

    product_id: str
    product_name: str
    image: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:

    id: int
    user_id: str
    status: str
    payment_status: str
    payment_method: str
    items: list[OrderLineDTO]
    shipping_address: str
    total: str
    created_at: str
    paid_at: str | None
    delivered_at: str | None


@dataclass(frozen=True)
class OrderListDTO:
    """Output: a list of orders, with revenue for administrative views."""

    orders: list[OrderDTO]
    count: int
    total_revenue: str


@dataclass(frozen=True)
class ProductDTO:

    id: str
    name: str
    category: str
    price: str
    stock: int
    rating: float


# --- Mapping -----------------------------------------------------------------


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        id=cart.id,
        user_id=cart.user_id,
        items=[
            CartLineDTO(
                product_id=item.product_id,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in cart.items
        ],
        total=str(cart.total),
    )


def order_to_dto(order: Order) -> OrderDTO:
    address = order.shipping_address
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method.value,
        items=[
            OrderLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                image=line.image,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in order.items
        ],
        shipping_address=(
            f"{address.address}, {address.city}, {address.state} "
            f"{address.postal_code} (tel. {address.phone})"
        ),
        total=str(order.total),
        created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
        paid_at=order.paid_at.strftime(_TIMESTAMP_FORMAT) if order.paid_at else None,
        delivered_at=(
            order.delivered_at.strftime(_TIMESTAMP_FORMAT) if order.delivered_at else None
        ),
    )


def orders_to_list_dto(orders: list[Order], revenue: Money | None = None) -> OrderListDTO:
    return OrderListDTO(
        orders=[order_to_dto(order) for order in orders],
        count=len(orders),
        total_revenue=str(revenue if revenue is not None else Money.zero()),
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        category=product.category.value,
        price=str(product.price),
        stock=product.stock,
        rating=product.rating,
    )
