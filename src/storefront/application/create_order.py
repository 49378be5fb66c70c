"""Application service: Create Order use case (checkout).

Turns the caller's cart into an immutable order:

1. Validate shipping details and payment method.
2. Load the cart; an empty cart cannot be checked out.
3. Re-resolve every product and snapshot its *live* name, image and
   price. A price change since add-to-cart is honoured at the new price.
4. Reserve stock through the ledger (all-or-nothing).
5. Persist the order. If that fails the reservation is given back.
6. Empty the cart.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, ShippingAddressSpec, order_to_dto
from storefront.domain.exceptions import EmptyCartError, EntityNotFoundError
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import Order, OrderLine, parse_payment_method
from storefront.domain.model.value_objects import ShippingAddress
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(
        self,
        caller: Caller,
        shipping_address: ShippingAddressSpec,
        payment_method: str | None = None,
    ) -> OrderDTO:
        address = ShippingAddress(
            address=shipping_address.address,
            city=shipping_address.city,
            state=shipping_address.state,
            postal_code=shipping_address.postal_code,
            phone=shipping_address.phone,
        )
        method = parse_payment_method(payment_method)

        cart = self._cart_repo.get_by_user_id(caller.user_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError("Cart is empty")

        lines: list[OrderLine] = []
        for item in cart.items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{item.product_id}' not found")
            lines.append(
                OrderLine(
                    product_id=product.id,
                    product_name=product.name,
                    image=product.image,
                    quantity=item.quantity,
                    unit_price=product.price,  # <-- live price snapshot
                )
            )

        order = Order.create(
            user_id=caller.user_id,
            items=lines,
            shipping_address=address,
            payment_method=method,
        )

        ledger = StockLedger(self._product_repo)
        ledger.reserve(order.stock_lines())
        try:
            self._order_repo.save(order)
        except Exception:
            ledger.release(order.stock_lines())
            raise

        cart.clear()
        self._cart_repo.save(cart)

        logger.info(
            "order_created",
            order_id=order.id,
            user_id=caller.user_id,
            lines=len(order.items),
            total=str(order.total),
        )
        return order_to_dto(order)
