"""Application service: Add To Cart use case.

Validates the request against the current catalog snapshot. Nothing is
reserved here; checkout re-validates and takes the stock.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.show_cart import load_or_create_cart
from storefront.domain.exceptions import EntityNotFoundError, InsufficientStockError
from storefront.domain.model.identity import Caller
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, caller: Caller, product_id: str, quantity: int = 1) -> CartDTO:
        """Add *quantity* units of a product to the caller's cart.

        If the product is already in the cart the quantities are merged,
        and the merged amount must still fit in the current stock.
        """
        qty = Quantity(quantity)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")

        cart = load_or_create_cart(self._cart_repo, caller.user_id)

        wanted = cart.quantity_of(product_id) + qty.value
        if not product.has_stock_for(wanted):
            raise InsufficientStockError(
                f"Not enough stock available for {product.name} "
                f"(need {wanted}, have {product.stock} available)"
            )

        cart.add_item(product_id, qty, product.price)
        self._cart_repo.save(cart)

        logger.info(
            "cart_item_added",
            user_id=caller.user_id,
            product_id=product_id,
            quantity=qty.value,
        )
        return cart_to_dto(cart)
