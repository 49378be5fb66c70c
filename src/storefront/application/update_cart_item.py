"""Application service: Update Cart Item Quantity use case."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.exceptions import EntityNotFoundError, InsufficientStockError
from storefront.domain.model.identity import Caller
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, caller: Caller, product_id: str, quantity: int) -> CartDTO:
        """Overwrite the quantity of a line already in the cart.

        The captured unit price is left as it was.
        """
        qty = Quantity(quantity)

        cart = self._cart_repo.get_by_user_id(caller.user_id)
        if cart is None:
            raise EntityNotFoundError("Cart not found")
        if cart.find_item(product_id) is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found in cart")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        if not product.has_stock_for(qty.value):
            raise InsufficientStockError(
                f"Not enough stock available for {product.name} "
                f"(need {qty.value}, have {product.stock} available)"
            )

        cart.set_quantity(product_id, qty)
        self._cart_repo.save(cart)
        return cart_to_dto(cart)
