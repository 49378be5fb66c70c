"""Application service: Show Cart use case (query with lazy create)."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.model.cart import Cart
from storefront.domain.model.identity import Caller
from storefront.domain.repository.cart_repository import CartRepository


def load_or_create_cart(cart_repo: CartRepository, user_id: str) -> Cart:
    """Return the user's cart, creating and persisting an empty one if needed."""
    cart = cart_repo.get_by_user_id(user_id)
    if cart is None:
        cart = Cart.empty_for(user_id)
        cart_repo.save(cart)
    return cart


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, caller: Caller) -> CartDTO:
        return cart_to_dto(load_or_create_cart(self._cart_repo, caller.user_id))
