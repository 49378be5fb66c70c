"""Application service: Clear Cart use case."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.show_cart import load_or_create_cart
from storefront.domain.model.identity import Caller
from storefront.domain.repository.cart_repository import CartRepository


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, caller: Caller) -> CartDTO:
        cart = load_or_create_cart(self._cart_repo, caller.user_id)
        cart.clear()
        self._cart_repo.save(cart)
        return cart_to_dto(cart)
