"""Abstract repository for Cart aggregate (one cart per user)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_user_id(self, user_id: str) -> Cart | None:
        """Return the user's cart, or None if they never had one."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart, replacing its line items."""
