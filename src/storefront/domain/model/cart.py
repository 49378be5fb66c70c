"""Cart aggregate: one mutable cart per user.

The cart only validates against the catalog; it never touches stock.
Stock is reserved at checkout by the stock ledger.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import Money, Quantity


@dataclass
class CartLineItem:

    product_id: str
    quantity: Quantity
    unit_price: Money  # captured when the product was first added

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Cart:
    """Aggregate root for a user's shopping cart.

    ``total`` is derived from the line items on every read, so it can
    never drift from the items it summarises.
    """

    id: str
    user_id: str
    items: list[CartLineItem] = field(default_factory=list)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def empty_for(user_id: str) -> Cart:
        return Cart(id=uuid.uuid4().hex, user_id=user_id)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product_id: str, quantity: Quantity, unit_price: Money) -> None:
        """Append a line, or merge quantities if the product is already here.

        A merged line keeps the price captured when it was first added.
        """
        existing = self.find_item(product_id)
        if existing is not None:
            existing.quantity = Quantity(existing.quantity.value + quantity.value)
        else:
            self.items.append(
                CartLineItem(product_id=product_id, quantity=quantity, unit_price=unit_price)
            )
        self._touch()

    def set_quantity(self, product_id: str, quantity: Quantity) -> None:
        item = self.find_item(product_id)
        if item is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found in cart")
        item.quantity = quantity
        self._touch()

    def remove_item(self, product_id: str) -> None:
        """Drop the line for *product_id*; absent lines are ignored."""
        self.items = [item for item in self.items if item.product_id != product_id]
        self._touch()

    def clear(self) -> None:
        self.items = []
        self._touch()

    # --- Queries --------------------------------------------------------------

    def find_item(self, product_id: str) -> CartLineItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def quantity_of(self, product_id: str) -> int:
        item = self.find_item(product_id)
        return item.quantity.value if item is not None else 0

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
