"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.cart import Cart, CartLineItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_by_user_id(self, user_id: str) -> Cart | None:
        for raw in self._file.read():
            if raw["user_id"] == user_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["user_id"] == cart.user_id:
                    records[i] = self._to_raw(cart)
                    break
            else:
                records.append(self._to_raw(cart))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "updated_at": cart.updated_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in cart.items
            ],
            # Informational only; always re-derived when loaded.
            "total": str(cart.total.amount),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        return Cart(
            id=raw["id"],
            user_id=raw["user_id"],
            items=[
                CartLineItem(
                    product_id=i["product_id"],
                    quantity=Quantity(i["quantity"]),
                    unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                )
                for i in raw["items"]
            ],
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
