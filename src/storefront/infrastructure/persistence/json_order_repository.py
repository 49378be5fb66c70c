"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import (
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


def _parse_ts(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw else None


def _format_ts(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.read():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_by_user(self, user_id: str) -> list[Order]:
        return [o for o in self.list_all() if o.user_id == user_id]

    def list_all(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._file.read()]
        return sorted(orders, key=lambda o: (o.created_at, o.id), reverse=True)

    def save(self, order: Order) -> None:
        if order.id is not None:
            raise ValueError(f"Order #{order.id} is already stored")
        with self._file.transaction() as records:
            order.id = max((raw["id"] for raw in records), default=0) + 1
            records.append(self._to_raw(order))

    def transition_status(self, order: Order, expected: OrderStatus) -> bool:
        with self._file.transaction() as records:
            raw = self._find(records, order.id)
            if raw is None or raw["status"] != expected.value:
                return False
            raw["status"] = order.status.value
            raw["delivered_at"] = _format_ts(order.delivered_at)
            return True

    def transition_payment_status(self, order: Order, expected: PaymentStatus) -> bool:
        with self._file.transaction() as records:
            raw = self._find(records, order.id)
            if raw is None or raw["payment_status"] != expected.value:
                return False
            raw["payment_status"] = order.payment_status.value
            raw["paid_at"] = _format_ts(order.paid_at)
            return True

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _find(records: list[dict], order_id: int | None) -> dict | None:
        for raw in records:
            if raw["id"] == order_id:
                return raw
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        address = order.shipping_address
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "payment_method": order.payment_method.value,
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "created_at": order.created_at.isoformat(),
            "paid_at": _format_ts(order.paid_at),
            "delivered_at": _format_ts(order.delivered_at),
            "shipping_address": {
                "address": address.address,
                "city": address.city,
                "state": address.state,
                "postal_code": address.postal_code,
                "phone": address.phone,
            },
            "items": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "image": line.image,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                }
                for line in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = tuple(
            OrderLine(
                product_id=i["product_id"],
                product_name=i["product_name"],
                image=i["image"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        )
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            total=Money(Decimal(raw["total"]), raw.get("currency", "USD")),
            payment_method=PaymentMethod(raw["payment_method"]),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            paid_at=_parse_ts(raw.get("paid_at")),
            delivered_at=_parse_ts(raw.get("delivered_at")),
        )
