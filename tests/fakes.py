"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON and SQL
repositories but keep everything in a dict. No file I/O, no side effects.
Stored aggregates are copied on the way in and out, like a real store.
"""

from __future__ import annotations

import copy
import threading

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order, OrderStatus, PaymentStatus
from storefront.domain.model.product import Product
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self._lock = threading.Lock()
        for p in products or []:
            self._store[p.id] = copy.deepcopy(p)

    def next_id(self) -> str:
        return str(max((int(pid) for pid in self._store), default=0) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        product = self._store.get(product_id)
        return copy.deepcopy(product) if product is not None else None

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.values()]

    def list_top_rated(self, limit: int = 6) -> list[Product]:
        return sorted(self.list_all(), key=lambda p: p.rating, reverse=True)[:limit]

    def save(self, product: Product) -> None:
        with self._lock:
            stored = copy.deepcopy(product)
            existing = self._store.get(product.id)
            if existing is not None:
                stored.stock = existing.stock
            self._store[product.id] = stored

    def adjust_stock(self, product_id: str, delta: int) -> int:
        with self._lock:
            product = self._store.get(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            return product.apply_stock_delta(delta)

    # --- Test helpers ---------------------------------------------------------

    def stock_of(self, product_id: str) -> int:
        return self._store[product_id].stock

    def delete(self, product_id: str) -> None:
        del self._store[product_id]


class FakeCartRepository(CartRepository):

    def __init__(self) -> None:
        self._store: dict[str, Cart] = {}

    def get_by_user_id(self, user_id: str) -> Cart | None:
        cart = self._store.get(user_id)
        return copy.deepcopy(cart) if cart is not None else None

    def save(self, cart: Cart) -> None:
        self._store[cart.user_id] = copy.deepcopy(cart)


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get_by_id(self, order_id: int) -> Order | None:
        order = self._store.get(order_id)
        return copy.deepcopy(order) if order is not None else None

    def list_by_user(self, user_id: str) -> list[Order]:
        return [o for o in self.list_all() if o.user_id == user_id]

    def list_all(self) -> list[Order]:
        orders = [copy.deepcopy(o) for o in self._store.values()]
        return sorted(orders, key=lambda o: (o.created_at, o.id), reverse=True)

    def save(self, order: Order) -> None:
        if order.id is not None:
            raise ValueError(f"Order #{order.id} is already stored")
        with self._lock:
            order.id = self._next_id
            self._next_id += 1
            self._store[order.id] = copy.deepcopy(order)

    def transition_status(self, order: Order, expected: OrderStatus) -> bool:
        with self._lock:
            stored = self._store.get(order.id)
            if stored is None or stored.status != expected:
                return False
            stored.status = order.status
            stored.delivered_at = order.delivered_at
            return True

    def transition_payment_status(self, order: Order, expected: PaymentStatus) -> bool:
        with self._lock:
            stored = self._store.get(order.id)
            if stored is None or stored.payment_status != expected:
                return False
            stored.payment_status = order.payment_status
            stored.paid_at = order.paid_at
            return True


class FailingOrderRepository(FakeOrderRepository):
    """Order store whose writes always fail, as a broken database would."""

    def save(self, order: Order) -> None:
        raise RuntimeError("database unavailable")
