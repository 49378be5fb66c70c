"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderStatus, PaymentStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]:
        """Return a user's orders, newest first."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new order and assign its ID.

        Stored orders only change through the ``transition_*`` methods.
        """

    @abstractmethod
    def transition_status(self, order: Order, expected: OrderStatus) -> bool:
        """Write the order's status and ``delivered_at`` if the stored status
        is still *expected*.

        Returns False, writing nothing, when another caller moved the order
        first. Check and write happen atomically.
        """

    @abstractmethod
    def transition_payment_status(self, order: Order, expected: PaymentStatus) -> bool:
        """Write the payment status and ``paid_at`` if the stored payment
        status is still *expected*. Same contract as ``transition_status``.
        """
