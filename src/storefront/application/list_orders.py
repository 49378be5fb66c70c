"""Application services: order listings (queries)."""

from __future__ import annotations

from storefront.application.dto import OrderListDTO, orders_to_list_dto
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import PaymentStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository


class ListMyOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, caller: Caller) -> OrderListDTO:
        return orders_to_list_dto(self._order_repo.list_by_user(caller.user_id))


class ListAllOrdersHandler:
    """Administrative view of every order plus revenue.

    Revenue counts only orders whose payment has been received.
    """

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, caller: Caller) -> OrderListDTO:
        caller.require_admin()

        orders = self._order_repo.list_all()
        revenue = Money.zero()
        for order in orders:
            if order.payment_status == PaymentStatus.PAID:
                revenue = revenue + order.total
        return orders_to_list_dto(orders, revenue)
