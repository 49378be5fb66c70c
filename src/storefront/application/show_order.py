"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ForbiddenError
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository


def load_visible_order(order_repo: OrderRepository, caller: Caller, order_id: int) -> Order:
    """Fetch an order the caller owns, or any order for an admin."""
    order = order_repo.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundError(f"Order #{order_id} not found")
    if not (order.is_owned_by(caller.user_id) or caller.is_admin):
        raise ForbiddenError("Not authorized to view this order")
    return order


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, caller: Caller, order_id: int) -> OrderDTO:
        return order_to_dto(load_visible_order(self._order_repo, caller, order_id))
