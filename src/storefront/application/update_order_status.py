"""Application service: Update Order Status use case (admin).

Transitions follow the order state machine strictly. Moving an order to
cancelled goes through the same stock restoration as a customer
cancellation, so stock is never stranded on a cancelled order.
"""

from __future__ import annotations

import structlog

from storefront.application.cancel_order import cancel_and_restore
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, InvalidStateError
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import OrderStatus, parse_order_status
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, caller: Caller, order_id: int, status: str) -> OrderDTO:
        caller.require_admin()
        new_status = parse_order_status(status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if new_status == OrderStatus.CANCELLED:
            order = cancel_and_restore(order, self._order_repo, self._product_repo)
            return order_to_dto(order)

        previous = order.status
        order.change_status(new_status)
        if not self._order_repo.transition_status(order, previous):
            raise InvalidStateError(
                f"Order #{order.id} changed while it was being updated; "
                f"it is no longer {previous.value}"
            )

        logger.info(
            "order_status_changed",
            order_id=order.id,
            previous=previous.value,
            status=new_status.value,
        )
        return order_to_dto(order)
