"""Application service: Cancel Order use case.

Only the order's owner may cancel it, and only while it is still
processing or shipped. The cancellation is claimed with a conditional
status write before any stock moves, so of two racing cancellations only
one restores stock. Restoration is best-effort: a line that cannot be
restored is logged and the rest are still given back.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ForbiddenError
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


def cancel_and_restore(
    order: Order,
    order_repo: OrderRepository,
    product_repo: ProductRepository,
) -> Order:
    """Mark the order cancelled, then give its stock back.

    Raises InvalidStateError once the stored order is delivered or
    already cancelled. Returns the order as cancelled.
    """
    while True:
        previous = order.status
        order.cancel()
        if order_repo.transition_status(order, previous):
            break
        # Another request moved the order first; retry from what is stored.
        order = order_repo.get_by_id(order.id)
        if order is None:
            raise EntityNotFoundError("Order not found")

    failed = StockLedger(product_repo).release(order.stock_lines())
    if failed:
        logger.warning(
            "order_cancelled_with_unrestored_stock",
            order_id=order.id,
            product_ids=failed,
        )

    logger.info("order_cancelled", order_id=order.id, user_id=order.user_id)
    return order


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, caller: Caller, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if not order.is_owned_by(caller.user_id):
            raise ForbiddenError("Not authorized to cancel this order")

        order = cancel_and_restore(order, self._order_repo, self._product_repo)
        return order_to_dto(order)
