"""Application service: Update Payment Status use case.

Only a status field is tracked; no payment gateway is involved.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.show_order import load_visible_order
from storefront.domain.exceptions import InvalidStateError
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import parse_payment_status
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdatePaymentStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, caller: Caller, order_id: int, status: str) -> OrderDTO:
        new_status = parse_payment_status(status)
        order = load_visible_order(self._order_repo, caller, order_id)

        previous = order.payment_status
        order.change_payment_status(new_status)
        if not self._order_repo.transition_payment_status(order, previous):
            raise InvalidStateError(
                f"Payment of order #{order.id} changed while it was being updated; "
                f"it is no longer {previous.value}"
            )

        logger.info(
            "payment_status_changed", order_id=order.id, status=new_status.value
        )
        return order_to_dto(order)
