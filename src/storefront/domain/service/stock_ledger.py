"""Domain service: Stock Ledger.

The only component allowed to move product stock. Single adjustments are
delegated to the repository's atomic ``adjust_stock`` primitive; this
service adds the multi-product operations on top of it:

- ``reserve`` is a saga. Each applied decrement records a compensation,
  and on failure the compensations run in reverse order before the error
  is re-raised, so callers never observe a half-reserved order.
- ``release`` is best-effort. Restoring too much stock is the safer
  failure, so a line that cannot be restored is logged and skipped.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from storefront.domain.exceptions import DomainException
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class StockLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def adjust(self, product_id: str, delta: int) -> int:
        """Apply *delta* to one product's stock and return the new level.

        Positive deltas restock or release, negative deltas reserve.
        """
        new_stock = self._product_repo.adjust_stock(product_id, delta)
        logger.debug(
            "stock_adjusted", product_id=product_id, delta=delta, stock=new_stock
        )
        return new_stock

    def reserve(self, lines: Iterable[tuple[str, int]]) -> None:
        """Take stock for every ``(product_id, quantity)`` line, or none of it."""
        applied: list[tuple[str, int]] = []
        try:
            for product_id, quantity in lines:
                self.adjust(product_id, -quantity)
                applied.append((product_id, quantity))
        except Exception:
            self._compensate(applied)
            raise

    def release(self, lines: Iterable[tuple[str, int]]) -> list[str]:
        """Give stock back for every line.

        Returns the product IDs whose stock could not be restored.
        """
        failed: list[str] = []
        for product_id, quantity in lines:
            try:
                self.adjust(product_id, quantity)
            except DomainException as exc:
                logger.error(
                    "stock_restore_failed",
                    product_id=product_id,
                    quantity=quantity,
                    error=str(exc),
                )
                failed.append(product_id)
        return failed

    def _compensate(self, applied: list[tuple[str, int]]) -> None:
        for product_id, quantity in reversed(applied):
            try:
                self.adjust(product_id, quantity)
            except Exception as exc:
                # The original error is what the caller must see.
                logger.error(
                    "stock_compensation_failed",
                    product_id=product_id,
                    quantity=quantity,
                    error=str(exc),
                )
        if applied:
            logger.info("stock_reservation_rolled_back", lines=len(applied))
