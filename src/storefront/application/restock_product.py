"""Application service: Restock Product use case (admin).

Stock moves through the ledger like any other adjustment, so a manual
correction cannot race a checkout.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.identity import Caller
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class RestockProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, caller: Caller, product_id: str, delta: int) -> ProductDTO:
        caller.require_admin()
        if delta == 0:
            raise ValidationError("Stock adjustment must be non-zero")

        new_stock = StockLedger(self._product_repo).adjust(product_id, delta)
        logger.info("product_restocked", product_id=product_id, delta=delta, stock=new_stock)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product_to_dto(product)
