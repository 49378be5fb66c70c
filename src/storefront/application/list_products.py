"""Application service: List Products use case (query)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.repository.product_repository import ProductRepository

TOP_RATED_LIMIT = 6


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, top_rated: bool = False) -> list[ProductDTO]:
        if top_rated:
            products = self._product_repo.list_top_rated(TOP_RATED_LIMIT)
        else:
            products = self._product_repo.list_all()
        return [product_to_dto(p) for p in products]
