"""Application service: Update Product use case (admin)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.identity import Caller
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        caller: Caller,
        product_id: str,
        new_price: str | None = None,
        new_name: str | None = None,
        new_image: str | None = None,
    ) -> ProductDTO:
        """Edit catalog fields of a product.

        This does NOT affect any existing orders, which captured a
        snapshot at checkout. Stock is not editable here; use restock.
        """
        caller.require_admin()

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if new_price is not None:
            product.update_price(Money.of(new_price))
        if new_name is not None:
            product.rename(new_name)
        if new_image is not None:
            product.image = new_image

        self._product_repo.save(product)
        return product_to_dto(product)
