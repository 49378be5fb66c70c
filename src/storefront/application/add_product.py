"""Application service: Add Product use case (admin)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.model.identity import Caller
from storefront.domain.model.product import Category, Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        caller: Caller,
        name: str,
        price: str,
        stock: int = 0,
        category: str = "other",
        description: str = "",
        image: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        caller.require_admin()

        product = Product.create(
            product_id=self._product_repo.next_id(),
            name=name,
            price=Money.of(price),
            stock=stock,
            category=Category.parse(category),
            description=description,
            image=image,
        )
        self._product_repo.save(product)
        return product_to_dto(product)
