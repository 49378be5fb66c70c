"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def list_top_rated(self, limit: int = 6) -> list[Product]:
        """Return the best rated products, highest rating first."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product.

        Catalog edits only; stock changes go through ``adjust_stock``.
        """

    @abstractmethod
    def adjust_stock(self, product_id: str, delta: int) -> int:
        """Atomically add *delta* to a product's stock and return the result.

        The read, the non-negative check and the write must happen as one
        step relative to every other adjustment of the same product.
        Raises EntityNotFoundError if the product does not exist and
        InsufficientStockError (leaving stock untouched) if the result
        would be negative.
        """
