"""Product aggregate.

Products live independently of carts and orders. Prices change and stock
moves, but orders keep a snapshot of what the product looked like at
checkout.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.value_objects import Money

DEFAULT_IMAGE = "https://via.placeholder.com/300"
MAX_NAME_LENGTH = 100


class Category(Enum):
    ELECTRONICS = "electronics"
    CLOTHING = "clothing"
    BOOKS = "books"
    HOME = "home"
    SPORTS = "sports"
    TOYS = "toys"
    FOOD = "food"
    OTHER = "other"

    @staticmethod
    def parse(raw: str) -> Category:
        try:
            return Category(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(c.value for c in Category)
            raise ValidationError(
                f"Unknown category {raw!r} (expected one of: {allowed})"
            ) from None


def _clean_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Product name is required")
    if len(name.strip()) > MAX_NAME_LENGTH:
        raise ValidationError(f"Product name cannot exceed {MAX_NAME_LENGTH} characters")
    return name.strip()


@dataclass
class Product:
    """A product in the catalog.

    ``stock`` is only ever changed through ``apply_stock_delta``, which the
    repositories call inside their atomic ``adjust_stock`` primitive.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    category: Category = Category.OTHER
    description: str = ""
    image: str = DEFAULT_IMAGE
    rating: float = 0.0
    num_reviews: int = 0

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        product_id: str,
        name: str,
        price: Money,
        stock: int = 0,
        category: Category = Category.OTHER,
        description: str = "",
        image: str | None = None,
    ) -> Product:
        if stock < 0:
            raise ValidationError("Stock cannot be negative")
        return Product(
            id=product_id,
            name=_clean_name(name),
            price=price,
            stock=stock,
            category=category,
            description=description,
            image=image or DEFAULT_IMAGE,
        )

    # --- Mutations ------------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders are unaffected; carts keep the price they captured.
        """
        self.price = new_price

    def rename(self, new_name: str) -> None:
        self.name = _clean_name(new_name)

    def apply_stock_delta(self, delta: int) -> int:
        """Add *delta* to stock, refusing to go below zero."""
        new_stock = self.stock + delta
        if new_stock < 0:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {-delta}, have {self.stock} available)"
            )
        self.stock = new_stock
        return new_stock

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.stock
