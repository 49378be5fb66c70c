"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import DEFAULT_IMAGE, Category, Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        records = self._file.read()
        if not records:
            return "1"
        return str(max(int(raw["id"]) for raw in records) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.read():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def list_top_rated(self, limit: int = 6) -> list[Product]:
        products = sorted(self.list_all(), key=lambda p: p.rating, reverse=True)
        return products[:limit]

    def save(self, product: Product) -> None:
        with self._file.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    # Keep the stored stock; only adjust_stock moves it.
                    stock = raw["stock"]
                    records[i] = self._to_raw(product)
                    records[i]["stock"] = stock
                    break
            else:
                records.append(self._to_raw(product))

    def adjust_stock(self, product_id: str, delta: int) -> int:
        with self._file.transaction() as records:
            for raw in records:
                if raw["id"] == product_id:
                    product = self._to_domain(raw)
                    raw["stock"] = product.apply_stock_delta(delta)
                    return raw["stock"]
            raise EntityNotFoundError(f"Product '{product_id}' not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "category": product.category.value,
            "description": product.description,
            "image": product.image,
            "rating": product.rating,
            "num_reviews": product.num_reviews,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock=raw["stock"],
            category=Category(raw.get("category", "other")),
            description=raw.get("description", ""),
            image=raw.get("image", DEFAULT_IMAGE),
            rating=raw.get("rating", 0.0),
            num_reviews=raw.get("num_reviews", 0),
        )
