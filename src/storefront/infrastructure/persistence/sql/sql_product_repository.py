"""SQLAlchemy-backed implementation of ProductRepository.

``adjust_stock`` is a single conditional UPDATE, so the floor check and
the write happen in one statement inside the database.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import sessionmaker

from storefront.domain.exceptions import EntityNotFoundError, InsufficientStockError
from storefront.domain.model.product import Category, Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.sql.tables import ProductModel


class SqlProductRepository(ProductRepository):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        with self._session_factory() as session:
            ids = session.execute(select(ProductModel.id)).scalars().all()
        return str(max((int(i) for i in ids), default=0) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        with self._session_factory() as session:
            row = session.get(ProductModel, product_id)
            return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        with self._session_factory() as session:
            rows = session.execute(select(ProductModel)).scalars().all()
            return [self._to_domain(row) for row in rows]

    def list_top_rated(self, limit: int = 6) -> list[Product]:
        with self._session_factory() as session:
            rows = session.execute(
                select(ProductModel).order_by(ProductModel.rating.desc()).limit(limit)
            ).scalars().all()
            return [self._to_domain(row) for row in rows]

    def save(self, product: Product) -> None:
        with self._session_factory.begin() as session:
            row = session.get(ProductModel, product.id)
            if row is None:
                row = ProductModel(id=product.id, stock=product.stock)
                session.add(row)
            # Stock of an existing row is only moved by adjust_stock.
            row.name = product.name
            row.price = product.price.amount
            row.currency = product.price.currency
            row.category = product.category.value
            row.description = product.description
            row.image = product.image
            row.rating = product.rating
            row.num_reviews = product.num_reviews

    def adjust_stock(self, product_id: str, delta: int) -> int:
        with self._session_factory.begin() as session:
            new_stock = session.execute(
                update(ProductModel)
                .where(
                    ProductModel.id == product_id,
                    ProductModel.stock + delta >= 0,
                )
                .values(stock=ProductModel.stock + delta)
                .returning(ProductModel.stock)
                .execution_options(synchronize_session=False)
            ).scalar_one_or_none()

            if new_stock is not None:
                return new_stock

            row = session.execute(
                select(ProductModel.name, ProductModel.stock).where(
                    ProductModel.id == product_id
                )
            ).one_or_none()
            if row is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            raise InsufficientStockError(
                f"Insufficient stock for {row.name} "
                f"(need {-delta}, have {row.stock} available)"
            )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: ProductModel) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=Money(Decimal(row.price), row.currency),
            stock=row.stock,
            category=Category(row.category),
            description=row.description,
            image=row.image,
            rating=row.rating,
            num_reviews=row.num_reviews,
        )
