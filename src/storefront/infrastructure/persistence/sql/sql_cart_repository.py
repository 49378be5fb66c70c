"""SQLAlchemy-backed implementation of CartRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import selectinload, sessionmaker

from storefront.domain.model.cart import Cart, CartLineItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.sql.database import as_utc
from storefront.infrastructure.persistence.sql.tables import CartItemModel, CartModel


class SqlCartRepository(CartRepository):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def get_by_user_id(self, user_id: str) -> Cart | None:
        with self._session_factory() as session:
            row = session.execute(
                select(CartModel)
                .where(CartModel.user_id == user_id)
                .options(selectinload(CartModel.items))
            ).scalar_one_or_none()
            return self._to_domain(row) if row is not None else None

    def save(self, cart: Cart) -> None:
        with self._session_factory.begin() as session:
            row = session.execute(
                select(CartModel).where(CartModel.user_id == cart.user_id)
            ).scalar_one_or_none()
            if row is None:
                row = CartModel(id=cart.id, user_id=cart.user_id)
                session.add(row)

            row.updated_at = cart.updated_at
            row.items = [
                CartItemModel(
                    position=position,
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    currency=item.unit_price.currency,
                )
                for position, item in enumerate(cart.items)
            ]

    @staticmethod
    def _to_domain(row: CartModel) -> Cart:
        return Cart(
            id=row.id,
            user_id=row.user_id,
            items=[
                CartLineItem(
                    product_id=item.product_id,
                    quantity=Quantity(item.quantity),
                    unit_price=Money(Decimal(item.unit_price), item.currency),
                )
                for item in row.items
            ],
            updated_at=as_utc(row.updated_at),
        )
