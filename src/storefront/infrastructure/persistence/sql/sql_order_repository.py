"""SQLAlchemy-backed implementation of OrderRepository.

Order lines are written once, on insert. Afterwards only the status
columns move, through guarded UPDATEs that only match the expected
previous status, so concurrent transitions cannot both win.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import selectinload, sessionmaker

from storefront.domain.model.order import (
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.sql.database import as_utc
from storefront.infrastructure.persistence.sql.tables import OrderLineModel, OrderModel


class SqlOrderRepository(OrderRepository):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        with self._session_factory() as session:
            row = session.execute(
                select(OrderModel)
                .where(OrderModel.id == order_id)
                .options(selectinload(OrderModel.lines))
            ).scalar_one_or_none()
            return self._to_domain(row) if row is not None else None

    def list_by_user(self, user_id: str) -> list[Order]:
        return self._list(OrderModel.user_id == user_id)

    def list_all(self) -> list[Order]:
        return self._list()

    def save(self, order: Order) -> None:
        if order.id is not None:
            raise ValueError(f"Order #{order.id} is already stored")
        with self._session_factory.begin() as session:
            row = self._to_row(order)
            session.add(row)
            session.flush()
            order.id = row.id

    def transition_status(self, order: Order, expected: OrderStatus) -> bool:
        return self._compare_and_set(
            order.id,
            OrderModel.status == expected.value,
            status=order.status.value,
            delivered_at=order.delivered_at,
        )

    def transition_payment_status(self, order: Order, expected: PaymentStatus) -> bool:
        return self._compare_and_set(
            order.id,
            OrderModel.payment_status == expected.value,
            payment_status=order.payment_status.value,
            paid_at=order.paid_at,
        )

    # --- Internal helpers -----------------------------------------------------

    def _compare_and_set(self, order_id: int | None, guard, **values) -> bool:
        with self._session_factory.begin() as session:
            result = session.execute(
                update(OrderModel)
                .where(OrderModel.id == order_id, guard)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1

    def _list(self, *criteria) -> list[Order]:
        with self._session_factory() as session:
            rows = session.execute(
                select(OrderModel)
                .where(*criteria)
                .options(selectinload(OrderModel.lines))
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars().all()
            return [self._to_domain(row) for row in rows]

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderModel:
        address = order.shipping_address
        return OrderModel(
            id=order.id,
            user_id=order.user_id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            payment_method=order.payment_method.value,
            total=order.total.amount,
            currency=order.total.currency,
            address=address.address,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            phone=address.phone,
            created_at=order.created_at,
            paid_at=order.paid_at,
            delivered_at=order.delivered_at,
            lines=[
                OrderLineModel(
                    position=position,
                    product_id=line.product_id,
                    product_name=line.product_name,
                    image=line.image,
                    quantity=line.quantity.value,
                    unit_price=line.unit_price.amount,
                    currency=line.unit_price.currency,
                )
                for position, line in enumerate(order.items)
            ],
        )

    @staticmethod
    def _to_domain(row: OrderModel) -> Order:
        return Order(
            id=row.id,
            user_id=row.user_id,
            items=tuple(
                OrderLine(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    image=line.image,
                    quantity=Quantity(line.quantity),
                    unit_price=Money(Decimal(line.unit_price), line.currency),
                )
                for line in row.lines
            ),
            shipping_address=ShippingAddress(
                address=row.address,
                city=row.city,
                state=row.state,
                postal_code=row.postal_code,
                phone=row.phone,
            ),
            total=Money(Decimal(row.total), row.currency),
            payment_method=PaymentMethod(row.payment_method),
            status=OrderStatus(row.status),
            payment_status=PaymentStatus(row.payment_status),
            created_at=as_utc(row.created_at),
            paid_at=as_utc(row.paid_at),
            delivered_at=as_utc(row.delivered_at),
        )
