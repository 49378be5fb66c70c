"""Order aggregate: the immutable record of a checkout.

Line items and the total are frozen when the order is created. After that
only the order status, the payment status and their timestamps change, and
only along the transitions listed below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidStateError, ValidationError
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress


class OrderStatus(Enum):
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    CASH_ON_DELIVERY = "cod"
    CARD = "card"


ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

PAYMENT_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.PAID, PaymentStatus.FAILED}),
    PaymentStatus.PAID: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.FAILED: frozenset(),
    PaymentStatus.REFUNDED: frozenset(),
}


def _parse_enum(enum_cls, raw: str, label: str):
    try:
        return enum_cls(raw.strip().lower())
    except (ValueError, AttributeError):
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Unknown {label} {raw!r} (expected one of: {allowed})"
        ) from None


def parse_order_status(raw: str) -> OrderStatus:
    return _parse_enum(OrderStatus, raw, "order status")


def parse_payment_status(raw: str) -> PaymentStatus:
    return _parse_enum(PaymentStatus, raw, "payment status")


def parse_payment_method(raw: str | None) -> PaymentMethod:
    if raw is None or not raw.strip():
        return PaymentMethod.CASH_ON_DELIVERY
    return _parse_enum(PaymentMethod, raw, "payment method")


@dataclass(frozen=True)
class OrderLine:
    """Snapshot of a product at checkout.

    Name, image and price are copied so later catalog edits cannot
    rewrite order history.
    """

    product_id: str
    product_name: str
    image: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.create()`` for new orders. The plain constructor is what
    repositories use to reconstitute persisted orders.
    """

    id: int | None
    user_id: str
    items: tuple[OrderLine, ...]
    shipping_address: ShippingAddress
    total: Money
    payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY
    status: OrderStatus = OrderStatus.PROCESSING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    paid_at: datetime | None = None
    delivered_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderLine],
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY,
    ) -> Order:
        """Build a new order; the total is summed from the snapshot lines,
        not taken from the cart, so it always matches the lines' prices.
        """
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for line in items:
            total = total + line.line_total

        return Order(
            id=None,
            user_id=user_id,
            items=tuple(items),
            shipping_address=shipping_address,
            total=total,
            payment_method=payment_method,
        )

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus, at: datetime | None = None) -> None:
        """Move along the order state machine.

        Delivered and cancelled are terminal. Reaching delivered stamps
        ``delivered_at``.
        """
        if new_status not in ORDER_TRANSITIONS[self.status]:
            raise InvalidStateError(
                f"Cannot move order #{self.id} from {self.status.value} "
                f"to {new_status.value}"
            )
        self.status = new_status
        if new_status == OrderStatus.DELIVERED:
            self.delivered_at = at or datetime.now(timezone.utc)

    def change_payment_status(
        self, new_status: PaymentStatus, at: datetime | None = None
    ) -> None:
        if new_status not in PAYMENT_TRANSITIONS[self.payment_status]:
            raise InvalidStateError(
                f"Cannot move payment of order #{self.id} from "
                f"{self.payment_status.value} to {new_status.value}"
            )
        self.payment_status = new_status
        if new_status == PaymentStatus.PAID:
            self.paid_at = at or datetime.now(timezone.utc)

    def ensure_cancellable(self) -> None:
        if OrderStatus.CANCELLED not in ORDER_TRANSITIONS[self.status]:
            raise InvalidStateError(
                f"Order #{self.id} cannot be cancelled (status is {self.status.value})"
            )

    def cancel(self) -> None:
        """Transition to CANCELLED.

        Stock must be restored by the caller *before* this is saved.
        """
        self.ensure_cancellable()
        self.status = OrderStatus.CANCELLED

    # --- Queries --------------------------------------------------------------

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    def stock_lines(self) -> list[tuple[str, int]]:
        return [(line.product_id, line.quantity.value) for line in self.items]
