"""Integration tests for the administrative status use cases."""

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import ShippingAddressSpec
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_payment_status import UpdatePaymentStatusHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    InvalidStateError,
    ValidationError,
)
from storefront.domain.model.identity import Caller
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, FakeOrderRepository, FakeProductRepository

ALICE = Caller.of("alice")
ADMIN = Caller.of("root", "admin")
SHIPPING = ShippingAddressSpec("1 Main St", "Springfield", "IL", "62701", "555-0100")


def _setup():
    product_repo = FakeProductRepository(
        [Product(id="1", name="Widget", price=Money.of("15.00"), stock=10)]
    )
    order_repo = FakeOrderRepository()
    cart_repo = FakeCartRepository()
    AddToCartHandler(cart_repo, product_repo).handle(ALICE, "1", 2)
    dto = CreateOrderHandler(order_repo, cart_repo, product_repo).handle(ALICE, SHIPPING)
    return dto.id, order_repo, product_repo


class TestUpdateOrderStatus:

    def test_ship_then_deliver_stamps_delivered_at(self):
        order_id, order_repo, product_repo = _setup()
        handler = UpdateOrderStatusHandler(order_repo, product_repo)

        handler.handle(ADMIN, order_id, "shipped")
        dto = handler.handle(ADMIN, order_id, "delivered")

        assert dto.status == "delivered"
        assert dto.delivered_at is not None
        assert order_repo.get_by_id(order_id).delivered_at is not None

    def test_no_stock_side_effects(self):
        order_id, order_repo, product_repo = _setup()
        UpdateOrderStatusHandler(order_repo, product_repo).handle(ADMIN, order_id, "shipped")
        assert product_repo.stock_of("1") == 8

    def test_skipping_shipped_rejected(self):
        order_id, order_repo, product_repo = _setup()
        with pytest.raises(InvalidStateError, match="from processing to delivered"):
            UpdateOrderStatusHandler(order_repo, product_repo).handle(ADMIN, order_id, "delivered")

    def test_admin_cancel_restores_stock(self):
        order_id, order_repo, product_repo = _setup()
        dto = UpdateOrderStatusHandler(order_repo, product_repo).handle(
            ADMIN, order_id, "cancelled"
        )
        assert dto.status == "cancelled"
        assert product_repo.stock_of("1") == 10

    def test_requires_admin(self):
        order_id, order_repo, product_repo = _setup()
        with pytest.raises(ForbiddenError):
            UpdateOrderStatusHandler(order_repo, product_repo).handle(ALICE, order_id, "shipped")

    def test_unknown_status_rejected(self):
        order_id, order_repo, product_repo = _setup()
        with pytest.raises(ValidationError):
            UpdateOrderStatusHandler(order_repo, product_repo).handle(ADMIN, order_id, "lost")

    def test_unknown_order(self):
        _, order_repo, product_repo = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateOrderStatusHandler(order_repo, product_repo).handle(ADMIN, 42, "shipped")


class TestUpdatePaymentStatus:

    def test_owner_marks_paid(self):
        order_id, order_repo, _ = _setup()
        dto = UpdatePaymentStatusHandler(order_repo).handle(ALICE, order_id, "paid")
        assert dto.payment_status == "paid"
        assert dto.paid_at is not None

    def test_admin_refunds(self):
        order_id, order_repo, _ = _setup()
        handler = UpdatePaymentStatusHandler(order_repo)
        handler.handle(ADMIN, order_id, "paid")
        dto = handler.handle(ADMIN, order_id, "refunded")
        assert dto.payment_status == "refunded"

    def test_refund_of_unpaid_rejected(self):
        order_id, order_repo, _ = _setup()
        with pytest.raises(InvalidStateError):
            UpdatePaymentStatusHandler(order_repo).handle(ADMIN, order_id, "refunded")

    def test_stranger_forbidden(self):
        order_id, order_repo, _ = _setup()
        with pytest.raises(ForbiddenError):
            UpdatePaymentStatusHandler(order_repo).handle(Caller.of("bob"), order_id, "paid")

    def test_does_not_touch_order_status_or_stock(self):
        order_id, order_repo, product_repo = _setup()
        UpdatePaymentStatusHandler(order_repo).handle(ALICE, order_id, "paid")
        assert order_repo.get_by_id(order_id).status.value == "processing"
        assert product_repo.stock_of("1") == 8
