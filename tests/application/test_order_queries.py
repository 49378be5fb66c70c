"""Integration tests for the order query use cases."""

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import ShippingAddressSpec
from storefront.application.list_orders import ListAllOrdersHandler, ListMyOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_payment_status import UpdatePaymentStatusHandler
from storefront.domain.exceptions import EntityNotFoundError, ForbiddenError
from storefront.domain.model.identity import Caller
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, FakeOrderRepository, FakeProductRepository

ALICE = Caller.of("alice")
BOB = Caller.of("bob")
ADMIN = Caller.of("root", "admin")
SHIPPING = ShippingAddressSpec("1 Main St", "Springfield", "IL", "62701", "555-0100")


@pytest.fixture
def repos():
    product_repo = FakeProductRepository(
        [Product(id="1", name="Widget", price=Money.of("10.00"), stock=100)]
    )
    return FakeOrderRepository(), FakeCartRepository(), product_repo


def _checkout(repos, caller: Caller, quantity: int) -> int:
    order_repo, cart_repo, product_repo = repos
    AddToCartHandler(cart_repo, product_repo).handle(caller, "1", quantity)
    return CreateOrderHandler(order_repo, cart_repo, product_repo).handle(caller, SHIPPING).id


class TestShowOrder:

    def test_owner_sees_order(self, repos):
        order_id = _checkout(repos, ALICE, 2)
        dto = ShowOrderHandler(repos[0]).handle(ALICE, order_id)
        assert dto.user_id == "alice"
        assert dto.items[0].product_name == "Widget"
        assert dto.shipping_address.startswith("1 Main St, Springfield")

    def test_admin_sees_any_order(self, repos):
        order_id = _checkout(repos, ALICE, 2)
        assert ShowOrderHandler(repos[0]).handle(ADMIN, order_id).id == order_id

    def test_stranger_forbidden(self, repos):
        order_id = _checkout(repos, ALICE, 2)
        with pytest.raises(ForbiddenError):
            ShowOrderHandler(repos[0]).handle(BOB, order_id)

    def test_unknown_order(self, repos):
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(repos[0]).handle(ALICE, 7)


class TestListMyOrders:

    def test_only_own_orders_newest_first(self, repos):
        first = _checkout(repos, ALICE, 1)
        _checkout(repos, BOB, 1)
        second = _checkout(repos, ALICE, 3)

        result = ListMyOrdersHandler(repos[0]).handle(ALICE)

        assert result.count == 2
        assert [o.id for o in result.orders] == [second, first]

    def test_no_orders(self, repos):
        result = ListMyOrdersHandler(repos[0]).handle(ALICE)
        assert result.count == 0
        assert result.orders == []


class TestListAllOrders:

    def test_revenue_counts_paid_orders_only(self, repos):
        paid = _checkout(repos, ALICE, 2)    # $20.00
        _checkout(repos, BOB, 5)             # $50.00, still pending
        UpdatePaymentStatusHandler(repos[0]).handle(ADMIN, paid, "paid")

        result = ListAllOrdersHandler(repos[0]).handle(ADMIN)

        assert result.count == 2
        assert result.total_revenue == "$20.00"

    def test_empty_store(self, repos):
        result = ListAllOrdersHandler(repos[0]).handle(ADMIN)
        assert result.count == 0
        assert result.total_revenue == "$0.00"

    def test_requires_admin(self, repos):
        with pytest.raises(ForbiddenError):
            ListAllOrdersHandler(repos[0]).handle(ALICE)
