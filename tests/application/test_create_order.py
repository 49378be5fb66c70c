"""Integration tests for the CreateOrder (checkout) use case."""

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import ShippingAddressSpec
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import (
    EmptyCartError,
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.identity import Caller
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import (
    FailingOrderRepository,
    FakeCartRepository,
    FakeOrderRepository,
    FakeProductRepository,
)

ALICE = Caller.of("alice")
SHIPPING = ShippingAddressSpec("1 Main St", "Springfield", "IL", "62701", "555-0100")


def _setup(order_repo: FakeOrderRepository | None = None):
    products = [
        Product(id="1", name="Widget", price=Money.of("15.00"), stock=10, image="w.png"),
        Product(id="2", name="Gadget", price=Money.of("25.00"), stock=5, image="g.png"),
    ]
    order_repo = order_repo if order_repo is not None else FakeOrderRepository()
    cart_repo = FakeCartRepository()
    product_repo = FakeProductRepository(products)
    handler = CreateOrderHandler(order_repo, cart_repo, product_repo)
    return handler, order_repo, cart_repo, product_repo


def _fill_cart(cart_repo, product_repo, *lines: tuple[str, int]) -> None:
    add = AddToCartHandler(cart_repo, product_repo)
    for pid, qty in lines:
        add.handle(ALICE, pid, qty)


class TestCreateOrderHappyPath:

    def test_creates_order_from_cart(self):
        handler, order_repo, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 3), ("2", 2))

        dto = handler.handle(ALICE, SHIPPING)

        assert dto.id == 1
        assert dto.status == "processing"
        assert dto.payment_status == "pending"
        assert dto.payment_method == "cod"
        assert dto.total == "$95.00"
        assert [(i.product_name, i.quantity) for i in dto.items] == [
            ("Widget", 3),
            ("Gadget", 2),
        ]

    def test_snapshots_name_and_image(self):
        handler, order_repo, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 1))

        dto = handler.handle(ALICE, SHIPPING)

        line = order_repo.get_by_id(dto.id).items[0]
        assert line.product_name == "Widget"
        assert line.image == "w.png"
        assert dto.items[0].image == "w.png"

    def test_reserves_stock(self):
        handler, _, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 3), ("2", 5))

        handler.handle(ALICE, SHIPPING)

        assert product_repo.stock_of("1") == 7
        assert product_repo.stock_of("2") == 0

    def test_empties_cart(self):
        handler, _, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 1), ("2", 1))

        handler.handle(ALICE, SHIPPING)

        cart = ShowCartHandler(cart_repo).handle(ALICE)
        assert cart.items == []
        assert cart.total == "$0.00"

    def test_card_payment_method(self):
        handler, _, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 1))
        dto = handler.handle(ALICE, SHIPPING, payment_method="card")
        assert dto.payment_method == "card"

    def test_persists_defaults(self):
        handler, order_repo, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 1))
        dto = handler.handle(ALICE, SHIPPING)
        saved = order_repo.get_by_id(dto.id)
        assert saved.status == OrderStatus.PROCESSING
        assert saved.payment_status == PaymentStatus.PENDING
        assert saved.user_id == "alice"


class TestCreateOrderPriceSnapshot:

    def test_uses_live_price_at_checkout(self):
        handler, _, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 2))

        widget = product_repo.get_by_id("1")
        widget.update_price(Money.of("20.00"))
        product_repo.save(widget)

        dto = handler.handle(ALICE, SHIPPING)
        assert dto.items[0].unit_price == "$20.00"
        assert dto.total == "$40.00"

    def test_later_catalog_edits_do_not_change_order(self):
        handler, order_repo, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 2))
        dto = handler.handle(ALICE, SHIPPING)

        widget = product_repo.get_by_id("1")
        widget.update_price(Money.of("99.99"))
        widget.rename("Super Widget")
        widget.image = "new.png"
        product_repo.save(widget)

        saved = order_repo.get_by_id(dto.id)
        assert saved.total == Money.of("30.00")
        assert saved.items[0].unit_price == Money.of("15.00")
        assert saved.items[0].product_name == "Widget"
        assert saved.items[0].image == "w.png"


class TestCreateOrderFailures:

    def test_empty_cart_rejected(self):
        handler, _, cart_repo, _ = _setup()
        ShowCartHandler(cart_repo).handle(ALICE)
        with pytest.raises(EmptyCartError, match="Cart is empty"):
            handler.handle(ALICE, SHIPPING)

    def test_missing_cart_rejected(self):
        handler, _, _, _ = _setup()
        with pytest.raises(EmptyCartError):
            handler.handle(ALICE, SHIPPING)

    def test_missing_address_field_rejected(self):
        handler, _, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 1))
        bad = ShippingAddressSpec("1 Main St", "", "IL", "62701", "555-0100")
        with pytest.raises(ValidationError, match="City is required"):
            handler.handle(ALICE, bad)
        assert product_repo.stock_of("1") == 10

    def test_unknown_payment_method_rejected(self):
        handler, _, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 1))
        with pytest.raises(ValidationError, match="payment method"):
            handler.handle(ALICE, SHIPPING, payment_method="barter")

    def test_stale_cart_rolls_back_reservations(self):
        handler, order_repo, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 4), ("2", 5))

        # Someone else buys Gadget stock after it went into the cart.
        product_repo.adjust_stock("2", -3)

        with pytest.raises(InsufficientStockError, match="Gadget"):
            handler.handle(ALICE, SHIPPING)

        assert product_repo.stock_of("1") == 10
        assert product_repo.stock_of("2") == 2
        assert order_repo.list_all() == []
        assert len(cart_repo.get_by_user_id("alice").items) == 2

    def test_product_removed_from_catalog(self):
        handler, order_repo, cart_repo, product_repo = _setup()
        _fill_cart(cart_repo, product_repo, ("1", 1), ("2", 1))
        product_repo.delete("2")

        with pytest.raises(EntityNotFoundError):
            handler.handle(ALICE, SHIPPING)

        assert product_repo.stock_of("1") == 10
        assert order_repo.list_all() == []

    def test_failed_persist_gives_stock_back(self):
        handler, _, cart_repo, product_repo = _setup(FailingOrderRepository())
        _fill_cart(cart_repo, product_repo, ("1", 3))

        with pytest.raises(RuntimeError, match="database unavailable"):
            handler.handle(ALICE, SHIPPING)

        assert product_repo.stock_of("1") == 10
        assert len(cart_repo.get_by_user_id("alice").items) == 1
