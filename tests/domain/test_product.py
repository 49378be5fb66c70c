"""Unit tests for the Product aggregate."""

import pytest

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.product import DEFAULT_IMAGE, Category, Product
from storefront.domain.model.value_objects import Money


def _product(stock: int = 5) -> Product:
    return Product(id="1", name="Widget", price=Money.of("15.00"), stock=stock)


class TestProductCreation:

    def test_defaults(self):
        product = Product.create("1", "  Widget ", Money.of("15.00"))
        assert product.name == "Widget"
        assert product.stock == 0
        assert product.category == Category.OTHER
        assert product.image == DEFAULT_IMAGE

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create("1", "  ", Money.of("1"))

    def test_long_name_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed 100"):
            Product.create("1", "x" * 101, Money.of("1"))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            Product.create("1", "Widget", Money.of("1"), stock=-1)

    def test_category_parse(self):
        assert Category.parse(" Books ") == Category.BOOKS

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError, match="Unknown category"):
            Category.parse("weapons")


class TestRename:

    def test_strips_whitespace(self):
        product = _product()
        product.rename("  Widget Pro ")
        assert product.name == "Widget Pro"

    def test_long_name_rejected_without_effect(self):
        product = _product()
        with pytest.raises(ValidationError, match="cannot exceed 100"):
            product.rename("x" * 101)
        assert product.name == "Widget"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            _product().rename(" ")


class TestStockDelta:

    def test_decrement(self):
        product = _product(stock=5)
        assert product.apply_stock_delta(-3) == 2

    def test_decrement_to_exactly_zero(self):
        product = _product(stock=5)
        assert product.apply_stock_delta(-5) == 0

    def test_going_negative_rejected_without_effect(self):
        product = _product(stock=2)
        with pytest.raises(InsufficientStockError, match="Insufficient stock for Widget"):
            product.apply_stock_delta(-3)
        assert product.stock == 2

    def test_increment(self):
        product = _product(stock=0)
        assert product.apply_stock_delta(4) == 4

    def test_has_stock_for(self):
        product = _product(stock=3)
        assert product.has_stock_for(3)
        assert not product.has_stock_for(4)
