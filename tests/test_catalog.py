"""
Tests for product payload defaulting and range checks
"""

import pytest

from glam_store.catalog import MAX_STOCK, product_fields
from glam_store.errors import ValidationError


class TestProductFields:
    def test_defaults(self):
        f = product_fields({"name": "Blush"})
        assert (f.price, f.stock, f.description, f.is_active) == (0.0, 0, "", False)

    @pytest.mark.parametrize("price", [float("inf"), float("-inf"), float("nan"), -0.5])
    def test_bad_price(self, price):
        with pytest.raises(ValidationError) as e:
            product_fields({"name": "Blush", "price": price})
        assert e.value.status_code == 400

    def test_stock_bounds(self):
        assert product_fields({"name": "Blush", "stock": MAX_STOCK}).stock == MAX_STOCK
        for stock in (-1, MAX_STOCK + 1):
            with pytest.raises(ValidationError):
                product_fields({"name": "Blush", "stock": stock})
