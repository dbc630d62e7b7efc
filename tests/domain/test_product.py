"""Unit tests for Product identity and payload mapping."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from tests.fakes import make_product


def _payload(**overrides):
    raw = {
        "id": 7,
        "title": "Essence Mascara",
        "price": 9.99,
        "description": "Lengthening mascara",
        "thumbnail": "https://cdn.example/7/thumb.png",
        "images": ["https://cdn.example/7/1.png", "https://cdn.example/7/2.png"],
        "category": "beauty",
        "rating": 4.9,
    }
    raw.update(overrides)
    return raw


class TestProductIdentity:

    def test_equal_by_id(self):
        assert make_product(1, price="1.00") == make_product(1, price="2.00")

    def test_different_ids_not_equal(self):
        assert make_product(1) != make_product(2)

    def test_hash_by_id(self):
        assert len({make_product(1), make_product(1, title="Other")}) == 1


class TestProductPayload:

    def test_from_payload_maps_fields(self):
        product = Product.from_payload(_payload())
        assert product.id == 7
        assert product.price.amount == Decimal("9.99")
        assert product.thumbnail_url == "https://cdn.example/7/thumb.png"
        assert product.image_urls == (
            "https://cdn.example/7/1.png",
            "https://cdn.example/7/2.png",
        )
        assert product.category == "beauty"

    def test_optional_fields_default(self):
        product = Product.from_payload({"id": 1, "title": "Bare", "price": "3"})
        assert product.description == ""
        assert product.image_urls == ()

    def test_missing_price_rejected(self):
        raw = _payload()
        del raw["price"]
        with pytest.raises(ValidationError, match="missing"):
            Product.from_payload(raw)

    def test_non_integer_id_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Product.from_payload(_payload(id="7"))

    def test_payload_round_trip_keeps_every_field(self):
        product = Product.from_payload(_payload())
        again = Product.from_payload(product.to_payload())
        assert again.to_payload() == product.to_payload()
        assert again.price == product.price
