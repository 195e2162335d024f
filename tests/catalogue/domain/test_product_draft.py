"""Tests for ProductDraft validation and the default catalogue."""

from decimal import Decimal

import pytest
from catalogue.product.defaults import DEFAULT_PRODUCTS
from catalogue.product.product import Product, ProductDraft
from shared.exceptions import ValidationError


class TestProductDraftConstruction:
    def test_valid_draft(self):
        draft = ProductDraft(name="Pistachio Macaroon", price=Decimal("3.25"), image="pistachio.jpg")
        assert draft.name == "Pistachio Macaroon"
        assert draft.price == Decimal("3.25")
        assert draft.image == "pistachio.jpg"

    def test_price_from_float_is_rounded_to_cents(self):
        draft = ProductDraft(name="Lemon Macaroon", price=2.5, image="lemon.jpg")
        assert draft.price == Decimal("2.50")

    def test_zero_price_is_valid(self):
        draft = ProductDraft(name="Sample", price=0, image="sample.jpg")
        assert draft.price == Decimal("0.00")

    def test_whitespace_is_trimmed(self):
        draft = ProductDraft(name="  Mint Macaroon ", price=Decimal("2"), image=" mint.jpg ")
        assert draft.name == "Mint Macaroon"
        assert draft.image == "mint.jpg"

    def test_to_record_copies_fields(self):
        record = ProductDraft(name="Mint Macaroon", price=Decimal("2"), image="mint.jpg").to_record()
        assert isinstance(record, Product)
        assert record.name == "Mint Macaroon"
        assert record.price == Decimal("2.00")
        assert record.image == "mint.jpg"


class TestProductDraftInvariants:
    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            ProductDraft(name="   ", price=Decimal("1"), image="x.jpg")
        assert "name" in exc.value.messages

    def test_blank_image_rejected(self):
        with pytest.raises(ValidationError) as exc:
            ProductDraft(name="Macaroon", price=Decimal("1"), image="")
        assert "image" in exc.value.messages

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError) as exc:
            ProductDraft(name="Macaroon", price=Decimal("-0.01"), image="x.jpg")
        assert "price" in exc.value.messages

    def test_non_numeric_price_rejected(self):
        with pytest.raises(ValidationError):
            ProductDraft(name="Macaroon", price="cheap", image="x.jpg")

    def test_price_above_column_limit_rejected(self):
        with pytest.raises(ValidationError) as exc:
            ProductDraft(name="Macaroon", price=Decimal("100000000.00"), image="x.jpg")
        assert "price" in exc.value.messages


class TestDefaultProducts:
    def test_six_defaults(self):
        assert len(DEFAULT_PRODUCTS) == 6

    def test_seed_order(self):
        assert [p.name for p in DEFAULT_PRODUCTS] == [
            "Strawberry Macaroon",
            "Chocolate Macaroon",
            "Candy Macaroon",
            "Berry Macaroon",
            "Caramel Macaroon",
            "Orange Macaroon",
        ]

    def test_chocolate_price(self):
        chocolate = next(p for p in DEFAULT_PRODUCTS if p.name == "Chocolate Macaroon")
        assert chocolate.price == Decimal("2.50")
        assert chocolate.image == "chocolate.jpg"
