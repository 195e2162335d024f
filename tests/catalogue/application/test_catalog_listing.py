"""Application tests for the catalog query service."""

from decimal import Decimal

import pytest
from catalogue.product.defaults import DEFAULT_PRODUCTS
from catalogue.product.listing import CatalogQueryService, ProductListing
from shared.exceptions import DataUnavailableError
from shared.utils.db import drop_db


@pytest.fixture
def listing(catalog):
    return CatalogQueryService(catalog)


class TestListProducts:
    def test_freshly_seeded_store_lists_six_defaults_in_seed_order(self, catalog, listing):
        catalog.seed_if_empty(DEFAULT_PRODUCTS)

        products = listing.list_products()

        assert len(products) == 6
        assert [(p.name, p.price, p.image) for p in products] == [(d.name, d.price, d.image) for d in DEFAULT_PRODUCTS]

    def test_returns_plain_listings(self, catalog, listing):
        catalog.seed_if_empty(DEFAULT_PRODUCTS)

        first = listing.list_products()[0]

        assert isinstance(first, ProductListing)
        assert first.to_dict() == {
            "id": first.id,
            "name": "Strawberry Macaroon",
            "price": Decimal("3.00"),
            "image": "strawberry.jpg",
        }

    def test_empty_catalogue(self, listing):
        assert listing.list_products() == []

    def test_store_failure_surfaces_as_data_unavailable(self, store, listing):
        drop_db(store)
        with pytest.raises(DataUnavailableError):
            listing.list_products()
