import os
from pathlib import Path

import pytest

os.environ.setdefault("STOREFRONT_ENV", "test")


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the config environment and configure logging once for the session.
    """
    os.environ["STOREFRONT_ENV"] = session.config.option.env

    from shared.utils.logging import configure_logging

    configure_logging()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture
def store():
    """A fresh in-memory database with every table created."""
    from shared.store import Store
    from shared.utils.db import drop_db, setup_db

    store = Store("sqlite://")
    setup_db(store)

    yield store

    drop_db(store)
    store.dispose()


@pytest.fixture
def catalog(store):
    from catalogue.product.store import CatalogStore

    return CatalogStore(store)


@pytest.fixture
def orders(store):
    from ordering.order.store import OrderStore

    return OrderStore(store)


@pytest.fixture
def checkout(orders):
    from ordering.checkout.processor import CheckoutProcessor

    return CheckoutProcessor(orders)


@pytest.fixture
def client(store):
    from fastapi.testclient import TestClient

    from app import create_app
    from shared.config import Settings

    settings = Settings(env="test", database_url="sqlite://", seed_on_startup=False)
    return TestClient(create_app(store=store, settings=settings))
