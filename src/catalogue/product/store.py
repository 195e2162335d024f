"""Catalog store: persistence for Product records."""

from collections.abc import Iterable

from sqlalchemy import func, select

from catalogue.product.product import Product, ProductDraft
from shared.store import Store
from shared.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogStore:
    def __init__(self, store: Store):
        self.store = store

    def list_all(self) -> list[Product]:
        """All products in the order they were created.

        The returned records are detached from the session and safe to read
        after the call returns.
        """
        with self.store.reading() as session:
            statement = select(Product).order_by(Product.created_at, Product.id)
            return list(session.scalars(statement))

    def count(self) -> int:
        with self.store.reading() as session:
            return session.scalar(select(func.count()).select_from(Product))

    def add(self, draft: ProductDraft) -> Product:
        with self.store.unit_of_work() as session:
            product = draft.to_record()
            session.add(product)
            session.flush()

        logger.info("product_added", product_id=product.id, name=product.name)
        return product

    def seed_if_empty(self, defaults: Iterable[ProductDraft]) -> int:
        """Insert ``defaults`` only when the catalogue has no products at all.

        Returns the number of products inserted, which is 0 on every call
        after the first.
        """
        with self.store.unit_of_work() as session:
            existing = session.scalar(select(func.count()).select_from(Product))
            if existing:
                logger.debug("catalogue_already_seeded", existing=existing)
                return 0

            inserted = 0
            for draft in defaults:
                session.add(draft.to_record())
                # Flush one at a time so ids follow seed order
                session.flush()
                inserted += 1

        logger.info("catalogue_seeded", inserted=inserted)
        return inserted
