"""Catalog query service: the product list shown to shoppers."""

from dataclasses import asdict, dataclass
from decimal import Decimal

from catalogue.product.store import CatalogStore


@dataclass(frozen=True)
class ProductListing:
    id: int
    name: str
    price: Decimal
    image: str

    def to_dict(self) -> dict:
        return asdict(self)


class CatalogQueryService:
    """Read-only view over the catalog store.

    ``list_products`` raises ``DataUnavailableError`` when the store cannot be
    reached; callers decide how to present that.
    """

    def __init__(self, catalog: CatalogStore):
        self.catalog = catalog

    def list_products(self) -> list[ProductListing]:
        return [
            ProductListing(id=product.id, name=product.name, price=product.price, image=product.image)
            for product in self.catalog.list_all()
        ]
