"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends

from catalogue.api.schemas import ProductResponse
from catalogue.product.listing import CatalogQueryService
from catalogue.product.store import CatalogStore
from shared.api import get_store
from shared.store import Store

product_router = APIRouter(prefix="/products", tags=["products"])


def get_catalog_query(store: Store = Depends(get_store)) -> CatalogQueryService:
    return CatalogQueryService(CatalogStore(store))


@product_router.get("", response_model=list[ProductResponse])
def list_products(catalog: CatalogQueryService = Depends(get_catalog_query)) -> list[ProductResponse]:
    return [ProductResponse.from_listing(listing) for listing in catalog.list_products()]
