"""Pydantic response schemas for the Catalogue API."""

from pydantic import BaseModel

from catalogue.product.listing import ProductListing


class ProductResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"id": 2, "name": "Chocolate Macaroon", "price": 2.5, "image": "chocolate.jpg"},
            ]
        }
    }

    id: int
    name: str
    price: float
    image: str

    @classmethod
    def from_listing(cls, listing: ProductListing) -> "ProductResponse":
        return cls(id=listing.id, name=listing.name, price=float(listing.price), image=listing.image)
