"""Products every new shop starts with, in display order."""

from decimal import Decimal

from catalogue.product.product import ProductDraft

DEFAULT_PRODUCTS = (
    ProductDraft(name="Strawberry Macaroon", price=Decimal("3.00"), image="strawberry.jpg"),
    ProductDraft(name="Chocolate Macaroon", price=Decimal("2.50"), image="chocolate.jpg"),
    ProductDraft(name="Candy Macaroon", price=Decimal("2.75"), image="candy.jpg"),
    ProductDraft(name="Berry Macaroon", price=Decimal("3.00"), image="berry.jpg"),
    ProductDraft(name="Caramel Macaroon", price=Decimal("2.50"), image="caramel.jpg"),
    ProductDraft(name="Orange Macaroon", price=Decimal("2.50"), image="orange.jpg"),
)
