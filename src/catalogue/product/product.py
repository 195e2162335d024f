"""Product table and the draft used to create products.

Products are created at seed or admin time and are read-only afterwards.
``image`` is an opaque key into object storage; the catalogue never turns it
into a URL.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.exceptions import ValidationError
from shared.money import MAX_PRICE, to_money
from shared.store import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("length(name) > 0", name="ck_products_name_not_empty"),
        CheckConstraint("length(image) > 0", name="ck_products_image_not_empty"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image: Mapped[str] = mapped_column(String(500), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return f"<Product {self.id} {self.name!r} {self.price}>"


@dataclass(frozen=True)
class ProductDraft:
    """A product that has not been stored yet."""

    name: str
    price: Decimal
    image: str

    def __post_init__(self):
        name = (self.name or "").strip()
        image = (self.image or "").strip()
        if not name:
            raise ValidationError({"name": ["Product name is required"]})
        if not image:
            raise ValidationError({"image": ["Product image key is required"]})

        price = to_money(self.price, field="price")
        if price < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})
        if price > MAX_PRICE:
            raise ValidationError({"price": [f"Price cannot exceed {MAX_PRICE}"]})

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "image", image)
        object.__setattr__(self, "price", price)

    def to_record(self) -> Product:
        return Product(name=self.name, price=self.price, image=self.image)
