"""Order and OrderItem tables, plus the plain-data shapes that travel in and out.

An Order exclusively owns its OrderItems: items are a child table keyed by the
order id with ``ON DELETE CASCADE``, and the ORM relationship deletes orphans.
Items copy the product name and price at order time (snapshot fields), so
editing the catalogue later never changes order history.

The order total is computed once, from the items, when the order is drafted:

    total == sum(item.product_price * item.quantity)

and is never recalculated afterwards. Items are immutable once stored.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.exceptions import InputValidationError, ValidationError
from shared.money import CENTS, MAX_PRICE, MAX_TOTAL, line_total, to_money
from shared.store import Base

MAX_QUANTITY = 1_000_000


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------
class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("total >= 0", name="ck_orders_total_non_negative"),
        CheckConstraint("length(name) > 0", name="ck_orders_name_not_empty"),
        CheckConstraint("length(address) > 0", name="ck_orders_address_not_empty"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItem.id",
    )

    @classmethod
    def from_draft(cls, draft: "OrderDraft") -> "Order":
        return cls(
            name=draft.name,
            address=draft.address,
            total=draft.total,
            items=[
                OrderItem(
                    product_name=line.product_name,
                    product_price=line.product_price,
                    quantity=line.quantity,
                )
                for line in draft.lines
            ],
        )

    def __repr__(self) -> str:
        return f"<Order {self.id} total={self.total} items={len(self.items)}>"


class OrderItem(Base):
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("product_price >= 0", name="ck_order_items_price_non_negative"),
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    order: Mapped[Order] = relationship(back_populates="items")


# ---------------------------------------------------------------------------
# Drafts (input to the order store)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class OrderLine:
    """One line of an order that has not been stored yet."""

    product_name: str
    product_price: Decimal
    quantity: int = 1

    def __post_init__(self):
        name = (self.product_name or "").strip()
        if not name:
            raise ValidationError({"product_name": ["Product name is required"]})

        price = to_money(self.product_price, field="product_price")
        if price < 0:
            raise ValidationError({"product_price": ["Price cannot be negative"]})
        if price > MAX_PRICE:
            raise ValidationError({"product_price": [f"Price cannot exceed {MAX_PRICE}"]})

        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})
        if self.quantity > MAX_QUANTITY:
            raise ValidationError({"quantity": [f"Quantity cannot exceed {MAX_QUANTITY}"]})

        object.__setattr__(self, "product_name", name)
        object.__setattr__(self, "product_price", price)

    @property
    def subtotal(self) -> Decimal:
        return line_total(self.product_price, self.quantity)


@dataclass(frozen=True)
class OrderDraft:
    name: str
    address: str
    lines: tuple[OrderLine, ...]

    def __post_init__(self):
        errors = {}
        name = (self.name or "").strip()
        address = (self.address or "").strip()
        if not name:
            errors["name"] = ["Name is required"]
        if not address:
            errors["address"] = ["Address is required"]
        if errors:
            raise InputValidationError(errors)
        if not self.lines:
            raise ValidationError({"lines": ["An order needs at least one item"]})
        if self.total > MAX_TOTAL:
            raise ValidationError({"total": [f"Order total cannot exceed {MAX_TOTAL}"]})

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "address", address)
        object.__setattr__(self, "lines", tuple(self.lines))

    @property
    def total(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0")).quantize(CENTS)


# ---------------------------------------------------------------------------
# Snapshots (output of the order store)
# ---------------------------------------------------------------------------
def _as_utc(moment: datetime) -> datetime:
    # SQLite drops the offset on the way back
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


@dataclass(frozen=True)
class PersistedOrderItem:
    id: int
    product_name: str
    product_price: Decimal
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return line_total(self.product_price, self.quantity)


@dataclass(frozen=True)
class PersistedOrder:
    id: int
    name: str
    address: str
    total: Decimal
    created_at: datetime
    items: tuple[PersistedOrderItem, ...] = field(default_factory=tuple)

    @classmethod
    def from_record(cls, order: Order) -> "PersistedOrder":
        return cls(
            id=order.id,
            name=order.name,
            address=order.address,
            total=order.total,
            created_at=_as_utc(order.created_at),
            items=tuple(
                PersistedOrderItem(
                    id=item.id,
                    product_name=item.product_name,
                    product_price=item.product_price,
                    quantity=item.quantity,
                )
                for item in order.items
            ),
        )

    @property
    def item_count(self) -> int:
        return len(self.items)
