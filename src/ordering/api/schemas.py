"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept separate from the order tables and
drafts. ``cart_data`` is the raw JSON text of the shopper's cart; it is
decoded and validated by the checkout processor, not here.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

from ordering.checkout.processor import OrderConfirmation
from ordering.order.order import PersistedOrder


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane",
                    "address": "1 Main St",
                    "cart_data": '[{"name": "Chocolate Macaroon", "price": 2.5, "quantity": 2}]',
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    address: str = Field(..., max_length=2000)
    cart_data: str = Field(..., validation_alias=AliasChoices("cart_data", "cartData"))


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderConfirmationResponse(BaseModel):
    order_id: int
    total: float
    item_count: int

    @classmethod
    def from_confirmation(cls, confirmation: OrderConfirmation) -> "OrderConfirmationResponse":
        return cls(
            order_id=confirmation.order_id,
            total=float(confirmation.total),
            item_count=confirmation.item_count,
        )


class OrderItemResponse(BaseModel):
    id: int
    product_name: str
    product_price: float
    quantity: int


class OrderResponse(BaseModel):
    id: int
    name: str
    address: str
    total: float
    created_at: datetime
    items: list[OrderItemResponse]

    @classmethod
    def from_order(cls, order: PersistedOrder) -> "OrderResponse":
        return cls(
            id=order.id,
            name=order.name,
            address=order.address,
            total=float(order.total),
            created_at=order.created_at,
            items=[
                OrderItemResponse(
                    id=item.id,
                    product_name=item.product_name,
                    product_price=float(item.product_price),
                    quantity=item.quantity,
                )
                for item in order.items
            ],
        )
