"""Decoding of the cart payload submitted at checkout.

The browser keeps the cart in session storage and posts it as a JSON array:

    [{"id": 2, "name": "Chocolate Macaroon", "price": 2.5, "quantity": 2}]

Nothing in it is trusted beyond its shape. ``productName`` / ``productPrice``
(and their snake_case forms) are accepted as aliases for ``name`` / ``price``;
unknown keys such as ``id`` are ignored and ``quantity`` defaults to 1.
Prices must be whole cents no larger than the price column holds, so the
stored snapshot is exactly the price the shopper saw.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from ordering.order.order import MAX_QUANTITY, OrderLine
from shared.exceptions import MalformedCartError, ValidationError
from shared.money import MAX_PRICE, has_whole_cents, to_money

PAYLOAD_FIELD = "cart_data"


class CartLine(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        strict=True,
        validation_alias=AliasChoices("name", "productName", "product_name"),
    )
    price: float = Field(
        ...,
        ge=0,
        le=float(MAX_PRICE),
        strict=True,
        allow_inf_nan=False,
        validation_alias=AliasChoices("price", "productPrice", "product_price"),
    )
    quantity: int = Field(1, ge=1, le=MAX_QUANTITY, strict=True)

    @field_validator("price")
    @classmethod
    def price_in_whole_cents(cls, value: float) -> float:
        if not has_whole_cents(value):
            raise ValueError("Price cannot have fractions of a cent")
        return value

    def to_order_line(self) -> OrderLine:
        return OrderLine(
            product_name=self.name,
            product_price=to_money(self.price, field="price"),
            quantity=self.quantity,
        )


_CART_ADAPTER = TypeAdapter(list[CartLine])


def _location(loc: tuple) -> str:
    path = PAYLOAD_FIELD
    for part in loc:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


def _messages(exc: PydanticValidationError) -> dict[str, list[str]]:
    messages: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        messages.setdefault(_location(error["loc"]), []).append(error["msg"])
    return messages


def decode_cart(payload: str | bytes | None) -> tuple[OrderLine, ...]:
    """Turn the raw cart payload into order lines.

    Raises ``MalformedCartError`` when the payload is missing, is not JSON,
    is not a list, is empty, or contains an item of the wrong shape.
    """
    if payload is None or (isinstance(payload, str | bytes) and not payload.strip()):
        raise MalformedCartError({PAYLOAD_FIELD: ["Cart data is required"]})
    if not isinstance(payload, str | bytes):
        raise MalformedCartError({PAYLOAD_FIELD: ["Cart data must be a JSON document"]})

    try:
        cart = _CART_ADAPTER.validate_json(payload)
    except PydanticValidationError as exc:
        raise MalformedCartError(_messages(exc)) from None

    if not cart:
        raise MalformedCartError({PAYLOAD_FIELD: ["Cart must contain at least one item"]})

    lines = []
    for index, line in enumerate(cart):
        try:
            lines.append(line.to_order_line())
        except ValidationError as exc:
            raise MalformedCartError(
                {_location((index, key)): messages for key, messages in exc.messages.items()}
            ) from None
    return tuple(lines)
