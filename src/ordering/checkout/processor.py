"""Checkout processor: turns a submitted cart into a stored order.

Flow:
    1. Buyer name and address must be non-blank (InputValidationError)
    2. Cart payload is decoded and shape-checked (MalformedCartError)
    3. The total is recomputed from the submitted lines; any total the
       client may have shown is ignored. Totals beyond what the orders
       table holds are rejected (MalformedCartError)
    4. Order and items are persisted atomically through the OrderStore
    5. The new order id is returned

The item count and, once stored, the order id are bound to the logging
context so later log lines for the same request carry them.

Steps 1 and 2 happen before the store is touched, so rejected input never
leaves partial state behind. Prices are taken from the submitted lines as
they were when the shopper added them to the cart; they are not looked up
again in the catalogue.
"""

from dataclasses import dataclass
from decimal import Decimal

from ordering.checkout.cart import decode_cart
from ordering.order.order import OrderDraft
from ordering.order.store import OrderStore
from shared.exceptions import InputValidationError, MalformedCartError, PersistenceError, ValidationError
from shared.utils.logging import add_context, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class OrderConfirmation:
    order_id: int
    total: Decimal
    item_count: int


def _require_text(value, field: str, label: str, errors: dict[str, list[str]]) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        errors[field] = [f"{label} is required"]
    return text


class CheckoutProcessor:
    def __init__(self, orders: OrderStore):
        self.orders = orders

    def submit_order(self, buyer_name: str, buyer_address: str, cart_payload: str) -> OrderConfirmation:
        errors: dict[str, list[str]] = {}
        name = _require_text(buyer_name, "name", "Name", errors)
        address = _require_text(buyer_address, "address", "Address", errors)
        if errors:
            logger.info("checkout_rejected", reason="input", fields=sorted(errors))
            raise InputValidationError(errors)

        try:
            lines = decode_cart(cart_payload)
        except MalformedCartError as exc:
            logger.info("checkout_rejected", reason="malformed_cart", fields=sorted(exc.messages))
            raise

        try:
            draft = OrderDraft(name=name, address=address, lines=lines)
        except ValidationError as exc:
            logger.info("checkout_rejected", reason="order_limits", fields=sorted(exc.messages))
            raise MalformedCartError(exc.messages) from None
        add_context(cart_items=len(lines))

        try:
            order = self.orders.create_order(draft)
        except PersistenceError:
            logger.exception("checkout_failed", item_count=len(lines))
            raise

        add_context(order_id=order.id)
        logger.info("checkout_completed", total=str(order.total))
        return OrderConfirmation(order_id=order.id, total=order.total, item_count=order.item_count)
