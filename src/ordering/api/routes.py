"""FastAPI routes for the Ordering domain: checkout and order lookup."""

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from ordering.api.schemas import CheckoutRequest, OrderConfirmationResponse, OrderResponse
from ordering.checkout.processor import CheckoutProcessor
from ordering.order.store import OrderStore
from shared.api import get_store
from shared.store import Store


def get_order_store(store: Store = Depends(get_store)) -> OrderStore:
    return OrderStore(store)


def get_checkout_processor(orders: OrderStore = Depends(get_order_store)) -> CheckoutProcessor:
    return CheckoutProcessor(orders)


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_checkout_request(request: Request) -> CheckoutRequest:
    """Accept the checkout either as JSON or as the browser's form post."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        data = dict(await request.form())
    else:
        try:
            data = await request.json()
        except ValueError:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "Body must be JSON or form data", "input": None}]
            ) from None

    try:
        return CheckoutRequest.model_validate(data)
    except PydanticValidationError as exc:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in exc.errors(include_url=False)]
        ) from None


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=OrderConfirmationResponse)
def submit_order(
    body: CheckoutRequest = Depends(read_checkout_request),
    checkout: CheckoutProcessor = Depends(get_checkout_processor),
) -> OrderConfirmationResponse:
    confirmation = checkout.submit_order(body.name, body.address, body.cart_data)
    return OrderConfirmationResponse.from_confirmation(confirmation)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: int, orders: OrderStore = Depends(get_order_store)) -> OrderResponse:
    return OrderResponse.from_order(orders.get(order_id))
