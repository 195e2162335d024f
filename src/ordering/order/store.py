"""Order store: persistence for orders and their items.

``create_order`` writes the order row and every item row in one unit of work.
Either all of them are committed or none are; no reader can see an order
with only some of its items.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from ordering.order.order import Order, OrderDraft, PersistedOrder
from shared.exceptions import OrderNotFoundError
from shared.store import Store
from shared.utils.logging import get_logger

logger = get_logger(__name__)


class OrderStore:
    def __init__(self, store: Store):
        self.store = store

    def create_order(self, draft: OrderDraft) -> PersistedOrder:
        with self.store.unit_of_work() as session:
            order = Order.from_draft(draft)
            session.add(order)
            session.flush()
            persisted = PersistedOrder.from_record(order)

        logger.info(
            "order_persisted",
            order_id=persisted.id,
            item_count=persisted.item_count,
            total=str(persisted.total),
        )
        return persisted

    def get(self, order_id: int) -> PersistedOrder:
        with self.store.reading() as session:
            statement = select(Order).options(selectinload(Order.items)).where(Order.id == order_id)
            order = session.scalars(statement).one_or_none()
            if order is None:
                raise OrderNotFoundError(order_id)
            return PersistedOrder.from_record(order)

    def count(self) -> int:
        with self.store.reading() as session:
            return session.scalar(select(func.count()).select_from(Order))

    def delete(self, order_id: int) -> None:
        """Delete an order; its items are removed by the cascade."""
        with self.store.unit_of_work() as session:
            order = session.get(Order, order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            session.delete(order)

        logger.info("order_deleted", order_id=order_id)
