"""Error taxonomy shared by the Catalogue and Ordering contexts.

Validation errors carry a ``messages`` map of field name to a list of
human-readable problems, the same shape the HTTP layer returns to clients:

    raise MalformedCartError({"cart_data": ["Cart must contain at least one item"]})

Persistence errors wrap the underlying SQLAlchemy exception (chained with
``from``) so callers can tell a storage failure from bad input without
depending on the driver.
"""


class StorefrontError(Exception):
    """Base class for every error raised by the storefront core."""


class ValidationError(StorefrontError):
    """Input was rejected before anything was persisted."""

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        super().__init__(messages)

    def __str__(self) -> str:
        return "; ".join(f"{field}: {', '.join(errors)}" for field, errors in self.messages.items())


class InputValidationError(ValidationError):
    """A required text field was missing or blank."""


class MalformedCartError(ValidationError):
    """The cart payload could not be decoded or an item failed shape validation."""


class ObjectNotFoundError(StorefrontError):
    """The requested record does not exist."""


class OrderNotFoundError(ObjectNotFoundError):
    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order {order_id} does not exist")


class PersistenceError(StorefrontError):
    """The store was unreachable or rejected a write."""


class DataUnavailableError(PersistenceError):
    """A read could not be served because the store is unreachable."""


class SchemaMismatchError(PersistenceError):
    """The live database schema does not match the declared tables."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("Database schema mismatch: " + "; ".join(problems))
