from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from shared.exceptions import PersistenceError, SchemaMismatchError
from shared.store import Base, Store


def _register_tables():
    """Import every model module so its table lands in ``Base.metadata``."""
    import catalogue.product.product  # noqa: F401
    import ordering.order.order  # noqa: F401


def setup_db(store: Store):
    """Setup database schema"""
    _register_tables()
    try:
        Base.metadata.create_all(store.engine)
    except SQLAlchemyError as exc:
        raise PersistenceError(str(exc)) from exc


def drop_db(store: Store):
    """Drop database schema"""
    _register_tables()
    try:
        Base.metadata.drop_all(store.engine)
    except SQLAlchemyError as exc:
        raise PersistenceError(str(exc)) from exc


def verify_schema(store: Store):
    """Check that every declared table and column exists in the live database.

    Raises ``SchemaMismatchError`` listing everything that is missing.
    """
    _register_tables()
    try:
        inspector = inspect(store.engine)
        existing_tables = set(inspector.get_table_names())

        problems = []
        for table in Base.metadata.sorted_tables:
            if table.name not in existing_tables:
                problems.append(f"missing table {table.name}")
                continue

            live_columns = {column["name"] for column in inspector.get_columns(table.name)}
            for column in table.columns:
                if column.name not in live_columns:
                    problems.append(f"missing column {table.name}.{column.name}")
    except SQLAlchemyError as exc:
        raise PersistenceError(str(exc)) from exc

    if problems:
        raise SchemaMismatchError(problems)
