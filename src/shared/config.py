"""Runtime configuration loaded from environment variables.

``STOREFRONT_ENV`` selects an overlay of defaults, in the same way the
environment name picks a config section elsewhere in the platform:

    development  -> local SQLite file, seed on startup
    test         -> in-memory SQLite, no seeding
    staging      -> like production
    production   -> PostgreSQL built from DB_* variables, seed on startup

Explicit variables (``DATABASE_URL``, ``SEED_ON_STARTUP`` ...) always win over
the overlay.
"""

import os
from dataclasses import dataclass

from sqlalchemy.engine import URL

DEFAULT_DB_NAME = "mikes_macaroon_market"

_OVERLAYS = {
    "development": {"database_url": "sqlite:///./macaroon_market.db", "seed_on_startup": True},
    "test": {"database_url": "sqlite://", "seed_on_startup": False},
    "staging": {"database_url": None, "seed_on_startup": True},
    "production": {"database_url": None, "seed_on_startup": True},
}


@dataclass(frozen=True)
class Settings:
    env: str
    database_url: str
    sql_echo: bool = False
    seed_on_startup: bool = True


def get_env() -> str:
    env = (os.getenv("STOREFRONT_ENV") or os.getenv("ENVIRONMENT") or "development").lower()
    return env if env in _OVERLAYS else "development"


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _postgres_url() -> str:
    """Build a PostgreSQL URL from the discrete DB_* variables."""
    url = URL.create(
        "postgresql+psycopg2",
        username=os.getenv("DB_USER", "postgres"),
        password=os.getenv("DB_PASS", "postgres"),
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "5432")),
        database=os.getenv("DB_NAME", DEFAULT_DB_NAME),
    )
    return url.render_as_string(hide_password=False)


def load_settings() -> Settings:
    env = get_env()
    overlay = _OVERLAYS[env]

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        if os.getenv("DB_HOST") or overlay["database_url"] is None:
            database_url = _postgres_url()
        else:
            database_url = overlay["database_url"]

    return Settings(
        env=env,
        database_url=database_url,
        sql_echo=_flag("SQL_ECHO", False),
        seed_on_startup=_flag("SEED_ON_STARTUP", overlay["seed_on_startup"]),
    )
