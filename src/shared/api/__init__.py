"""HTTP helpers shared by the context routers."""

from shared.api.dependencies import get_store

__all__ = ["get_store"]
