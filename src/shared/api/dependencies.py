"""FastAPI dependencies that hand the application's Store to request handlers."""

from fastapi import Request

from shared.store import Store


def get_store(request: Request) -> Store:
    return request.app.state.store
