from fastapi import FastAPI

from .auth import router as auth_router
from .notifications import router as notifications_router
from .tickets import router as tickets_router


def register_routes(app: FastAPI) -> None:
    """Regista todos os routers da API na aplicação FastAPI."""

    app.include_router(auth_router)
    app.include_router(notifications_router)
    app.include_router(tickets_router)
