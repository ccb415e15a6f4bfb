import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helpdesk.config import get_settings
from helpdesk.infrastructure.database import SessionLocal, engine, initialize_database
from helpdesk.infrastructure.realtime import build_realtime_hub
from helpdesk.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepara a base de dados e o registo de ligações; liberta-os no fim."""

    initialize_database()
    app.state.realtime = build_realtime_hub(SessionLocal, get_settings())
    logger.info("Realtime hub ready")
    yield
    logger.info(
        "Shutting down with %d live connection(s)",
        app.state.realtime.registry.connection_count(),
    )
    engine.dispose()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI principal."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Helpdesk API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    # Liveness of websockets relies on the server's ping/pong frames.
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        ws_ping_interval=settings.ws_ping_interval,
        ws_ping_timeout=settings.ws_ping_timeout,
    )
