# storefront/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

# register every model on Base.metadata before create_all
import storefront.data.models  # noqa: F401
from storefront.api import ROUTERS
from storefront.data.database import Base, engine
from storefront.data.seed import seed
from storefront.services.session import session_events
from storefront.utils.logging import get_logger
from storefront.utils.settings import SEED_DEMO_DATA

logger = get_logger(__name__)


def _log_session_event(event, ctx):
    logger.info(f"Session {event}: user={ctx.user_id} admin={ctx.is_admin}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    if SEED_DEMO_DATA:
        seed()

    unsubscribe = session_events.subscribe(_log_session_event)
    try:
        yield
    finally:
        unsubscribe()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
