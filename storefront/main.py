# storefront/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from storefront.api import register_routers
from storefront.data.database import Base, engine
from storefront.utils.logging import get_logger
from storefront.utils.retry import db_retry
from storefront.utils.settings import SERVER_PORT

# import wszystkich modeli przed create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


@db_retry()
def init_db(bind=None):
    bind = bind or engine
    logger.info(f"Initializing database, tables: {sorted(Base.metadata.tables)}")
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Footwear Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )
    return register_routers(app)


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=SERVER_PORT)
