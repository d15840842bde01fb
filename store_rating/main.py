import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from store_rating.core.config import get_settings
from store_rating.core.errors import register_exception_handlers
from store_rating.core.log import setup_logging
from store_rating.db.session import check_connection, init_db
from store_rating.middleware.auth_middleware import AuthMiddleware
from store_rating.routers.auth_router import router as auth_router
from store_rating.routers.dashboard_router import router as dashboard_router
from store_rating.routers.rating_router import router as rating_router
from store_rating.routers.store_router import router as store_router
from store_rating.routers.user_router import router as user_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # fails fast when SECRET_KEY is missing
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting store rating service (%s)", settings.ENVIRONMENT)
    if check_connection():
        init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Store Rating Service", version="1.0.0", lifespan=lifespan)
    register_exception_handlers(app)
    app.add_middleware(AuthMiddleware)
    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(store_router)
    app.include_router(rating_router)
    app.include_router(dashboard_router)

    @app.get("/ping")
    def ping():
        return {"ping": "pong"}

    return app


app = create_app()


def run():
    import uvicorn

    settings = get_settings()
    uvicorn.run("store_rating.main:app", host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    run()
