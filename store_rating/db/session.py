import logging
from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from store_rating.core.config import get_settings
from store_rating.model import Base

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """Build a full SQLAlchemy URL from granular env settings."""
    settings = get_settings()
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    return (
        f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASSWORD}"
        f"@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
        "?options=-csearch_path%3Dpublic"
    )


@lru_cache()
def get_engine() -> Engine:
    return create_engine(get_database_url(), pool_pre_ping=True)


@lru_cache()
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db():
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine = None):
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine or get_engine())


def check_connection() -> bool:
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception:
        logger.exception("Database connection failed")
        return False
