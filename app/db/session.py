import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from app.core.config import settings
from app.db.base import Base

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Create any missing tables. Alembic owns schema changes after the first deploy."""
    from app.db import models  # noqa: F401  registers tables on Base.metadata

    logger.info(f"Creating missing tables on {bind.url.render_as_string(hide_password=True)}")
    Base.metadata.create_all(bind=bind)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a request-scoped database session.

    Yields:
        Database session, closed once the response is sent
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
