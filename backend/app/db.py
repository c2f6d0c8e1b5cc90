from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

load_dotenv()

logger = logging.getLogger(__name__)


def _get_database_url() -> str:
    database_url = os.getenv("DATABASE_URL") or os.getenv("SQLALCHEMY_DATABASE_URL")
    if not database_url:
        raise RuntimeError(
            "DATABASE_URL or SQLALCHEMY_DATABASE_URL must be set to create the database engine."
        )
    return database_url


def _build_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        return create_engine(database_url, future=True, connect_args=connect_args)
    return create_engine(database_url, future=True, pool_pre_ping=True)


DATABASE_URL = _get_database_url()
engine = _build_engine(DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


class Base(DeclarativeBase):
    pass


def init_db(bind: Engine = engine, *, reset: bool = False) -> None:
    """
    Create the contract tables directly from the ORM metadata.
    Production databases go through the Alembic migrations instead.
    """
    import backend.app.models  # noqa: F401

    if reset:
        Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)
    logger.info("Initialized schema on %s", bind.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
