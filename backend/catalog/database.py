"""
Persistence wiring for the item API.

One engine per process, one Session per request. SQLite does not enforce
foreign keys unless asked to on every connection, so engines built here
switch the pragma on; otherwise a brand/category link could point at a row
that does not exist.
"""

import logging
import os
from pathlib import Path
from typing import Any, Generator

from dotenv import load_dotenv
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./catalog.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine for ``url``; extra keyword arguments go to create_engine."""
    if not url.startswith("sqlite"):
        return create_engine(url, **kwargs)

    connect_args = kwargs.pop("connect_args", {})
    # Sessions are handed across threads by FastAPI's threadpool
    connect_args.setdefault("check_same_thread", False)

    if ":memory:" not in url:
        Path(url.split("///", 1)[-1]).parent.mkdir(parents=True, exist_ok=True)

    sqlite_engine = create_engine(url, connect_args=connect_args, **kwargs)
    event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
    logger.debug(f"SQLite engine for {url} with foreign key enforcement")
    return sqlite_engine


engine: Engine = build_engine(DATABASE_URL, echo=SQL_ECHO)


def get_session() -> Generator[Session, None, None]:
    """Request-scoped session"""
    with Session(engine) as session:
        yield session


def create_tables(target: Engine) -> None:
    # Models register themselves with SQLModel.metadata on import
    from catalog.models.brand import Brand  # noqa: F401
    from catalog.models.brand_category import BrandCategory  # noqa: F401
    from catalog.models.category import Category  # noqa: F401

    SQLModel.metadata.create_all(target)


def init_db() -> None:
    create_tables(engine)
