"""
Database engine, session factory and schema bootstrap
"""
import logging
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from retail_orders.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_fk(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_store_engine(url: str, **kwargs) -> Engine:
    """
    Create an engine for the backing store

    SQLite connections get foreign key enforcement so that the store
    rejects orphan order lines and assignments the same way Postgres does.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(url, echo=settings.DATABASE_ECHO, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_fk)
    return engine


engine = create_store_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """Dependency yielding one session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@retry(
    stop=stop_after_attempt(settings.MAX_RETRIES),
    wait=wait_exponential(multiplier=settings.RETRY_DELAY, min=1, max=10),
    retry=retry_if_exception_type(OperationalError),
    reraise=True
)
def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create tables and seed the identity sequences

    Retried while the store is unreachable; safe to call repeatedly.
    """
    # Register models on Base.metadata
    from retail_orders.models import IdSequence
    from retail_orders.repositories.sequence_repository import SequenceRepository

    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    with Session(bind=bind, expire_on_commit=False) as db:
        SequenceRepository(db).ensure(IdSequence.NAMES, settings.SEQUENCE_START)

    logger.info("Database schema ready on %s", bind.url.render_as_string(hide_password=True))
