from collections.abc import Callable, Iterator
import logging
from typing import TypeVar

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from photogram.core.config import settings

T = TypeVar("T")

engine = create_engine(settings.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def optional_read(
    db: Session,
    load: Callable[[], T],
    *,
    default: T,
    log: logging.Logger,
    message: str,
    context: dict,
) -> T:
    """Run a read inside a savepoint, falling back to ``default`` on database errors.

    The savepoint keeps a failed query from aborting the surrounding transaction.
    """
    try:
        with db.begin_nested():
            return load()
    except SQLAlchemyError:
        log.warning(message, extra=context, exc_info=True)
        return default
