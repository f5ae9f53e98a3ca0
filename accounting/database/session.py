import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Transactional scope around a series of operations.

    Commits on normal exit. On any exception the session is rolled back
    and the exception re-raised unchanged. The session is always closed.
    """
    db = session_factory()
    logger.debug("transaction_started")
    try:
        yield db
        db.commit()
        logger.debug("transaction_committed")
    except Exception:
        db.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        db.close()
