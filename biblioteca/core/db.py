#!/usr/bin/env python

"""
    Database plumbing for Biblioteca: engine construction, the
    declarative Base, the per-request session dependency and the
    transaction helper that maps SQLAlchemy failures onto the
    Biblioteca error taxonomy.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import logging
from contextlib import contextmanager
from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from biblioteca.configs import DB_URI, DEBUG
from biblioteca.core.exceptions import (
    BibliotecaAPIError,
    ConstraintViolationError,
    StorageError,
    StorageUnavailableError,
)

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(uri=DB_URI, echo=DEBUG):
    """Builds an engine for `uri`. SQLite engines enforce foreign keys and
    in-memory SQLite shares one connection across threads.
    """
    engine_kwargs = {'echo': echo}
    if uri.startswith('sqlite'):
        engine_kwargs['connect_args'] = {'check_same_thread': False}
        if ':memory:' in uri or uri == 'sqlite://':
            engine_kwargs['poolclass'] = StaticPool
    else:
        engine_kwargs['client_encoding'] = 'utf8'
    engine = create_engine(uri, **engine_kwargs)
    if uri.startswith('sqlite'):
        event.listen(engine, 'connect', _enable_sqlite_foreign_keys)
    return engine


def make_session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


engine = make_engine()
SessionLocal = make_session_factory(engine)


def init_db(engine_to_init=engine):
    """Initializes the database and creates tables."""
    from biblioteca.core import models  # noqa: F401, registers tables on Base
    Base.metadata.create_all(bind=engine_to_init)


def ping(session):
    return session.execute(text("SELECT 1")).scalar() == 1


def get_db():
    """FastAPI dependency yielding one session per request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def transaction(session):
    """Commits the work done inside the block, or rolls it back and
    re-raises as a Biblioteca error.
    """
    try:
        yield session
        session.commit()
    except BibliotecaAPIError:
        session.rollback()
        raise
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Constraint violation: {e.orig}")
        raise ConstraintViolationError() from e
    except OperationalError as e:
        session.rollback()
        logger.error(f"Database unavailable: {e.orig}")
        raise StorageUnavailableError() from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Database error")
        raise StorageError(f"Database error: {str(e)}.") from e
