#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
    tests.test_db
    ~~~~~~~~~~~~~

    This module tests the transaction helper, the demo data loader and
    the alembic migrations.

    :copyright: (c) 2025 by Authors.
    :license: see LICENSE for more details.
"""

import pytest
from pathlib import Path
from unittest.mock import MagicMock
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import OperationalError, ProgrammingError
from biblioteca.core.db import Base, ping, transaction
from biblioteca.core.exceptions import (
    ConstraintViolationError,
    NotFoundError,
    StorageError,
    StorageUnavailableError,
)
from biblioteca.core.models import Book, Member
from biblioteca.core.seed import DEMO_BOOKS, DEMO_MEMBERS, seed_demo_data

ROOT = Path(__file__).resolve().parent.parent


def test_transaction_commits(db_session):
    with transaction(db_session):
        db_session.add(Book(title="Dune", author="Frank Herbert"))
    db_session.rollback()
    assert db_session.query(Book).count() == 1


def test_transaction_rolls_back_on_domain_error(db_session):
    with pytest.raises(NotFoundError):
        with transaction(db_session):
            db_session.add(Book(title="Dune", author="Frank Herbert"))
            db_session.flush()
            raise NotFoundError()
    assert db_session.query(Book).count() == 0


def test_integrity_error_becomes_constraint_violation(db_session):
    db_session.add(Member(first_name="A", last_name="B", email="a@example.com"))
    db_session.commit()

    with pytest.raises(ConstraintViolationError) as excinfo:
        with transaction(db_session):
            db_session.add(Member(first_name="C", last_name="D", email="a@example.com"))
    assert excinfo.value.status_code == 409
    assert db_session.query(Member).count() == 1


def test_operational_error_becomes_unavailable(db_session):
    db_session.commit = MagicMock(side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error")))

    with pytest.raises(StorageUnavailableError) as excinfo:
        with transaction(db_session):
            pass
    assert excinfo.value.status_code == 503


def test_other_database_errors_become_storage_errors(db_session):
    db_session.commit = MagicMock(side_effect=ProgrammingError("COMMIT", {}, Exception("bad sql")))

    with pytest.raises(StorageError) as excinfo:
        with transaction(db_session):
            pass
    assert excinfo.value.status_code == 500


def test_ping(db_session):
    assert ping(db_session) is True


def test_seed_demo_data_is_idempotent(db_session):
    assert seed_demo_data(db_session) == len(DEMO_BOOKS) + len(DEMO_MEMBERS)
    assert seed_demo_data(db_session) == 0
    assert db_session.query(Book).count() == len(DEMO_BOOKS)
    assert db_session.query(Member).count() == len(DEMO_MEMBERS)
    assert all(book.available for book in db_session.query(Book))


def test_migrations_match_models(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = Config()
    config.set_main_option("script_location", str(ROOT / "biblioteca" / "migrations"))
    config.set_main_option("sqlalchemy.url", url)

    command.upgrade(config, "head")

    engine = create_engine(url)
    inspector = inspect(engine)
    assert set(inspector.get_table_names()) == {"alembic_version", "books", "members", "loans"}
    for table in Base.metadata.sorted_tables:
        migrated = {column["name"] for column in inspector.get_columns(table.name)}
        assert migrated == set(table.columns.keys()), table.name

    command.downgrade(config, "base")
    assert set(inspect(engine).get_table_names()) == {"alembic_version"}
    engine.dispose()
