#!/usr/bin/env python

"""
    BibliotecaAPI composes the registries, the loan engine and the
    reports over one database session. Routes receive it through the
    `get_api` dependency, which is the single place a session is bound.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import logging
from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from biblioteca.core.books import BookRegistry
from biblioteca.core.db import get_db, ping
from biblioteca.core.loans import LoanEngine
from biblioteca.core.members import MemberRegistry
from biblioteca.core.reports import LoanReports
from biblioteca.core.utils import utcnow

logger = logging.getLogger(__name__)


class BibliotecaAPI:

    def __init__(self, session, clock=utcnow):
        self.session = session
        self.books = BookRegistry(session)
        self.members = MemberRegistry(session)
        self.loans = LoanEngine(session, books=self.books, members=self.members, clock=clock)
        self.reports = LoanReports(session, loans=self.loans)

    def database_ok(self) -> bool:
        try:
            return ping(self.session)
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return False


def get_api(session=Depends(get_db)) -> BibliotecaAPI:
    return BibliotecaAPI(session)
