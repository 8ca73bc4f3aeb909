#!/usr/bin/env python

"""
    Loan Lifecycle Engine for Biblioteca.

    Owns loan records and keeps each book's cached `available` flag in
    step with them:

    - issue:  active loan inserted, book marked unavailable
    - return: loan marked returned, book marked available
    - delete: only once returned; availability is left untouched

    Each transition writes the loan and the book in a single
    transaction. Issue claims the book with a conditional update on its
    own row (flag still set, no active loan), so of two requests racing
    on one book only the first to commit wins; the other matches no row
    once the winner commits. Return is guarded the same way on the loan
    row.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import datetime
import logging
from typing import List, Optional
from sqlalchemy import or_
from biblioteca.configs import DEFAULT_LIMIT, LOAN_PERIOD_DAYS
from biblioteca.core.books import BookRegistry
from biblioteca.core.db import transaction
from biblioteca.core.exceptions import (
    BookUnavailableError,
    LoanAlreadyReturnedError,
    LoanNotFoundError,
    LoanNotReturnedError,
    ValidationError,
)
from biblioteca.core.members import MemberRegistry
from biblioteca.core.models import Book, Loan, LoanStatus, Member
from biblioteca.core.utils import LIKE_ESCAPE, contains_pattern, utcnow, to_naive_utc
from biblioteca.schemas.loan import LoanView

logger = logging.getLogger(__name__)


class LoanEngine:

    def __init__(self, session, books=None, members=None, clock=utcnow,
                 loan_period_days=LOAN_PERIOD_DAYS):
        self.session = session
        self.books = books or BookRegistry(session)
        self.members = members or MemberRegistry(session)
        self.clock = clock
        self.loan_period = datetime.timedelta(days=loan_period_days)

    @staticmethod
    def _validate_ids(book_id, member_id):
        # Book and member ids live in separate sequences; equal values are fine.
        errors = []
        for field, value in (("book_id", book_id), ("member_id", member_id)):
            if value is None:
                errors.append(f"{field}: is required")
            elif isinstance(value, bool) or not isinstance(value, int) or value < 1:
                errors.append(f"{field}: must be a positive integer")
        if errors:
            raise ValidationError("Invalid loan data", details=errors)

    def find_by_id(self, loan_id) -> Optional[Loan]:
        return self.session.get(Loan, loan_id)

    def get(self, loan_id) -> Loan:
        if loan := self.find_by_id(loan_id):
            return loan
        raise LoanNotFoundError()

    def is_book_available(self, book_id) -> bool:
        """True iff no active loan references the book. This, not the
        book's cached flag, is the authority on availability.
        """
        return self.session.query(Loan.id).filter(
            Loan.book_id == book_id,
            Loan.status == LoanStatus.ACTIVE
        ).first() is None

    def issue(self, book_id, member_id, due_date=None) -> Loan:
        """
        Lend a book to a member.

        Args:
            book_id: The book to lend.
            member_id: The borrowing member.
            due_date: Optional due date; defaults to the loan period from now.
                May lie in the past.

        Returns:
            The newly created active Loan.

        Raises:
            ValidationError: If an identifier is missing or malformed.
            BookNotFoundError: If the book does not exist.
            MemberNotFoundError: If the member does not exist.
            BookUnavailableError: If the book already has an active loan.
        """
        self._validate_ids(book_id, member_id)
        self.books.get(book_id)
        self.members.get(member_id)

        if not self.is_book_available(book_id):
            logger.warning(f"Loan refused: book {book_id} is already on loan")
            raise BookUnavailableError()

        now = self.clock()
        due_at = to_naive_utc(due_date) if due_date else now + self.loan_period
        loan = Loan(
            book_id=book_id,
            member_id=member_id,
            loaned_at=now,
            due_at=due_at,
            status=LoanStatus.ACTIVE,
        )
        with transaction(self.session):
            if not self.books.claim(book_id):
                logger.warning(f"Loan refused: book {book_id} was claimed concurrently")
                raise BookUnavailableError()
            self.session.add(loan)
        logger.info(f"Loan {loan.id} issued: book {book_id} to member {member_id}, due {due_at:%Y-%m-%d}")
        return loan

    def return_loan(self, loan_id) -> Loan:
        """Marks an active loan returned and makes its book available again.

        Raises:
            LoanNotFoundError: If the loan does not exist.
            LoanAlreadyReturnedError: If the loan was already returned.
        """
        loan = self.get(loan_id)
        if not loan.is_active:
            raise LoanAlreadyReturnedError()

        now = self.clock()
        with transaction(self.session):
            returned = self.session.query(Loan).filter(
                Loan.id == loan_id,
                Loan.status == LoanStatus.ACTIVE
            ).update({
                Loan.status: LoanStatus.RETURNED,
                Loan.returned_at: now,
            }, synchronize_session=False)
            if not returned:
                raise LoanAlreadyReturnedError()
            self.books.set_available(loan.book_id, True)
        self.session.refresh(loan)
        logger.info(f"Loan {loan_id} returned: book {loan.book_id} available again")
        return loan

    def delete(self, loan_id) -> None:
        """Removes a returned loan. Active loans are refused so the book's
        availability flag cannot be left pointing at a deleted loan.

        Raises:
            LoanNotFoundError: If the loan does not exist.
            LoanNotReturnedError: If the loan is still active.
        """
        loan = self.get(loan_id)
        if loan.returned_at is None:
            logger.warning(f"Refusing to delete active loan {loan_id}")
            raise LoanNotReturnedError()
        with transaction(self.session):
            self.session.delete(loan)
        logger.info(f"Loan {loan_id} deleted")

    def _view_query(self):
        return self.session.query(
            Loan, Book.title, Book.author, Member.first_name, Member.last_name
        ).outerjoin(
            Book, Loan.book_id == Book.id
        ).outerjoin(
            Member, Loan.member_id == Member.id
        )

    def _filtered(self, query, status=None, search=None):
        if status:
            query = query.filter(Loan.status == LoanStatus(status))
        if search:
            term = contains_pattern(search)
            query = query.filter(or_(
                Book.title.ilike(term, escape=LIKE_ESCAPE),
                Book.author.ilike(term, escape=LIKE_ESCAPE),
                Member.first_name.ilike(term, escape=LIKE_ESCAPE),
                Member.last_name.ilike(term, escape=LIKE_ESCAPE),
            ))
        return query

    def _views(self, rows) -> List[LoanView]:
        now = self.clock()
        return [
            LoanView.from_loan(
                loan, now,
                book_title=title, book_author=author,
                member_first_name=first_name, member_last_name=last_name,
            )
            for loan, title, author, first_name, last_name in rows
        ]

    @staticmethod
    def _newest_first(query):
        return query.order_by(Loan.loaned_at.desc(), Loan.id.desc())

    def get_view(self, loan_id) -> LoanView:
        row = self._view_query().filter(Loan.id == loan_id).first()
        if row is None:
            raise LoanNotFoundError()
        return self._views([row])[0]

    def find_all(self, status=None, search=None, limit=DEFAULT_LIMIT, offset=0) -> List[LoanView]:
        query = self._newest_first(self._filtered(self._view_query(), status, search))
        return self._views(query.offset(offset).limit(limit).all())

    def count(self, status=None, search=None) -> int:
        query = self.session.query(Loan).outerjoin(
            Book, Loan.book_id == Book.id
        ).outerjoin(
            Member, Loan.member_id == Member.id
        )
        return self._filtered(query, status, search).count()

    def find_by_book(self, book_id, status=None) -> List[LoanView]:
        query = self._filtered(self._view_query(), status).filter(Loan.book_id == book_id)
        return self._views(self._newest_first(query).all())

    def find_by_member(self, member_id, status=None) -> List[LoanView]:
        query = self._filtered(self._view_query(), status).filter(Loan.member_id == member_id)
        return self._views(self._newest_first(query).all())

    def active_loans(self) -> List[LoanView]:
        return self.find_by_status(LoanStatus.ACTIVE)

    def find_by_status(self, status) -> List[LoanView]:
        query = self._filtered(self._view_query(), status)
        return self._views(self._newest_first(query).all())
