#!/usr/bin/env python

"""
    Book Registry for Biblioteca.

    Holds the catalogue and the cached `available` flag on each book.
    The flag is only written by the loan lifecycle, through
    `set_available` and `claim`.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import logging
from typing import List, Optional
from sqlalchemy import exists, or_
from biblioteca.configs import DEFAULT_LIMIT
from biblioteca.core.db import transaction
from biblioteca.core.exceptions import BookNotFoundError, IsbnExistsError
from biblioteca.core.models import Book, Loan, LoanStatus
from biblioteca.core.utils import LIKE_ESCAPE, contains_pattern
from biblioteca.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)


class BookRegistry:

    def __init__(self, session):
        self.session = session

    def find_by_id(self, book_id) -> Optional[Book]:
        return self.session.get(Book, book_id)

    def get(self, book_id) -> Book:
        if book := self.find_by_id(book_id):
            return book
        raise BookNotFoundError()

    def exists(self, book_id) -> bool:
        return self.session.query(exists().where(Book.id == book_id)).scalar()

    def find_by_isbn(self, isbn) -> Optional[Book]:
        return self.session.query(Book).filter(Book.isbn == isbn).first()

    def _search(self, search=None):
        query = self.session.query(Book)
        if search:
            term = contains_pattern(search)
            query = query.filter(or_(
                Book.title.ilike(term, escape=LIKE_ESCAPE),
                Book.author.ilike(term, escape=LIKE_ESCAPE),
                Book.genre.ilike(term, escape=LIKE_ESCAPE),
            ))
        return query

    def find_all(self, search=None, limit=DEFAULT_LIMIT, offset=0) -> List[Book]:
        return self._search(search).order_by(
            Book.title, Book.id).offset(offset).limit(limit).all()

    def count(self, search=None) -> int:
        return self._search(search).count()

    def create(self, data: BookCreate) -> Book:
        if data.isbn and self.find_by_isbn(data.isbn):
            raise IsbnExistsError()
        book = Book(**data.model_dump(), available=True)
        with transaction(self.session):
            self.session.add(book)
        logger.info(f"Book {book.id} created: {book.title!r}")
        return book

    def update(self, book_id, data: BookUpdate) -> Book:
        book = self.get(book_id)
        changes = data.model_dump(exclude_unset=True)
        isbn = changes.get('isbn')
        if isbn and isbn != book.isbn and self.find_by_isbn(isbn):
            raise IsbnExistsError()
        with transaction(self.session):
            for field, value in changes.items():
                setattr(book, field, value)
        return book

    def delete(self, book_id) -> None:
        book = self.get(book_id)
        with transaction(self.session):
            self.session.delete(book)
        logger.info(f"Book {book_id} deleted")

    def set_available(self, book_id, available: bool) -> None:
        """Writes the availability flag. Does not commit, so the caller
        can make it part of a larger transaction.
        """
        self.session.query(Book).filter(Book.id == book_id).update(
            {Book.available: available}, synchronize_session=False)

    def claim(self, book_id) -> bool:
        """Marks the book unavailable, but only if its flag is still set
        and no active loan references it. Returns False when the claim
        lost. Does not commit.

        Racing claims serialise on the book row: the loser re-reads the
        committed row and finds `available` already False.
        """
        active_loan = exists().where(
            Loan.book_id == book_id, Loan.status == LoanStatus.ACTIVE)
        claimed = self.session.query(Book).filter(
            Book.id == book_id,
            Book.available.is_(True),
            ~active_loan
        ).update({Book.available: False}, synchronize_session=False)
        return claimed == 1
