#!/usr/bin/env python

"""
    ORM models for Biblioteca: books, members and the loans
    connecting them.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from sqlalchemy import Column, String, Boolean, Integer, DateTime, Text, Enum as SQLAlchemyEnum
from sqlalchemy import ForeignKey
from sqlalchemy.sql import func
from biblioteca.core.db import Base
from biblioteca.core.utils import utcnow, days_between
import enum


class LoanStatus(str, enum.Enum):
    ACTIVE = 'active'
    RETURNED = 'returned'


class Book(Base):
    __tablename__ = 'books'

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    isbn = Column(String(32), unique=True, nullable=True)
    publication_year = Column(Integer)
    genre = Column(String(100))
    # Cached: False iff an active loan references this book
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class Member(Base):
    __tablename__ = 'members'

    id = Column(Integer, primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    phone = Column(String(32))
    address = Column(Text)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class Loan(Base):
    __tablename__ = 'loans'

    id = Column(Integer, primary_key=True)
    book_id = Column(Integer, ForeignKey('books.id'), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey('members.id'), nullable=False, index=True)
    loaned_at = Column(DateTime, nullable=False)
    due_at = Column(DateTime, nullable=False)
    returned_at = Column(DateTime, nullable=True)
    status = Column(
        SQLAlchemyEnum(
            LoanStatus, name='loan_status',
            values_callable=lambda statuses: [s.value for s in statuses]),
        default=LoanStatus.ACTIVE, nullable=False, index=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    @property
    def is_active(self):
        return self.status == LoanStatus.ACTIVE

    def is_overdue(self, now=None):
        """True while the loan is active and its due date has passed.
        Returned loans are never overdue, even if they came back late.
        """
        if not self.is_active or self.due_at is None:
            return False
        return (now or utcnow()) > self.due_at

    def days_late(self, now=None):
        now = now or utcnow()
        if not self.is_overdue(now):
            return 0
        return days_between(self.due_at, now)

    def __repr__(self):
        return f"<Loan {self.id} book={self.book_id} member={self.member_id} {getattr(self.status, 'value', self.status)}>"
