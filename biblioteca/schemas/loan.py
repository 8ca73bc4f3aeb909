#!/usr/bin/env python
"""
    Loan Schemas for Biblioteca.

    `LoanView` is the read model served to clients: the durable loan
    fields, the values derived from the clock (`overdue`, `days_late`)
    and display fields joined in from the book and the member. None of
    the derived or joined values are stored on the loan itself.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from biblioteca.core.models import LoanStatus
from biblioteca.core.utils import utcnow


class LoanCreate(BaseModel):
    book_id: int = Field(..., gt=0)
    member_id: int = Field(..., gt=0)
    due_date: Optional[datetime] = Field(
        None, description="Defaults to the configured loan period after today")

    class Config:
        json_schema_extra = {
            "example": {
                "book_id": 1,
                "member_id": 2
            }
        }


class LoanView(BaseModel):
    id: int
    book_id: int
    member_id: int
    loaned_at: datetime
    due_at: datetime
    returned_at: Optional[datetime] = None
    status: LoanStatus
    overdue: bool = False
    days_late: int = 0
    book_title: Optional[str] = None
    book_author: Optional[str] = None
    member_first_name: Optional[str] = None
    member_last_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_loan(cls, loan, now=None, **joined):
        now = now or utcnow()
        return cls(
            id=loan.id,
            book_id=loan.book_id,
            member_id=loan.member_id,
            loaned_at=loan.loaned_at,
            due_at=loan.due_at,
            returned_at=loan.returned_at,
            status=loan.status,
            overdue=loan.is_overdue(now),
            days_late=loan.days_late(now),
            created_at=loan.created_at,
            updated_at=loan.updated_at,
            **joined
        )


class LoanStats(BaseModel):
    total: int
    active: int
    returned: int
    overdue: int
    overdue_percentage: int
