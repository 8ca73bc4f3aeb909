#!/usr/bin/env python

"""
    Aggregate/reporting queries over loans. Overdue status is never
    stored; it is recomputed from the due dates of active loans on
    every read.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from typing import List, Optional, Tuple
from biblioteca.core.loans import LoanEngine
from biblioteca.core.models import LoanStatus
from biblioteca.schemas.loan import LoanStats, LoanView


def percentage(part: int, whole: int) -> int:
    """`part / whole` as a whole percentage rounded half up, 0 when `whole` is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


class LoanReports:

    def __init__(self, session, loans: Optional[LoanEngine] = None):
        self.loans = loans or LoanEngine(session)

    def overdue_loans(self) -> List[LoanView]:
        """Every overdue loan, latest due date last."""
        overdue = [view for view in self.loans.active_loans() if view.overdue]
        return sorted(overdue, key=lambda view: (view.due_at, view.id))

    def overdue(self, limit=None, offset=0) -> Tuple[List[LoanView], int]:
        """A page of overdue loans and the total number overdue."""
        overdue = self.overdue_loans()
        end = None if limit is None else offset + limit
        return overdue[offset:end], len(overdue)

    def stats(self) -> LoanStats:
        active = self.loans.count(LoanStatus.ACTIVE)
        overdue = len(self.overdue_loans())
        return LoanStats(
            total=self.loans.count(),
            active=active,
            returned=self.loans.count(LoanStatus.RETURNED),
            overdue=overdue,
            overdue_percentage=percentage(overdue, active),
        )
