#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
    tests.test_reports
    ~~~~~~~~~~~~~~~~~~

    This module tests the overdue listing and loan statistics.

    :copyright: (c) 2025 by Authors.
    :license: see LICENSE for more details.
"""

import datetime
import pytest
from biblioteca.core.reports import percentage


@pytest.mark.parametrize("part, whole, expected", [
    (0, 0, 0),
    (3, 0, 0),
    (0, 5, 0),
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),
    (5, 5, 100),
])
def test_percentage_rounds_half_up(part, whole, expected):
    assert percentage(part, whole) == expected


def test_stats_with_no_loans(api):
    stats = api.reports.stats()
    assert stats.model_dump() == {
        "total": 0, "active": 0, "returned": 0, "overdue": 0, "overdue_percentage": 0,
    }


@pytest.fixture
def lending(api, clock, make_book, make_member):
    """Four loans: two overdue (by 5 and 2 days), one on time, one returned late."""
    member = make_member()
    books = [make_book() for _ in range(4)]
    days = datetime.timedelta(days=1)
    very_late = api.loans.issue(books[0].id, member.id, due_date=clock.now - 5 * days)
    late = api.loans.issue(books[1].id, member.id, due_date=clock.now - 2 * days)
    on_time = api.loans.issue(books[2].id, member.id)
    returned = api.loans.issue(books[3].id, member.id, due_date=clock.now - 10 * days)
    api.loans.return_loan(returned.id)
    return very_late, late, on_time, returned


def test_overdue_lists_only_active_loans_past_due(api, lending):
    very_late, late, on_time, returned = lending

    overdue = api.reports.overdue_loans()

    assert [v.id for v in overdue] == [very_late.id, late.id]
    assert [v.days_late for v in overdue] == [5, 2]
    assert all(v.overdue for v in overdue)


def test_overdue_page_reports_total(api, lending):
    very_late, late, _, _ = lending

    page, total = api.reports.overdue(limit=1, offset=1)

    assert total == 2
    assert [v.id for v in page] == [late.id]


def test_stats(api, lending):
    stats = api.reports.stats()

    assert stats.total == 4
    assert stats.active == 3
    assert stats.returned == 1
    assert stats.overdue == 2
    assert stats.overdue_percentage == 67


def test_stats_follow_the_clock(api, clock, lending):
    clock.advance(days=31)
    stats = api.reports.stats()
    assert stats.overdue == 3
    assert stats.overdue_percentage == 100
