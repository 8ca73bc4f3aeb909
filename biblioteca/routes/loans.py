#!/usr/bin/env python

"""
    Loan routes for Biblioteca, mounted under /api/prestiti.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from biblioteca.configs import DEFAULT_LIMIT, MAX_LIMIT
from biblioteca.core.api import BibliotecaAPI, get_api
from biblioteca.core.models import LoanStatus
from biblioteca.schemas.book import Book
from biblioteca.schemas.common import envelope, make_pagination
from biblioteca.schemas.loan import LoanCreate

router = APIRouter()


@router.get("")
async def list_loans(
        loan_status: Optional[LoanStatus] = Query(None, alias="status"),
        search: Optional[str] = None,
        limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
        offset: int = Query(0, ge=0),
        api: BibliotecaAPI = Depends(get_api)):
    search = search.strip() if search else None
    loans = api.loans.find_all(status=loan_status, search=search, limit=limit, offset=offset)
    total = api.loans.count(status=loan_status, search=search)
    return envelope(loans, pagination=make_pagination(total, limit, offset))


@router.get("/stats")
async def loan_stats(api: BibliotecaAPI = Depends(get_api)):
    return envelope(api.reports.stats())


@router.get("/scaduti")
async def overdue_loans(
        limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
        offset: int = Query(0, ge=0),
        api: BibliotecaAPI = Depends(get_api)):
    loans, total = api.reports.overdue(limit=limit, offset=offset)
    return envelope(loans, pagination=make_pagination(total, limit, offset))


@router.get("/libro/{book_id}")
async def loans_by_book(
        book_id: int,
        loan_status: Optional[LoanStatus] = Query(None, alias="status"),
        api: BibliotecaAPI = Depends(get_api)):
    book = api.books.get(book_id)
    return envelope({
        "book": Book.model_validate(book),
        "loans": api.loans.find_by_book(book_id, status=loan_status),
    })


@router.get("/{loan_id}")
async def get_loan(loan_id: int, api: BibliotecaAPI = Depends(get_api)):
    return envelope(api.loans.get_view(loan_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_loan(payload: LoanCreate, api: BibliotecaAPI = Depends(get_api)):
    loan = api.loans.issue(payload.book_id, payload.member_id, due_date=payload.due_date)
    return envelope(api.loans.get_view(loan.id), message="Loan created")


@router.put("/{loan_id}/restituisci")
async def return_loan(loan_id: int, api: BibliotecaAPI = Depends(get_api)):
    loan = api.loans.return_loan(loan_id)
    return envelope(api.loans.get_view(loan.id), message="Loan returned")


@router.delete("/{loan_id}")
async def delete_loan(loan_id: int, api: BibliotecaAPI = Depends(get_api)):
    api.loans.delete(loan_id)
    return envelope(message="Loan deleted")
