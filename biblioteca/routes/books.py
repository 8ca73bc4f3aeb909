#!/usr/bin/env python

"""
    Book routes for Biblioteca, mounted under /api/libri.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from biblioteca.configs import DEFAULT_LIMIT, MAX_LIMIT
from biblioteca.core.api import BibliotecaAPI, get_api
from biblioteca.core.exceptions import ValidationError
from biblioteca.schemas.book import Book, BookCreate, BookUpdate
from biblioteca.schemas.common import envelope, make_pagination

router = APIRouter()


def _page(api, search, limit, offset):
    books = [Book.model_validate(b) for b in api.books.find_all(search=search, limit=limit, offset=offset)]
    return books, make_pagination(api.books.count(search=search), limit, offset)


@router.get("")
async def list_books(
        search: Optional[str] = None,
        limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
        offset: int = Query(0, ge=0),
        api: BibliotecaAPI = Depends(get_api)):
    books, pagination = _page(api, search.strip() if search else None, limit, offset)
    return envelope(books, pagination=pagination)


@router.get("/search")
async def search_books(
        q: Optional[str] = None,
        limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
        offset: int = Query(0, ge=0),
        api: BibliotecaAPI = Depends(get_api)):
    query = (q or "").strip()
    if not query:
        raise ValidationError("A search query is required", details=["q: is required"])
    books, pagination = _page(api, query, limit, offset)
    body = envelope(books, pagination=pagination)
    body["query"] = query
    return body


@router.get("/{book_id}")
async def get_book(book_id: int, api: BibliotecaAPI = Depends(get_api)):
    return envelope(Book.model_validate(api.books.get(book_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(payload: BookCreate, api: BibliotecaAPI = Depends(get_api)):
    book = api.books.create(payload)
    return envelope(Book.model_validate(book), message="Book created")


@router.put("/{book_id}")
async def update_book(book_id: int, payload: BookUpdate, api: BibliotecaAPI = Depends(get_api)):
    book = api.books.update(book_id, payload)
    return envelope(Book.model_validate(book), message="Book updated")


@router.delete("/{book_id}")
async def delete_book(book_id: int, api: BibliotecaAPI = Depends(get_api)):
    api.books.delete(book_id)
    return envelope(message="Book deleted")
