#!/usr/bin/env python
"""
    Book Schemas for Biblioteca.

    `BookUpdate` lists every field a client may change; the availability
    flag is owned by the loan lifecycle and is deliberately absent.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import datetime
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from biblioteca.schemas.common import required_text, optional_text

MIN_PUBLICATION_YEAR = 1000


def _plausible_year(year: Optional[int]) -> Optional[int]:
    if year is not None and not (MIN_PUBLICATION_YEAR <= year <= datetime.date.today().year):
        raise ValueError("must be a valid publication year")
    return year


class BookCreate(BaseModel):
    title: str = Field(..., max_length=255)
    author: str = Field(..., max_length=255)
    isbn: Optional[str] = Field(None, max_length=32)
    publication_year: Optional[int] = None
    genre: Optional[str] = Field(None, max_length=100)

    @field_validator('title', 'author')
    @classmethod
    def check_required(cls, value):
        return required_text(value)

    @field_validator('isbn', 'genre')
    @classmethod
    def check_optional(cls, value):
        return optional_text(value)

    @field_validator('publication_year')
    @classmethod
    def check_year(cls, value):
        return _plausible_year(value)

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Dune",
                "author": "Frank Herbert",
                "isbn": "978-88-04-12348-7",
                "publication_year": 1965,
                "genre": "Science fiction"
            }
        }


class BookUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    author: Optional[str] = Field(None, max_length=255)
    isbn: Optional[str] = Field(None, max_length=32)
    publication_year: Optional[int] = None
    genre: Optional[str] = Field(None, max_length=100)

    @field_validator('title', 'author')
    @classmethod
    def check_required(cls, value):
        return required_text(value)

    @field_validator('isbn', 'genre')
    @classmethod
    def check_optional(cls, value):
        return optional_text(value)

    @field_validator('publication_year')
    @classmethod
    def check_year(cls, value):
        return _plausible_year(value)


class Book(BaseModel):
    id: int
    title: str
    author: str
    isbn: Optional[str] = None
    publication_year: Optional[int] = None
    genre: Optional[str] = None
    available: bool
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    class Config:
        from_attributes = True
