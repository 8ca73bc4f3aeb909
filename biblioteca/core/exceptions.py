#!/usr/bin/env python

"""
    Error taxonomy for Biblioteca.

    Every error raised by the core carries the HTTP status the web layer
    should answer with, so routes never translate errors by hand.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from typing import List, Optional


class BibliotecaAPIError(Exception):

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[str]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(BibliotecaAPIError):
    status_code = 400
    default_message = "Invalid data"


class NotFoundError(BibliotecaAPIError):
    status_code = 404
    default_message = "Resource not found"

class BookNotFoundError(NotFoundError):
    default_message = "Book not found"

class MemberNotFoundError(NotFoundError):
    default_message = "Member not found"

class LoanNotFoundError(NotFoundError):
    default_message = "Loan not found"


class ConflictError(BibliotecaAPIError):
    status_code = 409
    default_message = "Conflict"

class BookUnavailableError(ConflictError):
    default_message = "The book is not available for loan"

class LoanAlreadyReturnedError(ConflictError):
    default_message = "The loan has already been returned"

class LoanNotReturnedError(ConflictError):
    status_code = 400
    default_message = "The loan must be returned before it can be deleted"

class EmailExistsError(ConflictError):
    default_message = "A member with this email already exists"

class IsbnExistsError(ConflictError):
    default_message = "A book with this ISBN already exists"


class StorageError(BibliotecaAPIError):
    status_code = 500
    default_message = "Database error"

class ConstraintViolationError(StorageError):
    status_code = 409
    default_message = "Resource already exists or is still in use"

class StorageUnavailableError(StorageError):
    status_code = 503
    default_message = "Unable to reach the database"
