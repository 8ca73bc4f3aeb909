#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
    tests.test_registries
    ~~~~~~~~~~~~~~~~~~~~~

    This module tests the book and member registries.

    :copyright: (c) 2025 by Authors.
    :license: see LICENSE for more details.
"""

import datetime
import pytest
from pydantic import ValidationError as SchemaError
from biblioteca.core.exceptions import (
    BookNotFoundError,
    ConstraintViolationError,
    EmailExistsError,
    IsbnExistsError,
    MemberNotFoundError,
)
from biblioteca.schemas.book import BookCreate, BookUpdate
from biblioteca.schemas.member import MemberCreate, MemberUpdate


def test_create_book_is_available(api, make_book):
    book = make_book(title="  Dune ", author="Frank Herbert", isbn="", genre="Sci-fi")

    assert book.id is not None
    assert book.title == "Dune"
    assert book.isbn is None
    assert book.available is True
    assert api.books.exists(book.id) is True
    assert api.books.exists(book.id + 1) is False


def test_duplicate_isbn_is_rejected(make_book):
    make_book(isbn="978-88-04-12348-7")
    make_book()
    make_book()
    with pytest.raises(IsbnExistsError):
        make_book(isbn="978-88-04-12348-7")


@pytest.mark.parametrize("fields", [
    {"title": "", "author": "A"},
    {"title": "   ", "author": "A"},
    {"title": "T"},
    {"title": "T", "author": "A", "publication_year": 999},
    {"title": "T", "author": "A", "publication_year": datetime.date.today().year + 1},
])
def test_invalid_book_data(fields):
    with pytest.raises(SchemaError):
        BookCreate(**fields)


def test_update_book_changes_only_given_fields(api, make_book):
    book = make_book(title="Dune", author="Frank Herbert", genre="Sci-fi")

    api.books.update(book.id, BookUpdate(title="Dune Messiah"))

    api.session.expire_all()
    book = api.books.get(book.id)
    assert book.title == "Dune Messiah"
    assert book.author == "Frank Herbert"
    assert book.genre == "Sci-fi"


def test_update_cannot_touch_availability(api, make_book):
    book = make_book()
    api.books.update(book.id, BookUpdate(available=False, genre="Essay"))
    assert api.books.get(book.id).available is True


def test_update_rejects_null_title():
    with pytest.raises(SchemaError):
        BookUpdate(title=None)


def test_update_book_to_existing_isbn(api, make_book):
    make_book(isbn="111-1")
    book = make_book(isbn="222-2")
    with pytest.raises(IsbnExistsError):
        api.books.update(book.id, BookUpdate(isbn="111-1"))
    api.books.update(book.id, BookUpdate(isbn="222-2"))


def test_missing_book(api):
    assert api.books.find_by_id(5) is None
    with pytest.raises(BookNotFoundError):
        api.books.get(5)
    with pytest.raises(BookNotFoundError):
        api.books.update(5, BookUpdate(title="x"))
    with pytest.raises(BookNotFoundError):
        api.books.delete(5)


def test_find_books_by_title_order_and_search(api, make_book):
    make_book(title="Neuromancer", author="William Gibson", genre="Cyberpunk")
    make_book(title="1984", author="George Orwell", genre="Dystopia")
    make_book(title="Dune", author="Frank Herbert", genre="Science fiction")

    assert [b.title for b in api.books.find_all()] == ["1984", "Dune", "Neuromancer"]
    assert [b.title for b in api.books.find_all(limit=1, offset=1)] == ["Dune"]
    assert [b.title for b in api.books.find_all(search="cyber")] == ["Neuromancer"]
    assert [b.title for b in api.books.find_all(search="ORWELL")] == ["1984"]
    assert api.books.count() == 3
    assert api.books.count(search="e") == 3


def test_set_available(api, make_book):
    book = make_book()
    api.books.set_available(book.id, False)
    api.session.commit()
    assert api.books.get(book.id).available is False


def test_claim_requires_available_flag(api, make_book):
    taken, free = make_book(), make_book()
    api.books.set_available(taken.id, False)
    api.session.commit()

    assert api.books.claim(taken.id) is False
    assert api.books.claim(free.id) is True
    api.session.commit()
    assert api.books.get(free.id).available is False


@pytest.mark.parametrize("search, expected", [
    ("100%", ["100% Cotton"]),
    ("%", ["100% Cotton"]),
    ("_", ["Snake_case"]),
    ("e_c", ["Snake_case"]),
])
def test_find_books_matches_wildcards_literally(api, make_book, search, expected):
    make_book(title="100% Cotton")
    make_book(title="Snake_case")
    make_book(title="Dune")

    assert [b.title for b in api.books.find_all(search=search)] == expected
    assert api.books.count(search=search) == len(expected)


def test_delete_book_with_loans_is_refused(api, make_book, make_member):
    book, member = make_book(), make_member()
    api.loans.issue(book.id, member.id)

    with pytest.raises(ConstraintViolationError):
        api.books.delete(book.id)

    assert api.books.exists(book.id)


def test_delete_book(api, make_book):
    book = make_book()
    api.books.delete(book.id)
    assert api.books.find_by_id(book.id) is None


def test_create_member(api, make_member):
    member = make_member(first_name="Mario", last_name="Rossi", email="mario.rossi@example.com",
                         phone="+39 333-1234567", address="  ")

    assert member.id is not None
    assert member.phone == "+39 333-1234567"
    assert member.address is None
    assert api.members.exists(member.id)
    assert api.members.exists_by_email("MARIO.ROSSI@example.com")
    assert not api.members.exists_by_email("someone@example.com")


def test_duplicate_email_is_rejected(make_member):
    make_member(email="mario.rossi@example.com")
    with pytest.raises(EmailExistsError):
        make_member(email="Mario.Rossi@example.com")


@pytest.mark.parametrize("fields", [
    {"first_name": "", "last_name": "Rossi", "email": "m@example.com"},
    {"first_name": "Mario", "last_name": "Rossi", "email": "not-an-email"},
    {"first_name": "Mario", "last_name": "Rossi"},
    {"first_name": "Mario", "last_name": "Rossi", "email": "m@example.com", "phone": "12-34"},
    {"first_name": "Mario", "last_name": "Rossi", "email": "m@example.com", "phone": "call me 1234567"},
])
def test_invalid_member_data(fields):
    with pytest.raises(SchemaError):
        MemberCreate(**fields)


def test_update_member(api, make_member):
    member = make_member(first_name="Mario", phone="333-1234567")

    api.members.update(member.id, MemberUpdate(last_name="Verdi", phone=None))

    api.session.expire_all()
    member = api.members.get(member.id)
    assert member.first_name == "Mario"
    assert member.last_name == "Verdi"
    assert member.phone is None


def test_update_member_email_conflict(api, make_member):
    make_member(email="taken@example.com")
    member = make_member(email="mine@example.com")

    with pytest.raises(EmailExistsError):
        api.members.update(member.id, MemberUpdate(email="taken@example.com"))
    api.members.update(member.id, MemberUpdate(email="mine@example.com"))


def test_find_members_ordered_by_name(api, make_member):
    make_member(first_name="Luca", last_name="Verdi")
    make_member(first_name="Mario", last_name="Rossi")
    make_member(first_name="Anna", last_name="Rossi")

    names = [(m.last_name, m.first_name) for m in api.members.find_all()]
    assert names == [("Rossi", "Anna"), ("Rossi", "Mario"), ("Verdi", "Luca")]
    assert api.members.count(search="rossi") == 2


def test_find_members_matches_underscore_literally(api, make_member):
    make_member(email="mario_rossi@example.com")
    make_member(email="mario.rossi@example.com")

    assert [m.email for m in api.members.find_all(search="o_r")] == ["mario_rossi@example.com"]
    assert api.members.count(search="%") == 0


def test_missing_member(api):
    with pytest.raises(MemberNotFoundError):
        api.members.get(3)
    with pytest.raises(MemberNotFoundError):
        api.members.delete(3)


def test_delete_member_with_loans_is_refused(api, make_book, make_member):
    book, member = make_book(), make_member()
    api.loans.issue(book.id, member.id)
    with pytest.raises(ConstraintViolationError):
        api.members.delete(member.id)
