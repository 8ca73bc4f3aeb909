#!/usr/bin/env python

"""
    Demo catalogue loaded on startup when BIBLIOTECA_SEED is set.
"""

import logging
from biblioteca.core.books import BookRegistry
from biblioteca.core.members import MemberRegistry
from biblioteca.schemas.book import BookCreate
from biblioteca.schemas.member import MemberCreate

logger = logging.getLogger(__name__)

DEMO_BOOKS = [
    ("The Lord of the Rings", "J.R.R. Tolkien", "978-88-04-12345-6", 1954, "Fantasy"),
    ("1984", "George Orwell", "978-88-04-12346-3", 1949, "Dystopia"),
    ("The Little Prince", "Antoine de Saint-Exupery", None, 1943, "Fable"),
    ("Dune", "Frank Herbert", "978-88-04-12348-7", 1965, "Science fiction"),
    ("Neuromancer", "William Gibson", None, 1984, "Cyberpunk"),
]

DEMO_MEMBERS = [
    ("Mario", "Rossi", "mario.rossi@example.com", "333-1234567", "Via Roma 1, Milano"),
    ("Giulia", "Bianchi", "giulia.bianchi@example.com", "333-2345678", "Via Milano 2, Roma"),
    ("Luca", "Verdi", "luca.verdi@example.com", "333-3456789", "Via Napoli 3, Firenze"),
]


def seed_demo_data(session):
    """Inserts the demo books and members into empty tables. Returns the
    number of records created; a second call is a no-op.
    """
    books, members = BookRegistry(session), MemberRegistry(session)
    created = 0
    if not books.count():
        for title, author, isbn, year, genre in DEMO_BOOKS:
            books.create(BookCreate(
                title=title, author=author, isbn=isbn,
                publication_year=year, genre=genre))
            created += 1
    if not members.count():
        for first_name, last_name, email, phone, address in DEMO_MEMBERS:
            members.create(MemberCreate(
                first_name=first_name, last_name=last_name, email=email,
                phone=phone, address=address))
            created += 1
    logger.info(f"Seeded {created} demo records")
    return created
