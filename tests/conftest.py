import os
import datetime
import pytest

# Set TESTING before any biblioteca imports
os.environ["TESTING"] = "true"

from biblioteca.core.api import BibliotecaAPI
from biblioteca.core.db import Base, init_db, make_engine, make_session_factory
from biblioteca.schemas.book import BookCreate
from biblioteca.schemas.member import MemberCreate


class FakeClock:
    """Stands in for the wall clock so due dates and lateness are exact."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += datetime.timedelta(**kwargs)
        return self.now


@pytest.fixture
def engine():
    engine = make_engine("sqlite:///:memory:", echo=False)
    init_db(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock(datetime.datetime(2025, 3, 1, 12, 0, 0))


@pytest.fixture
def api(db_session, clock):
    return BibliotecaAPI(db_session, clock=clock)


@pytest.fixture
def make_book(api):
    counter = iter(range(1, 1000))

    def _make_book(**fields):
        n = next(counter)
        fields.setdefault("title", f"Book {n}")
        fields.setdefault("author", f"Author {n}")
        return api.books.create(BookCreate(**fields))
    return _make_book


@pytest.fixture
def make_member(api):
    counter = iter(range(1, 1000))

    def _make_member(**fields):
        n = next(counter)
        fields.setdefault("first_name", f"First{n}")
        fields.setdefault("last_name", f"Last{n}")
        fields.setdefault("email", f"member{n}@example.com")
        return api.members.create(MemberCreate(**fields))
    return _make_member


@pytest.fixture
def check_availability(api):
    """Asserts every book is unavailable exactly when an active loan
    references it.
    """
    def _check():
        api.session.expire_all()
        for book in api.books.find_all(limit=None):
            assert book.available == api.loans.is_book_available(book.id), book.title
    return _check
