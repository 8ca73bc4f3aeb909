"""
Seed README

1. Creates the books, members and loans tables if they are missing
2. Inserts the demo catalogue (five books, three members) into empty tables
    - Tables that already hold rows are left alone, so running it twice is safe
"""

import argparse
import logging
from biblioteca.core.db import SessionLocal, init_db, make_engine, make_session_factory
from biblioteca.core.seed import seed_demo_data

logger = logging.getLogger(__name__)


def seed(db_uri=None):
    if db_uri:
        engine = make_engine(db_uri)
        init_db(engine)
        session = make_session_factory(engine)()
    else:
        init_db()
        session = SessionLocal()
    try:
        return seed_demo_data(session)
    finally:
        session.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load the Biblioteca demo catalogue")
    parser.add_argument("--db-uri", default=None, help="Database URI (defaults to the configured one)")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    created = seed(args.db_uri)
    print(f"Created {created} records")
