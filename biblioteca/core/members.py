#!/usr/bin/env python

"""
    Member Registry for Biblioteca.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import logging
from typing import List, Optional
from sqlalchemy import exists, func, or_
from biblioteca.configs import DEFAULT_LIMIT
from biblioteca.core.db import transaction
from biblioteca.core.exceptions import EmailExistsError, MemberNotFoundError
from biblioteca.core.models import Member
from biblioteca.core.utils import LIKE_ESCAPE, contains_pattern
from biblioteca.schemas.member import MemberCreate, MemberUpdate

logger = logging.getLogger(__name__)


class MemberRegistry:

    def __init__(self, session):
        self.session = session

    def find_by_id(self, member_id) -> Optional[Member]:
        return self.session.get(Member, member_id)

    def get(self, member_id) -> Member:
        if member := self.find_by_id(member_id):
            return member
        raise MemberNotFoundError()

    def exists(self, member_id) -> bool:
        return self.session.query(exists().where(Member.id == member_id)).scalar()

    def find_by_email(self, email) -> Optional[Member]:
        return self.session.query(Member).filter(
            func.lower(Member.email) == email.strip().lower()).first()

    def exists_by_email(self, email) -> bool:
        return self.find_by_email(email) is not None

    def _search(self, search=None):
        query = self.session.query(Member)
        if search:
            term = contains_pattern(search)
            query = query.filter(or_(
                Member.first_name.ilike(term, escape=LIKE_ESCAPE),
                Member.last_name.ilike(term, escape=LIKE_ESCAPE),
                Member.email.ilike(term, escape=LIKE_ESCAPE),
            ))
        return query

    def find_all(self, search=None, limit=DEFAULT_LIMIT, offset=0) -> List[Member]:
        return self._search(search).order_by(
            Member.last_name, Member.first_name, Member.id
        ).offset(offset).limit(limit).all()

    def count(self, search=None) -> int:
        return self._search(search).count()

    def create(self, data: MemberCreate) -> Member:
        if self.exists_by_email(data.email):
            raise EmailExistsError()
        member = Member(**data.model_dump())
        with transaction(self.session):
            self.session.add(member)
        logger.info(f"Member {member.id} created")
        return member

    def update(self, member_id, data: MemberUpdate) -> Member:
        member = self.get(member_id)
        changes = data.model_dump(exclude_unset=True)
        email = changes.get('email')
        if email and email.lower() != member.email.lower() and self.exists_by_email(email):
            raise EmailExistsError()
        with transaction(self.session):
            for field, value in changes.items():
                setattr(member, field, value)
        return member

    def delete(self, member_id) -> None:
        member = self.get(member_id)
        with transaction(self.session):
            self.session.delete(member)
        logger.info(f"Member {member_id} deleted")
