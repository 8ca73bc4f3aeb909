#!/usr/bin/env python
"""
    Member Schemas for Biblioteca.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import re
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from biblioteca.schemas.common import required_text, optional_text

PHONE_RE = re.compile(r'^[\d\s\-+()]+$')
MIN_PHONE_DIGITS = 7


def _valid_phone(phone: Optional[str]) -> Optional[str]:
    phone = optional_text(phone)
    if phone is None:
        return None
    if not PHONE_RE.match(phone) or len(re.sub(r'\D', '', phone)) < MIN_PHONE_DIGITS:
        raise ValueError("must be a valid phone number")
    return phone


class MemberCreate(BaseModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None

    @field_validator('first_name', 'last_name')
    @classmethod
    def check_required(cls, value):
        return required_text(value)

    @field_validator('phone')
    @classmethod
    def check_phone(cls, value):
        return _valid_phone(value)

    @field_validator('address')
    @classmethod
    def check_address(cls, value):
        return optional_text(value)


class MemberUpdate(BaseModel):
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None

    @field_validator('first_name', 'last_name', 'email')
    @classmethod
    def check_required(cls, value):
        return required_text(value)

    @field_validator('phone')
    @classmethod
    def check_phone(cls, value):
        return _valid_phone(value)

    @field_validator('address')
    @classmethod
    def check_address(cls, value):
        return optional_text(value)


class Member(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
