"""
Member creation.

Strictly sequential: duplicate-email check, then identity creation, then the
profile upsert. Each step gates the next; a failure stops the sequence and
propagates to the caller. Nothing is retried or rolled back.
"""
from __future__ import annotations

import logging
import secrets
from datetime import date
from typing import Any, Callable, Optional

from pydantic import BaseModel, EmailStr, ValidationError, field_validator

from data import queries
from data.connection import SupabaseClient
from data.contracts import ProfileInsert, ProfileRow, parse_rows


logger = logging.getLogger(__name__)

# Shown instead of the validator's own wording
FIELD_MESSAGES = {"email": "Enter a valid email address"}


class DuplicateEmailError(ValueError):
    def __init__(self, email: str):
        super().__init__(f"A member with email {email} already exists.")
        self.email = email


class NewMember(BaseModel):
    full_name: str
    email: EmailStr
    phone: Optional[str] = None
    national_id: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    member_number: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Full name is required")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("phone", "national_id", "address", "member_number", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("date_of_birth")
    @classmethod
    def _not_in_future(cls, v: Optional[date]) -> Optional[date]:
        if v and v > date.today():
            raise ValueError("Date of birth cannot be in the future")
        return v


def validate_member_form(data: dict[str, Any]) -> tuple[Optional[NewMember], dict[str, str]]:
    """Returns (member, {}) or (None, {field: message}) for inline display."""
    try:
        return NewMember.model_validate(data), {}
    except ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "__all__"
            msg = err["msg"].removeprefix("Value error, ")
            if err["type"] != "missing" and field in FIELD_MESSAGES:
                msg = FIELD_MESSAGES[field]
            errors.setdefault(field, msg)
        return None, errors


def generate_password(nbytes: int = 18) -> str:
    # The member never sees this; access comes through the email invitation.
    return secrets.token_urlsafe(nbytes)


def email_exists(client: SupabaseClient, email: str) -> bool:
    res = client.select(queries.q_profile_by_email(email))
    return len(res.rows) > 0


def create_member(
    client: SupabaseClient,
    member: NewMember,
    password_factory: Callable[[], str] = generate_password,
) -> ProfileRow:
    if email_exists(client, member.email):
        logger.info("Member creation stopped: email already registered")
        raise DuplicateEmailError(member.email)

    identity = client.create_identity(
        member.email,
        password_factory(),
        metadata={
            "full_name": member.full_name,
            "phone": member.phone,
            "member_number": member.member_number,
        },
    )
    logger.info("Created identity %s for new member", identity.id)

    profile = ProfileInsert(id=identity.id, **member.model_dump(exclude_none=True))
    stored = client.upsert("profiles", profile)
    logger.info("Upserted profile %s", identity.id)
    return parse_rows("profiles", [stored])[0]
