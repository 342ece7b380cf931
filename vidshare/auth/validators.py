"""
Credential checks that gate account creation and password changes.

Every rule is evaluated and every problem is reported together, so a
client sees the full list in one response. These checks always run
before a password is hashed.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from vidshare.auth.passwords import MAX_PASSWORD_BYTES
from vidshare.core.errors import DuplicateField, WeakPassword
from vidshare.storage.base import AccountStorage

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

PASSWORD_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"[0-9]"), "Password must contain a number"),
    (re.compile(r"[A-Z]"), "Password must contain an uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain a lowercase letter"),
]


def password_problems(password: str) -> list[str]:
    """Return every violated strength rule (empty list if strong)."""
    problems = []
    if len(password) < MIN_PASSWORD_LENGTH:
        problems.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    for pattern, message in PASSWORD_RULES:
        if not pattern.search(password):
            problems.append(message)
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        problems.append(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    return problems


def _password_errors(password: str) -> list[dict[str, Any]]:
    return [{"field": "password", "msg": msg} for msg in password_problems(password)]


def validate_new_password(password: str) -> None:
    """Raise WeakPassword listing all problems, if any."""
    errors = _password_errors(password)
    if errors:
        raise WeakPassword(errors=errors)


class CredentialValidator:
    """Uniqueness and strength checks for signup."""

    def __init__(self, accounts: AccountStorage):
        self.accounts = accounts

    async def duplicate_fields(self, username: str, email: str) -> list[str]:
        fields = []
        if await self.accounts.get_by_username(username):
            fields.append("username")
        if await self.accounts.get_by_email(email):
            fields.append("email")
        return fields

    async def validate_signup(self, username: str, email: str, password: str) -> None:
        """
        Check a signup before anything is hashed or stored.

        Raises:
            DuplicateField: username and/or email taken (password problems,
                if any, are listed in the same error)
            WeakPassword: only the password was at fault
        """
        duplicates = await self.duplicate_fields(username, email)
        weak = _password_errors(password)

        if duplicates:
            logger.info("Signup rejected, duplicate %s", ", ".join(duplicates))
            errors = [{"field": f, "msg": f"{f.capitalize()} already in use"} for f in duplicates]
            raise DuplicateField(duplicates, errors=errors + weak)
        if weak:
            raise WeakPassword(errors=weak)
