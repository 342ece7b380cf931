"""
Account Service.

Signup, login, and the self-service account operations. Every mutation
checks identity first, then ownership, then input, and only then
hashes or writes anything.
"""

from __future__ import annotations

import asyncio
import logging

from vidshare.auth.context import AuthContext
from vidshare.auth.passwords import CredentialHasher
from vidshare.auth.policies import require_authenticated, require_owner
from vidshare.auth.tokens import TokenService
from vidshare.auth.validators import CredentialValidator, validate_new_password
from vidshare.core.errors import InvalidCredentials, NotFound
from vidshare.core.models import Account, AccountView, AuthResult, SignupRequest
from vidshare.storage.base import StorageProvider

logger = logging.getLogger(__name__)

NOT_YOURS = "You are not allowed to modify other user's data."


class AccountService:
    """Accounts and credentials."""

    def __init__(
        self,
        storage: StorageProvider,
        tokens: TokenService,
        hasher: CredentialHasher | None = None,
    ):
        self.storage = storage
        self.tokens = tokens
        self.hasher = hasher or CredentialHasher()
        self.validator = CredentialValidator(storage.accounts)

    # =========================================================================
    # Signup / Login
    # =========================================================================

    async def signup(self, data: SignupRequest) -> AuthResult:
        """
        Create an account and log it in.

        Raises:
            DuplicateField: username or email already taken
            WeakPassword: password fails the strength rules
            ConfigurationError: tokens cannot be issued
        """
        # Fail before writing anything if no token could be issued afterwards
        self.tokens.config.ensure_configured()

        email = str(data.email).lower()
        await self.validator.validate_signup(data.username, email, data.password)

        password_hash = await asyncio.to_thread(self.hasher.hash, data.password)
        # storage re-checks uniqueness; a concurrent signup that won the race
        # surfaces here as DuplicateField
        account = await self.storage.accounts.create(
            Account(username=data.username, email=email, password_hash=password_hash)
        )
        logger.info("Account %s created", account.id)

        return self._auth_result(account)

    async def authenticate(self, identifier: str, password: str) -> AuthResult | None:
        """
        Check credentials.

        The identifier is tried as an email first, then as a username.
        Returns None for both an unknown identifier and a wrong password.
        """
        account = await self.storage.accounts.get_by_email(identifier)
        if account is None:
            account = await self.storage.accounts.get_by_username(identifier)
        if account is None:
            return None

        if not await asyncio.to_thread(self.hasher.verify, password, account.password_hash):
            return None

        return self._auth_result(account)

    async def login(self, identifier: str, password: str) -> AuthResult:
        result = await self.authenticate(identifier, password)
        if result is None:
            logger.info("Failed login attempt")
            raise InvalidCredentials()
        return result

    def _auth_result(self, account: Account) -> AuthResult:
        token = self.tokens.issue(account.id, account.username)
        return AuthResult(account=account.redacted(), token=token)

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_account(self, account_id: str) -> AccountView:
        account = await self.storage.accounts.get(account_id)
        if account is None:
            raise NotFound("User could not be found")
        return account.redacted()

    async def list_accounts(self) -> list[AccountView]:
        return [a.redacted() for a in await self.storage.accounts.list()]

    async def current_account(self, ctx: AuthContext) -> AccountView:
        require_authenticated(ctx)
        return await self.get_account(ctx.user_id)

    # =========================================================================
    # Self-service mutations
    # =========================================================================

    async def change_password(self, ctx: AuthContext, account_id: str, new_password: str) -> AccountView:
        """
        Replace the caller's own password.

        Raises:
            Unauthenticated: anonymous caller
            Forbidden: account_id is someone else's
            WeakPassword: new password fails the strength rules
            NotFound: account vanished (concurrent delete)
        """
        require_owner(ctx, account_id, NOT_YOURS)
        validate_new_password(new_password)

        password_hash = await asyncio.to_thread(self.hasher.hash, new_password)
        account = await self.storage.accounts.update(account_id, {"password_hash": password_hash})
        if account is None:
            raise NotFound("User could not be found")

        logger.info("Password changed for account %s", account_id)
        return account.redacted()

    async def delete_account(self, ctx: AuthContext, account_id: str) -> None:
        """Delete the caller's own account along with its videos."""
        require_owner(ctx, account_id, NOT_YOURS)

        if not await self.storage.accounts.delete(account_id):
            raise NotFound("User could not be found")
        removed = await self.storage.videos.delete_by_owner(account_id)
        logger.info("Account %s deleted with %d videos", account_id, removed)
