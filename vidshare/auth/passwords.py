# =============================================================================
# Password Hashing
# =============================================================================
#
# bcrypt with a fixed work factor. Each hash gets its own random salt,
# so hashing the same password twice gives different strings that both
# verify.
#
# =============================================================================

from __future__ import annotations

import logging

import bcrypt

from vidshare.core.errors import InternalError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of the secret
MAX_PASSWORD_BYTES = 72


class CredentialHasher:
    """One-way password hashing and verification."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Hash a password. Returns the bcrypt string ("$2b$10$...")."""
        secret = plaintext.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                "Password is too long",
                [{"field": "password", "msg": f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"}],
            )
        try:
            hashed = bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.rounds))
        except Exception as e:
            logger.exception("Password hashing failed")
            raise InternalError("Error hashing the password.") from e
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """
        Verify a password against its hash.

        A malformed or empty hash is a non-match, not an error.
        """
        if not password_hash:
            return False
        secret = plaintext.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(secret, password_hash.encode("utf-8"))
        except ValueError:
            # invalid salt / not a bcrypt hash
            return False
        except Exception as e:
            logger.exception("Password verification failed")
            raise InternalError("Error verifying the password.") from e
