"""
Business logic for accounts.

The ``IdentityService`` registers accounts in the record store and
issues opaque session tokens.  Password handling is not secure: the
password is only checked for length at registration and is never
stored.  Authentication delegates to a credential check which, by
default, accepts any password for a known email; pass a real verifier
(e.g. one backed by bcrypt hashes) to the constructor in production.
"""

import logging
from typing import Optional, Tuple

from ..core.config import settings
from ..core.errors import ConflictError, InvalidCredentialsError, NotFoundError, ValidationError
from ..core.records import Account, utcnow
from ..core.security import CredentialCheck, accept_any_password, issue_token, new_id
from ..core.store import RecordStore


logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityService:
    """Account registration, lookup and authentication."""

    def __init__(
        self,
        store: RecordStore,
        credential_check: CredentialCheck = accept_any_password,
        min_password_length: Optional[int] = None,
    ) -> None:
        self.store = store
        self.credential_check = credential_check
        self.min_password_length = (
            settings.min_password_length if min_password_length is None else min_password_length
        )

    def register(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> Tuple[Account, str]:
        """Create an account and issue a token for it.

        Raises ``ValidationError`` if any field is empty or the password
        is shorter than the configured minimum, and ``ConflictError``
        if the normalized email is already registered.
        """
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required")
        if len(password) < self.min_password_length:
            raise ValidationError(
                f"Password must be at least {self.min_password_length} characters"
            )
        normalized = normalize_email(email)
        if not normalized or not name.strip():
            raise ValidationError("Name, email, and password are required")
        if self.find_by_email(normalized) is not None:
            raise ConflictError()

        account = Account(id=new_id(), email=normalized, name=name.strip(), created_at=utcnow())
        self.store.accounts.insert(account)
        logger.info("Registered account %s (%s)", account.id, account.email)
        return account, issue_token()

    def authenticate(self, email: Optional[str], password: Optional[str]) -> Tuple[Account, str]:
        """Return the account for ``email`` together with a fresh token.

        Raises ``InvalidCredentialsError`` when no account has the
        normalized email or the credential check rejects the password.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")
        account = self.find_by_email(email)
        if account is None or not self.credential_check(account, password):
            logger.info("Failed login for %s", normalize_email(email))
            raise InvalidCredentialsError()
        return account, issue_token()

    def find_by_email(self, email: str) -> Optional[Account]:
        normalized = normalize_email(email)
        matches = self.store.accounts.scan(lambda account: account.email == normalized)
        return matches[0] if matches else None

    def get_account(self, account_id: str) -> Account:
        account = self.store.accounts.find_by_id(account_id)
        if account is None:
            raise NotFoundError("Account not found")
        return account
