"""
Identity helpers: id and token generation, credential checks and
caller resolution.

Tokens issued here are opaque random strings.  They are handed to the
client after registration or login but are not validated by the API:
song endpoints trust the caller id carried in the header named by
``settings.caller_id_header``.  :func:`verify_caller` is the single
place that turns a request into an account id, so a real token
verifier (JWT, server-side sessions) replaces its body without
touching any endpoint.

Likewise, :func:`accept_any_password` is the default credential check
of ``IdentityService``.  It accepts every password; a deployment that
stores password hashes passes its own verifier to the service.
"""

import secrets
import string
import time
import uuid
from typing import Callable

from fastapi import Request

from .config import settings
from .errors import UnauthenticatedError
from .records import Account

_TOKEN_ALPHABET = string.ascii_lowercase + string.digits

CredentialCheck = Callable[[Account, str], bool]


def new_id() -> str:
    """Return a fresh opaque record id."""
    return uuid.uuid4().hex


def issue_token() -> str:
    """Create an opaque session token of the form ``token_<millis>_<random>``.

    No expiry, refresh or revocation is modelled.
    """
    suffix = "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(9))
    return f"token_{int(time.time() * 1000)}_{suffix}"


def accept_any_password(account: Account, password: str) -> bool:
    """Default credential check: any password matches an existing account."""
    return True


def verify_caller(request: Request) -> str:
    """Dependency that resolves the caller's account id.

    Reads the trusted caller id header.  A missing or blank value
    raises :class:`UnauthenticatedError` (HTTP 401).
    """
    caller_id = request.headers.get(settings.caller_id_header, "").strip()
    if not caller_id:
        raise UnauthenticatedError()
    return caller_id
