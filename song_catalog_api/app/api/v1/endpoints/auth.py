"""
Authentication endpoints for API v1.

Provide registration and login.  Both return the account together
with an opaque token.  The token is not verified by other endpoints
yet; clients identify themselves with the caller id header (see
``core.security.verify_caller``).
"""

from fastapi import APIRouter, Depends, status

from song_catalog_api.app.core.store import RecordStore, get_store
from song_catalog_api.app.schemas.user import AccountRead, AuthResponse, LoginRequest, RegisterRequest
from song_catalog_api.app.services.user_service import IdentityService


router = APIRouter()


def get_identity_service(store: RecordStore = Depends(get_store)) -> IdentityService:
    return IdentityService(store)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    service: IdentityService = Depends(get_identity_service),
) -> AuthResponse:
    """Register a new account.

    Returns 400 for missing fields or a short password and 409 when
    the email (compared case-insensitively) is already taken.
    """
    account, token = service.register(payload.name, payload.email, payload.password)
    return AuthResponse(account=AccountRead.model_validate(account), token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    service: IdentityService = Depends(get_identity_service),
) -> AuthResponse:
    """Authenticate by email and return a fresh token.

    The password is not checked against a stored secret; any value is
    accepted once the email matches a registered account.
    """
    account, token = service.authenticate(payload.email, payload.password)
    return AuthResponse(account=AccountRead.model_validate(account), token=token)
