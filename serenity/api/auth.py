"""Login, registration and password reset endpoints."""

import logging

from fastapi import APIRouter, HTTPException, status

from serenity.api.deps import ServicesDep
from serenity.auth.identity import AuthError
from serenity.auth.session import Session
from serenity.models.schemas import (
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
    SessionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(session: Session) -> SessionResponse:
    return SessionResponse(uid=session.uid, email=session.email, id_token=session.id_token)


@router.post("/login", response_model=SessionResponse)
async def login(request: LoginRequest, services: ServicesDep) -> SessionResponse:
    """Sign in with e-mail and password.

    Raises:
        400: Blank e-mail or password.
        401: Credentials rejected by the identity service.
    """
    try:
        session = await services.auth.sign_in(request.email, request.password)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return _session_response(session)


@router.post(
    "/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED
)
async def register(request: RegisterRequest, services: ServicesDep) -> SessionResponse:
    """Create an account and its profile document.

    Raises:
        400: Missing fields or mismatched passwords.
        401: Account rejected by the identity service (e.g. EMAIL_EXISTS).
    """
    try:
        session = await services.auth.register(
            request.name, request.email, request.password, request.confirm_password
        )
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return _session_response(session)


@router.post("/password-reset")
async def password_reset(
    request: PasswordResetRequest, services: ServicesDep
) -> dict[str, str]:
    """Send a password reset e-mail."""
    try:
        await services.auth.send_password_reset(request.email)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return {"status": "sent"}
