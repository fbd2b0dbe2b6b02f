"""
FastAPI routes for authentication.

Prefix: /auth

Every successful signup/login answers with the issued token in the body
and also sets it as the session cookie. Clients may use either.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from taskboard.auth.models import AuthResult
from taskboard.auth.service import AuthService
from taskboard.core.session import SessionContext
from .auth_middleware import apply_session, get_auth_service, get_session, get_settings
from .schemas import ApiResponse, AuthData, GoogleAuthRequest, LoginRequest, SignupRequest

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(
    request: Request,
    session: SessionContext,
    result: AuthResult,
    message: str,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    body = ApiResponse(
        status=status_code,
        message=message,
        data=AuthData(id=result.user_id, token=result.token),
    )
    response = JSONResponse(status_code=status_code, content=body.model_dump())
    apply_session(response, session, get_settings(request))
    return response


@router.post("/signup", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    request: Request,
    session: SessionContext = Depends(get_session),
    auth: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Register a new user.

    Request (JSON):
        email, password (required unless externalId), firstname, lastname, externalId?

    Response:
        {"status": 201, "message": "User created", "data": {"id": "...", "token": "..."}}
    """
    result = auth.signup(
        email=payload.email,
        password=payload.password,
        firstname=payload.firstname,
        lastname=payload.lastname,
        external_id=payload.external_id,
        session=session,
    )
    return _auth_response(request, session, result, "User created", status.HTTP_201_CREATED)


@router.post("/login", response_model=ApiResponse)
def login(
    payload: LoginRequest,
    request: Request,
    session: SessionContext = Depends(get_session),
    auth: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Log in with email and password. Same response shape as /signup."""
    result = auth.login(email=payload.email, password=payload.password, session=session)
    return _auth_response(request, session, result, "Login successful")


@router.post("/google", response_model=ApiResponse)
def google_auth(
    payload: GoogleAuthRequest,
    request: Request,
    session: SessionContext = Depends(get_session),
    auth: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Sign in (or sign up) with a Google OAuth access token.

    The token is verified against Google's userinfo endpoint; unverified
    emails are rejected with 401, provider outages answer 500.
    """
    google = request.app.state.google_client
    profile = google.fetch_profile(payload.access_token)
    result = auth.external_identity_auth(profile, session)
    message = "Google signup successful" if result.created else "Google login successful"
    return _auth_response(request, session, result, message)


@router.post("/logout")
def logout(
    request: Request,
    session: SessionContext = Depends(get_session),
    auth: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Clear the session cookie. Always succeeds."""
    auth.logout(session)
    response = JSONResponse({"status": 200, "message": "Logged out successfully"})
    apply_session(response, session, get_settings(request))
    return response
