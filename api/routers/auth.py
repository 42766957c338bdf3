"""
Sign-up, sign-in and sign-out endpoints.

These are the only routes reachable without a session.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Response

from barangay.identity import AuthSession, IdentityGateway
from ..dependencies import CurrentUser, get_identity, get_token
from ..models import AuthResponse, SignInRequest, SignUpRequest, UserResponse


router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

Identity = Annotated[IdentityGateway, Depends(get_identity)]


def _auth_response(session: AuthSession) -> AuthResponse:
    return AuthResponse(
        access_token=session.access_token,
        token_type=session.token_type,
        expires_at=session.expires_at,
        user=UserResponse(**session.user.to_dict())
    )


@router.get("")
def auth_info():
    """Sign-in entry point for clients without a session"""
    return {
        "sign_in": "POST /auth/sign-in",
        "sign_up": "POST /auth/sign-up",
        "sign_out": "POST /auth/sign-out",
        "session": "GET /auth/session"
    }


@router.post("/sign-up", response_model=AuthResponse, status_code=201)
def sign_up(request: SignUpRequest, identity: Identity):
    """Create an account and return a session token for it."""
    return _auth_response(identity.sign_up(request.email, request.password, request.display_name))


@router.post("/sign-in", response_model=AuthResponse)
def sign_in(request: SignInRequest, identity: Identity):
    """
    Sign in with email and password.

    Send the returned token as `Authorization: Bearer <token>` on every
    other request.
    """
    return _auth_response(identity.sign_in(request.email, request.password))


@router.post("/sign-out", status_code=204)
def sign_out(identity: Identity, token: Annotated[Optional[str], Depends(get_token)]):
    identity.sign_out(token)
    return Response(status_code=204)


@router.get("/session", response_model=UserResponse)
def current_session(user: CurrentUser):
    """The signed-in user"""
    return UserResponse(**user.to_dict())
