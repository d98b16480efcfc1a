"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status

from ..auth.jwt_auth import SessionIssuer
from ..auth.dependencies import get_session_issuer
from .schemas import LoginRequest, LoginResponse, UserSummary, ErrorResponse

router = APIRouter(tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Login successful"},
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(
    login_data: LoginRequest,
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> LoginResponse:
    """
    Authenticate a user and issue a session token.

    The token is a signed JWT valid for one hour; send it as
    ``Authorization: Bearer <token>`` on every other endpoint.
    """
    session = await issuer.issue_session(login_data.username, login_data.password)

    return LoginResponse(
        token=session.token,
        expires_in=session.expires_in,
        user=UserSummary(
            id=session.user.id,
            name=session.user.name,
            role=session.user.role.value,
        ),
    )
