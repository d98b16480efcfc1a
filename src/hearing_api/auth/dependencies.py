"""Authentication and tenant-access dependencies for FastAPI."""

from typing import Optional

from fastapi import Depends, Path, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..core.errors import Unauthenticated
from ..domain.models import Identity
from ..repositories.dependencies import get_repository_container
from ..repositories.interfaces import RepositoryContainer
from .access import AccessGuard
from .jwt_auth import JWTTokenManager, SessionIssuer

# Missing credentials are reported by get_current_identity, not by the scheme
security = HTTPBearer(auto_error=False)


def get_token_manager(request: Request) -> JWTTokenManager:
    """Return the token manager attached to the running application."""
    return request.app.state.token_manager


def get_session_issuer(
    repos: RepositoryContainer = Depends(get_repository_container),
    token_manager: JWTTokenManager = Depends(get_token_manager),
) -> SessionIssuer:
    return SessionIssuer(repos.credential, token_manager)


def get_access_guard(
    repos: RepositoryContainer = Depends(get_repository_container),
) -> AccessGuard:
    return AccessGuard(repos.credential)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> Identity:
    """
    Get the caller identity from the Bearer token.

    Raises:
        Unauthenticated: If no Bearer token was sent (401)
        InvalidOrExpiredToken: If the token does not verify (403)
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return issuer.verify_session(credentials.credentials)


async def require_tenant_access(
    tenant_id: str = Path(..., description="Tenant identifier"),
    identity: Identity = Depends(get_current_identity),
    guard: AccessGuard = Depends(get_access_guard),
) -> Identity:
    """
    Authorize the caller for the tenant named in the path.

    Raises:
        AccessDenied: If the caller is not a member of the tenant (403)
    """
    await guard.authorize(identity, tenant_id)
    return identity
