"""JWT session tokens and the login flow that issues them."""

from dataclasses import dataclass
from datetime import datetime, timezone, timedelta
from typing import Any, Dict, Optional

import jwt

from ..config import get_config
from ..core.errors import InvalidCredentials, InvalidOrExpiredToken
from ..domain.models import Identity, User
from ..repositories.interfaces import CredentialRepository
from ..utils.logging_config import get_logger
from .security import verify_password

logger = get_logger('auth')


class JWTTokenManager:
    """Creates and verifies signed, time-bounded session tokens."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        ttl_seconds: Optional[int] = None,
    ):
        """Initialize from explicit values, falling back to configuration."""
        config = get_config()
        self.secret_key = secret_key or config.app.jwt_secret_key
        self.algorithm = algorithm or config.app.jwt_algorithm
        self.ttl_seconds = ttl_seconds or config.app.session_ttl_seconds

    def create_token(self, user: User, now: Optional[datetime] = None) -> str:
        """
        Create an access token for a user.

        Args:
            user: The authenticated user
            now: Issue time; defaults to the current UTC time

        Returns:
            Encoded JWT carrying sub, username and role claims
        """
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "username": user.username,
            "role": user.role.value,
            "iat": now,
            "exp": now + timedelta(seconds=self.ttl_seconds),
            "type": "access",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode an access token.

        Raises:
            InvalidOrExpiredToken: If the signature, expiry, type or claims are invalid
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired session token")
            raise InvalidOrExpiredToken()
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected invalid session token: {e}")
            raise InvalidOrExpiredToken()

        if payload.get("type") != "access":
            raise InvalidOrExpiredToken()
        if not payload.get("username") or not payload.get("role"):
            raise InvalidOrExpiredToken()

        return payload


@dataclass
class IssuedSession:
    token: str
    expires_in: int
    user: User


class SessionIssuer:
    """Verifies credentials against the credential store and issues tokens."""

    def __init__(
        self,
        credentials: CredentialRepository,
        token_manager: Optional[JWTTokenManager] = None,
    ):
        self.credentials = credentials
        self.token_manager = token_manager or JWTTokenManager()

    async def issue_session(self, username: str, password: str) -> IssuedSession:
        """
        Authenticate a username/password pair and issue a session token.

        Raises:
            InvalidCredentials: If the user is unknown or the password does not match
        """
        user = await self.credentials.get_by_username(username)
        if user is None or not verify_password(
            password, user.password_salt, user.password_hash, user.password_iterations
        ):
            logger.warning(f"Failed login attempt for username {username!r}")
            raise InvalidCredentials()

        token = self.token_manager.create_token(user)
        logger.info(f"Issued session for user {user.id}")
        return IssuedSession(token=token, expires_in=self.token_manager.ttl_seconds, user=user)

    def verify_session(self, token: str) -> Identity:
        """
        Recover the identity embedded in a session token.

        Raises:
            InvalidOrExpiredToken: If the token cannot be verified
        """
        payload = self.token_manager.verify_token(token)
        return Identity(
            user_id=payload["sub"],
            username=payload["username"],
            role=payload["role"],
        )
