"""Tenant-scoped access control."""

from ..core.errors import AccessDenied
from ..domain.models import Identity
from ..repositories.interfaces import CredentialRepository
from ..utils.logging_config import get_logger

logger = get_logger('auth')


class AccessGuard:
    """Allows a caller into a tenant only if the caller's user is a member of it."""

    def __init__(self, credentials: CredentialRepository):
        self.credentials = credentials

    async def authorize(self, identity: Identity, tenant_id: str) -> None:
        """
        Raises:
            AccessDenied: If the tenant is not in the user's membership list
        """
        tenant_ids = await self.credentials.list_tenant_ids(identity.user_id)
        if tenant_id not in tenant_ids:
            logger.warning(f"User {identity.user_id} denied access to tenant {tenant_id}")
            raise AccessDenied()
