"""Abstract repository interfaces for the data access layer.

The credential store and the domain store are expressed as a set of
per-entity repositories gathered in a ``RepositoryContainer``. Handlers
only ever see these interfaces, so a persistent implementation can
replace the in-memory one without touching the API layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.models import (
    User,
    Tenant,
    Group,
    Profile,
    TestPath,
    TestStep,
    HearingTest,
    NewProfile,
    NewHearingTest,
)


class CredentialRepository(ABC):
    """Repository interface for users and their tenant memberships."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by ID."""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by exact username."""
        pass

    @abstractmethod
    async def list_tenant_ids(self, user_id: str) -> List[str]:
        """Get the tenant ids a user belongs to, in membership order."""
        pass


class TenantRepository(ABC):
    """Repository interface for Tenant entities."""

    @abstractmethod
    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        """Get a tenant by ID."""
        pass

    @abstractmethod
    async def list_all(self) -> List[Tenant]:
        """Get all tenants."""
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[Tenant]:
        """Get the tenants a user belongs to, in membership order."""
        pass


class GroupRepository(ABC):
    """Repository interface for Group entities."""

    @abstractmethod
    async def get_by_id(self, group_id: str) -> Optional[Group]:
        """Get a group by ID."""
        pass

    @abstractmethod
    async def list_by_tenant(self, tenant_id: str) -> List[Group]:
        """Get all groups of a tenant."""
        pass


class ProfileRepository(ABC):
    """Repository interface for Profile entities."""

    @abstractmethod
    async def get(self, tenant_id: str, profile_id: str) -> Optional[Profile]:
        """Get a profile scoped to a tenant.

        Returns None both for an unknown id and for a profile owned by a
        different tenant.
        """
        pass

    @abstractmethod
    async def list_by_group(self, tenant_id: str, group_id: str) -> List[Profile]:
        """Get profiles of a group within a tenant."""
        pass

    @abstractmethod
    async def search(self, tenant_id: str, query: str) -> List[Profile]:
        """Case-insensitive substring search over names, employee id and department."""
        pass

    @abstractmethod
    async def create(self, fields: NewProfile) -> Profile:
        """Create a new profile under an existing tenant and group."""
        pass


class TestPathRepository(ABC):
    """Repository interface for TestPath entities."""

    __test__ = False

    @abstractmethod
    async def get_by_profile(self, profile_id: str) -> Optional[TestPath]:
        """Get the test path assigned to a profile."""
        pass

    @abstractmethod
    async def create(self, profile_id: str, steps: List[TestStep]) -> TestPath:
        """Assign a test path to a profile."""
        pass


class HearingTestRepository(ABC):
    """Repository interface for HearingTest entities."""

    @abstractmethod
    async def list_by_profile(self, profile_id: str) -> List[HearingTest]:
        """Get all hearing tests recorded for a profile."""
        pass

    @abstractmethod
    async def create(self, fields: NewHearingTest) -> HearingTest:
        """Record a hearing test and compute its next due date."""
        pass


class RepositoryContainer:
    """Container for all repository interfaces to support dependency injection."""

    def __init__(
        self,
        credential_repo: CredentialRepository,
        tenant_repo: TenantRepository,
        group_repo: GroupRepository,
        profile_repo: ProfileRepository,
        test_path_repo: TestPathRepository,
        hearing_test_repo: HearingTestRepository,
    ):
        self.credential = credential_repo
        self.tenant = tenant_repo
        self.group = group_repo
        self.profile = profile_repo
        self.test_path = test_path_repo
        self.hearing_test = hearing_test_repo
