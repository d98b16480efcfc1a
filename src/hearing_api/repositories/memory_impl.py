"""In-memory implementations of repository interfaces.

Every list/search operation is a linear scan over a dict of records, which
keeps insertion order. References between tables are plain string ids that
are checked when records are added or created.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional
from uuid import uuid4

from .interfaces import (
    CredentialRepository,
    TenantRepository,
    GroupRepository,
    ProfileRepository,
    TestPathRepository,
    HearingTestRepository,
)
from ..core.errors import ReferenceIntegrityError, ValidationError
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
from ..utils.logging_config import get_logger

logger = get_logger('store')

NEXT_TEST_INTERVAL = timedelta(days=365)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryCredentialRepository(CredentialRepository):
    """In-memory implementation of CredentialRepository."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._memberships: Dict[str, List[str]] = {}

    def add(self, user: User, tenant_ids: List[str]) -> None:
        """Register a user and its tenant memberships (seed time only)."""
        if user.id in self._users:
            raise ValueError(f"Duplicate user id: {user.id}")
        if any(existing.username == user.username for existing in self._users.values()):
            raise ValueError(f"Duplicate username: {user.username}")
        self._users[user.id] = user
        self._memberships[user.id] = list(tenant_ids)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by ID."""
        return self._users.get(user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by exact username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def list_tenant_ids(self, user_id: str) -> List[str]:
        """Get the tenant ids a user belongs to, in membership order."""
        return list(self._memberships.get(user_id, []))


class MemoryTenantRepository(TenantRepository):
    """In-memory implementation of TenantRepository."""

    def __init__(self, credentials: CredentialRepository):
        self._tenants: Dict[str, Tenant] = {}
        self._credentials = credentials

    def add(self, tenant: Tenant) -> None:
        if tenant.id in self._tenants:
            raise ValueError(f"Duplicate tenant id: {tenant.id}")
        self._tenants[tenant.id] = tenant

    def exists(self, tenant_id: str) -> bool:
        return tenant_id in self._tenants

    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        """Get a tenant by ID."""
        return self._tenants.get(tenant_id)

    async def list_all(self) -> List[Tenant]:
        """Get all tenants."""
        return list(self._tenants.values())

    async def list_for_user(self, user_id: str) -> List[Tenant]:
        """Get the tenants a user belongs to, in membership order."""
        tenant_ids = await self._credentials.list_tenant_ids(user_id)
        return [self._tenants[tid] for tid in tenant_ids if tid in self._tenants]


class MemoryGroupRepository(GroupRepository):
    """In-memory implementation of GroupRepository."""

    def __init__(self, tenants: MemoryTenantRepository):
        self._groups: Dict[str, Group] = {}
        self._tenants = tenants

    def add(self, group: Group) -> None:
        if group.id in self._groups:
            raise ValueError(f"Duplicate group id: {group.id}")
        if not self._tenants.exists(group.tenant_id):
            raise ReferenceIntegrityError(
                f"Group {group.id} references unknown tenant {group.tenant_id}"
            )
        self._groups[group.id] = group

    def lookup(self, group_id: str) -> Optional[Group]:
        return self._groups.get(group_id)

    async def get_by_id(self, group_id: str) -> Optional[Group]:
        """Get a group by ID."""
        return self._groups.get(group_id)

    async def list_by_tenant(self, tenant_id: str) -> List[Group]:
        """Get all groups of a tenant."""
        return [group for group in self._groups.values() if group.tenant_id == tenant_id]


class MemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository."""

    def __init__(self, tenants: MemoryTenantRepository, groups: MemoryGroupRepository):
        self._profiles: Dict[str, Profile] = {}
        self._tenants = tenants
        self._groups = groups

    def _check_references(self, tenant_id: str, group_id: str) -> None:
        if not self._tenants.exists(tenant_id):
            raise ReferenceIntegrityError(f"Unknown tenant: {tenant_id}")
        group = self._groups.lookup(group_id)
        if group is None or group.tenant_id != tenant_id:
            raise ReferenceIntegrityError(
                f"Group {group_id} does not exist under tenant {tenant_id}"
            )

    def add(self, profile: Profile) -> None:
        if profile.id in self._profiles:
            raise ValueError(f"Duplicate profile id: {profile.id}")
        self._check_references(profile.tenant_id, profile.group_id)
        self._profiles[profile.id] = profile

    def lookup(self, profile_id: str) -> Optional[Profile]:
        return self._profiles.get(profile_id)

    async def get(self, tenant_id: str, profile_id: str) -> Optional[Profile]:
        """Get a profile scoped to a tenant."""
        profile = self._profiles.get(profile_id)
        if profile is None or profile.tenant_id != tenant_id:
            return None
        return profile

    async def list_by_group(self, tenant_id: str, group_id: str) -> List[Profile]:
        """Get profiles of a group within a tenant."""
        return [
            profile for profile in self._profiles.values()
            if profile.tenant_id == tenant_id and profile.group_id == group_id
        ]

    async def search(self, tenant_id: str, query: str) -> List[Profile]:
        """Case-insensitive substring search over names, employee id and department."""
        needle = query.lower()
        matches = []
        for profile in self._profiles.values():
            if profile.tenant_id != tenant_id:
                continue
            haystacks = (
                profile.first_name,
                profile.last_name,
                profile.employee_id,
                profile.department,
                profile.full_name,
            )
            if any(needle in value.lower() for value in haystacks):
                matches.append(profile)
        return matches

    async def create(self, fields: NewProfile) -> Profile:
        """Create a new profile under an existing tenant and group."""
        self._check_references(fields.tenant_id, fields.group_id)
        profile = Profile(
            id=str(uuid4()),
            tenant_id=fields.tenant_id,
            group_id=fields.group_id,
            employee_id=fields.employee_id,
            first_name=fields.first_name,
            last_name=fields.last_name,
            date_of_birth=fields.date_of_birth,
            department=fields.department,
            last_test_date=fields.last_test_date,
        )
        self._profiles[profile.id] = profile
        logger.info(f"Created profile {profile.id} in {profile.tenant_id}/{profile.group_id}")
        return profile


class MemoryTestPathRepository(TestPathRepository):
    """In-memory implementation of TestPathRepository."""

    def __init__(self, profiles: MemoryProfileRepository):
        self._paths: Dict[str, TestPath] = {}
        self._profiles = profiles

    def _validate(self, path: TestPath) -> None:
        if self._profiles.lookup(path.profile_id) is None:
            raise ReferenceIntegrityError(f"Unknown profile: {path.profile_id}")
        if any(existing.profile_id == path.profile_id for existing in self._paths.values()):
            raise ValidationError(f"Profile {path.profile_id} already has a test path")
        step_numbers = [step.step for step in path.steps]
        if len(step_numbers) != len(set(step_numbers)):
            raise ValidationError("Test path step numbers must be unique")

    def add(self, path: TestPath) -> None:
        if path.id in self._paths:
            raise ValueError(f"Duplicate test path id: {path.id}")
        self._validate(path)
        self._paths[path.id] = path

    async def get_by_profile(self, profile_id: str) -> Optional[TestPath]:
        """Get the test path assigned to a profile."""
        for path in self._paths.values():
            if path.profile_id == profile_id:
                return path
        return None

    async def create(self, profile_id: str, steps: List[TestStep]) -> TestPath:
        """Assign a test path to a profile."""
        path = TestPath(id=f"path-{uuid4().hex[:12]}", profile_id=profile_id, steps=list(steps))
        self._validate(path)
        self._paths[path.id] = path
        return path


class MemoryHearingTestRepository(HearingTestRepository):
    """In-memory implementation of HearingTestRepository."""

    def __init__(
        self,
        profiles: MemoryProfileRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._tests: Dict[str, HearingTest] = {}
        self._profiles = profiles
        self._clock = clock

    async def list_by_profile(self, profile_id: str) -> List[HearingTest]:
        """Get all hearing tests recorded for a profile."""
        return [test for test in self._tests.values() if test.profile_id == profile_id]

    async def create(self, fields: NewHearingTest) -> HearingTest:
        """Record a hearing test; the next test falls due 365 days from now."""
        profile = self._profiles.lookup(fields.profile_id)
        if profile is None or profile.tenant_id != fields.tenant_id:
            raise ReferenceIntegrityError(
                f"Profile {fields.profile_id} does not exist under tenant {fields.tenant_id}"
            )

        now = self._clock()
        test_id = f"test-{int(now.timestamp() * 1000)}-{uuid4().hex[:9]}"
        while test_id in self._tests:
            test_id = f"test-{int(now.timestamp() * 1000)}-{uuid4().hex[:9]}"

        test = HearingTest(
            id=test_id,
            tenant_id=fields.tenant_id,
            profile_id=fields.profile_id,
            test_date=fields.test_date,
            tester_id=fields.tester_id,
            device_id=fields.device_id,
            test_type=fields.test_type,
            results=list(fields.results),
            next_test_due=(now + NEXT_TEST_INTERVAL).date().isoformat(),
        )
        self._tests[test.id] = test
        logger.info(
            f"Recorded hearing test {test.id} for profile {test.profile_id} "
            f"({len(test.results)} results, next due {test.next_test_due})"
        )
        return test
