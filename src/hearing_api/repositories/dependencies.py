"""Dependency injection for the repository layer."""

from datetime import datetime
from typing import Callable, Optional

from fastapi import Request

from .interfaces import RepositoryContainer
from .memory_impl import (
    MemoryCredentialRepository,
    MemoryTenantRepository,
    MemoryGroupRepository,
    MemoryProfileRepository,
    MemoryTestPathRepository,
    MemoryHearingTestRepository,
    utc_now,
)
from .seed import seed_store


def build_memory_container(
    seed: bool = True,
    clock: Callable[[], datetime] = utc_now,
    password_hash_iterations: Optional[int] = None,
) -> RepositoryContainer:
    """
    Create a repository container backed by fresh in-memory repositories.

    Each call returns an independent store, so tests get full isolation.
    """
    credentials = MemoryCredentialRepository()
    tenants = MemoryTenantRepository(credentials)
    groups = MemoryGroupRepository(tenants)
    profiles = MemoryProfileRepository(tenants, groups)
    test_paths = MemoryTestPathRepository(profiles)
    hearing_tests = MemoryHearingTestRepository(profiles, clock=clock)

    if seed:
        seed_store(
            credentials,
            tenants,
            groups,
            profiles,
            test_paths,
            password_hash_iterations=password_hash_iterations,
        )

    return RepositoryContainer(
        credential_repo=credentials,
        tenant_repo=tenants,
        group_repo=groups,
        profile_repo=profiles,
        test_path_repo=test_paths,
        hearing_test_repo=hearing_tests,
    )


def get_repository_container(request: Request) -> RepositoryContainer:
    """
    Return the container attached to the running application.

    This is the main dependency injection point for repositories.
    """
    return request.app.state.repositories
