"""Seed data loaded into a fresh in-memory store at startup."""

from typing import Any, Dict, List, Optional

from ..auth.security import hash_password
from ..config import get_config
from ..core.enums import Ear, RiskLevel, UserRole
from ..domain.models import User, Tenant, Group, Profile, TestPath, TestStep
from .memory_impl import (
    MemoryCredentialRepository,
    MemoryTenantRepository,
    MemoryGroupRepository,
    MemoryProfileRepository,
    MemoryTestPathRepository,
)

SEED_TENANTS = [
    {"id": "acme-corp", "name": "ACME Corporation", "industry": "Manufacturing"},
    {"id": "tech-solutions", "name": "Tech Solutions Inc", "industry": "Technology"},
]

SEED_USERS: List[Dict[str, Any]] = [
    {
        "id": "tester-001",
        "username": "admin@hearingtest.com",
        "password": "SecurePass123!",
        "name": "Dr. Sarah Johnson",
        "role": UserRole.CERTIFIED_TESTER,
        "tenants": ["acme-corp", "tech-solutions"],
    },
    {
        "id": "tester-002",
        "username": "field.tester@acme-corp.com",
        "password": "FieldTest456!",
        "name": "Mark Evans",
        "role": UserRole.CERTIFIED_TESTER,
        "tenants": ["acme-corp"],
    },
]

SEED_GROUPS = [
    {
        "id": "factory-floor",
        "tenant_id": "acme-corp",
        "name": "Factory Floor Workers",
        "description": "High noise exposure employees",
        "employee_count": 45,
        "risk_level": RiskLevel.HIGH,
    },
    {
        "id": "office-staff",
        "tenant_id": "acme-corp",
        "name": "Office Staff",
        "description": "Administrative personnel",
        "employee_count": 23,
        "risk_level": RiskLevel.LOW,
    },
    {
        "id": "developers",
        "tenant_id": "tech-solutions",
        "name": "Software Developers",
        "description": "Development team members",
        "employee_count": 30,
        "risk_level": RiskLevel.LOW,
    },
]

SEED_PROFILES = [
    {
        "id": "emp-001",
        "tenant_id": "acme-corp",
        "group_id": "factory-floor",
        "employee_id": "E12345",
        "first_name": "John",
        "last_name": "Smith",
        "date_of_birth": "1985-06-15",
        "department": "Manufacturing",
        "last_test_date": "2023-12-01",
    },
    {
        "id": "emp-002",
        "tenant_id": "acme-corp",
        "group_id": "factory-floor",
        "employee_id": "E12346",
        "first_name": "Maria",
        "last_name": "Rodriguez",
        "date_of_birth": "1990-03-22",
        "department": "Manufacturing",
        "last_test_date": "2023-11-15",
    },
    {
        "id": "emp-003",
        "tenant_id": "acme-corp",
        "group_id": "office-staff",
        "employee_id": "E12347",
        "first_name": "David",
        "last_name": "Chen",
        "date_of_birth": "1988-09-10",
        "department": "Administration",
        "last_test_date": "2024-01-05",
    },
    {
        "id": "emp-101",
        "tenant_id": "tech-solutions",
        "group_id": "developers",
        "employee_id": "T20001",
        "first_name": "Priya",
        "last_name": "Patel",
        "date_of_birth": "1992-11-02",
        "department": "Engineering",
        "last_test_date": None,
    },
]

# Screening frequencies at 25 dB, left ear then right ear
SCREENING_FREQUENCIES_HZ = [500, 1000, 2000, 4000]

SEED_TEST_PATHS = [
    {
        "id": "path-001",
        "profile_id": "emp-001",
        "steps": [
            {"step": index + 1, "frequency_hz": freq, "decibel_db": 25, "ear": ear}
            for index, (ear, freq) in enumerate(
                (ear, freq)
                for ear in (Ear.LEFT, Ear.RIGHT)
                for freq in SCREENING_FREQUENCIES_HZ
            )
        ],
    },
]


def seed_store(
    credentials: MemoryCredentialRepository,
    tenants: MemoryTenantRepository,
    groups: MemoryGroupRepository,
    profiles: MemoryProfileRepository,
    test_paths: MemoryTestPathRepository,
    password_hash_iterations: Optional[int] = None,
) -> None:
    """Populate empty repositories with the built-in dataset."""
    for tenant in SEED_TENANTS:
        tenants.add(Tenant(**tenant))

    if password_hash_iterations is None:
        password_hash_iterations = get_config().app.password_hash_iterations

    for user in SEED_USERS:
        salt_hex, hash_hex = hash_password(
            user["password"], iterations=password_hash_iterations
        )
        credentials.add(
            User(
                id=user["id"],
                username=user["username"],
                name=user["name"],
                role=user["role"],
                password_salt=salt_hex,
                password_hash=hash_hex,
                password_iterations=password_hash_iterations,
            ),
            user["tenants"],
        )

    for group in SEED_GROUPS:
        groups.add(Group(**group))

    for profile in SEED_PROFILES:
        profiles.add(Profile(**profile))

    for path in SEED_TEST_PATHS:
        test_paths.add(
            TestPath(
                id=path["id"],
                profile_id=path["profile_id"],
                steps=[TestStep(**step) for step in path["steps"]],
            )
        )
