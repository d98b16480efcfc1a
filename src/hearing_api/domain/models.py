"""Domain records held by the credential and domain stores.

Attribute names follow Python conventions; the API layer is responsible
for projecting them to the snake_case wire shape.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..core.enums import Ear, RiskLevel, ToneResponse, UserRole


@dataclass
class User:
    """A user who can log in. Only password material is stored."""

    id: str
    username: str
    name: str
    role: UserRole
    password_salt: str
    password_hash: str
    password_iterations: int


@dataclass
class Tenant:
    id: str
    name: str
    industry: str
    active: bool = True


@dataclass
class Group:
    id: str
    tenant_id: str
    name: str
    description: Optional[str] = None
    employee_count: int = 0
    risk_level: RiskLevel = RiskLevel.LOW


@dataclass
class Profile:
    id: str
    tenant_id: str
    group_id: str
    employee_id: str
    first_name: str
    last_name: str
    date_of_birth: str
    department: str
    last_test_date: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class TestStep:
    """One prescribed tone of a test path."""

    __test__ = False  # not a pytest test class

    step: float
    frequency_hz: float
    decibel_db: float
    ear: Ear


@dataclass
class TestPath:
    __test__ = False

    id: str
    profile_id: str
    steps: List[TestStep] = field(default_factory=list)


@dataclass
class ToneResult:
    """A submitted response to one presented tone."""

    step: float
    frequency_hz: float
    decibel_db: float
    ear: Ear
    response: ToneResponse


@dataclass
class HearingTest:
    id: str
    tenant_id: str
    profile_id: str
    test_date: datetime
    tester_id: str
    device_id: str
    test_type: str
    results: List[ToneResult]
    next_test_due: str


@dataclass
class NewProfile:
    """Fields accepted when creating a profile."""

    tenant_id: str
    group_id: str
    employee_id: str
    first_name: str
    last_name: str
    date_of_birth: str
    department: str
    last_test_date: Optional[str] = None


@dataclass
class NewHearingTest:
    """Fields accepted when recording a hearing test."""

    tenant_id: str
    profile_id: str
    test_date: datetime
    tester_id: str
    device_id: str
    results: List[ToneResult]
    test_type: str = "audiometry"


@dataclass(frozen=True)
class Identity:
    """Claims recovered from a verified session token."""

    user_id: str
    username: str
    role: str
