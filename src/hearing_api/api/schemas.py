"""Pydantic models for API request/response validation."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ConfigDict

from ..core.enums import Ear, RiskLevel, ToneResponse


# Base response models
class BaseResponse(BaseModel):
    """Base response model with common fields."""

    model_config = ConfigDict(from_attributes=True)


class FieldError(BaseModel):
    field: str = Field(description="Dotted location of the offending field")
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    success: bool = False
    message: str = Field(description="Human-readable summary of the failure")
    errors: Optional[List[FieldError]] = Field(
        None, description="Per-field validation errors (400 responses only)"
    )


# Authentication schemas
class LoginRequest(BaseModel):
    """Schema for login request."""

    username: str = Field(description="Username (email address)", min_length=1)
    password: str = Field(description="Account password", min_length=1)


class UserSummary(BaseResponse):
    id: str
    name: str
    role: str


class LoginResponse(BaseModel):
    """Schema for login response."""

    success: bool = True
    token: str = Field(description="Bearer token for API authentication")
    expires_in: int = Field(description="Token lifetime in seconds")
    user: UserSummary


# Tenant and group schemas
class TenantResponse(BaseResponse):
    id: str
    name: str
    industry: str
    active: bool


class TenantListResponse(BaseResponse):
    tenants: List[TenantResponse]


class GroupResponse(BaseResponse):
    id: str
    tenant_id: str
    name: str
    description: Optional[str] = None
    employee_count: int
    risk_level: RiskLevel


class GroupListResponse(BaseResponse):
    groups: List[GroupResponse]


# Profile schemas
class ProfileResponse(BaseResponse):
    id: str
    tenant_id: str
    group_id: str
    employee_id: str
    first_name: str
    last_name: str
    date_of_birth: str
    department: str
    last_test_date: Optional[str] = None


class ProfileListResponse(BaseResponse):
    profiles: List[ProfileResponse]


class ProfileCreate(BaseModel):
    """Schema for creating a profile inside a group."""

    employee_id: str = Field(description="Employer-assigned employee number", min_length=1, max_length=50)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    date_of_birth: date
    department: str = Field(min_length=1, max_length=100)
    last_test_date: Optional[date] = None


class ProfileCreatedResponse(BaseResponse):
    success: bool = True
    profile: ProfileResponse


class TestStepResponse(BaseResponse):
    step: Union[int, float]
    frequency_hz: Union[int, float]
    decibel_db: Union[int, float]
    ear: Ear


class ToneResultResponse(BaseResponse):
    step: Union[int, float]
    frequency_hz: Union[int, float]
    decibel_db: Union[int, float]
    ear: Ear
    response: ToneResponse


class HearingTestResponse(BaseResponse):
    id: str
    test_date: datetime
    tester_id: str
    device_id: str
    test_type: str
    results: List[ToneResultResponse]
    next_test_due: str


class ProfileDetailResponse(BaseResponse):
    profile: ProfileResponse
    test_path: List[TestStepResponse] = Field(
        description="Prescribed steps; empty when no path is assigned"
    )
    previous_tests: List[HearingTestResponse]


# Hearing test submission schemas
class TestMetadata(BaseModel):
    test_date: datetime = Field(description="When the test was performed (ISO 8601)")
    tester_id: str = Field(min_length=1)
    device_id: str = Field(min_length=1)
    test_type: str = Field(default="audiometry", min_length=1)


class ToneResultIn(BaseModel):
    step: Union[int, float]
    frequency_hz: Union[int, float] = Field(description="Tone frequency in Hz")
    decibel_db: Union[int, float] = Field(description="Presentation level in dB HL")
    ear: Ear
    response: ToneResponse


class TestSubmission(BaseModel):
    """Schema for submitting hearing test results."""

    test_metadata: TestMetadata
    results: List[ToneResultIn]


class TestSubmissionResponse(BaseModel):
    success: bool = True
    test_id: str
    message: str = "Test results saved successfully"
    next_test_due: str


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into ``{field, message, type}`` entries."""
    return [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        }
        for error in errors
    ]
