"""Enums for the Hearing Test API."""

from enum import Enum


class Ear(str, Enum):
    """Ear a tone is presented to."""

    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"


class ToneResponse(str, Enum):
    """Employee response to a presented tone."""

    HEARD = "heard"
    NOT_HEARD = "not_heard"


class RiskLevel(str, Enum):
    """Noise-exposure risk level of a group."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UserRole(str, Enum):
    """Roles a user can hold."""

    CERTIFIED_TESTER = "certified_tester"
    ADMINISTRATOR = "administrator"
