from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried by the authenticated identity."""

    ADMIN = "ADMIN"
    COACH = "COACH"
    LEARNER = "LEARNER"


class ActorKind(str, Enum):
    LEARNER = "LEARNER"
    COACH = "COACH"


class JustificationStatus(str, Enum):
    """Absence/lateness justification workflow states."""

    NONE = "NONE"
    TO_JUSTIFY = "TO_JUSTIFY"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class CoachPresenceState(str, Enum):
    NOT_ARRIVED = "NOT_ARRIVED"
    CHECKED_IN = "CHECKED_IN"
    COMPLETED = "COMPLETED"


class ScanAction(str, Enum):
    CHECKIN = "checkin"
    CHECKOUT = "checkout"
    NONE = "none"


class MealType(str, Enum):
    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
