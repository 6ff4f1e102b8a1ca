"""
Shared Value Objects used across multiple domains.

Value Objects are immutable objects that describe characteristics of a thing.
Two value objects are equal if all their properties are equal.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional


# =============================================================================
# ENUMERATIONS
# =============================================================================

class KitType(str, Enum):
    """Delivery package a client bought; selects the phase template."""

    LAUNCH = "LAUNCH"
    GROWTH = "GROWTH"

    @classmethod
    def parse(cls, value) -> Optional[KitType]:
        """Return the matching kit type (case-insensitive) or None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class PhaseStatus(str, Enum):
    """Lifecycle status of one delivery phase."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    WAITING_ON_CLIENT = "WAITING_ON_CLIENT"
    DONE = "DONE"

    @property
    def is_started(self) -> bool:
        """Any status other than NOT_STARTED counts as started."""
        return self is not PhaseStatus.NOT_STARTED

    @property
    def is_terminal(self) -> bool:
        return self is PhaseStatus.DONE

    @classmethod
    def parse(cls, value) -> Optional[PhaseStatus]:
        """Return the matching status (exact value) or None."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None


class TaskStatus(str, Enum):
    """Status of a client task."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TaskType(str, Enum):
    """What a client task asks the client to do."""

    UPLOAD_FILE = "UPLOAD_FILE"
    SEND_INFO = "SEND_INFO"
    PROVIDE_DETAILS = "PROVIDE_DETAILS"
    REVIEW = "REVIEW"
    OTHER = "OTHER"
