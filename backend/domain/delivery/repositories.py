"""
Delivery Domain - Repository Interfaces.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from domain.shared.value_objects import KitType

PhasesState = Dict[str, Any]


@dataclass
class ProjectRecord:
    """Snapshot of a project as seen by the phase logic."""

    id: Any
    kit_type: KitType
    phases_state: PhasesState = field(default_factory=dict)
    name: str = ''
    email: str = ''
    user_id: Optional[str] = None
    current_day_of_14: int = 1
    next_from_us: str = ''
    next_from_you: str = ''
    onboarding_percent: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectStateRepository(ABC):
    """Repository interface for project phase state."""

    @abstractmethod
    def get(self, project_id) -> Optional[ProjectRecord]:
        """Get a project snapshot, or None if it does not exist."""
        pass

    @abstractmethod
    def update(
        self,
        project_id,
        patch: Callable[[ProjectRecord], PhasesState],
    ) -> Optional[PhasesState]:
        """
        Read-modify-write the phase state blob of one project.

        ``patch`` receives the current snapshot and returns the new blob,
        which replaces the stored one. Implementations must run the read and
        the write as one unit. Returns the stored blob, or None if the
        project does not exist.
        """
        pass

    @abstractmethod
    def list(self, kit_type: Optional[KitType] = None) -> List[ProjectRecord]:
        """List projects, newest first, optionally for one kit type."""
        pass
