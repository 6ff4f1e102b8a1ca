"""
Persistence Models Package.

Django ORM models for admins, onboarding input, projects and tasks.
"""

from .base import (
    TimeStampedMixin,
    ActiveManager,
    AllObjectsManager,
    BaseModel,
    BaseModelWithHistory,
)

# Admins
from .users import User
from .audit import AuditLog

# Onboarding input
from .onboarding import (
    OnboardingAnswer,
    QuizSubmission,
    Lead,
)

# Delivery
from .project import (
    Project,
    KitTypeChoices,
)
from .task import (
    Task,
    TaskTypeChoices,
    TaskStatusChoices,
)

__all__ = [
    'TimeStampedMixin',
    'ActiveManager',
    'AllObjectsManager',
    'BaseModel',
    'BaseModelWithHistory',
    'User',
    'AuditLog',
    'OnboardingAnswer',
    'QuizSubmission',
    'Lead',
    'Project',
    'KitTypeChoices',
    'Task',
    'TaskTypeChoices',
    'TaskStatusChoices',
]
