"""
API v1 Views.
"""

from .auth import AuthViewSet, AdminViewSet
from .project import ProjectViewSet, PhaseTemplateViewSet
from .onboarding import OnboardingAnswerViewSet, QuizSubmissionViewSet, LeadViewSet
from .tasks import TaskViewSet
from .health import DatabaseHealthView
