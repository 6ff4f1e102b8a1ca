"""
Serializers Package.

All API serializers for the delivery admin backend.
"""

from .base import AdminEmailField, BaseModelSerializer

from .users import (
    SendOTPSerializer,
    OTPLoginSerializer,
    AdminProfileSerializer,
    AdminCreateSerializer,
)

from .project import (
    ProjectDetailSerializer,
    ProjectClientSerializer,
    ProjectMinimalSerializer,
    ProjectProgressUpdateSerializer,
    PhaseStatusUpdateSerializer,
    ChecklistItemUpdateSerializer,
    ChecklistItemSerializer,
    MergedPhaseSerializer,
    ProjectWithPhasesSerializer,
    PhaseTemplateSerializer,
)

from .onboarding import (
    OnboardingAnswerSerializer,
    QuizSubmissionSerializer,
    LeadSerializer,
)

from .task import (
    TaskSerializer,
    TaskResponseCreateSerializer,
    TaskResponseFeedSerializer,
)
