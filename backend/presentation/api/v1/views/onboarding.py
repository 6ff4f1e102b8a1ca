"""
Onboarding Views.

API views for onboarding answers, quiz submissions and leads.
"""

from rest_framework import mixins, status, viewsets, filters
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from application.services.onboarding import OnboardingService
from domain.delivery.phase_templates import get_phase_structure_for_kit_type
from infrastructure.persistence.models import AuditLog, Lead, OnboardingAnswer, Project, QuizSubmission
from presentation.api.pagination import StandardResultsSetPagination
from ..serializers.onboarding import (
    LeadSerializer,
    OnboardingAnswerSerializer,
    QuizSubmissionSerializer,
)
from .base import (
    EntityNotFoundMixin,
    ListEnvelopeMixin,
    ReadOnlyModelViewSet,
    UUID_LOOKUP_REGEX,
    get_client_ip,
)


class OnboardingAnswerViewSet(
    ListEnvelopeMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for onboarding answers.

    Endpoints:
    - GET /onboarding-answers/ - all answers with their client project
    - POST /onboarding-answers/{id}/start-project/ - create the project
    """

    queryset = OnboardingAnswer.objects.select_related('project').order_by('-completed_at')
    serializer_class = OnboardingAnswerSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_serializer_context(self):
        context = super().get_serializer_context()
        if self.action == 'list':
            user_ids = set(
                OnboardingAnswer.objects.exclude(user_id='').values_list('user_id', flat=True)
            )
            context['projects_by_user_id'] = {
                project.user_id: project
                for project in Project.objects.filter(user_id__in=user_ids).order_by('created_at')
            }
        return context

    @action(detail=True, methods=['post'], url_path='start-project')
    def start_project(self, request, pk=None):
        """Start the delivery project for this onboarding answer."""
        project = OnboardingService().start_project(pk, user=request.user)
        AuditLog.record(
            AuditLog.ACTION_START_PROJECT,
            user=request.user,
            obj=project,
            user_ip=get_client_ip(request),
            user_agent=request.META.get('HTTP_USER_AGENT', ''),
            kit_type=project.kit_type,
            onboarding_answer_id=str(pk),
        )

        structure = get_phase_structure_for_kit_type(project.kit_type)
        return Response({
            'success': True,
            'project': {
                'id': str(project.id),
                'email': project.email,
                'name': project.name or None,
                'plan': project.kit_type,
                'startedAt': project.started_at.isoformat() if project.started_at else None,
                'currentDayOf14': project.current_day_of_14,
                'phasesState': project.phases_state,
                'phaseCount': len(structure),
            },
            'message': 'Project started successfully',
        }, status=status.HTTP_200_OK)


class QuizSubmissionViewSet(
    EntityNotFoundMixin,
    ListEnvelopeMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for quiz submissions.

    Endpoints:
    - GET /quiz-submissions/ - list submissions, newest first
    - GET /quiz-submissions/{id}/ - get one submission
    - DELETE /quiz-submissions/{id}/ - delete a submission
    """

    queryset = QuizSubmission.objects.order_by('-created_at')
    serializer_class = QuizSubmissionSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP_REGEX
    not_found_entity = 'Quiz submission'

    filter_backends = [filters.SearchFilter]
    search_fields = ['first_name', 'last_name', 'email', 'brand_name']

    def retrieve(self, request, *args, **kwargs):
        submission = self.get_object()
        return Response({'success': True, 'data': self.get_serializer(submission).data})

    def destroy(self, request, *args, **kwargs):
        submission = self.get_object()
        submission.delete()
        return Response({
            'success': True,
            'message': 'Quiz submission deleted successfully',
        })


class LeadViewSet(ReadOnlyModelViewSet):
    """
    ViewSet for audit leads (read-only).

    Endpoints:
    - GET /leads/ - paginated list (?search=, ?ordering=)
    - GET /leads/{id}/ - get one lead
    """

    queryset = Lead.objects.all()
    serializer_class = LeadSerializer
    pagination_class = StandardResultsSetPagination
    not_found_entity = 'Lead'

    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['business_name', 'first_name', 'last_name', 'email', 'location']
    ordering_fields = ['created_at', 'business_name']
    ordering = ['-created_at']
