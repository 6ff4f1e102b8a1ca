"""
Project Views.

API views for client projects and their 4-phase delivery state.
"""

import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from application.services.phases import PhaseService
from domain.delivery.phase_templates import (
    DEFAULT_KIT_TYPE,
    get_phase_structure_for_kit_type,
)
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import KitType
from infrastructure.persistence.models import Project
from infrastructure.persistence.repositories import DjangoProjectStateRepository
from ..serializers.project import (
    ChecklistItemUpdateSerializer,
    MergedPhaseSerializer,
    PhaseStatusUpdateSerializer,
    PhaseTemplateSerializer,
    ProjectClientSerializer,
    ProjectDetailSerializer,
    ProjectProgressUpdateSerializer,
    ProjectWithPhasesSerializer,
)
from .base import EntityNotFoundMixin, HistoryViewMixin, UUID_LOOKUP_REGEX

logger = logging.getLogger(__name__)


def check_phase_key(phase_key, phase_id):
    """
    Reject a URL phase that differs from the body's phase_id.

    ``phase_key`` is either ``PHASE_n`` or the display id
    ``{project_id}-PHASE_n``.
    """
    if phase_key.rsplit('-', 1)[-1] != phase_id:
        logger.warning(f"URL phase {phase_key} does not match body phase_id {phase_id}")
        raise ValidationException(
            f"phase_id {phase_id} does not match URL phase {phase_key}",
            field='phase_id',
            value=phase_key,
        )


class ProjectViewSet(
    EntityNotFoundMixin,
    HistoryViewMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for projects.

    Endpoints:
    - GET /projects/{id}/ - project progress card
    - PATCH /projects/{id}/ - update current day / next steps
    - GET /projects/{id}/history/ - change history
    - GET /projects/{id}/phases/ - merged phases with checklist items
    - GET /projects/{id}/phases/{phase_key}/ - project summary (id, email, plan)
    - PATCH /projects/{id}/phases/{phase_key}/ - change phase status
    - PATCH /projects/{id}/phases/{phase_key}/checklist/{item_id}/ - tick a checklist item
    - GET /projects/phases/ - all projects with phases (?kit_type=&status=)
    - GET /projects/clients/ - client summary list
    """

    queryset = Project.objects.all()
    serializer_class = ProjectDetailSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP_REGEX
    not_found_entity = 'Project'
    http_method_names = ['get', 'patch', 'head', 'options']

    def get_phase_service(self):
        return PhaseService(DjangoProjectStateRepository())

    # =========================================================================
    # Project
    # =========================================================================

    def retrieve(self, request, *args, **kwargs):
        project = self.get_object()
        return Response({'project': ProjectDetailSerializer(project).data})

    def partial_update(self, request, *args, **kwargs):
        project = self.get_object()
        serializer = ProjectProgressUpdateSerializer(project, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save(updated_by=request.user)

        logger.info(f"Project {project.id} progress updated: {serializer.validated_data}")
        return Response({
            'success': True,
            'message': 'Project progress updated successfully',
        })

    @action(detail=False, methods=['get'])
    def clients(self, request):
        """Client summary list."""
        projects = self.get_queryset().order_by('-created_at')
        data = ProjectClientSerializer(projects, many=True).data
        return Response({'success': True, 'data': data, 'count': len(data)})

    # =========================================================================
    # Phases
    # =========================================================================

    @action(detail=True, methods=['get'])
    def phases(self, request, pk=None):
        """Merged phases of one project, in template order."""
        project, phases = self.get_phase_service().get_project_phases(pk)
        data = MergedPhaseSerializer(phases, many=True, context={'project': project}).data
        return Response({'phases': data})

    @action(
        detail=True,
        methods=['get'],
        url_path=r'phases/(?P<phase_key>[^/]+)',
        url_name='phase',
    )
    def phase_detail(self, request, pk=None, phase_key=None):
        """Project summary for a phase page (id, email, plan)."""
        project = self.get_object()
        return Response({
            'project': {
                'id': str(project.id),
                'email': project.email,
                'plan': project.kit_type,
            },
        })

    @phase_detail.mapping.patch
    def update_phase_status(self, request, pk=None, phase_key=None):
        """
        Change a phase status.

        Body: {"status": "...", "phase_id": "PHASE_n"}. ``phase_key`` in the
        URL is ``PHASE_n`` or the display id and must name the same phase.
        """
        serializer = PhaseStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        phase_id = serializer.validated_data['phase_id']
        check_phase_key(phase_key, phase_id)

        self.get_phase_service().update_phase_status(
            pk,
            phase_id,
            serializer.validated_data['status'],
        )
        return Response({
            'success': True,
            'message': 'Phase status updated successfully',
        })

    @action(
        detail=True,
        methods=['patch'],
        url_path=r'phases/(?P<phase_key>[^/]+)/checklist/(?P<item_id>[^/]+)',
        url_name='phase-checklist',
    )
    def update_checklist_item(self, request, pk=None, phase_key=None, item_id=None):
        """
        Tick or untick a checklist item.

        Body: {"is_done": bool, "phase_id": "PHASE_n", "label": "..."}.
        """
        serializer = ChecklistItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        phase_id = serializer.validated_data['phase_id']
        check_phase_key(phase_key, phase_id)

        checklist = self.get_phase_service().update_checklist_item(
            pk,
            phase_id,
            serializer.validated_data['label'],
            serializer.validated_data['is_done'],
        )
        return Response({
            'success': True,
            'message': 'Checklist item updated successfully',
            'checklist': checklist,
            'phase_id': phase_id,
        })

    @action(detail=False, methods=['get'], url_path='phases', url_name='phases-overview')
    def phases_overview(self, request):
        """All projects with merged phases, filtered by kit type / phase status."""
        pairs = self.get_phase_service().list_projects_with_phases(
            kit_type=request.query_params.get('kit_type'),
            status=request.query_params.get('status'),
        )
        data = ProjectWithPhasesSerializer(pairs, many=True).data
        return Response({'projects': data, 'total': len(data)})


class PhaseTemplateViewSet(viewsets.ViewSet):
    """
    ViewSet for the static phase templates.

    Endpoints:
    - GET /phase-templates/?kit_type=LAUNCH|GROWTH
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        kit_type = request.query_params.get('kit_type')
        if kit_type:
            parsed = KitType.parse(kit_type)
            if parsed is None:
                raise ValidationException(
                    f"Invalid kit_type: {kit_type}", field='kit_type', value=kit_type
                )
        else:
            parsed = DEFAULT_KIT_TYPE

        structure = get_phase_structure_for_kit_type(parsed)
        return Response({
            'phase_templates': PhaseTemplateSerializer(structure, many=True).data,
            'kit_type': parsed.value,
        }, status=status.HTTP_200_OK)
