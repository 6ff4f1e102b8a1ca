"""
Task Views.

API views for client tasks, their responses and statistics.
"""

import logging

import django_filters
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone
from django_filters.utils import translate_validation
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from application.services.tasks import (
    TaskService,
    completed_at_for_status,
    parse_task_metadata,
)
from application.tasks.notification_tasks import send_task_assigned_email
from domain.shared.exceptions import EntityNotFoundException, ValidationException
from infrastructure.persistence.models import Project, Task
from infrastructure.persistence.models.task import TaskStatusChoices, TaskTypeChoices
from presentation.api.pagination import TaskResponsesPagination
from ..serializers.task import (
    TaskResponseCreateSerializer,
    TaskResponseFeedSerializer,
    TaskSerializer,
)
from .base import BaseModelViewSet

logger = logging.getLogger(__name__)


# =============================================================================
# FILTERS
# =============================================================================

class TaskFilterSet(django_filters.FilterSet):
    """Filters for the plain task list."""

    project_id = django_filters.UUIDFilter(field_name='project_id')
    status = django_filters.ChoiceFilter(choices=TaskStatusChoices.choices)
    type = django_filters.ChoiceFilter(choices=TaskTypeChoices.choices)

    class Meta:
        model = Task
        fields = ['project_id', 'status', 'type']


class TaskResponseFilterSet(django_filters.FilterSet):
    """
    Filters for the responses feed and statistics.

    ``has_responses`` looks inside the JSON metadata, so it is evaluated in
    Python and narrowed back to a queryset by primary key.
    """

    client_id = django_filters.UUIDFilter(field_name='project_id')
    client_email = django_filters.CharFilter(field_name='project__email', lookup_expr='iexact')
    status = django_filters.ChoiceFilter(choices=TaskStatusChoices.choices)
    type = django_filters.ChoiceFilter(choices=TaskTypeChoices.choices)
    date_from = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='gte')
    date_to = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='lte')
    has_responses = django_filters.BooleanFilter(method='filter_has_responses')

    class Meta:
        model = Task
        fields = ['client_id', 'client_email', 'status', 'type', 'date_from', 'date_to']

    def filter_has_responses(self, queryset, name, value):
        if value is None:
            return queryset
        matching = [
            task.pk
            for task in queryset.select_related(None).only('id', 'metadata')
            if bool(parse_task_metadata(task.metadata)['responses']) == value
        ]
        return queryset.filter(pk__in=matching)


# =============================================================================
# VIEWSET
# =============================================================================

class TaskViewSet(BaseModelViewSet):
    """
    ViewSet for client tasks.

    Endpoints:
    - GET /tasks/ - list (?project_id=&status=&type=)
    - POST /tasks/ - create a task for a project
    - GET /tasks/{id}/ - get task
    - PATCH /tasks/{id}/ - update task
    - DELETE /tasks/{id}/ - soft delete
    - POST /tasks/{id}/responses/ - add a response
    - GET /tasks/{id}/history/ - change history
    - GET /tasks/responses/ - paginated responses feed
    - GET /tasks/statistics/ - aggregate statistics
    """

    queryset = Task.objects.select_related('project', 'created_by').order_by('-created_at')
    serializer_classes = {
        'responses_feed': TaskResponseFeedSerializer,
        'add_response': TaskResponseCreateSerializer,
        'default': TaskSerializer,
    }
    filterset_class = TaskFilterSet
    search_fields = ['title', 'description']
    ordering_fields = ['created_at', 'due_date', 'status']
    not_found_entity = 'Task'
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def _filter_for_clients(self, request):
        filterset = TaskResponseFilterSet(
            request.query_params,
            queryset=self.get_queryset(),
            request=request,
        )
        if not filterset.is_valid():
            raise translate_validation(filterset.errors)
        return filterset.qs

    # =========================================================================
    # CRUD
    # =========================================================================

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        data = self.get_serializer(queryset, many=True).data
        return Response({'success': True, 'data': data, 'count': len(data)})

    def retrieve(self, request, *args, **kwargs):
        task = self.get_object()
        return Response({'success': True, 'data': self.get_serializer(task).data})

    def create(self, request, *args, **kwargs):
        project_id = request.data.get('project_id')
        if not project_id or not request.data.get('title'):
            raise ValidationException('project_id and title are required')

        try:
            project = Project.objects.filter(pk=project_id).first()
        except (DjangoValidationError, ValueError):
            project = None
        if project is None:
            raise EntityNotFoundException('Project', project_id)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        now = timezone.now()
        task = serializer.save(
            project=project,
            created_by=request.user,
            updated_by=request.user,
            completed_at=completed_at_for_status(
                serializer.validated_data.get('status', TaskStatusChoices.PENDING), None, now
            ),
        )

        logger.info(f"Task {task.id} created for project {project.id}")
        send_task_assigned_email.delay(str(task.id))

        return Response(
            {
                'success': True,
                'data': self.get_serializer(task).data,
                'message': 'Task created successfully',
            },
            status=status.HTTP_201_CREATED,
        )

    def perform_update(self, serializer):
        task = serializer.instance
        new_status = serializer.validated_data.get('status', task.status)
        serializer.save(
            updated_by=self.request.user,
            completed_at=completed_at_for_status(new_status, task.completed_at, timezone.now()),
        )

    def update(self, request, *args, **kwargs):
        response = super().update(request, *args, **kwargs)
        return Response({
            'success': True,
            'data': response.data,
            'message': 'Task updated successfully',
        })

    def destroy(self, request, *args, **kwargs):
        task = self.get_object()
        task.soft_delete(user=request.user)
        logger.info(f"Task {task.id} deleted by {request.user.email}")
        return Response({'success': True, 'message': 'Task deleted successfully'})

    # =========================================================================
    # Responses
    # =========================================================================

    @action(detail=True, methods=['post'], url_path='responses')
    def add_response(self, request, pk=None):
        """Append a client/admin response to the task."""
        task = self.get_object()
        serializer = TaskResponseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = TaskService().add_response(
            task.pk,
            serializer.validated_data['text'],
            attachments=serializer.validated_data.get('attachments'),
            created_by=request.user.email,
        )
        return Response(
            {
                'success': True,
                'response': response,
                'message': 'Response added successfully',
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=['get'], url_path='responses')
    def responses_feed(self, request):
        """Tasks with their normalised responses, limit/offset paginated."""
        queryset = self._filter_for_clients(request)

        paginator = TaskResponsesPagination()
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = TaskResponseFeedSerializer(page, many=True, context=self.get_serializer_context())
        return paginator.get_paginated_response(serializer.data)

    @action(detail=False, methods=['get'])
    def statistics(self, request):
        """Aggregate task statistics for the filtered set."""
        queryset = self._filter_for_clients(request)
        return Response({
            'success': True,
            'statistics': TaskService().statistics(queryset),
        })
