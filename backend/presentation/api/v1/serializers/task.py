"""
Task Serializers.
"""

from rest_framework import serializers

from application.services.tasks import parse_task_metadata
from infrastructure.persistence.models import Task
from .base import BaseModelSerializer
from .project import ProjectMinimalSerializer


class TaskSerializer(BaseModelSerializer):
    """Task with its project summary."""

    project_id = serializers.UUIDField(read_only=True)
    project = ProjectMinimalSerializer(read_only=True)
    attachments = serializers.ListField(required=False)
    metadata = serializers.DictField(required=False)

    class Meta:
        model = Task
        fields = [
            'id', 'project_id', 'title', 'description', 'type', 'status',
            'due_date', 'completed_at', 'attachments', 'metadata',
            'created_by', 'created_at', 'updated_at', 'project',
        ]
        read_only_fields = ['id', 'completed_at', 'created_at', 'updated_at']


class TaskResponseCreateSerializer(serializers.Serializer):
    """POST body for a task response."""

    text = serializers.CharField(
        error_messages={
            'required': 'text is required',
            'blank': 'text is required',
            'null': 'text is required',
        }
    )
    attachments = serializers.ListField(
        child=serializers.DictField(),
        required=False,
    )


class TaskResponseFeedSerializer(BaseModelSerializer):
    """
    Task row of the responses feed.

    Responses and attachments are normalised from ``metadata``.
    """

    client_id = serializers.UUIDField(source='project_id', read_only=True)
    client_name = serializers.SerializerMethodField()
    client_email = serializers.SerializerMethodField()
    responses = serializers.SerializerMethodField()
    attachments = serializers.SerializerMethodField()
    metadata = serializers.SerializerMethodField()

    class Meta:
        model = Task
        fields = [
            'id', 'client_id', 'client_name', 'client_email',
            'title', 'description', 'type', 'status',
            'due_date', 'completed_at', 'created_at', 'updated_at',
            'created_by', 'responses', 'attachments', 'metadata',
        ]
        read_only_fields = fields

    def _parsed(self, obj):
        cache = self.context.setdefault('_parsed_metadata', {})
        if obj.pk not in cache:
            cache[obj.pk] = parse_task_metadata(obj.metadata)
        return cache[obj.pk]

    def get_client_name(self, obj):
        return obj.project.name or None

    def get_client_email(self, obj):
        return obj.project.email or None

    def get_responses(self, obj):
        return self._parsed(obj)['responses']

    def get_attachments(self, obj):
        return self._parsed(obj)['attachments']

    def get_metadata(self, obj):
        return self._parsed(obj)
