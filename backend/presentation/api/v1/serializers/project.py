"""
Project Serializers.

Serializers for projects and their delivery phases.
"""

from rest_framework import serializers

from domain.shared.value_objects import PhaseStatus
from infrastructure.persistence.models import Project
from .base import BaseModelSerializer


# =============================================================================
# PROJECT
# =============================================================================

class ProjectDetailSerializer(BaseModelSerializer):
    """Project progress card."""

    plan = serializers.CharField(source='kit_type', read_only=True)

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'email', 'user_id', 'plan', 'kit_type',
            'current_day_of_14', 'next_from_us', 'next_from_you',
            'onboarding_percent', 'started_at', 'created_at', 'updated_at',
            'updated_by',
        ]
        read_only_fields = fields


class ProjectClientSerializer(serializers.ModelSerializer):
    """Summary row for the clients list."""

    plan = serializers.CharField(source='kit_type', read_only=True)

    class Meta:
        model = Project
        fields = [
            'id', 'user_id', 'name', 'email', 'plan',
            'current_day_of_14', 'started_at', 'created_at',
        ]
        read_only_fields = fields


class ProjectMinimalSerializer(serializers.ModelSerializer):
    """Minimal project serializer for nested representations."""

    plan = serializers.CharField(source='kit_type', read_only=True)

    class Meta:
        model = Project
        fields = ['id', 'name', 'email', 'plan']
        read_only_fields = fields


class ProjectProgressUpdateSerializer(serializers.ModelSerializer):
    """PATCH body for project progress."""

    DAY_RANGE_MESSAGE = 'current_day_of_14 must be between 1 and 14'

    current_day_of_14 = serializers.IntegerField(
        required=False,
        min_value=1,
        max_value=Project.DAYS_IN_CYCLE,
        error_messages={
            'min_value': DAY_RANGE_MESSAGE,
            'max_value': DAY_RANGE_MESSAGE,
            'invalid': DAY_RANGE_MESSAGE,
            'null': DAY_RANGE_MESSAGE,
        }
    )
    next_from_us = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    next_from_you = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = Project
        fields = ['current_day_of_14', 'next_from_us', 'next_from_you']

    def validate(self, attrs):
        for field in ('next_from_us', 'next_from_you'):
            if field in attrs and attrs[field] is None:
                attrs[field] = ''
        return attrs


# =============================================================================
# PHASES
# =============================================================================

class PhaseStatusUpdateSerializer(serializers.Serializer):
    """PATCH body for a phase status change."""

    phase_id = serializers.CharField(
        error_messages={
            'required': 'phase_id is required',
            'blank': 'phase_id is required',
            'null': 'phase_id is required',
        }
    )
    status = serializers.ChoiceField(
        choices=[s.value for s in PhaseStatus],
        error_messages={
            'required': 'Valid status is required',
            'invalid_choice': 'Valid status is required',
            'null': 'Valid status is required',
        }
    )


class ChecklistItemUpdateSerializer(serializers.Serializer):
    """PATCH body for a checklist item."""

    is_done = serializers.BooleanField(
        error_messages={
            'required': 'is_done is required',
            'null': 'is_done is required',
            'invalid': 'is_done must be a boolean',
        }
    )
    phase_id = serializers.CharField(
        error_messages={
            'required': 'phase_id is required',
            'blank': 'phase_id is required',
            'null': 'phase_id is required',
        }
    )
    label = serializers.CharField(
        trim_whitespace=False,
        error_messages={
            'required': 'label is required',
            'blank': 'label is required',
            'null': 'label is required',
        }
    )


class ChecklistItemSerializer(serializers.Serializer):
    """
    One checklist entry of a merged phase.

    Expects ``project`` (a ProjectRecord), ``phase_id`` and ``index`` in
    the context.
    """

    def to_representation(self, item):
        project = self.context['project']
        phase_id = self.context['phase_id']
        index = self.context['index']
        return {
            'id': f"{project.id}-{phase_id}-{index}",
            'phase_id': phase_id,
            'label': item.label,
            'is_done': item.is_done,
            'sort_order': index + 1,
            'created_at': project.created_at.isoformat() if project.created_at else None,
            'updated_at': project.updated_at.isoformat() if project.updated_at else None,
        }


class MergedPhaseSerializer(serializers.Serializer):
    """
    Merged phase (template + stored state) of one project.

    Expects ``project`` (a ProjectRecord) in the context.
    """

    id = serializers.SerializerMethodField()
    project_id = serializers.SerializerMethodField()
    phase_number = serializers.IntegerField()
    phase_id = serializers.CharField()
    title = serializers.CharField()
    subtitle = serializers.CharField(allow_null=True)
    day_range = serializers.CharField()
    status = serializers.CharField(source='status.value')
    started_at = serializers.CharField(allow_null=True)
    completed_at = serializers.CharField(allow_null=True)
    created_at = serializers.SerializerMethodField()
    updated_at = serializers.SerializerMethodField()
    checklist_items = serializers.SerializerMethodField()
    phase_links = serializers.SerializerMethodField()

    def _project(self):
        return self.context['project']

    def get_id(self, phase):
        return f"{self._project().id}-{phase.phase_id}"

    def get_project_id(self, phase):
        return str(self._project().id)

    def get_created_at(self, phase):
        value = self._project().created_at
        return value.isoformat() if value else None

    def get_updated_at(self, phase):
        value = self._project().updated_at
        return value.isoformat() if value else None

    def get_checklist_items(self, phase):
        return [
            ChecklistItemSerializer(
                item,
                context={'project': self._project(), 'phase_id': phase.phase_id, 'index': index},
            ).data
            for index, item in enumerate(phase.checklist)
        ]

    def get_phase_links(self, phase):
        return []


class ProjectWithPhasesSerializer(serializers.Serializer):
    """
    Project row of the phases overview.

    Serializes a ``(ProjectRecord, [MergedPhase])`` pair.
    """

    def to_representation(self, pair):
        project, phases = pair
        return {
            'id': str(project.id),
            'user_id': project.user_id,
            'kit_type': project.kit_type.value if hasattr(project.kit_type, 'value') else project.kit_type,
            'current_day_of_14': project.current_day_of_14,
            'next_from_us': project.next_from_us or None,
            'next_from_you': project.next_from_you or None,
            'onboarding_finished': project.onboarding_percent == 100,
            'onboarding_percent': project.onboarding_percent,
            'created_at': project.created_at.isoformat() if project.created_at else None,
            'updated_at': project.updated_at.isoformat() if project.updated_at else None,
            'email': project.email,
            'phases': MergedPhaseSerializer(phases, many=True, context={'project': project}).data,
        }


class PhaseTemplateSerializer(serializers.Serializer):
    """Static phase template."""

    phase_id = serializers.CharField()
    phase_number = serializers.IntegerField()
    title = serializers.CharField()
    subtitle = serializers.CharField(allow_null=True)
    day_range = serializers.CharField()
    checklist_labels = serializers.ListField(child=serializers.CharField())
