"""
Django implementations of domain repository interfaces.
"""

import logging
from typing import List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from domain.delivery.repositories import ProjectRecord, ProjectStateRepository
from domain.shared.value_objects import KitType
from .models import Project

logger = logging.getLogger(__name__)


def project_to_record(project: Project) -> ProjectRecord:
    return ProjectRecord(
        id=project.id,
        kit_type=KitType.parse(project.kit_type) or project.kit_type,
        phases_state=project.phases_state if isinstance(project.phases_state, dict) else {},
        name=project.name,
        email=project.email,
        user_id=project.user_id or None,
        current_day_of_14=project.current_day_of_14,
        next_from_us=project.next_from_us,
        next_from_you=project.next_from_you,
        onboarding_percent=project.onboarding_percent,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


class DjangoProjectStateRepository(ProjectStateRepository):
    """
    Phase state repository backed by ``Project.phases_state``.

    Updates lock the project row (SELECT ... FOR UPDATE) for the whole
    read-modify-write, so concurrent updates to one project serialise.
    """

    def __init__(self, queryset=None):
        self._queryset = queryset

    def _base_queryset(self):
        if self._queryset is not None:
            return self._queryset.all()
        return Project.objects.all()

    def _find(self, queryset, project_id) -> Optional[Project]:
        try:
            return queryset.filter(pk=project_id).first()
        except (DjangoValidationError, ValueError):
            # Not a valid UUID
            return None

    def get(self, project_id) -> Optional[ProjectRecord]:
        project = self._find(self._base_queryset(), project_id)
        return project_to_record(project) if project else None

    def update(self, project_id, patch):
        with transaction.atomic():
            project = self._find(self._base_queryset().select_for_update(), project_id)
            if project is None:
                return None

            new_state = patch(project_to_record(project))
            project.phases_state = new_state
            project.save(update_fields=['phases_state', 'updated_at', 'version'])

        logger.debug(f"Saved phase state for project {project_id}")
        return new_state

    def list(self, kit_type: Optional[KitType] = None) -> List[ProjectRecord]:
        queryset = self._base_queryset().order_by('-created_at')
        if kit_type is not None:
            queryset = queryset.filter(kit_type=KitType(kit_type).value)
        return [project_to_record(project) for project in queryset]
