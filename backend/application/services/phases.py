"""
Phase Service.

Application service for reading and updating the delivery phases of a
project. All persistence goes through a ProjectStateRepository.
"""

from datetime import datetime, timezone as dt_timezone
import logging
from typing import Any, Callable, List, Optional, Tuple

from domain.delivery.phase_state import (
    MergedPhase,
    apply_checklist_update,
    apply_status_change,
    ensure_all_phases,
    merge_phase_structure_with_state,
    to_bool,
)
from domain.delivery.phase_templates import (
    get_phase_structure_for_kit_type,
    get_phase_template,
)
from domain.delivery.repositories import ProjectRecord, ProjectStateRepository
from domain.shared.exceptions import (
    EntityNotFoundException,
    PhaseNotFoundException,
    ValidationException,
)
from domain.shared.value_objects import KitType, PhaseStatus

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(dt_timezone.utc)


class PhaseService:
    """
    Phase operations on top of a ProjectStateRepository.

    Usage:
        service = PhaseService(DjangoProjectStateRepository())
        service.update_phase_status(project_id, 'PHASE_1', 'IN_PROGRESS')
    """

    def __init__(
        self,
        repository: ProjectStateRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.repository = repository
        self.clock = clock

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_project(self, project_id) -> ProjectRecord:
        project = self.repository.get(project_id)
        if project is None:
            raise EntityNotFoundException('Project', project_id)
        return project

    @staticmethod
    def _require(value: Any, field: str):
        if value is None or value == '':
            raise ValidationException(f"{field} is required", field=field)

    @staticmethod
    def _get_phase_or_404(kit_type, phase_id: str):
        template = get_phase_template(kit_type, phase_id)
        if template is None:
            kit = KitType.parse(kit_type)
            raise PhaseNotFoundException(phase_id, kit.value if kit else str(kit_type))
        return template

    # =========================================================================
    # Reads
    # =========================================================================

    def get_project_phases(self, project_id) -> Tuple[ProjectRecord, List[MergedPhase]]:
        """Return the project and its merged phases, in template order."""
        project = self._get_project(project_id)
        structure = get_phase_structure_for_kit_type(project.kit_type)
        return project, merge_phase_structure_with_state(structure, project.phases_state)

    def list_projects_with_phases(
        self,
        kit_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Tuple[ProjectRecord, List[MergedPhase]]]:
        """
        List projects (newest first) with their merged phases.

        ``kit_type`` restricts to one kit; ``status`` keeps only projects
        where at least one merged phase has that status.
        """
        parsed_kit = None
        if kit_type:
            parsed_kit = KitType.parse(kit_type)
            if parsed_kit is None:
                raise ValidationException(
                    f"Invalid kit_type: {kit_type}", field='kit_type', value=kit_type
                )

        parsed_status = None
        if status:
            parsed_status = PhaseStatus.parse(status)
            if parsed_status is None:
                raise ValidationException(
                    f"Invalid status: {status}", field='status', value=status
                )

        result = []
        for project in self.repository.list(kit_type=parsed_kit):
            structure = get_phase_structure_for_kit_type(project.kit_type)
            phases = merge_phase_structure_with_state(structure, project.phases_state)
            if parsed_status and not any(p.status == parsed_status for p in phases):
                continue
            result.append((project, phases))
        return result

    # =========================================================================
    # Writes
    # =========================================================================

    def update_phase_status(self, project_id, phase_id: str, new_status) -> dict:
        """
        Change the status of one phase.

        Returns the stored state of that phase.
        Raises ValidationException for a missing/unknown status or missing
        phase id, EntityNotFoundException for an unknown project or phase.
        """
        self._require(phase_id, 'phase_id')
        status = PhaseStatus.parse(new_status)
        if status is None:
            raise ValidationException("Valid status is required", field='status', value=new_status)

        project = self._get_project(project_id)
        self._get_phase_or_404(project.kit_type, phase_id)

        now = self.clock()

        def patch(current: ProjectRecord) -> dict:
            structure = get_phase_structure_for_kit_type(current.kit_type)
            state = ensure_all_phases(current.phases_state, structure)
            state[phase_id] = apply_status_change(state.get(phase_id), status, now)
            return state

        new_state = self.repository.update(project_id, patch)
        if new_state is None:
            raise EntityNotFoundException('Project', project_id)

        logger.info(f"Project {project_id}: {phase_id} status -> {status.value}")
        return new_state[phase_id]

    def update_checklist_item(self, project_id, phase_id: str, label: str, is_done: bool) -> dict:
        """
        Set one checklist label of a phase.

        Returns the stored checklist mapping of that phase.
        """
        if is_done is None:
            raise ValidationException("is_done is required", field='is_done')
        self._require(phase_id, 'phase_id')
        self._require(label, 'label')

        project = self._get_project(project_id)
        template = self._get_phase_or_404(project.kit_type, phase_id)

        def patch(current: ProjectRecord) -> dict:
            structure = get_phase_structure_for_kit_type(current.kit_type)
            state = ensure_all_phases(current.phases_state, structure)
            state[phase_id] = apply_checklist_update(
                state.get(phase_id), template.checklist_labels, label, is_done
            )
            return state

        new_state = self.repository.update(project_id, patch)
        if new_state is None:
            raise EntityNotFoundException('Project', project_id)

        if not template.has_label(label):
            logger.warning(
                f"Project {project_id}: stored checklist label {label!r} "
                f"which is not part of {phase_id}"
            )
        logger.info(f"Project {project_id}: {phase_id} checklist {label!r} -> {to_bool(is_done)}")
        return new_state[phase_id]['checklist']
