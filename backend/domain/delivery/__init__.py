"""
Delivery Domain.

Fixed 4-phase / 14-day delivery cycle: phase templates per kit type and the
logic that reconciles them with stored per-project phase state.
"""

from .phase_templates import (
    PhaseTemplate,
    LAUNCH_KIT_STRUCTURE,
    GROWTH_KIT_STRUCTURE,
    get_phase_structure_for_kit_type,
    get_phase_template,
    is_known_kit_type,
)
from .phase_state import (
    ChecklistEntry,
    MergedPhase,
    merge_phase_structure_with_state,
    initialize_phases_state,
    apply_status_change,
    apply_checklist_update,
)
from .repositories import ProjectRecord, ProjectStateRepository

__all__ = [
    'PhaseTemplate',
    'LAUNCH_KIT_STRUCTURE',
    'GROWTH_KIT_STRUCTURE',
    'get_phase_structure_for_kit_type',
    'get_phase_template',
    'is_known_kit_type',
    'ChecklistEntry',
    'MergedPhase',
    'merge_phase_structure_with_state',
    'initialize_phases_state',
    'apply_status_change',
    'apply_checklist_update',
    'ProjectRecord',
    'ProjectStateRepository',
]
