"""
Delivery Domain - Phase State.

Reconciles the static phase templates with the per-project state blob
stored in ``Project.phases_state``.

Stored blob shape (keyed by phase_id)::

    {
        "PHASE_1": {
            "status": "IN_PROGRESS",
            "started_at": "2026-01-05T10:00:00+00:00",
            "completed_at": null,
            "checklist": {"Onboarding steps completed": true}
        },
        ...
    }

All functions here are pure: they never mutate their inputs and return
fresh dictionaries / dataclasses.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from domain.shared.value_objects import PhaseStatus

from .phase_templates import PhaseTemplate, get_phase_structure_for_kit_type

logger = logging.getLogger(__name__)

TRUE_STRINGS = frozenset({'true', '1', 'yes', 'on'})


# =============================================================================
# MERGED VIEW
# =============================================================================

@dataclass(frozen=True)
class ChecklistEntry:
    """One template label with its completion flag."""

    label: str
    is_done: bool = False


@dataclass
class MergedPhase:
    """Template phase combined with its stored state."""

    phase_id: str
    phase_number: int
    title: str
    day_range: str
    subtitle: Optional[str] = None
    status: PhaseStatus = PhaseStatus.NOT_STARTED
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    checklist: List[ChecklistEntry] = field(default_factory=list)

    @property
    def done_count(self) -> int:
        return sum(1 for item in self.checklist if item.is_done)

    @property
    def progress_percent(self) -> int:
        if not self.checklist:
            return 0
        return round(self.done_count * 100 / len(self.checklist))

    def to_dict(self) -> dict:
        return {
            'phase_id': self.phase_id,
            'phase_number': self.phase_number,
            'title': self.title,
            'subtitle': self.subtitle,
            'day_range': self.day_range,
            'status': self.status.value,
            'started_at': self.started_at,
            'completed_at': self.completed_at,
            'checklist': [
                {'label': item.label, 'is_done': item.is_done}
                for item in self.checklist
            ],
        }


# =============================================================================
# HELPERS
# =============================================================================

def default_phase_state() -> Dict[str, Any]:
    """State used for a phase that has nothing stored yet."""
    return {
        'status': PhaseStatus.NOT_STARTED.value,
        'started_at': None,
        'completed_at': None,
        'checklist': {},
    }


def to_bool(value: Any) -> bool:
    """
    Lenient boolean used on the write side.

    Accepts True, 1 and the usual truthy strings; everything else is False.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return False


def _timestamp(value: Any) -> Optional[str]:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str) and value:
        return value
    return None


def _normalize_phase_state(raw: Any) -> Dict[str, Any]:
    """Copy a stored phase entry, replacing anything malformed with defaults."""
    if not isinstance(raw, Mapping):
        return default_phase_state()

    status = PhaseStatus.parse(raw.get('status'))
    checklist = raw.get('checklist')
    return {
        'status': (status or PhaseStatus.NOT_STARTED).value,
        'started_at': _timestamp(raw.get('started_at')),
        'completed_at': _timestamp(raw.get('completed_at')),
        'checklist': dict(checklist) if isinstance(checklist, Mapping) else {},
    }


# =============================================================================
# MERGE
# =============================================================================

def merge_phase_structure_with_state(
    structure: Sequence[PhaseTemplate],
    state: Optional[Mapping[str, Any]],
) -> List[MergedPhase]:
    """
    Merge a phase structure with a stored state blob.

    Returns one MergedPhase per template phase, in template order. Only
    template labels appear in each checklist; a label counts as done only
    when its stored value is exactly ``True``. Stored labels that are not
    part of the template are left in storage and skipped here.
    """
    if not isinstance(state, Mapping):
        state = {}

    merged = []
    for template in structure:
        phase_state = _normalize_phase_state(state.get(template.phase_id))
        stored_checklist = phase_state['checklist']

        unknown = [key for key in stored_checklist if not template.has_label(key)]
        if unknown:
            logger.debug(
                f"Ignoring stored checklist labels not in template "
                f"{template.phase_id}: {unknown}"
            )

        merged.append(MergedPhase(
            phase_id=template.phase_id,
            phase_number=template.phase_number,
            title=template.title,
            subtitle=template.subtitle,
            day_range=template.day_range,
            status=PhaseStatus(phase_state['status']),
            started_at=phase_state['started_at'],
            completed_at=phase_state['completed_at'],
            checklist=[
                ChecklistEntry(label=label, is_done=stored_checklist.get(label) is True)
                for label in template.checklist_labels
            ],
        ))

    return merged


def merge_for_kit_type(kit_type, state: Optional[Mapping[str, Any]]) -> List[MergedPhase]:
    """Shortcut: look up the structure for ``kit_type`` and merge."""
    return merge_phase_structure_with_state(get_phase_structure_for_kit_type(kit_type), state)


# =============================================================================
# INITIALISATION
# =============================================================================

def _initial_phase_state(template: PhaseTemplate) -> Dict[str, Any]:
    phase_state = default_phase_state()
    phase_state['checklist'] = {label: False for label in template.checklist_labels}
    return phase_state


def initialize_phases_state(kit_type) -> Dict[str, Dict[str, Any]]:
    """Fresh blob: every phase NOT_STARTED, every label False."""
    return {
        template.phase_id: _initial_phase_state(template)
        for template in get_phase_structure_for_kit_type(kit_type)
    }


def ensure_all_phases(
    state: Optional[Mapping[str, Any]],
    structure: Iterable[PhaseTemplate],
) -> Dict[str, Any]:
    """
    Return a copy of ``state`` with an entry for every template phase.

    Existing entries (and any extra keys) are kept as they are; missing or
    malformed phase entries are replaced by the initial state.
    """
    result = dict(state) if isinstance(state, Mapping) else {}
    for template in structure:
        if not isinstance(result.get(template.phase_id), Mapping):
            result[template.phase_id] = _initial_phase_state(template)
    return result


# =============================================================================
# MUTATIONS
# =============================================================================

def _copy_phase_state(existing: Any) -> Dict[str, Any]:
    """Shallow copy of a stored phase entry; defaults if it is not a mapping."""
    if not isinstance(existing, Mapping):
        return default_phase_state()
    return dict(existing)


def apply_status_change(
    existing: Optional[Mapping[str, Any]],
    new_status: PhaseStatus,
    now: datetime,
) -> Dict[str, Any]:
    """
    Apply a status transition to one phase entry.

    - ``started_at`` is stamped on the first move away from NOT_STARTED
      and never cleared afterwards.
    - ``completed_at`` is stamped when the phase becomes DONE and cleared
      when it leaves DONE.
    - The checklist and any other stored keys are carried over untouched.
    """
    new_status = PhaseStatus(new_status)
    phase_state = _copy_phase_state(existing)

    if new_status.is_started and not phase_state.get('started_at'):
        phase_state['started_at'] = now.isoformat()
    phase_state.setdefault('started_at', None)

    phase_state['status'] = new_status.value
    phase_state['completed_at'] = now.isoformat() if new_status.is_terminal else None
    phase_state.setdefault('checklist', {})
    return phase_state


def apply_checklist_update(
    existing: Optional[Mapping[str, Any]],
    template_labels: Sequence[str],
    label: str,
    is_done: Any,
) -> Dict[str, Any]:
    """
    Set one checklist label on a phase entry.

    An empty stored checklist is first seeded with every template label set
    to False. The label is written even if the template does not know it.
    Only ``checklist`` is replaced; status, timestamps and any other stored
    keys stay as they are.
    """
    phase_state = _copy_phase_state(existing)
    stored = phase_state.get('checklist')
    checklist = {
        key: to_bool(value) for key, value in stored.items()
    } if isinstance(stored, Mapping) else {}

    if not checklist:
        checklist = {template_label: False for template_label in template_labels}

    checklist[label] = to_bool(is_done)
    phase_state['checklist'] = checklist
    return phase_state
