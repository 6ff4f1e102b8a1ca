"""
Delivery Domain - Phase Templates.

Hardcoded 4-phase structure of the 14-day delivery cycle for each kit type.
The structure never changes at runtime; only phase status and checklist
completion are stored per project (see phase_state).
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Dict, Optional, Tuple

from domain.shared.value_objects import KitType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhaseTemplate:
    """Static description of one delivery phase."""

    phase_id: str
    phase_number: int
    title: str
    day_range: str
    checklist_labels: Tuple[str, ...]
    subtitle: Optional[str] = None

    def has_label(self, label: str) -> bool:
        return label in self.checklist_labels

    def to_dict(self) -> dict:
        return {
            'phase_id': self.phase_id,
            'phase_number': self.phase_number,
            'title': self.title,
            'subtitle': self.subtitle,
            'day_range': self.day_range,
            'checklist_labels': list(self.checklist_labels),
        }


# =============================================================================
# LAUNCH KIT
# =============================================================================

LAUNCH_KIT_STRUCTURE: Tuple[PhaseTemplate, ...] = (
    PhaseTemplate(
        phase_id='PHASE_1',
        phase_number=1,
        title='Inputs & clarity',
        subtitle='Lock the message and plan.',
        day_range='Days 0-2',
        checklist_labels=(
            'Onboarding steps completed',
            'Brand / strategy call completed',
            'Simple 14 day plan agreed',
        ),
    ),
    PhaseTemplate(
        phase_id='PHASE_2',
        phase_number=2,
        title='Words that sell',
        subtitle='We write your 3 pages.',
        day_range='Days 3-5',
        checklist_labels=(
            'Draft homepage copy ready',
            'Draft offer / services page ready',
            'Draft contact / about copy ready',
            'You reviewed and approved copy',
        ),
    ),
    PhaseTemplate(
        phase_id='PHASE_3',
        phase_number=3,
        title='Design & build',
        subtitle='We turn copy into a 3 page site.',
        day_range='Days 6-10',
        checklist_labels=(
            'Site layout built for all 3 pages',
            'Mobile checks done',
            'Testimonials and proof added',
            'Staging link shared with you',
        ),
    ),
    PhaseTemplate(
        phase_id='PHASE_4',
        phase_number=4,
        title='Test & launch',
        subtitle='We connect domain, test and go live.',
        day_range='Days 11-14',
        checklist_labels=(
            'Forms tested',
            'Domain connected',
            'Final tweaks applied',
            'Loom walkthrough recorded and shared',
        ),
    ),
)


# =============================================================================
# GROWTH KIT
# =============================================================================

GROWTH_KIT_STRUCTURE: Tuple[PhaseTemplate, ...] = (
    PhaseTemplate(
        phase_id='PHASE_1',
        phase_number=1,
        title='Strategy locked in',
        subtitle='Offer, goal and funnel map agreed.',
        day_range='Days 0-2',
        checklist_labels=(
            'Onboarding complete',
            'Strategy / funnel call done',
            'Main offer + 90 day goal confirmed',
            'Simple funnel map agreed',
        ),
    ),
    PhaseTemplate(
        phase_id='PHASE_2',
        phase_number=2,
        title='Copy & email engine',
        subtitle='We write your site copy and 5 emails.',
        day_range='Days 3-5',
        checklist_labels=(
            'Draft website copy ready',
            'Draft 5-email nurture sequence ready',
            'You reviewed and approved copy',
            'Any changes locked in',
        ),
    ),
    PhaseTemplate(
        phase_id='PHASE_3',
        phase_number=3,
        title='Build the funnel',
        subtitle='Pages, lead magnet and blog hub built.',
        day_range='Days 6-10',
        checklist_labels=(
            'All pages built',
            'Lead magnet created',
            'Blog hub set up',
            'Email sequences integrated',
            'Staging link shared',
        ),
    ),
    PhaseTemplate(
        phase_id='PHASE_4',
        phase_number=4,
        title='Test & handover',
        subtitle='We test the full journey and go live.',
        day_range='Days 11-14',
        checklist_labels=(
            'Funnel tested from first visit to booked call',
            'Domain connected',
            'Tracking checked (Analytics / pixels)',
            '5-email sequence switched on',
            'Loom walkthrough recorded and shared',
        ),
    ),
)


PHASE_STRUCTURES: Dict[KitType, Tuple[PhaseTemplate, ...]] = {
    KitType.LAUNCH: LAUNCH_KIT_STRUCTURE,
    KitType.GROWTH: GROWTH_KIT_STRUCTURE,
}

DEFAULT_KIT_TYPE = KitType.LAUNCH


def is_known_kit_type(kit_type) -> bool:
    """Check whether a kit type value maps to one of the templates."""
    return KitType.parse(kit_type) is not None


def get_phase_structure_for_kit_type(kit_type) -> Tuple[PhaseTemplate, ...]:
    """
    Get the ordered phase templates for a kit type.

    Accepts a KitType or its string value (case-insensitive). Anything
    else falls back to the LAUNCH structure and is logged.
    """
    parsed = KitType.parse(kit_type)
    if parsed is None:
        logger.warning(
            "Unknown kit type %r, falling back to %s phase structure",
            kit_type, DEFAULT_KIT_TYPE.value
        )
        parsed = DEFAULT_KIT_TYPE
    return PHASE_STRUCTURES[parsed]


def get_phase_template(kit_type, phase_id: str) -> Optional[PhaseTemplate]:
    """Get a single phase of a kit type's structure, or None if unknown."""
    for phase in get_phase_structure_for_kit_type(kit_type):
        if phase.phase_id == phase_id:
            return phase
    return None


def phase_ids_for_kit_type(kit_type) -> Tuple[str, ...]:
    return tuple(phase.phase_id for phase in get_phase_structure_for_kit_type(kit_type))
