"""
Onboarding Service.

Turns a client's onboarding answers into a delivery project.
"""

import logging
from typing import Any, Iterator, Mapping, Optional

from django.db import transaction
from django.utils import timezone

from domain.delivery.phase_state import initialize_phases_state
from domain.shared.exceptions import (
    EntityAlreadyExistsException,
    EntityNotFoundException,
    ValidationException,
)
from domain.shared.value_objects import KitType

logger = logging.getLogger(__name__)

PLAN_KEYS = ('plan', 'kit_type', 'preferredKit')
EMAIL_KEYS = ('email', 'user_email')


# =============================================================================
# ANSWER EXTRACTION
# =============================================================================

def _answer_sources(answers: Any) -> Iterator[Mapping]:
    """Top-level answers first, then ``steps[].fields`` in order."""
    if not isinstance(answers, Mapping):
        return
    yield answers
    steps = answers.get('steps')
    if isinstance(steps, list):
        for step in steps:
            if isinstance(step, Mapping) and isinstance(step.get('fields'), Mapping):
                yield step['fields']


def _plan_value(value: Any) -> KitType:
    if isinstance(value, str) and value.strip().upper() == KitType.GROWTH.value:
        return KitType.GROWTH
    return KitType.LAUNCH


def extract_plan(answers: Any) -> KitType:
    """Kit type from the answers; GROWTH only when spelled out, else LAUNCH."""
    for source in _answer_sources(answers):
        for key in PLAN_KEYS:
            if source.get(key):
                return _plan_value(source[key])
    return KitType.LAUNCH


def extract_email(answers: Any) -> str:
    for source in _answer_sources(answers):
        for key in EMAIL_KEYS:
            if source.get(key):
                return str(source[key]).strip()
    raise ValidationException('Email not found in onboarding answers', field='email')


def extract_name(answers: Any) -> Optional[str]:
    for source in _answer_sources(answers):
        if source.get('name'):
            return str(source['name']).strip()
        if source.get('full_name'):
            return str(source['full_name']).strip()
        if source.get('first_name') and source.get('last_name'):
            return f"{source['first_name']} {source['last_name']}".strip()
    return None


# =============================================================================
# SERVICE
# =============================================================================

class OnboardingService:
    """Start projects from onboarding answers."""

    def start_project(self, answer_id, user=None):
        """
        Create the project for an onboarding answer.

        Raises EntityNotFoundException for an unknown answer,
        EntityAlreadyExistsException if a project exists and
        ValidationException if the answers have no email.
        """
        from infrastructure.persistence.models import OnboardingAnswer, Project

        with transaction.atomic():
            answer = (
                OnboardingAnswer.objects.select_for_update()
                .filter(pk=answer_id)
                .first()
            )
            if answer is None:
                raise EntityNotFoundException('Onboarding answer', answer_id)

            if Project.all_objects.filter(onboarding_answer=answer).exists():
                raise EntityAlreadyExistsException(
                    'Project', answer_id,
                    message='Project already exists for this onboarding answer'
                )

            try:
                plan = extract_plan(answer.answers)
                email = extract_email(answer.answers)
                name = extract_name(answer.answers)
            except ValidationException as e:
                raise ValidationException(
                    f"Failed to extract data from onboarding answers: {e.message}",
                    field='answers'
                ) from e

            project = Project.objects.create(
                onboarding_answer=answer,
                user_id=answer.user_id,
                email=email,
                name=name or '',
                kit_type=plan.value,
                started_at=timezone.now(),
                current_day_of_14=1,
                phases_state=initialize_phases_state(plan),
                created_by=user,
                updated_by=user,
            )

        logger.info(
            f"Project {project.id} started from onboarding answer {answer_id} "
            f"({plan.value}, {email})"
        )
        return project
