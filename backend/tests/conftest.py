"""
Test configuration and fixtures.

Database fixtures rely on pytest-django; pure domain tests use the
in-memory repository below and need no database.
"""

import copy
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from domain.delivery.repositories import ProjectRecord, ProjectStateRepository
from domain.shared.value_objects import KitType


# =============================================================================
# IN-MEMORY REPOSITORY
# =============================================================================

class InMemoryProjectStateRepository(ProjectStateRepository):
    """Dict-backed repository; stores deep copies so callers cannot alias state."""

    def __init__(self):
        self.projects = {}
        self.update_calls = 0

    def add(self, record: ProjectRecord) -> ProjectRecord:
        self.projects[record.id] = replace(record, phases_state=copy.deepcopy(record.phases_state))
        return record

    def get(self, project_id):
        record = self.projects.get(project_id)
        if record is None:
            return None
        return replace(record, phases_state=copy.deepcopy(record.phases_state))

    def update(self, project_id, patch):
        record = self.projects.get(project_id)
        if record is None:
            return None
        self.update_calls += 1
        new_state = patch(replace(record, phases_state=copy.deepcopy(record.phases_state)))
        self.projects[project_id] = replace(record, phases_state=copy.deepcopy(new_state))
        return copy.deepcopy(new_state)

    def list(self, kit_type=None):
        records = [
            self.get(project_id) for project_id in self.projects
            if kit_type is None or self.projects[project_id].kit_type == kit_type
        ]
        return sorted(records, key=lambda r: r.created_at or datetime.min.replace(tzinfo=timezone.utc), reverse=True)


class FixedClock:
    """Clock returning a settable UTC time."""

    def __init__(self, now=None):
        self.now = now or datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)

    def __call__(self):
        return self.now


@pytest.fixture
def memory_repository():
    return InMemoryProjectStateRepository()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def launch_record(memory_repository):
    """LAUNCH project with nothing stored yet."""
    return memory_repository.add(ProjectRecord(
        id='project-launch',
        kit_type=KitType.LAUNCH,
        phases_state={},
        email='client@example.com',
        created_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
    ))


@pytest.fixture
def growth_record(memory_repository):
    """GROWTH project with nothing stored yet."""
    return memory_repository.add(ProjectRecord(
        id='project-growth',
        kit_type=KitType.GROWTH,
        phases_state=None,
        email='growth@example.com',
        created_at=datetime(2026, 3, 2, tzinfo=timezone.utc),
    ))


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture
def admin_user(db):
    from infrastructure.persistence.models import User

    return User.objects.create_user(email='admin@example.com', name='Ada Admin')


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(api_client, admin_user):
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def onboarding_answer(db):
    from infrastructure.persistence.models import OnboardingAnswer

    return OnboardingAnswer.objects.create(
        user_id='client-account-1',
        answers={
            'steps': [
                {'fields': {'email': 'jane@example.com', 'first_name': 'Jane', 'last_name': 'Doe'}},
                {'fields': {'plan': 'launch'}},
            ],
        },
    )


@pytest.fixture
def project_factory(db):
    """Create projects with an initialised phase-state blob."""
    from django.utils import timezone as dj_timezone

    from domain.delivery.phase_state import initialize_phases_state
    from infrastructure.persistence.models import Project

    counter = {'n': 0}

    def make(**kwargs):
        counter['n'] += 1
        kit_type = kwargs.pop('kit_type', KitType.LAUNCH.value)
        defaults = {
            'email': f"client{counter['n']}@example.com",
            'name': f"Client {counter['n']}",
            'user_id': f"client-account-{counter['n']}",
            'kit_type': kit_type,
            'started_at': dj_timezone.now(),
            'phases_state': initialize_phases_state(kit_type),
        }
        defaults.update(kwargs)
        return Project.objects.create(**defaults)

    return make


@pytest.fixture
def project(project_factory):
    return project_factory()
