"""
Tests for PhaseService against the in-memory repository.
"""

import pytest

from application.services.phases import PhaseService
from domain.delivery.repositories import ProjectRecord
from domain.shared.exceptions import (
    EntityNotFoundException,
    PhaseNotFoundException,
    ValidationException,
)
from domain.shared.value_objects import KitType, PhaseStatus


@pytest.fixture
def service(memory_repository, clock):
    return PhaseService(memory_repository, clock=clock)


class TestGetProjectPhases:

    def test_merged_phases_for_empty_state(self, service, launch_record):
        record, phases = service.get_project_phases(launch_record.id)

        assert record.id == launch_record.id
        assert len(phases) == 4
        assert all(p.status is PhaseStatus.NOT_STARTED for p in phases)

    def test_unknown_project(self, service):
        with pytest.raises(EntityNotFoundException) as exc:
            service.get_project_phases('missing')
        assert exc.value.message == 'Project not found'


class TestUpdatePhaseStatus:

    def test_status_change_persisted(self, service, memory_repository, launch_record, clock):
        stored = service.update_phase_status(launch_record.id, 'PHASE_1', 'IN_PROGRESS')

        assert stored['status'] == 'IN_PROGRESS'
        assert stored['started_at'] == clock.now.isoformat()

        state = memory_repository.projects[launch_record.id].phases_state
        assert set(state) == {'PHASE_1', 'PHASE_2', 'PHASE_3', 'PHASE_4'}
        assert state['PHASE_2']['status'] == 'NOT_STARTED'

    def test_done_then_reopen(self, service, launch_record, clock):
        started = service.update_phase_status(launch_record.id, 'PHASE_2', 'IN_PROGRESS')
        clock.advance(days=1)
        done = service.update_phase_status(launch_record.id, 'PHASE_2', 'DONE')
        clock.advance(hours=3)
        reopened = service.update_phase_status(launch_record.id, 'PHASE_2', 'IN_PROGRESS')

        assert done['completed_at'] is not None
        assert done['started_at'] == started['started_at']
        assert reopened['completed_at'] is None
        assert reopened['started_at'] == started['started_at']

    def test_growth_state_none_initialised(self, service, memory_repository, growth_record):
        service.update_phase_status(growth_record.id, 'PHASE_4', 'WAITING_ON_CLIENT')

        _, phases = service.get_project_phases(growth_record.id)
        assert phases[3].status is PhaseStatus.WAITING_ON_CLIENT
        assert phases[3].title == 'Test & handover'

    @pytest.mark.parametrize('status', [None, '', 'FINISHED', 'done'])
    def test_invalid_status(self, service, memory_repository, launch_record, status):
        with pytest.raises(ValidationException) as exc:
            service.update_phase_status(launch_record.id, 'PHASE_1', status)
        assert exc.value.message == 'Valid status is required'
        assert memory_repository.update_calls == 0

    def test_missing_phase_id(self, service, launch_record):
        with pytest.raises(ValidationException) as exc:
            service.update_phase_status(launch_record.id, '', 'DONE')
        assert exc.value.message == 'phase_id is required'

    def test_unknown_phase(self, service, memory_repository, launch_record):
        with pytest.raises(PhaseNotFoundException) as exc:
            service.update_phase_status(launch_record.id, 'PHASE_5', 'DONE')
        assert exc.value.message == 'Phase PHASE_5 not found for LAUNCH kit'
        assert exc.value.details['kit_type'] == 'LAUNCH'
        assert memory_repository.update_calls == 0

    def test_unknown_project(self, service):
        with pytest.raises(EntityNotFoundException):
            service.update_phase_status('missing', 'PHASE_1', 'DONE')

    def test_corrupt_entry_replaced(self, service, memory_repository):
        memory_repository.add(ProjectRecord(
            id='corrupt',
            kit_type=KitType.LAUNCH,
            phases_state={'PHASE_1': 'not-a-dict', 'PHASE_9': {'keep': True}},
        ))

        stored = service.update_phase_status('corrupt', 'PHASE_1', 'IN_PROGRESS')

        assert stored['status'] == 'IN_PROGRESS'
        state = memory_repository.projects['corrupt'].phases_state
        assert state['PHASE_9'] == {'keep': True}


class TestUpdateChecklistItem:

    def test_seeds_and_sets_label(self, service, memory_repository, launch_record):
        checklist = service.update_checklist_item(
            launch_record.id, 'PHASE_1', 'Onboarding steps completed', True
        )

        assert checklist == {
            'Onboarding steps completed': True,
            'Brand / strategy call completed': False,
            'Simple 14 day plan agreed': False,
        }
        _, phases = service.get_project_phases(launch_record.id)
        assert phases[0].checklist[0].is_done is True

    def test_status_untouched(self, service, memory_repository, launch_record):
        service.update_phase_status(launch_record.id, 'PHASE_1', 'IN_PROGRESS')
        service.update_checklist_item(launch_record.id, 'PHASE_1', 'Onboarding steps completed', True)

        state = memory_repository.projects[launch_record.id].phases_state
        assert state['PHASE_1']['status'] == 'IN_PROGRESS'

    def test_stored_entry_kept_apart_from_checklist(self, service, memory_repository):
        memory_repository.add(ProjectRecord(
            id='legacy',
            kit_type=KitType.LAUNCH,
            phases_state={'PHASE_1': {'status': 'LEGACY', 'checklist': {}, 'notes': 'keep me'}},
        ))

        service.update_checklist_item('legacy', 'PHASE_1', 'Onboarding steps completed', True)

        entry = memory_repository.projects['legacy'].phases_state['PHASE_1']
        assert entry['status'] == 'LEGACY'
        assert entry['notes'] == 'keep me'
        assert entry['checklist']['Onboarding steps completed'] is True

    def test_unknown_label_stored_but_hidden(self, service, memory_repository, launch_record, caplog):
        service.update_checklist_item(launch_record.id, 'PHASE_1', 'Invented label', True)

        state = memory_repository.projects[launch_record.id].phases_state
        assert state['PHASE_1']['checklist']['Invented label'] is True
        _, phases = service.get_project_phases(launch_record.id)
        assert 'Invented label' not in [item.label for item in phases[0].checklist]
        assert 'not part of PHASE_1' in caplog.text

    @pytest.mark.parametrize('phase_id, label, message', [
        ('', 'Forms tested', 'phase_id is required'),
        ('PHASE_4', '', 'label is required'),
    ])
    def test_required_fields(self, service, launch_record, phase_id, label, message):
        with pytest.raises(ValidationException) as exc:
            service.update_checklist_item(launch_record.id, phase_id, label, True)
        assert exc.value.message == message

    def test_is_done_required(self, service, launch_record):
        with pytest.raises(ValidationException) as exc:
            service.update_checklist_item(launch_record.id, 'PHASE_1', 'Forms tested', None)
        assert exc.value.message == 'is_done is required'

    def test_unknown_phase_for_kit(self, service, growth_record):
        with pytest.raises(EntityNotFoundException) as exc:
            service.update_checklist_item(growth_record.id, 'PHASE_0', 'Domain connected', True)
        assert 'GROWTH' in exc.value.message


class TestListProjectsWithPhases:

    def test_newest_first(self, service, launch_record, growth_record):
        pairs = service.list_projects_with_phases()
        assert [record.id for record, _ in pairs] == [growth_record.id, launch_record.id]

    def test_kit_type_filter(self, service, launch_record, growth_record):
        pairs = service.list_projects_with_phases(kit_type='growth')
        assert [record.id for record, _ in pairs] == [growth_record.id]

    def test_status_filter(self, service, launch_record, growth_record):
        service.update_phase_status(launch_record.id, 'PHASE_3', 'WAITING_ON_CLIENT')

        pairs = service.list_projects_with_phases(status='WAITING_ON_CLIENT')
        assert [record.id for record, _ in pairs] == [launch_record.id]

    @pytest.mark.parametrize('kwargs', [{'kit_type': 'PLATINUM'}, {'status': 'BLOCKED'}])
    def test_invalid_filters(self, service, kwargs):
        with pytest.raises(ValidationException):
            service.list_projects_with_phases(**kwargs)
