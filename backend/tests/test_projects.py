"""
Tests for project progress endpoints and the Django repository.
"""

import pytest

from domain.shared.value_objects import KitType
from infrastructure.persistence.models import Project
from infrastructure.persistence.repositories import DjangoProjectStateRepository


def project_url(project_id):
    return f'/api/v1/projects/{project_id}/'


@pytest.mark.django_db
class TestProjectDetail:

    def test_retrieve(self, auth_client, project):
        response = auth_client.get(project_url(project.id))

        assert response.status_code == 200
        data = response.data['project']
        assert data['id'] == str(project.id)
        assert data['plan'] == 'LAUNCH'
        assert data['current_day_of_14'] == 1

    def test_retrieve_unknown(self, auth_client):
        response = auth_client.get(project_url('22222222-2222-2222-2222-222222222222'))
        assert response.status_code == 404
        assert response.data['error'] == 'Project not found'

    def test_soft_deleted_hidden(self, auth_client, project):
        project.soft_delete()
        response = auth_client.get(project_url(project.id))
        assert response.status_code == 404


@pytest.mark.django_db
class TestProjectProgressUpdate:

    def test_update_progress(self, auth_client, project, admin_user):
        response = auth_client.patch(
            project_url(project.id),
            {'current_day_of_14': 5, 'next_from_us': 'Send first draft', 'next_from_you': None},
            format='json',
        )

        assert response.status_code == 200
        assert response.data == {'success': True, 'message': 'Project progress updated successfully'}
        project.refresh_from_db()
        assert project.current_day_of_14 == 5
        assert project.next_from_us == 'Send first draft'
        assert project.next_from_you == ''
        assert project.updated_by == admin_user

    @pytest.mark.parametrize('day', [0, 15, 'abc'])
    def test_day_out_of_range(self, auth_client, project, day):
        response = auth_client.patch(project_url(project.id), {'current_day_of_14': day}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'current_day_of_14 must be between 1 and 14'

    def test_kit_type_not_writable(self, auth_client, project):
        auth_client.patch(project_url(project.id), {'kit_type': 'GROWTH'}, format='json')
        project.refresh_from_db()
        assert project.kit_type == 'LAUNCH'

    def test_put_not_allowed(self, auth_client, project):
        response = auth_client.put(project_url(project.id), {}, format='json')
        assert response.status_code == 405


@pytest.mark.django_db
class TestClientsAndHistory:

    def test_clients(self, auth_client, project_factory):
        project_factory()
        project_factory(kit_type='GROWTH')

        response = auth_client.get('/api/v1/projects/clients/')
        assert response.status_code == 200
        assert response.data['count'] == 2
        assert {row['plan'] for row in response.data['data']} == {'LAUNCH', 'GROWTH'}

    def test_history(self, auth_client, project):
        auth_client.patch(project_url(project.id), {'current_day_of_14': 3}, format='json')

        response = auth_client.get(f'/api/v1/projects/{project.id}/history/')
        assert response.status_code == 200
        assert [record['type'] for record in response.data] == ['~', '+']
        changed = {change['field'] for change in response.data[0]['changes']}
        assert 'current_day_of_14' in changed


@pytest.mark.django_db
class TestDjangoProjectStateRepository:

    def test_get_returns_record(self, project):
        record = DjangoProjectStateRepository().get(project.id)
        assert record.id == project.id
        assert record.kit_type is KitType.LAUNCH
        assert record.email == project.email

    @pytest.mark.parametrize('project_id', ['not-a-uuid', '33333333-3333-3333-3333-333333333333'])
    def test_get_missing(self, db, project_id):
        assert DjangoProjectStateRepository().get(project_id) is None

    def test_update_writes_blob(self, project):
        repository = DjangoProjectStateRepository()

        def patch(record):
            state = dict(record.phases_state)
            state['PHASE_1'] = {**state['PHASE_1'], 'status': 'IN_PROGRESS'}
            return state

        stored = repository.update(project.id, patch)

        assert stored['PHASE_1']['status'] == 'IN_PROGRESS'
        project.refresh_from_db()
        assert project.phases_state['PHASE_1']['status'] == 'IN_PROGRESS'
        assert project.version == 2

    def test_update_missing(self, db):
        result = DjangoProjectStateRepository().update(
            '44444444-4444-4444-4444-444444444444', lambda record: {}
        )
        assert result is None

    def test_list_by_kit_type(self, project_factory):
        project_factory()
        growth = project_factory(kit_type='GROWTH')

        records = DjangoProjectStateRepository().list(kit_type=KitType.GROWTH)
        assert [r.id for r in records] == [growth.id]

    def test_soft_deleted_excluded(self, project):
        project.soft_delete()
        assert DjangoProjectStateRepository().get(project.id) is None
        assert Project.all_objects.filter(pk=project.id).exists()
