"""
Tests for client tasks, task responses and statistics.
"""

from datetime import datetime, timedelta, timezone

import pytest
from django.core import mail

from application.services.tasks import (
    TaskService,
    completed_at_for_status,
    normalize_attachment,
    parse_task_metadata,
)
from infrastructure.persistence.models import Task

TASKS_URL = '/api/v1/tasks/'
NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


def task_url(task_id):
    return f'{TASKS_URL}{task_id}/'


@pytest.fixture
def task_factory(project):
    def make(**kwargs):
        kwargs.setdefault('project', project)
        kwargs.setdefault('title', 'Upload your logo')
        return Task.objects.create(**kwargs)
    return make


class TestMetadataParsing:

    def test_non_dict_metadata(self):
        assert parse_task_metadata(None) == {'responses': [], 'attachments': []}
        assert parse_task_metadata(['x']) == {'responses': [], 'attachments': []}

    def test_legacy_key_spellings(self):
        parsed = parse_task_metadata({
            'responses': [
                {'response': 'Here you go', 'createdAt': '2026-01-01T00:00:00Z', 'createdBy': 'client'},
                {'id': 'r2', 'text': 'Second', 'attachments': 'oops'},
            ],
            'attachments': [{'name': 'logo.png', 'url': 'https://cdn/logo.png', 'mimeType': 'image/png'}],
        })

        first, second = parsed['responses']
        assert first['id'] == 'response-0'
        assert first['text'] == 'Here you go'
        assert first['created_at'] == '2026-01-01T00:00:00Z'
        assert first['created_by'] == 'client'
        assert second['id'] == 'r2'
        assert second['attachments'] == []
        assert parsed['attachments'][0]['type'] == 'image/png'

    def test_normalize_attachment_defaults(self):
        assert normalize_attachment('bad') == {
            'name': '', 'url': '', 'uploaded_at': None, 'size': None, 'type': None,
        }


class TestCompletedAt:

    def test_stamped_once(self):
        assert completed_at_for_status('COMPLETED', None, NOW) == NOW
        earlier = NOW - timedelta(days=1)
        assert completed_at_for_status('COMPLETED', earlier, NOW) == earlier

    @pytest.mark.parametrize('status', ['PENDING', 'IN_PROGRESS', 'CANCELLED'])
    def test_cleared(self, status):
        assert completed_at_for_status(status, NOW, NOW) is None


@pytest.mark.django_db
class TestTaskCrud:

    def test_create(self, auth_client, project, admin_user):
        response = auth_client.post(
            TASKS_URL,
            {'project_id': str(project.id), 'title': 'Send brand colours', 'type': 'SEND_INFO'},
            format='json',
        )

        assert response.status_code == 201
        assert response.data['message'] == 'Task created successfully'
        data = response.data['data']
        assert data['status'] == 'PENDING'
        assert data['type'] == 'SEND_INFO'
        assert data['project_id'] == str(project.id)
        assert data['created_by'] == admin_user.email
        assert data['project']['email'] == project.email

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == [project.email]
        assert 'Send brand colours' in mail.outbox[0].subject

    @pytest.mark.parametrize('body', [{'title': 'No project'}, {'project_id': 'x'}])
    def test_create_requires_project_and_title(self, auth_client, body):
        response = auth_client.post(TASKS_URL, body, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'project_id and title are required'

    def test_create_unknown_project(self, auth_client, db):
        response = auth_client.post(
            TASKS_URL,
            {'project_id': '55555555-5555-5555-5555-555555555555', 'title': 'Orphan'},
            format='json',
        )
        assert response.status_code == 404
        assert response.data['error'] == 'Project not found'

    def test_create_invalid_type(self, auth_client, project):
        response = auth_client.post(
            TASKS_URL,
            {'project_id': str(project.id), 'title': 'Bad', 'type': 'DANCE'},
            format='json',
        )
        assert response.status_code == 400

    def test_list_filters(self, auth_client, project_factory, task_factory):
        other_project = project_factory()
        task_factory(title='A', status='PENDING')
        task_factory(title='B', status='COMPLETED', type='REVIEW')
        task_factory(project=other_project, title='C')

        response = auth_client.get(TASKS_URL)
        assert response.data['count'] == 3

        response = auth_client.get(f'{TASKS_URL}?project_id={other_project.id}')
        assert [row['title'] for row in response.data['data']] == ['C']

        response = auth_client.get(f'{TASKS_URL}?status=COMPLETED&type=REVIEW')
        assert [row['title'] for row in response.data['data']] == ['B']

    def test_list_invalid_status_filter(self, auth_client, db):
        response = auth_client.get(f'{TASKS_URL}?status=DONE')
        assert response.status_code == 400

    def test_retrieve(self, auth_client, task_factory):
        task = task_factory()
        response = auth_client.get(task_url(task.id))
        assert response.status_code == 200
        assert response.data['data']['title'] == 'Upload your logo'

    def test_status_transitions(self, auth_client, task_factory):
        task = task_factory()

        response = auth_client.patch(task_url(task.id), {'status': 'COMPLETED'}, format='json')
        assert response.status_code == 200
        assert response.data['message'] == 'Task updated successfully'
        task.refresh_from_db()
        first_completed_at = task.completed_at
        assert first_completed_at is not None

        auth_client.patch(task_url(task.id), {'title': 'Renamed'}, format='json')
        task.refresh_from_db()
        assert task.completed_at == first_completed_at

        auth_client.patch(task_url(task.id), {'status': 'IN_PROGRESS'}, format='json')
        task.refresh_from_db()
        assert task.completed_at is None

    def test_delete_is_soft(self, auth_client, task_factory):
        task = task_factory()

        response = auth_client.delete(task_url(task.id))
        assert response.status_code == 200
        assert response.data == {'success': True, 'message': 'Task deleted successfully'}

        response = auth_client.get(task_url(task.id))
        assert response.status_code == 404
        assert response.data['error'] == 'Task not found'
        assert Task.all_objects.get(pk=task.id).deleted_at is not None


@pytest.mark.django_db
class TestTaskResponses:

    def test_add_response(self, auth_client, task_factory, admin_user):
        task = task_factory(metadata={'responses': [{'text': 'Earlier'}]})

        response = auth_client.post(
            f'{task_url(task.id)}responses/',
            {'text': '  Logo attached  ', 'attachments': [{'name': 'logo.svg', 'url': 'https://cdn/logo.svg'}]},
            format='json',
        )

        assert response.status_code == 201
        assert response.data['response']['text'] == 'Logo attached'
        assert response.data['response']['created_by'] == admin_user.email
        task.refresh_from_db()
        assert len(task.metadata['responses']) == 2
        assert task.metadata['responses'][1]['attachments'][0]['name'] == 'logo.svg'

    def test_add_response_requires_text(self, auth_client, task_factory):
        task = task_factory()
        response = auth_client.post(f'{task_url(task.id)}responses/', {'text': ''}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'text is required'

    def test_feed_pagination_and_filters(self, auth_client, project_factory, task_factory):
        other = project_factory(email='other@example.com')
        task_factory(title='Answered', metadata={'responses': [{'text': 'done'}]})
        task_factory(title='Silent')
        task_factory(project=other, title='Other client', metadata={'responses': [{'text': 'hi'}]})

        response = auth_client.get(f'{TASKS_URL}responses/?limit=2')
        assert response.status_code == 200
        assert response.data['pagination'] == {'total': 3, 'limit': 2, 'offset': 0, 'has_more': True}
        assert len(response.data['tasks']) == 2

        response = auth_client.get(f'{TASKS_URL}responses/?has_responses=true')
        assert {row['title'] for row in response.data['tasks']} == {'Answered', 'Other client'}
        assert response.data['pagination']['total'] == 2

        response = auth_client.get(f'{TASKS_URL}responses/?has_responses=false')
        assert [row['title'] for row in response.data['tasks']] == ['Silent']

        response = auth_client.get(f'{TASKS_URL}responses/?client_email=OTHER@example.com')
        rows = response.data['tasks']
        assert [row['title'] for row in rows] == ['Other client']
        assert rows[0]['client_email'] == 'other@example.com'
        assert rows[0]['client_id'] == str(other.id)
        assert rows[0]['responses'][0]['text'] == 'hi'

    def test_feed_limit_capped(self, auth_client, task_factory):
        task_factory()
        response = auth_client.get(f'{TASKS_URL}responses/?limit=500')
        assert response.data['pagination']['limit'] == 100

    def test_feed_date_filter(self, auth_client, task_factory):
        task = task_factory()
        Task.objects.filter(pk=task.pk).update(created_at=datetime(2025, 1, 10, tzinfo=timezone.utc))
        task_factory(title='Recent')

        response = auth_client.get(f'{TASKS_URL}responses/?date_to=2025-02-01')
        assert [row['title'] for row in response.data['tasks']] == ['Upload your logo']

        response = auth_client.get(f'{TASKS_URL}responses/?date_from=2025-02-01')
        assert [row['title'] for row in response.data['tasks']] == ['Recent']


@pytest.mark.django_db
class TestTaskStatistics:

    def test_statistics_endpoint(self, auth_client, task_factory):
        task_factory(status='COMPLETED', type='REVIEW', attachments=[{'name': 'a'}])
        task_factory(metadata={'responses': [{'text': 'ok', 'attachments': [{'name': 'b'}]}]})

        response = auth_client.get(f'{TASKS_URL}statistics/')

        assert response.status_code == 200
        stats = response.data['statistics']
        assert stats['total_tasks'] == 2
        assert stats['tasks_by_status']['COMPLETED'] == 1
        assert stats['tasks_by_status']['PENDING'] == 1
        assert stats['tasks_by_type']['REVIEW'] == 1
        assert stats['total_responses'] == 1
        assert stats['tasks_with_responses'] == 1
        assert stats['tasks_without_responses'] == 1
        assert stats['total_attachments'] == 2

    def test_average_response_time(self, task_factory):
        task = task_factory()
        created = task.created_at
        task.metadata = {'responses': [{'text': 'x', 'created_at': (created + timedelta(hours=3)).isoformat()}]}
        task.save()

        stats = TaskService().statistics(Task.objects.all())
        assert stats['average_response_time_hours'] == 3.0

    def test_no_responses_average_is_none(self, task_factory):
        task_factory()
        assert TaskService().statistics(Task.objects.all())['average_response_time_hours'] is None
