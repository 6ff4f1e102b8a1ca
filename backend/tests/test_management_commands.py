"""
Tests for the create_admin and import_csv management commands.
"""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from infrastructure.persistence.management.commands.import_csv import normalize_header
from infrastructure.persistence.models import AuditLog, Project, QuizSubmission, Task, User


def run(*args):
    out = StringIO()
    call_command(*args, stdout=out, stderr=StringIO())
    return out.getvalue()


@pytest.fixture
def write_csv(tmp_path):
    def write(content, name='rows.csv'):
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return str(path)
    return write


@pytest.mark.django_db
class TestCreateAdmin:

    def test_create(self):
        output = run('create_admin', 'Boss@Example.com', 'The Boss', 'super_admin')

        assert 'Created admin boss@example.com' in output
        admin = User.objects.get(email='boss@example.com')
        assert admin.name == 'The Boss'
        assert admin.role == 'super_admin'
        assert admin.is_staff

    def test_rerun_updates(self):
        run('create_admin', 'ops@example.com', 'Ops')

        output = run('create_admin', 'ops@example.com', 'Operations', 'super_admin')

        assert 'Updated admin ops@example.com: name, role' in output
        assert User.objects.filter(email='ops@example.com').count() == 1

    def test_rerun_unchanged(self):
        run('create_admin', 'ops@example.com', 'Ops')
        assert 'already exists' in run('create_admin', 'ops@example.com')

    def test_invalid_role(self):
        with pytest.raises(CommandError, match="Invalid role 'owner'"):
            run('create_admin', 'ops@example.com', 'Ops', 'owner')

    def test_invalid_email(self):
        with pytest.raises(CommandError, match='Invalid email'):
            run('create_admin', 'not-an-email')


@pytest.mark.parametrize('header, expected', [
    ('brand_name', 'brand_name'),
    ('Brand Name', 'brand_name'),
    ('brand-name', 'brand_name'),
    ('brandName', 'brand_name'),
    ('  phoneNumber ', 'phone_number'),
])
def test_normalize_header(header, expected):
    assert normalize_header(header) == expected


@pytest.mark.django_db
class TestImportCsv:

    def test_quiz_submissions(self, write_csv):
        path = write_csv(
            'First Name,lastName,email,brandGoals,preferred-kit,audience\n'
            'Mia,Stone,mia@example.com,"[""leads"", ""sales""]",growth,"founders, coaches"\n'
            'Leo,,leo@example.com,,,\n'
        )

        output = run('import_csv', 'QuizSubmission', path)

        assert 'Created: 2, skipped: 0, failed: 0' in output
        entry = AuditLog.objects.get(action='import')
        assert entry.extra_data['model'] == 'QuizSubmission'
        assert entry.extra_data['created'] == 2
        mia = QuizSubmission.objects.get(email='mia@example.com')
        assert mia.brand_goals == ['leads', 'sales']
        assert mia.audience == ['founders', 'coaches']
        assert mia.preferred_kit == 'GROWTH'
        assert QuizSubmission.objects.get(email='leo@example.com').preferred_kit is None

    def test_project_plan_alias(self, write_csv):
        path = write_csv(
            'email,name,plan,startedAt,current_day_of_14\n'
            'jo@example.com,Jo,launch,2026-02-01,4\n'
        )

        run('import_csv', 'Project', path)

        project = Project.objects.get(email='jo@example.com')
        assert project.kit_type == 'LAUNCH'
        assert project.current_day_of_14 == 4
        assert project.started_at.year == 2026

    def test_invalid_enum_fails(self, write_csv):
        path = write_csv('email,plan\njo@example.com,platinum\n')

        with pytest.raises(CommandError, match='1 row\\(s\\) failed'):
            run('import_csv', 'Project', path)
        assert not Project.objects.exists()

    def test_dry_run_writes_nothing(self, write_csv):
        path = write_csv('email\nmia@example.com\n')

        output = run('import_csv', 'QuizSubmission', path, '--dry-run')

        assert 'Valid: 1' in output
        assert not QuizSubmission.objects.exists()
        assert not AuditLog.objects.exists()

    def test_existing_id_skipped(self, write_csv):
        existing = QuizSubmission.objects.create(email='mia@example.com')
        path = write_csv(f'id,email\n{existing.id},changed@example.com\n')

        output = run('import_csv', 'QuizSubmission', path)

        assert 'Created: 0, skipped: 1' in output
        existing.refresh_from_db()
        assert existing.email == 'mia@example.com'

    def test_task_with_creator(self, write_csv, project, admin_user):
        path = write_csv(
            'project,title,status,created_by\n'
            f'{project.id},Upload logo,completed,ADMIN@example.com\n'
        )

        run('import_csv', 'Task', path)

        task = Task.objects.get(title='Upload logo')
        assert task.project == project
        assert task.status == 'COMPLETED'
        assert task.created_by == admin_user

    def test_admin_import(self, write_csv):
        path = write_csv('email,name\nNew@Example.com,New Admin\n')

        run('import_csv', 'Admin', path)

        admin = User.objects.get(email='new@example.com')
        assert not admin.has_usable_password()

    def test_unknown_column(self, write_csv):
        path = write_csv('email,favourite_colour\nmia@example.com,blue\n')
        with pytest.raises(CommandError):
            run('import_csv', 'QuizSubmission', path)

    def test_unknown_model(self, write_csv):
        path = write_csv('email\nmia@example.com\n')
        with pytest.raises(CommandError, match="Unknown model 'Invoice'"):
            run('import_csv', 'Invoice', path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CommandError, match='Cannot read'):
            run('import_csv', 'Lead', str(tmp_path / 'missing.csv'))
