"""
Tests for OTP authentication and admin management.
"""

from datetime import timedelta

import pytest
from django.core import mail
from django.utils import timezone
from rest_framework_simplejwt.tokens import RefreshToken

from application.services.auth import GENERIC_OTP_MESSAGE, generate_otp
from infrastructure.persistence.models import AuditLog, User

SEND_OTP_URL = '/api/v1/auth/send-otp/'
LOGIN_URL = '/api/v1/auth/login/'


@pytest.fixture
def client_admin(db):
    return User.objects.create_user(email='ops@example.com', name='Olive Ops')


@pytest.fixture
def default_admin(db):
    return User.objects.create_user(email='team@example.com', name='Team')


class TestGenerateOtp:

    def test_numeric_of_requested_length(self):
        for _ in range(20):
            code = generate_otp(6)
            assert len(code) == 6
            assert code.isdigit()
            assert code[0] != '0'


@pytest.mark.django_db
class TestSendOtp:

    def test_missing_email(self, api_client):
        response = api_client.post(SEND_OTP_URL, {}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'Email is required'

    def test_unknown_email_gets_generic_answer(self, api_client):
        response = api_client.post(SEND_OTP_URL, {'email': 'nobody@example.com'}, format='json')
        assert response.status_code == 200
        assert response.data == {'success': True, 'message': GENERIC_OTP_MESSAGE}
        assert len(mail.outbox) == 0

    def test_otp_stored_and_emailed(self, api_client, client_admin):
        response = api_client.post(SEND_OTP_URL, {'email': ' OPS@example.com '}, format='json')

        assert response.status_code == 200
        assert 'otp' not in response.data
        client_admin.refresh_from_db()
        assert len(client_admin.otp_code) == 6
        assert client_admin.otp_expires_at > timezone.now()
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['ops@example.com']
        assert client_admin.otp_code in mail.outbox[0].body

    def test_default_admin_gets_fixed_code_without_email(self, api_client, default_admin):
        response = api_client.post(SEND_OTP_URL, {'email': 'team@example.com'}, format='json')

        assert response.status_code == 200
        assert 'otp' not in response.data
        default_admin.refresh_from_db()
        assert default_admin.otp_code == '000000'
        assert len(mail.outbox) == 0

    def test_default_admin_code_echoed_when_enabled(self, api_client, default_admin, settings):
        settings.DEFAULT_ADMIN_OTP_ECHO = True
        response = api_client.post(SEND_OTP_URL, {'email': 'team@example.com'}, format='json')
        assert response.data['otp'] == '000000'


@pytest.mark.django_db
class TestLogin:

    def _request_code(self, api_client, admin):
        api_client.post(SEND_OTP_URL, {'email': admin.email}, format='json')
        admin.refresh_from_db()
        return admin.otp_code

    def test_login_success(self, api_client, client_admin):
        code = self._request_code(api_client, client_admin)

        response = api_client.post(LOGIN_URL, {'email': 'ops@example.com', 'otp': code}, format='json')

        assert response.status_code == 200
        assert response.data['success'] is True
        assert response.data['access']
        assert response.data['refresh']
        assert response.data['admin']['email'] == 'ops@example.com'

        client_admin.refresh_from_db()
        assert client_admin.otp_code is None
        assert client_admin.last_login is not None
        assert AuditLog.objects.filter(user=client_admin, action='login').count() == 1

    def test_code_single_use(self, api_client, client_admin):
        code = self._request_code(api_client, client_admin)
        api_client.post(LOGIN_URL, {'email': 'ops@example.com', 'otp': code}, format='json')

        response = api_client.post(LOGIN_URL, {'email': 'ops@example.com', 'otp': code}, format='json')
        assert response.status_code == 401
        assert response.data['error'] == 'No OTP found. Please request a new OTP.'

    def test_wrong_code(self, api_client, client_admin):
        self._request_code(api_client, client_admin)
        response = api_client.post(LOGIN_URL, {'email': 'ops@example.com', 'otp': 'abcdef'}, format='json')
        assert response.status_code == 401
        assert response.data['error'] == 'Invalid OTP. Please check your email and try again.'

    def test_expired_code(self, api_client, client_admin):
        code = self._request_code(api_client, client_admin)
        User.objects.filter(pk=client_admin.pk).update(
            otp_expires_at=timezone.now() - timedelta(minutes=1)
        )
        response = api_client.post(LOGIN_URL, {'email': 'ops@example.com', 'otp': code}, format='json')
        assert response.status_code == 401
        assert response.data['error'] == 'OTP has expired. Please request a new OTP.'

    def test_unknown_admin(self, api_client, db):
        response = api_client.post(LOGIN_URL, {'email': 'ghost@example.com', 'otp': '123456'}, format='json')
        assert response.status_code == 401
        assert response.data['error'] == 'Invalid email or OTP'

    def test_missing_fields(self, api_client, db):
        response = api_client.post(LOGIN_URL, {'email': 'ops@example.com'}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'Email and OTP are required'

    def test_default_admin_fixed_code(self, api_client, default_admin):
        response = api_client.post(LOGIN_URL, {'email': 'team@example.com', 'otp': '000000'}, format='json')
        assert response.status_code == 200


@pytest.mark.django_db
class TestSession:

    def test_me(self, auth_client, admin_user):
        response = auth_client.get('/api/v1/auth/me/')
        assert response.status_code == 200
        assert response.data['admin']['email'] == admin_user.email

    def test_me_requires_auth(self, api_client, db):
        response = api_client.get('/api/v1/auth/me/')
        assert response.status_code == 401

    def test_refresh(self, api_client, admin_user):
        refresh = RefreshToken.for_user(admin_user)
        response = api_client.post('/api/v1/auth/refresh/', {'refresh': str(refresh)}, format='json')
        assert response.status_code == 200
        assert 'access' in response.data

    def test_refresh_invalid_token(self, api_client, db):
        response = api_client.post('/api/v1/auth/refresh/', {'refresh': 'not-a-token'}, format='json')
        assert response.status_code == 401

    def test_logout_blacklists_refresh(self, auth_client, admin_user):
        refresh = str(RefreshToken.for_user(admin_user))

        response = auth_client.post('/api/v1/auth/logout/', {'refresh': refresh}, format='json')
        assert response.status_code == 200
        assert response.data['message'] == 'Logged out successfully'
        assert AuditLog.objects.filter(user=admin_user, action='logout').exists()

        response = auth_client.post('/api/v1/auth/refresh/', {'refresh': refresh}, format='json')
        assert response.status_code == 401


@pytest.mark.django_db
class TestAdmins:

    def test_list(self, auth_client, admin_user):
        response = auth_client.get('/api/v1/admins/')
        assert response.status_code == 200
        assert response.data['count'] == 1
        assert response.data['data'][0]['email'] == admin_user.email

    def test_create(self, auth_client):
        response = auth_client.post(
            '/api/v1/admins/',
            {'email': 'New.Admin@Example.com', 'name': 'New Admin'},
            format='json',
        )
        assert response.status_code == 201
        assert response.data['message'] == 'Admin created successfully'
        admin = User.objects.get(email='new.admin@example.com')
        assert admin.role == 'admin'
        assert not admin.has_usable_password()

    def test_duplicate_email(self, auth_client, admin_user):
        response = auth_client.post(
            '/api/v1/admins/', {'email': 'ADMIN@example.com', 'name': 'Dup'}, format='json'
        )
        assert response.status_code == 400
        assert response.data['error'] == 'Admin with this email already exists'
