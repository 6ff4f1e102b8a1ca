"""
Auth Views.

API views for OTP authentication and admin management.
"""

import logging

from rest_framework import status, viewsets, mixins
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from django.contrib.auth import get_user_model

from application.services.auth import OTPAuthService
from domain.shared.exceptions import AuthorizationException, ValidationException
from infrastructure.persistence.models import AuditLog
from ..serializers.users import (
    SendOTPSerializer,
    OTPLoginSerializer,
    AdminProfileSerializer,
    AdminCreateSerializer,
)
from .base import ListEnvelopeMixin, get_client_ip, UUID_LOOKUP_REGEX

User = get_user_model()
logger = logging.getLogger(__name__)


class AuthViewSet(viewsets.GenericViewSet):
    """
    ViewSet for authentication.

    Endpoints:
    - POST /auth/send-otp/ - e-mail a one-time password
    - POST /auth/login/ - exchange email + OTP for JWT tokens
    - POST /auth/refresh/ - refresh access token
    - POST /auth/logout/ - logout (blacklist refresh token)
    - GET /auth/me/ - get current admin profile
    """

    permission_classes = [AllowAny]
    serializer_class = SendOTPSerializer

    def get_throttles(self):
        if self.action in ('send_otp', 'login'):
            self.throttle_scope = 'otp'
        return super().get_throttles()

    @action(detail=False, methods=['post'], url_path='send-otp', permission_classes=[AllowAny])
    def send_otp(self, request):
        """Store a fresh OTP and e-mail it to the admin."""
        serializer = SendOTPSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = OTPAuthService().request_otp(serializer.validated_data['email'])

        data = {'success': True, 'message': result.message}
        if result.otp:
            data['otp'] = result.otp
        return Response(data)

    @action(detail=False, methods=['post'], permission_classes=[AllowAny])
    def login(self, request):
        """Login with email + OTP and get JWT tokens."""
        serializer = OTPLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        admin = OTPAuthService().verify_otp(
            serializer.validated_data['email'],
            serializer.validated_data['otp'],
        )

        refresh = RefreshToken.for_user(admin)

        AuditLog.record(
            AuditLog.ACTION_LOGIN,
            user=admin,
            obj=admin,
            user_ip=get_client_ip(request),
            user_agent=request.META.get('HTTP_USER_AGENT', ''),
        )

        return Response({
            'success': True,
            'access': str(refresh.access_token),
            'refresh': str(refresh),
            'admin': AdminProfileSerializer(admin).data,
        })

    @action(detail=False, methods=['post'], permission_classes=[AllowAny])
    def refresh(self, request):
        """Refresh access token."""
        serializer = TokenRefreshSerializer(data=request.data)

        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            raise AuthorizationException(str(e), reason='token_not_valid')

        return Response(serializer.validated_data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], permission_classes=[IsAuthenticated])
    def logout(self, request):
        """Logout and blacklist refresh token."""
        refresh_token = request.data.get('refresh')
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                raise ValidationException(str(e), field='refresh')

        AuditLog.record(
            AuditLog.ACTION_LOGOUT,
            user=request.user,
            obj=request.user,
            user_ip=get_client_ip(request),
            user_agent=request.META.get('HTTP_USER_AGENT', ''),
        )

        return Response({'success': True, 'message': 'Logged out successfully'})

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated])
    def me(self, request):
        """Get current admin profile."""
        return Response({
            'success': True,
            'admin': AdminProfileSerializer(request.user).data,
        })


class AdminViewSet(
    ListEnvelopeMixin,
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for admin accounts.

    Endpoints:
    - GET /admins/ - list admins
    - POST /admins/ - create admin (email, name, role)
    """

    queryset = User.objects.all().order_by('email')
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_serializer_class(self):
        if self.action == 'create':
            return AdminCreateSerializer
        return AdminProfileSerializer

    def create(self, request, *args, **kwargs):
        serializer = AdminCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        admin = serializer.save()

        logger.info(f"Admin {admin.email} created by {request.user.email}")
        return Response(
            {
                'success': True,
                'data': AdminProfileSerializer(admin).data,
                'message': 'Admin created successfully',
            },
            status=status.HTTP_201_CREATED,
        )
