"""
User Serializers.

Serializers for OTP authentication and admin management.
"""

from rest_framework import serializers
from django.contrib.auth import get_user_model

User = get_user_model()


class SendOTPSerializer(serializers.Serializer):
    """Request body of auth/send-otp."""

    email = serializers.CharField(
        error_messages={
            'required': 'Email is required',
            'blank': 'Email is required',
            'null': 'Email is required',
        }
    )


class OTPLoginSerializer(serializers.Serializer):
    """Request body of auth/login."""

    REQUIRED = 'Email and OTP are required'

    email = serializers.CharField(
        error_messages={'required': REQUIRED, 'blank': REQUIRED, 'null': REQUIRED}
    )
    otp = serializers.CharField(
        error_messages={'required': REQUIRED, 'blank': REQUIRED, 'null': REQUIRED}
    )


class AdminProfileSerializer(serializers.ModelSerializer):
    """Serializer for the signed-in admin."""

    created_at = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'name', 'role', 'is_active',
            'last_login', 'last_activity', 'created_at',
        ]
        read_only_fields = fields


class AdminCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating admins."""

    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'role']
        read_only_fields = ['id']

    def validate_email(self, value):
        email = value.strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError('Admin with this email already exists')
        return email

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)
