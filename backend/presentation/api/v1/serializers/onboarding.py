"""
Onboarding Serializers.

Serializers for onboarding answers, quiz submissions and leads.
"""

from rest_framework import serializers

from infrastructure.persistence.models import Lead, OnboardingAnswer, QuizSubmission
from .project import ProjectMinimalSerializer


class OnboardingAnswerSerializer(serializers.ModelSerializer):
    """
    Onboarding answer with the client project it belongs to.

    The project is found through the one-to-one link first, then through
    ``projects_by_user_id`` in the context (same client account).
    """

    client = serializers.SerializerMethodField()

    class Meta:
        model = OnboardingAnswer
        fields = [
            'id', 'user_id', 'answers', 'completed_at',
            'created_at', 'updated_at', 'client',
        ]
        read_only_fields = fields

    def get_client(self, obj):
        project = getattr(obj, 'project', None)
        if project is None or project.deleted_at is not None:
            project = self.context.get('projects_by_user_id', {}).get(obj.user_id)
        if project is None:
            return None
        return ProjectMinimalSerializer(project).data


class QuizSubmissionSerializer(serializers.ModelSerializer):
    """Quiz submission."""

    full_name = serializers.CharField(read_only=True)
    brand_goals = serializers.SerializerMethodField()
    audience = serializers.SerializerMethodField()

    class Meta:
        model = QuizSubmission
        fields = [
            'id', 'full_name', 'first_name', 'last_name', 'email',
            'phone_number', 'referral', 'brand_name', 'logo_status',
            'brand_goals', 'online_presence', 'audience', 'brand_style',
            'timeline', 'preferred_kit', 'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_brand_goals(self, obj):
        return obj.brand_goals if isinstance(obj.brand_goals, list) else []

    def get_audience(self, obj):
        return obj.audience if isinstance(obj.audience, list) else []


class LeadSerializer(serializers.ModelSerializer):
    """Audit lead."""

    class Meta:
        model = Lead
        fields = [
            'id', 'business_name', 'location', 'primary_issue',
            'monthly_revenue', 'lead_source', 'client_value',
            'first_name', 'last_name', 'role', 'whatsapp', 'email',
            'website', 'instagram', 'created_at', 'updated_at',
        ]
        read_only_fields = fields
