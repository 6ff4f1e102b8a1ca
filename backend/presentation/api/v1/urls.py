"""
API v1 URL Configuration.

All API endpoints for version 1.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views.auth import AuthViewSet, AdminViewSet
from .views.project import ProjectViewSet, PhaseTemplateViewSet
from .views.onboarding import (
    OnboardingAnswerViewSet,
    QuizSubmissionViewSet,
    LeadViewSet,
)
from .views.tasks import TaskViewSet
from .views.health import DatabaseHealthView

# Create router
router = DefaultRouter()

# Auth & Admins
router.register(r'auth', AuthViewSet, basename='auth')
router.register(r'admins', AdminViewSet, basename='admins')

# Projects & phases
router.register(r'projects', ProjectViewSet, basename='projects')
router.register(r'phase-templates', PhaseTemplateViewSet, basename='phase-templates')

# Onboarding
router.register(r'onboarding-answers', OnboardingAnswerViewSet, basename='onboarding-answers')
router.register(r'quiz-submissions', QuizSubmissionViewSet, basename='quiz-submissions')
router.register(r'leads', LeadViewSet, basename='leads')

# Tasks
router.register(r'tasks', TaskViewSet, basename='tasks')

app_name = 'api_v1'

urlpatterns = [
    path('health/db/', DatabaseHealthView.as_view(), name='health-db'),
    path('', include(router.urls)),
]
