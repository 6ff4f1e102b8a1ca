"""
Health Views.
"""

import logging

from django.db import DatabaseError, connection
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.persistence.models import Project, QuizSubmission, Task

logger = logging.getLogger(__name__)


class DatabaseHealthView(APIView):
    """
    GET /health/db/ - database connectivity and row counts.
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = []

    def get(self, request):
        try:
            with connection.cursor() as cursor:
                cursor.execute('SELECT 1')
            counts = {
                'projects': Project.objects.count(),
                'quiz_submissions': QuizSubmission.objects.count(),
                'tasks': Task.objects.count(),
            }
        except DatabaseError as e:
            logger.exception("Database health check failed")
            return Response(
                {
                    'status': 'error',
                    'database': 'unavailable',
                    'error': str(e),
                },
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({
            'status': 'ok',
            'database': connection.vendor,
            'counts': counts,
        })
