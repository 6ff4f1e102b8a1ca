import logging

from django.db import DatabaseError, IntegrityError
from django.db.models.deletion import ProtectedError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from domain.shared.exceptions import (
    AuthorizationException,
    DomainException,
    EntityAlreadyExistsException,
    EntityNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES = (
    (EntityNotFoundException, status.HTTP_404_NOT_FOUND),
    (EntityAlreadyExistsException, status.HTTP_400_BAD_REQUEST),
    (ValidationException, status.HTTP_400_BAD_REQUEST),
    (AuthorizationException, status.HTTP_401_UNAUTHORIZED),
)


def _first_error_message(detail):
    """Flatten DRF validation detail to one readable message."""
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_error_message(value)
    if isinstance(detail, (list, tuple)) and detail:
        return _first_error_message(detail[0])
    return str(detail)


def custom_exception_handler(exc, context):
    """
    Shape every error as ``{"error": "<message>", ...}``.

    Domain exceptions are mapped to HTTP codes here so views can simply
    raise them.
    """
    if isinstance(exc, DomainException):
        for exc_class, status_code in DOMAIN_STATUS_CODES:
            if isinstance(exc, exc_class):
                break
        else:
            status_code = status.HTTP_400_BAD_REQUEST

        data = {'error': exc.message, 'code': exc.code}
        if exc.details:
            data['details'] = exc.details
        return Response(data, status=status_code)

    if isinstance(exc, ProtectedError):
        protected = [str(o) for o in list(exc.protected_objects)[:5]]
        return Response(
            {
                'error': 'Cannot delete object: it is referenced by other records.',
                'code': 'protected_error',
                'protected_objects_sample': protected,
            },
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error: {exc}")
        return Response(
            {
                'error': 'Data integrity violation (duplicate or related records).',
                'code': 'integrity_error',
            },
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, DatabaseError):
        logger.exception("Database error while handling request")
        return Response(
            {'error': 'Database error', 'code': 'database_error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled error while handling request")
        return Response(
            {'error': str(exc) or 'Internal server error', 'code': 'server_error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        response.data = {
            'error': _first_error_message(exc.detail),
            'details': exc.detail,
        }
    elif isinstance(response.data, dict) and 'detail' in response.data:
        detail = response.data['detail']
        response.data = {
            'error': str(detail),
            'code': getattr(detail, 'code', None) or 'error',
        }

    return response
