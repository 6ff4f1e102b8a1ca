"""
Domain Exceptions.

Raised by services and views; the API exception handler turns them into
``{"error": message, "code": code, "details": {...}}`` responses.
"""

from typing import Optional, Any, Dict


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "DOMAIN_ERROR"
        self.details = details or {}


class EntityNotFoundException(DomainException):
    """A project, task, answer... that does not exist (or is soft-deleted)."""

    def __init__(self, entity_type: str, entity_id: Any, message: Optional[str] = None):
        super().__init__(
            message=message or f"{entity_type} not found",
            code="ENTITY_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": str(entity_id)}
        )


class PhaseNotFoundException(EntityNotFoundException):
    """Phase id that is not part of the project's kit structure."""

    def __init__(self, phase_id: str, kit_type: str):
        super().__init__(
            'Phase', phase_id,
            message=f"Phase {phase_id} not found for {kit_type} kit"
        )
        self.details['kit_type'] = kit_type


class EntityAlreadyExistsException(DomainException):
    """Second project for one onboarding answer, duplicate admin e-mail."""

    def __init__(self, entity_type: str, identifier: Any, message: Optional[str] = None):
        super().__init__(
            message=message or f"{entity_type} with identifier '{identifier}' already exists",
            code="ENTITY_ALREADY_EXISTS",
            details={"entity_type": entity_type, "identifier": str(identifier)}
        )


class ValidationException(DomainException):
    """Missing or malformed input; ``field`` names the offending key."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field, "value": str(value) if value is not None else None}
        )


class AuthorizationException(DomainException):
    """Raised when credentials are missing, wrong or expired."""

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(
            message=message,
            code="AUTHORIZATION_ERROR",
            details={"reason": reason} if reason else {}
        )
