"""
Task Service.

Client task helpers: normalising the loosely-structured ``metadata``
payload (responses and attachments written by older clients use several
key spellings), appending responses and computing statistics.
"""

from datetime import datetime
import logging
from typing import Any, Dict, Iterable, List, Optional
import uuid

from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from domain.shared.exceptions import EntityNotFoundException, ValidationException
from domain.shared.value_objects import TaskStatus, TaskType

logger = logging.getLogger(__name__)


# =============================================================================
# METADATA NORMALISATION
# =============================================================================

def _first(data: dict, *keys, default=None):
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return default


def normalize_attachment(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raw = {}
    return {
        'name': raw.get('name') or '',
        'url': raw.get('url') or '',
        'uploaded_at': _first(raw, 'uploaded_at', 'uploadedAt', 'created_at', 'createdAt'),
        'size': raw.get('size'),
        'type': _first(raw, 'type', 'mimeType', 'mime_type'),
    }


def normalize_response(raw: Any, index: int) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raw = {}
    attachments = raw.get('attachments')
    return {
        'id': raw.get('id') or f"response-{index}",
        'text': _first(raw, 'text', 'response', default=''),
        'created_at': _first(raw, 'created_at', 'createdAt', default=timezone.now().isoformat()),
        'created_by': _first(raw, 'created_by', 'createdBy', default=''),
        'attachments': attachments if isinstance(attachments, list) else [],
    }


def parse_task_metadata(metadata: Any) -> Dict[str, List[Dict[str, Any]]]:
    """
    Extract normalised ``responses`` and ``attachments`` from task metadata.

    Anything that is not a dict yields empty lists.
    """
    if not isinstance(metadata, dict):
        return {'responses': [], 'attachments': []}

    responses = metadata.get('responses')
    attachments = metadata.get('attachments')
    return {
        'responses': [
            normalize_response(item, index)
            for index, item in enumerate(responses)
        ] if isinstance(responses, list) else [],
        'attachments': [
            normalize_attachment(item) for item in attachments
        ] if isinstance(attachments, list) else [],
    }


# =============================================================================
# STATUS RULES
# =============================================================================

def completed_at_for_status(status: str, current: Optional[datetime], now: datetime) -> Optional[datetime]:
    """
    ``completed_at`` after a status change.

    Stamped once when the task becomes COMPLETED; cleared otherwise.
    """
    if status == TaskStatus.COMPLETED.value:
        return current or now
    return None


# =============================================================================
# SERVICE
# =============================================================================

class TaskService:
    """Task operations that go beyond plain CRUD."""

    def add_response(self, task_id, text: str, attachments=None, created_by: str = '') -> Dict[str, Any]:
        """Append a response to ``metadata['responses']`` and return it."""
        from infrastructure.persistence.models import Task

        if not isinstance(text, str) or not text.strip():
            raise ValidationException('text is required', field='text')
        if attachments is not None and not isinstance(attachments, list):
            raise ValidationException('attachments must be a list', field='attachments')

        with transaction.atomic():
            task = Task.objects.select_for_update().filter(pk=task_id).first()
            if task is None:
                raise EntityNotFoundException('Task', task_id)

            metadata = dict(task.metadata) if isinstance(task.metadata, dict) else {}
            responses = list(metadata.get('responses') or [])
            response = {
                'id': str(uuid.uuid4()),
                'text': text.strip(),
                'created_at': timezone.now().isoformat(),
                'created_by': created_by,
                'attachments': attachments or [],
            }
            responses.append(response)
            metadata['responses'] = responses
            task.metadata = metadata
            task.save(update_fields=['metadata', 'updated_at', 'version'])

        logger.info(f"Task {task_id}: response added by {created_by or 'unknown'}")
        return response

    def statistics(self, tasks: Iterable) -> Dict[str, Any]:
        """
        Aggregate statistics over a task queryset / iterable.

        ``average_response_time_hours`` is the mean time between task
        creation and its first response, over tasks that have one.
        """
        total = 0
        by_status = {status.value: 0 for status in TaskStatus}
        by_type = {task_type.value: 0 for task_type in TaskType}
        total_responses = 0
        with_responses = 0
        total_attachments = 0
        response_hours = []

        for task in tasks:
            total += 1
            by_status[task.status] = by_status.get(task.status, 0) + 1
            by_type[task.type] = by_type.get(task.type, 0) + 1

            parsed = parse_task_metadata(task.metadata)
            responses = parsed['responses']
            total_responses += len(responses)
            total_attachments += len(parsed['attachments'])
            total_attachments += len(task.attachments) if isinstance(task.attachments, list) else 0
            total_attachments += sum(len(r['attachments']) for r in responses)

            if responses:
                with_responses += 1
                first_at = parse_datetime(str(responses[0]['created_at']))
                if first_at is not None and task.created_at is not None:
                    if timezone.is_naive(first_at):
                        first_at = timezone.make_aware(first_at)
                    delta = (first_at - task.created_at).total_seconds() / 3600
                    if delta >= 0:
                        response_hours.append(delta)

        average = round(sum(response_hours) / len(response_hours), 2) if response_hours else None
        return {
            'total_tasks': total,
            'tasks_by_status': by_status,
            'tasks_by_type': by_type,
            'total_responses': total_responses,
            'tasks_with_responses': with_responses,
            'tasks_without_responses': total - with_responses,
            'average_response_time_hours': average,
            'total_attachments': total_attachments,
        }
