"""
Base Views.

Common view mixins and base classes.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.http import Http404

from domain.shared.exceptions import EntityNotFoundException

UUID_LOOKUP_REGEX = r'[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}'


def get_client_ip(request):
    """Get client IP address from request."""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip


class AuditViewMixin:
    """
    Mixin that adds audit fields on create/update.
    """

    def perform_create(self, serializer):
        """Set created_by and updated_by on create."""
        serializer.save(
            created_by=self.request.user,
            updated_by=self.request.user
        )

    def perform_update(self, serializer):
        """Set updated_by on update."""
        serializer.save(updated_by=self.request.user)


class ListEnvelopeMixin:
    """
    Wrap list responses as ``{"success": true, "data": [...], "count": n}``.
    """

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        data = self.get_serializer(queryset, many=True).data
        return Response({'success': True, 'data': data, 'count': len(data)})


class EntityNotFoundMixin:
    """
    Raise EntityNotFoundException instead of a bare 404 from get_object().

    Set `not_found_entity` to the human name of the model.
    """

    not_found_entity = 'Object'

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            lookup = self.kwargs.get(self.lookup_url_kwarg or self.lookup_field)
            raise EntityNotFoundException(self.not_found_entity, lookup)


class HistoryViewMixin:
    """
    Mixin for accessing object history.
    """

    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        """Get object history."""
        obj = self.get_object()

        if not hasattr(obj, 'history'):
            return Response(
                {'error': 'History is not available for this object'},
                status=status.HTTP_400_BAD_REQUEST
            )

        history = obj.history.select_related('history_user').all()[:50]
        data = []
        for record in history:
            changes = []
            if record.prev_record is not None:
                delta = record.diff_against(record.prev_record)
                changes = [
                    {'field': change.field, 'old': change.old, 'new': change.new}
                    for change in delta.changes
                ]
            data.append({
                'id': record.history_id,
                'date': record.history_date,
                'user': str(record.history_user) if record.history_user else None,
                'type': record.history_type,
                'changes': changes,
            })

        return Response(data)


class BaseModelViewSet(
    EntityNotFoundMixin,
    AuditViewMixin,
    HistoryViewMixin,
    viewsets.ModelViewSet
):
    """
    Base viewset with common functionality.
    """
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_serializer_class(self):
        """
        Return different serializers per action.

        Override `serializer_classes` dict in subclass:
        serializer_classes = {
            'list': ListSerializer,
            'retrieve': DetailSerializer,
            'default': DetailSerializer,
        }
        """
        serializer_classes = getattr(self, 'serializer_classes', {})
        if self.action in serializer_classes:
            return serializer_classes[self.action]
        if 'default' in serializer_classes:
            return serializer_classes['default']
        return super().get_serializer_class()


class ReadOnlyModelViewSet(EntityNotFoundMixin, viewsets.ReadOnlyModelViewSet):
    """
    Read-only viewset.
    """
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP_REGEX
