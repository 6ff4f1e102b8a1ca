"""
Base Serializers.

Shared pieces for serializers of audited models (projects and tasks).
"""

from rest_framework import serializers


class AdminEmailField(serializers.RelatedField):
    """Read-only admin foreign key rendered as the admin's e-mail."""

    def __init__(self, **kwargs):
        kwargs['read_only'] = True
        super().__init__(**kwargs)

    def to_representation(self, value):
        return value.email


class BaseModelSerializer(serializers.ModelSerializer):
    """
    Base serializer for models with audit columns.

    ``created_by`` / ``updated_by`` are never writable from a request body;
    views pass ``request.user`` to ``save()``. Subclasses opt in by listing
    them in ``Meta.fields``.
    """

    created_by = AdminEmailField()
    updated_by = AdminEmailField()
