"""
Custom pagination classes for the API.
"""

from rest_framework.pagination import LimitOffsetPagination, PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """
    Standard pagination class that allows page_size to be set via query parameter.

    Default is 50, max is 1000.
    """
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 1000


class TaskResponsesPagination(LimitOffsetPagination):
    """
    limit/offset pagination for the task responses feed.

    Default limit is 50, max is 100. The envelope is
    ``{"tasks": [...], "pagination": {total, limit, offset, has_more}}``.
    """
    default_limit = 50
    max_limit = 100

    def get_paginated_response(self, data):
        return Response({
            'tasks': data,
            'pagination': {
                'total': self.count,
                'limit': self.limit,
                'offset': self.offset,
                'has_more': self.offset + self.limit < self.count,
            },
        })
