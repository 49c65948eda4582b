import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def clamp_int(value, default, minimum=1, maximum=None):
    """ Parse a query param as int, falling back to default and clamping to bounds """
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = default
    number = max(minimum, number)
    if maximum is not None:
        number = min(maximum, number)
    return number


def paginated_payload(items, total, page, page_size):
    return {
        'items': items,
        'total': total,
        'page': page,
        'page_size': page_size,
        'total_pages': math.ceil(total / page_size) if page_size else 0,
    }


class ClampedPagination(PageNumberPagination):
    """ Page number pagination that never 404s

        page < 1 is treated as 1, page_size is clamped to [1, max_page_size]
        and a page past the end simply returns no items
    """
    page_size = DEFAULT_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = MAX_PAGE_SIZE

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.page_number = clamp_int(request.query_params.get(self.page_query_param), 1)
        self.current_page_size = self.get_page_size(request)
        self.total = queryset.count()

        offset = (self.page_number - 1) * self.current_page_size
        return list(queryset[offset:offset + self.current_page_size])

    def get_page_size(self, request):
        return clamp_int(
            request.query_params.get(self.page_size_query_param),
            self.page_size,
            maximum=self.max_page_size,
        )

    def get_paginated_response(self, data):
        return Response({
            'success': True,
            'data': paginated_payload(data, self.total, self.page_number, self.current_page_size),
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'success': {'type': 'boolean'},
                'data': {
                    'type': 'object',
                    'properties': {
                        'items': schema,
                        'total': {'type': 'integer'},
                        'page': {'type': 'integer'},
                        'page_size': {'type': 'integer'},
                        'total_pages': {'type': 'integer'},
                    },
                },
            },
        }
