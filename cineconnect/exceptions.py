import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler


logger = logging.getLogger(__name__)


class DomainError(Exception):
    """ Base class for business rule failures raised by the service layer

        Carries a machine readable `code`; the calling view decides which
        HTTP status the code maps to through its `domain_error_statuses`
    """

    def __init__(self, message, code):
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self):
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


class ApiError(APIException):
    """ An API exception with a per instance status code """

    def __init__(self, status_code, message, code=None):
        self.status_code = status_code
        super().__init__(detail=message, code=code)

    @classmethod
    def bad_request(cls, message, code=None):
        return cls(status.HTTP_400_BAD_REQUEST, message, code)


def flatten_validation_errors(detail, path=''):
    """ Turn DRF's nested error structure into a flat list of {path, message} """
    if isinstance(detail, dict):
        errors = []
        for field, value in detail.items():
            child = field if not path else f"{path}.{field}"
            if field == 'non_field_errors':
                child = path
            errors.extend(flatten_validation_errors(value, child))
        return errors

    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                errors.extend(flatten_validation_errors(value, f"{path}.{index}" if path else str(index)))
            else:
                errors.append({'path': path, 'message': str(value)})
        return errors

    return [{'path': path, 'message': str(detail)}]


def exception_handler(exc, context):
    """ Render every error as {success: false, error, code?, details?} """
    if isinstance(exc, DomainError):
        statuses = getattr(context.get('view'), 'domain_error_statuses', {})
        status_code = statuses.get(exc.code)
        if status_code is not None:
            exc = ApiError(status_code, exc.message, exc.code)

    response = drf_exception_handler(exc, context)

    if response is None:
        # Anything DRF doesn't know about is a bug, log it with its traceback
        logger.error("Unhandled error in %s", context.get('view').__class__.__name__, exc_info=exc)
        message = str(exc) if settings.DEBUG else 'Internal server error'
        return Response(
            {'success': False, 'error': message},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if isinstance(exc, ValidationError):
        response.data = {
            'success': False,
            'error': 'Validation error',
            'details': flatten_validation_errors(exc.detail),
        }
        return response

    body = {'success': False, 'error': _message_of(exc, response.data)}
    if isinstance(exc, ApiError) and isinstance(exc.detail, str) and exc.detail.code not in (None, 'error'):
        body['code'] = exc.detail.code
    response.data = body
    return response


def _message_of(exc, data=None):
    if isinstance(data, dict) and 'detail' in data:
        return str(data['detail'])
    detail = getattr(exc, 'detail', None)
    if detail is None:
        return str(exc)
    if isinstance(detail, dict):
        return str(detail.get('detail', detail))
    if isinstance(detail, list):
        return '; '.join(str(item) for item in detail)
    return str(detail)
