"""
API error handling.

Every failure leaves the API as ``{"message": ..., "errors": ...}``:

- validation problems (DRF or model level, uniqueness races): 400
- missing entities: 404
- anything else: 500 with a generic message; details are only logged
"""

import logging

from django.core.exceptions import NON_FIELD_ERRORS, ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .utils import to_camel_case

logger = logging.getLogger(__name__)


def django_errors_to_dict(exc):
    """
    Flatten a Django ValidationError into ``{field: [messages]}``.

    Model-level errors keyed by ``__all__`` are reported as
    ``non_field_errors`` like DRF does.
    """
    if hasattr(exc, 'error_dict'):
        errors = {}
        for field, messages in exc.message_dict.items():
            key = 'non_field_errors' if field == NON_FIELD_ERRORS else field
            errors[key] = list(messages)
        return errors
    return {'non_field_errors': list(exc.messages)}


def _view_message(view, attribute, default):
    message = getattr(view, attribute, None)
    # Per-method messages, e.g. {'GET': 'Failed to fetch projects', ...}
    if isinstance(message, dict):
        request = getattr(view, 'request', None)
        message = message.get(getattr(request, 'method', None))
    return message or default


def api_exception_handler(exc, context):
    """
    DRF exception handler producing the marketplace error format.

    Views may set ``validation_error_message``, ``not_found_message`` and
    ``error_message`` to customize the top-level message, either as a string
    or as a dict keyed by HTTP method.
    """
    view = context.get('view')

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(django_errors_to_dict(exc))
    elif isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error rejected as invalid input: {exc}")
        exc = ValidationError({'non_field_errors': ['A record with these values already exists.']})
    elif isinstance(exc, ObjectDoesNotExist):
        exc = NotFound()

    if isinstance(exc, ValidationError):
        detail = exc.detail
        if not isinstance(detail, dict):
            detail = {'non_field_errors': detail}
        detail = {to_camel_case(field): messages for field, messages in detail.items()}
        return Response(
            {
                'message': _view_message(view, 'validation_error_message', 'Invalid request data'),
                'errors': detail,
            },
            status=status.HTTP_400_BAD_REQUEST
        )

    if isinstance(exc, (NotFound, Http404)):
        return Response(
            {'message': _view_message(view, 'not_found_message', 'Not found')},
            status=status.HTTP_404_NOT_FOUND
        )

    response = exception_handler(exc, context)

    if response is None:
        logger.exception(
            f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}"
        )
        return Response(
            {'message': _view_message(view, 'error_message', 'An unexpected error occurred')},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    detail = response.data.get('detail') if isinstance(response.data, dict) else None
    response.data = {'message': str(detail) if detail else 'Request failed'}
    return response
