"""
Error taxonomy shared by every rule component.

Each kind maps to one HTTP status and one machine readable ``code`` so that
callers can tell an ``InvalidState`` apart from a ``Forbidden`` even when both
come back as client errors.
"""
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class MarketplaceError(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request could not be processed.'
    default_code = 'error'


class NotFound(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class Forbidden(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Not authorized.'
    default_code = 'forbidden'


class InvalidState(MarketplaceError):
    default_detail = 'Entity is not in the required status.'
    default_code = 'invalid_state'


class ValidationError(MarketplaceError):
    default_detail = 'Invalid input.'
    default_code = 'validation_error'


class Conflict(MarketplaceError):
    default_detail = 'Entity already exists.'
    default_code = 'conflict'


class InsufficientFunds(MarketplaceError):
    default_detail = 'Insufficient balance.'
    default_code = 'insufficient_funds'


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return ''
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def _framework_code(exc):
    """Code for errors raised by DRF or Django rather than by the rules."""
    if isinstance(exc, (exceptions.PermissionDenied, DjangoPermissionDenied)):
        return Forbidden.default_code
    if isinstance(exc, (exceptions.NotFound, Http404)):
        return NotFound.default_code
    codes = exc.get_codes() if isinstance(exc, exceptions.APIException) else None
    return codes if isinstance(codes, str) else 'error'


def api_exception_handler(exc, context):
    """Render every error as ``{"error": ..., "code": ...}``."""
    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else 'unknown'

    if isinstance(exc, MarketplaceError):
        logger.warning(f"{view_name} rejected request: {exc.default_code}: {exc.detail}")
        return Response(
            {'error': str(exc.detail), 'code': exc.default_code},
            status=exc.status_code,
        )

    response = exception_handler(exc, context)
    if response is None:
        logger.exception(f"Unhandled error in {view_name}: {exc}")
        return Response(
            {'error': 'Internal server error', 'code': 'internal_error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            'error': _first_message(exc.detail),
            'code': ValidationError.default_code,
            'fields': exc.detail,
        }
    else:
        response.data = {
            'error': _first_message(response.data.get('detail', response.data)),
            'code': _framework_code(exc),
        }
    return response
