"""
Core — Exception Handling

Typed domain errors for the inventory ledger and the DRF exception handler
that renders them in the standard API error envelope.

Every domain error carries one of the stable codes INVALID_INPUT, NOT_FOUND,
CONFLICT, FORBIDDEN or INTERNAL in ``default_code``.

@file core/exceptions.py
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('stockledger')

INVALID_INPUT = 'INVALID_INPUT'
NOT_FOUND = 'NOT_FOUND'
CONFLICT = 'CONFLICT'
FORBIDDEN = 'FORBIDDEN'
INTERNAL = 'INTERNAL'
UNAUTHENTICATED = 'UNAUTHENTICATED'


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class InvalidInputError(APIException):
    """Malformed, empty or self-contradicting payload, rejected before any write."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid input.'
    default_code = INVALID_INPUT


class ResourceNotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = NOT_FOUND


class ConflictError(APIException):
    """Raised when a business rule forbids the operation in the current state."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Operation conflicts with the current state.'
    default_code = CONFLICT


class InvalidStateTransition(ConflictError):
    """Raised when a state machine transition is not allowed."""
    default_detail = 'Invalid state transition.'


class InsufficientStockError(ConflictError):
    """Raised when applying a set of diffs would drive a balance below zero."""
    default_detail = 'Insufficient stock. Negative stock is not allowed.'


class InventoryLockedError(ConflictError):
    """Raised when a ledger-posting action runs while a stock opname is in progress."""
    default_detail = 'A stock opname is in progress. Stock postings are blocked until it ends.'


class ActiveOpnameExistsError(ConflictError):
    default_detail = 'A stock opname is already in progress. Finalize or void it first.'


class PermissionDeniedError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Permission denied.'
    default_code = FORBIDDEN


class InternalError(APIException):
    """Storage or transport failure; the message never leaks internals."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'A system error occurred. Please try again shortly.'
    default_code = INTERNAL


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

def standard_exception_handler(exc, context):
    """
    Wraps every error response in the standard envelope:
      { "success": false, "errors": {...}, "code": "ERROR_CODE" }
    """
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = PermissionDeniedError()
    elif isinstance(exc, ValidationError):
        data = {
            'success': False,
            'errors': exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages},
            'code': INVALID_INPUT,
        }
        return Response(data, status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)

    if response is not None:
        code = getattr(exc, 'default_code', 'ERROR')
        if isinstance(exc, drf_exceptions.ValidationError):
            code = INVALID_INPUT
        elif isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
            code = UNAUTHENTICATED
        elif isinstance(exc, drf_exceptions.PermissionDenied):
            code = FORBIDDEN
        elif isinstance(exc, drf_exceptions.NotFound):
            code = NOT_FOUND

        if isinstance(response.data, dict):
            errors = response.data
        elif isinstance(response.data, list):
            errors = {'detail': response.data}
        else:
            errors = {'detail': [str(response.data)]}

        response.data = {
            'success': False,
            'errors': errors,
            'code': code,
        }
        return response

    logger.exception('Unhandled exception in view: %s', exc)
    return Response(
        {'success': False, 'errors': {'detail': [str(InternalError.default_detail)]}, 'code': INTERNAL},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
