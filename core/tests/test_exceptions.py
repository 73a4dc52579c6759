"""
Core — Exception Handler Tests

@file core/tests/test_exceptions.py
"""

from django.core.exceptions import ValidationError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions

from core.exceptions import (
    InventoryLockedError,
    PermissionDeniedError,
    standard_exception_handler,
)


class TestStandardExceptionHandler:

    def test_conflict_envelope(self):
        response = standard_exception_handler(InventoryLockedError(), {})
        assert response.status_code == 409
        assert response.data['success'] is False
        assert response.data['code'] == 'CONFLICT'

    def test_forbidden(self):
        response = standard_exception_handler(PermissionDeniedError(), {})
        assert response.status_code == 403
        assert response.data['code'] == 'FORBIDDEN'

    def test_http404_becomes_not_found(self):
        response = standard_exception_handler(Http404(), {})
        assert response.status_code == 404
        assert response.data['code'] == 'NOT_FOUND'

    def test_validation_errors_are_invalid_input(self):
        response = standard_exception_handler(drf_exceptions.ValidationError({'items': ['required']}), {})
        assert response.status_code == 400
        assert response.data['code'] == 'INVALID_INPUT'
        assert response.data['errors'] == {'items': ['required']}

        response = standard_exception_handler(ValidationError('bad'), {})
        assert response.data['code'] == 'INVALID_INPUT'

    def test_unauthenticated(self):
        response = standard_exception_handler(drf_exceptions.NotAuthenticated(), {})
        assert response.status_code == 401
        assert response.data['code'] == 'UNAUTHENTICATED'

    def test_unhandled_exception_is_internal(self, caplog):
        response = standard_exception_handler(RuntimeError('secret detail'), {})
        assert response.status_code == 500
        assert response.data['code'] == 'INTERNAL'
        assert 'secret detail' not in str(response.data)
        assert 'Unhandled exception' in caplog.text
