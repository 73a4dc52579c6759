"""
Companies — DRF Permissions

HasInventoryScope resolves the request's AuthContext and caches it on the
request as ``request.auth_context``. CanWriteInventory additionally
requires a writer role for unsafe methods.

@file companies/permissions.py
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission

from .context import require_inventory_writer, resolve_auth_context

COMPANY_HEADER = 'HTTP_X_COMPANY_ID'


def get_auth_context(request):
    ctx = getattr(request, 'auth_context', None)
    if ctx is None:
        ctx = resolve_auth_context(request.user, request.META.get(COMPANY_HEADER))
        request.auth_context = ctx
    return ctx


class HasInventoryScope(BasePermission):
    def has_permission(self, request, view):
        get_auth_context(request)
        return True


class CanWriteInventory(HasInventoryScope):
    def has_permission(self, request, view):
        ctx = get_auth_context(request)
        if request.method not in SAFE_METHODS:
            require_inventory_writer(ctx)
        return True
