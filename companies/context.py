"""
Companies — Authorization Context

AuthContext is the identity every inventory operation receives: which
company it acts on, who acts, and with which role. It is built once per
request by resolve_auth_context and passed explicitly to the services.

@file companies/context.py
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from core.exceptions import InvalidInputError, PermissionDeniedError
from core.validators import parse_uuid

from .models import Company, Membership

logger = logging.getLogger('stockledger')

ROLE_SUPERADMIN = 'SUPERADMIN'
ROLE_ADMIN = 'ADMIN'
ROLE_STAFF = 'STAFF'

INVENTORY_WRITER_ROLES = frozenset({ROLE_SUPERADMIN, ROLE_ADMIN})


@dataclass(frozen=True)
class AuthContext:
    company_id: UUID
    actor_id: UUID
    role: str

    @property
    def can_write_inventory(self) -> bool:
        return self.role in INVENTORY_WRITER_ROLES


def resolve_auth_context(user, requested_company_id=None) -> AuthContext:
    """
    Resolve the tenant scope for ``user``.

    SUPERADMIN must name the company explicitly and keeps the SUPERADMIN
    role inside it. Everyone else is bound to their ACTIVE membership and
    ``requested_company_id``, when given, must match it.
    """
    if user is None or not user.is_authenticated:
        raise PermissionDeniedError(detail='Authentication required.')

    if getattr(user, 'is_superadmin', False):
        if not requested_company_id:
            raise InvalidInputError(detail='A company must be selected.')
        company_id = parse_uuid(requested_company_id, 'company_id')
        if not Company.objects.filter(pk=company_id, is_active=True).exists():
            raise PermissionDeniedError(detail='Company not accessible.')
        return AuthContext(company_id=company_id, actor_id=user.pk, role=ROLE_SUPERADMIN)

    membership = (
        Membership.objects
        .filter(user=user, status=Membership.Status.ACTIVE, company__is_active=True)
        .only('company_id', 'role')
        .first()
    )
    if membership is None:
        logger.info('No active membership for user %s', user.pk)
        raise PermissionDeniedError(detail='No active company membership.')

    if requested_company_id and parse_uuid(requested_company_id, 'company_id') != membership.company_id:
        raise PermissionDeniedError(detail='Company not accessible.')

    return AuthContext(company_id=membership.company_id, actor_id=user.pk, role=membership.role)


def require_inventory_writer(ctx: AuthContext) -> None:
    if not ctx.can_write_inventory:
        raise PermissionDeniedError(detail='Inventory changes require an admin role.')
