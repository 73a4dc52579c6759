"""
Core — Audit Service & Unit of Work

AuditService hands one structured event per successful transition to the
audit sink once the surrounding transaction commits. unit_of_work wraps a
workflow operation in a single atomic block and turns unexpected storage
failures into InternalError.

@file core/services.py
"""

import functools
import logging
import uuid
from decimal import Decimal
from typing import Any

from django.db import DatabaseError, transaction
from rest_framework.exceptions import APIException

from core.exceptions import InternalError

logger = logging.getLogger('stockledger')


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {key: _jsonable(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(val) for val in value]
    if isinstance(value, uuid.UUID):
        return str(value)
    return value


class AuditService:
    """Fire-and-forget audit events for inventory transitions."""

    @staticmethod
    def emit(
        ctx,
        *,
        action: str,
        target_type: str,
        target_id,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """
        Queue an audit event for ``ctx`` (an AuthContext).

        Dispatch happens on commit; if the transaction rolls back the event is
        dropped together with the business writes.
        """
        payload = {
            'company_id': str(ctx.company_id),
            'actor_id': str(ctx.actor_id),
            'action': action,
            'target_type': target_type,
            'target_id': str(target_id),
            'metadata': _jsonable(metadata) if metadata is not None else None,
        }
        transaction.on_commit(functools.partial(AuditService._dispatch, payload))

    @staticmethod
    def _dispatch(payload: dict[str, Any]) -> None:
        from core.tasks import record_audit_event

        try:
            record_audit_event.delay(**payload)
        except Exception:
            logger.exception(
                'Audit dispatch failed: action=%s target=%s:%s',
                payload['action'], payload['target_type'], payload['target_id'],
            )


def unit_of_work(operation: str):
    """
    Run the decorated service call as one atomic unit.

    Domain errors (APIException subclasses) propagate unchanged after the
    rollback. Any other database failure is logged with full context and
    surfaced as InternalError.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                with transaction.atomic():
                    return func(*args, **kwargs)
            except APIException:
                raise
            except DatabaseError as exc:
                logger.exception('%s failed: unexpected storage error', operation)
                raise InternalError() from exc

        return wrapper

    return decorator
