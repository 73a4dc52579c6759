"""
Core — Celery Tasks

Audit sink: persists one AuditLog row per inventory transition. Dispatched
after the business transaction has committed.

@file core/tasks.py
"""

import logging

from celery import shared_task

logger = logging.getLogger('stockledger')


@shared_task(name='core.record_audit_event', ignore_result=True)
def record_audit_event(
    *,
    company_id,
    actor_id,
    action,
    target_type='',
    target_id='',
    metadata=None,
):
    from .models import AuditLog

    entry = AuditLog.objects.create(
        company_id=company_id,
        actor_id=actor_id,
        action=action,
        target_type=target_type or '',
        target_id=target_id or '',
        metadata=metadata,
    )
    logger.debug('Audit %s %s:%s recorded as %s', action, target_type, target_id, entry.pk)
    return str(entry.pk)
