"""
StockLedger — Celery Application

Configured from Django settings (CELERY_* namespace); tasks are discovered
in every installed app's tasks.py.

@file config/celery.py
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

app = Celery('stockledger')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
