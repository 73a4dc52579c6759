"""
Receivings — Application Configuration
"""

from django.apps import AppConfig


class ReceivingsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'receivings'
    verbose_name = 'Goods Receiving'
