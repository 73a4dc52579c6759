"""
Opnames — Application Configuration
"""

from django.apps import AppConfig


class OpnamesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'opnames'
    verbose_name = 'Stock Opname'
