"""
Core App Configuration
======================

Validates the driver credentials and defaults once Django is ready.
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    name = "core"
    verbose_name = "Panhandler Core"

    def ready(self):
        from core.config import validate_config_on_startup
        validate_config_on_startup()
