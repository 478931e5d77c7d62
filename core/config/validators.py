"""
Configuration Validators
========================

Startup validation for the Panhandler configuration layer.
Raises ImproperlyConfigured for critical issues in production,
logs warnings in development.

Called automatically via core.apps.CoreConfig.ready().
"""

import logging
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


def validate_config_on_startup(app_config=None):
    """
    Validate all configuration on application startup.

    Production:
        CRITICAL issues raise ImproperlyConfigured (hard failure).
        WARNING issues are logged but don't block startup.

    Development:
        All issues are logged as warnings/info.
    """
    if app_config is None:
        from panhandler_site.config import config as app_config

    issues = app_config.validate()

    if not issues:
        logger.info("Configuration validated — no issues found")
        app_config.log_status()
        return

    critical_issues = [i for i in issues if i.startswith("CRITICAL")]

    # log_status reports every issue at its own level
    app_config.log_status()

    if app_config.is_production and critical_issues:
        raise ImproperlyConfigured(
            "Configuration validation failed in production:\n"
            + "\n".join(f"  • {i}" for i in critical_issues)
        )
