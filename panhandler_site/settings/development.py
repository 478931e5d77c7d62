"""
Development Settings

.env is loaded by panhandler_site.config, before the config is built.
"""

from .base import *

DEBUG = True
ALLOWED_HOSTS = ["*"]

# Cache - Use local memory for development (throttle counters)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}
