"""
Test settings for PluginLicenseService.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

# Use in-memory cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "TIMEOUT": None,
    }
}

PLS_API_BASE_URL = "https://licensing.test/api"
PLS_API_TOKEN = "test-token"
PLS_API_TIMEOUT = 5
PLS_ENCRYPTION_KEY = "test-encryption-secret"
PLS_DEFAULT_PROVIDER = "default"
PLS_DOMAIN_NAME = "example.com"
PLS_ADMIN_EMAIL = "admin@example.com"
PLS_USE_CACHE_LOCK = False

# Disable logging during tests
LOGGING_CONFIG = None
