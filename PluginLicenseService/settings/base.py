"""
Base Django settings for PluginLicenseService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
# It also derives the encryption key of stored license data unless
# PLS_ENCRYPTION_KEY is set.
SECRET_KEY = "django-insecure-6v!q3k$1r@z8w_pls-dev-only-p#e7n2m^x0t(c9b)f4j"

# Application definition
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "PluginLicenseService.apps.PluginLicenseServiceConfig",
    "core",
    "licenses",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    # Custom middleware
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.metrics.MetricsMiddleware",
]

ROOT_URLCONF = "PluginLicenseService.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "PluginLicenseService.wsgi.application"

# No relational database: all state lives in the key-value store (CACHES)
DATABASES = {}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "Plugin License Service API",
    "DESCRIPTION": (
        "Provisions, activates and validates third-party plugin licenses "
        "against the remote licensing authority."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api/v1",
    "TAGS": [
        {"name": "License API", "description": "Plugin license lifecycle"},
        {"name": "Health", "description": "Health check endpoints"},
    ],
}

# Key-value store backing the license records (Redis cache)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.environ.get("REDIS_URL", "redis://127.0.0.1:6379/1"),
        "TIMEOUT": None,
        "OPTIONS": {
            "socket_connect_timeout": 5,
            "socket_timeout": 5,
        },
    }
}

# Licensing
PLS_API_BASE_URL = os.environ.get("PLS_API_BASE_URL", "https://hiive.cloud/api")
PLS_API_TOKEN = os.environ.get("PLS_API_TOKEN", "")
PLS_API_TIMEOUT = int(os.environ.get("PLS_API_TIMEOUT", "10"))
PLS_ENCRYPTION_KEY = os.environ.get("PLS_ENCRYPTION_KEY", "")
PLS_DEFAULT_PROVIDER = os.environ.get("PLS_DEFAULT_PROVIDER", "default")
PLS_DOMAIN_NAME = os.environ.get("PLS_DOMAIN_NAME", "")
PLS_ADMIN_EMAIL = os.environ.get("PLS_ADMIN_EMAIL", "")
PLS_USE_CACHE_LOCK = os.environ.get("PLS_USE_CACHE_LOCK", "false").lower() == "true"

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "development"))
