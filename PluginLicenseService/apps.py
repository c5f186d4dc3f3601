"""
App configuration for Plugin License Service.
"""
import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class PluginLicenseServiceConfig(AppConfig):
    """App configuration for PluginLicenseService."""

    name = "PluginLicenseService"
    verbose_name = "Plugin License Service"

    def ready(self):
        """Validate licensing settings once apps are loaded."""
        from licenses.application.config import LicensingConfig

        config = LicensingConfig.from_settings()
        logger.info(
            "Licensing API at %s (timeout=%ss, cache lock %s)",
            config.api_base_url,
            config.api_timeout,
            "on" if config.use_cache_lock else "off",
        )
