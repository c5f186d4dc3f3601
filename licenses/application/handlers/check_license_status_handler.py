"""
CheckLicenseStatusHandler.

Handles the fail-closed license check query.
"""
from licenses.application.queries.check_license_status import CheckLicenseStatusQuery
from licenses.application.services.license_lifecycle_manager import LicenseLifecycleManager


class CheckLicenseStatusHandler:
    """Handler for CheckLicenseStatusQuery."""

    def __init__(self, manager: LicenseLifecycleManager):
        """Initialize handler with the lifecycle manager."""
        self.manager = manager

    def handle(self, query: CheckLicenseStatusQuery) -> bool:
        """Return True only if the licensing authority confirmed validity."""
        return self.manager.check_license_status(
            plugin=query.plugin_slug, activation_key=query.activation_key
        )
