"""
GetLicenseStatusHandler.

Handles the get license status query.
"""
from core.domain.value_objects import PluginSlug
from licenses.application.dto.license_dto import LicenseStatusDTO
from licenses.application.queries.get_license_status import GetLicenseStatusQuery
from licenses.application.services.license_lifecycle_manager import LicenseLifecycleManager


class GetLicenseStatusHandler:
    """Handler for GetLicenseStatusQuery."""

    def __init__(self, manager: LicenseLifecycleManager):
        """Initialize handler with the lifecycle manager."""
        self.manager = manager

    def handle(self, query: GetLicenseStatusQuery) -> LicenseStatusDTO:
        """
        Handle get license status query.

        Args:
            query: GetLicenseStatusQuery

        Returns:
            LicenseStatusDTO with the remote status

        Raises:
            NotFound: If the plugin was never provisioned
            LicensingException: If the licensing API call fails
        """
        plugin = PluginSlug(query.plugin_slug)
        status = self.manager.status(str(plugin))
        return LicenseStatusDTO(plugin_slug=str(plugin), status=status.value, is_valid=status.is_valid)
