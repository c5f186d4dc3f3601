"""
ProvisionLicenseHandler.

Handles the provision license command.
"""
from core.domain.value_objects import PluginSlug, ProviderName
from licenses.application.commands.provision_license import ProvisionLicenseCommand
from licenses.application.dto.license_dto import LicenseEntryDTO
from licenses.application.services.license_lifecycle_manager import LicenseLifecycleManager


class ProvisionLicenseHandler:
    """Handler for ProvisionLicenseCommand."""

    def __init__(self, manager: LicenseLifecycleManager):
        """Initialize handler with the lifecycle manager."""
        self.manager = manager

    def handle(self, command: ProvisionLicenseCommand) -> LicenseEntryDTO:
        """
        Handle provision license command.

        Args:
            command: ProvisionLicenseCommand

        Returns:
            LicenseEntryDTO describing the plugin's storage map entry

        Raises:
            ValueError: If the plugin slug or provider is empty
            DecryptionError: If the stored records are unreadable
            LicensingException: If the licensing API call fails
        """
        plugin = PluginSlug(command.plugin_slug)
        provider = ProviderName(command.provider) if command.provider else None

        entry = self.manager.provision(str(plugin), str(provider) if provider else None)
        return LicenseEntryDTO.from_entry(str(plugin), entry)
