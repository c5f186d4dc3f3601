"""
ActivateLicenseHandler.

Handles the activate license command.
"""
from core.domain.value_objects import PluginSlug
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.dto.license_dto import ActivationDTO
from licenses.application.services.license_lifecycle_manager import LicenseLifecycleManager


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(self, manager: LicenseLifecycleManager):
        """Initialize handler with the lifecycle manager."""
        self.manager = manager

    def handle(self, command: ActivateLicenseCommand) -> ActivationDTO:
        """
        Handle activate license command.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationDTO with the activation key

        Raises:
            NotFound: If the plugin was never provisioned
            LicensingException: If the licensing API call fails
        """
        plugin = PluginSlug(command.plugin_slug)
        activation_key = self.manager.activate(
            str(plugin), domain_name=command.domain_name, email=command.email
        )
        return ActivationDTO(plugin_slug=str(plugin), activation_key=activation_key)
