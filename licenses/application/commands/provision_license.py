"""
ProvisionLicenseCommand.

Command to provision a license for a plugin.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ProvisionLicenseCommand:
    """
    Command to provision a license.

    The provider selects the naming scheme of the plugin's license
    material; the configured default provider is used when omitted.
    """

    plugin_slug: str
    provider: Optional[str] = None
