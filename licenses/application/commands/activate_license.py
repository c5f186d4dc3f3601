"""
ActivateLicenseCommand.

Command to activate a provisioned license for this installation.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ActivateLicenseCommand:
    """Command to activate a plugin's license."""

    plugin_slug: str
    domain_name: Optional[str] = None
    email: Optional[str] = None
