"""
CheckLicenseStatusQuery.

Query for the fail-closed validity check of a plugin or activation key.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CheckLicenseStatusQuery:
    """Query to check whether a license is currently valid."""

    plugin_slug: Optional[str] = None
    activation_key: Optional[str] = None
