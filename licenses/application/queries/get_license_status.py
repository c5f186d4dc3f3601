"""
GetLicenseStatusQuery.

Query to get the remote license status of a plugin.
"""
from dataclasses import dataclass


@dataclass
class GetLicenseStatusQuery:
    """Query to get license status for a plugin."""

    plugin_slug: str
