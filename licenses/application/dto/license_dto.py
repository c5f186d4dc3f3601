"""
License DTOs for API and CLI responses.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from licenses.domain.storage_map import StorageMapEntry


@dataclass
class LicenseEntryDTO:
    """DTO for a plugin's storage map entry."""

    plugin_slug: str
    provider: str
    license_id: Optional[str]
    download_url: Optional[str]
    basename: Optional[str]
    license_id_storage_name: Optional[str]
    activation_key_storage_name: Optional[str]
    storage_method: Optional[str]

    @classmethod
    def from_entry(cls, plugin_slug: str, entry: StorageMapEntry) -> "LicenseEntryDTO":
        return cls(plugin_slug=plugin_slug, **entry.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ActivationDTO:
    """DTO for an activation result."""

    plugin_slug: str
    activation_key: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class LicenseStatusDTO:
    """DTO for license status response."""

    plugin_slug: str
    status: str
    is_valid: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
