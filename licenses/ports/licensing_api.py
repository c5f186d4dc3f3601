"""
Licensing API port (interface).

This defines the contract for talking to the remote licensing authority.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

from core.domain.value_objects import LicenseStatus


@dataclass(frozen=True)
class ProvisionedLicense:
    """Normalized provision response."""

    license_id: str
    download_url: str
    basename: Optional[str] = None
    storage_map_overrides: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class LicenseStatusResult:
    """
    Normalized status response.

    The authority answers either with a boolean validity flag or with a
    status value; exactly one of the two fields is set.
    """

    valid: Optional[bool] = None
    status: Optional[LicenseStatus] = None

    @property
    def is_valid(self) -> bool:
        if self.valid is not None:
            return self.valid
        return self.status is not None and self.status.is_valid

    def as_status(self) -> LicenseStatus:
        """Report the answer as a LicenseStatus."""
        if self.status is not None:
            return self.status
        return LicenseStatus.ACTIVE if self.valid else LicenseStatus.EXPIRED


class LicensingAPI(ABC):
    """
    Abstract licensing API client.

    Calls are synchronous and are never retried by the client.
    """

    @abstractmethod
    def provision(self, plugin: str, provider: str) -> ProvisionedLicense:
        """
        Provision a license for a plugin.

        Raises:
            TransportError: If the authority cannot be reached
            RemoteRejected: On a non-2xx answer
            UnexpectedResponseFormat: If license id or download URL is missing
        """
        pass

    @abstractmethod
    def activate(self, license_id: str, domain_name: str, email: str) -> str:
        """
        Activate a license for this installation.

        Returns:
            The activation key

        Raises:
            TransportError: If the authority cannot be reached
            RemoteRejected: On a non-2xx answer
            UnexpectedResponseFormat: If the activation key is missing
        """
        pass

    @abstractmethod
    def status(self, activation_key_or_license_id: str) -> LicenseStatusResult:
        """
        Look up the remote status of a license.

        Raises:
            TransportError: If the authority cannot be reached
            RemoteRejected: On a non-2xx answer
            UnexpectedResponseFormat: If neither validity nor status is present
        """
        pass
