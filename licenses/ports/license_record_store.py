"""
License record store port (interface).

This defines the contract for persisting the storage map and the
individual license id / activation key values.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Optional

from licenses.domain.storage_map import StorageMap


class LicenseRecordStore(ABC):
    """
    Abstract store for license records.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def get_storage_map(self) -> StorageMap:
        """
        Read the storage map.

        Returns:
            The persisted StorageMap, or an empty one if nothing was stored

        Raises:
            DecryptionError: If a map is stored but cannot be decrypted
        """
        pass

    @abstractmethod
    def put_storage_map(self, storage_map: StorageMap) -> None:
        """
        Replace the persisted storage map.

        Args:
            storage_map: Complete map to persist

        Raises:
            StorageError: If the map cannot be written
        """
        pass

    @abstractmethod
    def get_value(self, storage_name: str) -> Optional[str]:
        """
        Read an individually stored value.

        Args:
            storage_name: Name recorded in (or resolved for) an entry

        Returns:
            The value or None if absent

        Raises:
            DecryptionError: If a value is stored but cannot be decrypted
        """
        pass

    @abstractmethod
    def put_value(self, storage_name: str, value: str) -> None:
        """
        Store an individual value.

        Args:
            storage_name: Name recorded in (or resolved for) an entry
            value: License id or activation key

        Raises:
            StorageError: If the value cannot be written
        """
        pass
