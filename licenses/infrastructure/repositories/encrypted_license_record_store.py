"""
Encrypted implementation of LicenseRecordStore.

The storage map is serialized to JSON, encrypted and written under one
well-known key. License ids and activation keys are encrypted individually
and written under their own storage names.
"""
import json
import logging
from typing import Optional

from core.domain.exceptions import DecryptionError
from core.infrastructure.cache import KeyValueStore
from core.infrastructure.encryption import EncryptionCodec
from licenses.domain.storage_map import StorageMap
from licenses.ports.license_record_store import LicenseRecordStore

logger = logging.getLogger(__name__)

STORAGE_MAP_KEY = "pls_license_storage_map"


class EncryptedLicenseRecordStore(LicenseRecordStore):
    """Key-value store implementation of LicenseRecordStore."""

    def __init__(
        self,
        store: KeyValueStore,
        codec: EncryptionCodec,
        storage_map_key: str = STORAGE_MAP_KEY,
    ):
        """Initialize store with its backend and codec."""
        self.store = store
        self.codec = codec
        self.storage_map_key = storage_map_key

    def get_storage_map(self) -> StorageMap:
        blob = self.store.get(self.storage_map_key)
        if blob is None:
            return StorageMap()

        plaintext = self.codec.decrypt(blob)
        try:
            return StorageMap.from_dict(json.loads(plaintext.decode("utf-8")))
        except (UnicodeDecodeError, json.JSONDecodeError, ValueError) as e:
            logger.error("Stored storage map is not valid JSON: %s", e)
            raise DecryptionError("Stored storage map is unreadable") from e

    def put_storage_map(self, storage_map: StorageMap) -> None:
        payload = json.dumps(storage_map.to_dict(), sort_keys=True).encode("utf-8")
        self.store.set(self.storage_map_key, self.codec.encrypt(payload))
        logger.debug("Storage map written (%d entries)", len(storage_map))

    def get_value(self, storage_name: str) -> Optional[str]:
        blob = self.store.get(storage_name)
        if blob is None:
            return None
        try:
            return self.codec.decrypt(blob).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecryptionError(f"Stored value {storage_name} is unreadable") from e

    def put_value(self, storage_name: str, value: str) -> None:
        self.store.set(storage_name, self.codec.encrypt(value.encode("utf-8")))
        logger.debug("Stored value written: %s", storage_name)
