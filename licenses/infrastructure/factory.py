"""
Wiring of the license lifecycle manager from Django settings.
"""
import math
from typing import Optional

from core.infrastructure.cache_adapters import DjangoCacheStore
from core.infrastructure.encryption import EncryptionCodec
from core.infrastructure.locks import cache_lock_factory
from licenses.application.config import LicensingConfig
from licenses.application.services.license_lifecycle_manager import LicenseLifecycleManager
from licenses.infrastructure.clients.hiive_licensing_client import HiiveLicensingClient
from licenses.infrastructure.repositories.encrypted_license_record_store import (
    EncryptedLicenseRecordStore,
)

# A provision makes up to two remote calls under the lock
LOCK_TIMEOUT_FACTOR = 3


def build_lifecycle_manager(
    config: Optional[LicensingConfig] = None,
    store: Optional[DjangoCacheStore] = None,
) -> LicenseLifecycleManager:
    """
    Build a LicenseLifecycleManager backed by the Django cache and the HTTP client.

    Args:
        config: Licensing configuration (read from settings if omitted)
        store: Key-value store (the default Django cache if omitted)

    Returns:
        Configured LicenseLifecycleManager
    """
    config = config or LicensingConfig.from_settings()
    store = store or DjangoCacheStore()
    record_store = EncryptedLicenseRecordStore(store, EncryptionCodec(config.encryption_secret))
    return LicenseLifecycleManager(
        record_store=record_store,
        api_client=HiiveLicensingClient(config),
        config=config,
        lock_factory=_lock_factory(store, config),
    )


def _lock_factory(store: DjangoCacheStore, config: LicensingConfig):
    if not config.use_cache_lock:
        return None
    return cache_lock_factory(store, timeout=math.ceil(LOCK_TIMEOUT_FACTOR * config.api_timeout))
