"""
License lifecycle manager.

Orchestrates provisioning, activation and validation of plugin licenses
against the remote licensing authority, keeping the license material in
the encrypted record store.

Per plugin the lifecycle is ``Unprovisioned -> Provisioned -> Activated``.
An activated license is re-validated against the authority whenever it is
used; expiry is always a remote answer.

The storage map is updated with a full read-modify-write. Nothing here
makes that cycle atomic: two concurrent provision or activate calls can
race and the last writer's map wins. ``lock_factory`` lets a caller plug
in mutual exclusion (see core.infrastructure.locks).

Provisioning writes the storage map before the license id. If the map
write fails, the stored license id still belongs to the entry that is
still recorded. If the license id write fails after the map write, the
entry already names the new license and the next provision replaces it.
"""
import logging
from contextlib import nullcontext
from typing import Callable, ContextManager, Optional

from core.domain.exceptions import LicenseNotProvisionedError, NotFound
from core.domain.value_objects import LicenseStatus
from core.metrics import license_checks_total, licenses_activated_total, licenses_provisioned_total
from licenses.application.config import LicensingConfig
from licenses.domain.services import StorageLocationService
from licenses.domain.storage_locations import StorageLocationRegistry, default_registry
from licenses.domain.storage_map import StorageMap, StorageMapEntry
from licenses.ports.license_record_store import LicenseRecordStore
from licenses.ports.licensing_api import LicensingAPI

logger = logging.getLogger(__name__)

LockFactory = Callable[[str], ContextManager]


def _no_lock(plugin: str) -> ContextManager:
    return nullcontext()


def _mask(value: Optional[str]) -> str:
    if not value:
        return "<none>"
    return f"{value[:8]}..." if len(value) > 8 else value


class LicenseLifecycleManager:
    """Application service exposing provision, activate and status operations."""

    def __init__(
        self,
        record_store: LicenseRecordStore,
        api_client: LicensingAPI,
        config: LicensingConfig,
        registry: Optional[StorageLocationRegistry] = None,
        lock_factory: Optional[LockFactory] = None,
    ):
        """
        Initialize manager with its collaborators.

        Args:
            record_store: Store for the storage map and individual values
            api_client: Remote licensing API
            config: Licensing configuration
            registry: Storage location registry (defaults to the built-in one)
            lock_factory: Callable returning a context manager per plugin,
                held around every storage map read-modify-write
        """
        self.record_store = record_store
        self.api_client = api_client
        self.config = config
        self.locations = StorageLocationService(
            registry or default_registry, config.default_provider
        )
        self.lock_factory = lock_factory or _no_lock

    def provision(self, plugin: str, provider: Optional[str] = None) -> StorageMapEntry:
        """
        Provision a license for a plugin.

        An existing entry whose license id and activation key are stored and
        which the authority still reports valid is returned unchanged without
        a remote call. Otherwise a license is provisioned remotely and its
        entry (re)written.

        Args:
            plugin: Plugin slug
            provider: Provider name (defaults to the configured provider)

        Returns:
            The plugin's StorageMapEntry

        Raises:
            DecryptionError: If the stored records are unreadable
            TransportError, RemoteRejected, UnexpectedResponseFormat: From
                the licensing API; nothing is written in that case
        """
        provider = provider or self.config.default_provider

        with self.lock_factory(plugin):
            storage_map = self.record_store.get_storage_map()
            existing = storage_map.get(plugin)

            if existing is not None and self._has_valid_license(plugin, existing):
                logger.debug("Reusing valid license for %s", plugin)
                licenses_provisioned_total.labels(provider=provider, outcome="reused").inc()
                return existing

            try:
                provisioned = self.api_client.provision(plugin, provider)
            except Exception:
                licenses_provisioned_total.labels(provider=provider, outcome="failed").inc()
                raise

            location = self.locations.location_for_provisioning(
                plugin, provider, existing, provisioned.storage_map_overrides
            )
            entry = StorageMapEntry(
                provider=provider,
                download_url=provisioned.download_url,
                basename=provisioned.basename,
                license_id_storage_name=location.license_id_storage_name,
                activation_key_storage_name=location.activation_key_storage_name,
                storage_method=location.storage_method,
                license_id=provisioned.license_id,
            )

            # Map first: a failed map write must leave the previous license id in place
            self.record_store.put_storage_map(storage_map.with_entry(plugin, entry))
            self.record_store.put_value(location.license_id_storage_name, provisioned.license_id)

        licenses_provisioned_total.labels(provider=provider, outcome="provisioned").inc()
        logger.info(
            "Provisioned license %s for %s (%s)", _mask(provisioned.license_id), plugin, provider
        )
        return entry

    def activate(
        self,
        plugin: str,
        domain_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> str:
        """
        Activate a plugin's license for this installation.

        A stored activation key the authority still reports valid is
        returned without a new activation request.

        Args:
            plugin: Plugin slug
            domain_name: Installation domain (defaults to PLS_DOMAIN_NAME)
            email: Admin email (defaults to PLS_ADMIN_EMAIL)

        Returns:
            The activation key

        Raises:
            NotFound: If the plugin has no storage map entry
            LicenseNotProvisionedError: If no license id is stored
            DecryptionError: If the stored records are unreadable
            TransportError, RemoteRejected, UnexpectedResponseFormat: From
                the licensing API
        """
        with self.lock_factory(plugin):
            storage_map = self.record_store.get_storage_map()
            entry = self._require_entry(storage_map, plugin)
            location = self.locations.location_for_entry(plugin, entry)

            current_key = self.record_store.get_value(location.activation_key_storage_name)
            if current_key and self.check_license_status(activation_key=current_key):
                logger.debug("Reusing valid activation key for %s", plugin)
                licenses_activated_total.labels(outcome="reused").inc()
                return current_key

            license_id = self.record_store.get_value(location.license_id_storage_name)
            if not license_id:
                raise LicenseNotProvisionedError(f"No license id stored for {plugin}")

            try:
                activation_key = self.api_client.activate(
                    license_id,
                    domain_name or self.config.domain_name,
                    email or self.config.admin_email,
                )
            except Exception:
                licenses_activated_total.labels(outcome="failed").inc()
                raise

            self.record_store.put_value(location.activation_key_storage_name, activation_key)

            if (
                entry.license_id_storage_name is None
                or entry.activation_key_storage_name is None
                or entry.storage_method is None
            ):
                # Record the recomputed names so later reads skip the resolver
                upgraded = entry.with_values(
                    license_id_storage_name=location.license_id_storage_name,
                    activation_key_storage_name=location.activation_key_storage_name,
                    storage_method=location.storage_method,
                )
                self.record_store.put_storage_map(storage_map.with_entry(plugin, upgraded))

        licenses_activated_total.labels(outcome="activated").inc()
        logger.info("Activated license %s for %s", _mask(license_id), plugin)
        return activation_key

    def check_license_status(
        self, plugin: Optional[str] = None, activation_key: Optional[str] = None
    ) -> bool:
        """
        Fail-closed validity gate.

        Resolves the plugin's activation key unless one is given, then asks
        the authority. Any failure along the way reports the license as
        invalid; this method never raises.

        Args:
            plugin: Plugin slug, used when no activation key is given
            activation_key: Activation key to check directly

        Returns:
            True only if the authority confirmed the license is valid
        """
        try:
            if not activation_key:
                activation_key = self._stored_activation_key(plugin)
                if not activation_key:
                    license_checks_total.labels(result="invalid").inc()
                    return False

            valid = self.api_client.status(activation_key).is_valid is True
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("License check for %s failed closed: %s", plugin or "<key>", e)
            license_checks_total.labels(result="error").inc()
            return False

        license_checks_total.labels(result="valid" if valid else "invalid").inc()
        return valid

    def status(self, plugin: str) -> LicenseStatus:
        """
        Report the remote license status of a plugin.

        Unlike check_license_status, errors propagate to the caller.

        Args:
            plugin: Plugin slug

        Returns:
            LicenseStatus reported by the authority, or NOT_GENERATED when
            nothing has been stored for the plugin yet

        Raises:
            NotFound: If the plugin has no storage map entry
            DecryptionError: If the stored records are unreadable
            TransportError, RemoteRejected, UnexpectedResponseFormat: From
                the licensing API
        """
        storage_map = self.record_store.get_storage_map()
        entry = self._require_entry(storage_map, plugin)
        location = self.locations.location_for_entry(plugin, entry)

        reference = self.record_store.get_value(
            location.activation_key_storage_name
        ) or self.record_store.get_value(location.license_id_storage_name)
        if not reference:
            return LicenseStatus.NOT_GENERATED

        return self.api_client.status(reference).as_status()

    def _has_valid_license(self, plugin: str, entry: StorageMapEntry) -> bool:
        location = self.locations.location_for_entry(plugin, entry)
        license_id = self.record_store.get_value(location.license_id_storage_name)
        if not license_id:
            return False
        activation_key = self.record_store.get_value(location.activation_key_storage_name)
        if not activation_key:
            return False
        return self.check_license_status(plugin=plugin, activation_key=activation_key)

    def _stored_activation_key(self, plugin: Optional[str]) -> Optional[str]:
        if not plugin:
            return None
        entry = self.record_store.get_storage_map().get(plugin)
        if entry is None:
            return None
        location = self.locations.location_for_entry(plugin, entry)
        return self.record_store.get_value(location.activation_key_storage_name)

    @staticmethod
    def _require_entry(storage_map: StorageMap, plugin: str) -> StorageMapEntry:
        entry = storage_map.get(plugin)
        if entry is None:
            raise NotFound(f"No license found for {plugin}")
        return entry
