"""
Pytest configuration and shared fixtures.
"""

import pytest
from django.core.cache import caches

from core.infrastructure.cache_adapters import DjangoCacheStore
from core.infrastructure.encryption import EncryptionCodec
from licenses.application.config import LicensingConfig
from licenses.application.services.license_lifecycle_manager import LicenseLifecycleManager
from licenses.infrastructure.repositories.encrypted_license_record_store import (
    EncryptedLicenseRecordStore,
)
from licenses.ports.licensing_api import LicensingAPI, LicenseStatusResult, ProvisionedLicense


class FakeLicensingAPI(LicensingAPI):
    """In-memory licensing API recording every call."""

    def __init__(self):
        self.provision_result = ProvisionedLicense(
            license_id="L1",
            download_url="https://cdn/x.zip",
            basename="acme-plugin/acme-plugin.php",
        )
        self.activation_key = "AK1"
        self.status_result = LicenseStatusResult(valid=True)
        self.provision_error = None
        self.activate_error = None
        self.status_error = None
        self.on_provision = None
        self.calls = []

    def provision(self, plugin, provider):
        self.calls.append(("provision", plugin, provider))
        if self.on_provision:
            self.on_provision(plugin, provider)
        if self.provision_error:
            raise self.provision_error
        return self.provision_result

    def activate(self, license_id, domain_name, email):
        self.calls.append(("activate", license_id, domain_name, email))
        if self.activate_error:
            raise self.activate_error
        return self.activation_key

    def status(self, activation_key_or_license_id):
        self.calls.append(("status", activation_key_or_license_id))
        if self.status_error:
            raise self.status_error
        return self.status_result

    def count(self, operation):
        """Number of calls made to one operation."""
        return sum(1 for call in self.calls if call[0] == operation)


@pytest.fixture(autouse=True)
def clear_store():
    """Start every test with an empty key-value store."""
    caches["default"].clear()
    yield
    caches["default"].clear()


@pytest.fixture
def licensing_config():
    """Fixture for LicensingConfig."""
    return LicensingConfig(
        api_base_url="https://licensing.test/api",
        encryption_secret="test-encryption-secret",
        api_token="test-token",
        api_timeout=5,
        domain_name="example.com",
        admin_email="admin@example.com",
    )


@pytest.fixture(scope="session")
def codec():
    """Fixture for EncryptionCodec (key derivation is slow, share it)."""
    return EncryptionCodec("test-encryption-secret")


@pytest.fixture
def kv_store():
    """Fixture for the Django cache key-value store."""
    return DjangoCacheStore()


@pytest.fixture
def record_store(kv_store, codec):
    """Fixture for EncryptedLicenseRecordStore."""
    return EncryptedLicenseRecordStore(kv_store, codec)


@pytest.fixture
def fake_api():
    """Fixture for the fake licensing API."""
    return FakeLicensingAPI()


@pytest.fixture
def manager(record_store, fake_api, licensing_config):
    """Fixture for LicenseLifecycleManager wired to the fake API."""
    return LicenseLifecycleManager(
        record_store=record_store,
        api_client=fake_api,
        config=licensing_config,
    )


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
