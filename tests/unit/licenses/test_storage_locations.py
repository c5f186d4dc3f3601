"""
Unit tests for storage location resolution.
"""
import re

import pytest

from licenses.domain.services import StorageLocationService
from licenses.domain.storage_locations import (
    STORAGE_METHOD_KEY_VALUE,
    StorageLocation,
    StorageLocationRegistry,
    StorageLocationStrategy,
    build_default_registry,
    name_digest,
    resolve,
)
from licenses.domain.storage_map import StorageMapEntry


class TestStorageLocationRegistry:
    """Tests for the provider registry."""

    def test_default_scheme(self):
        """Test names produced for a provider without its own strategy."""
        location = resolve("default", "acme-plugin")
        digest = name_digest("default", "acme-plugin")

        assert location.license_id_storage_name == f"pls_license_id_default_acme_plugin_{digest}"
        assert (
            location.activation_key_storage_name
            == f"pls_activation_key_default_acme_plugin_{digest}"
        )
        assert location.storage_method == STORAGE_METHOD_KEY_VALUE

    def test_vendor_scheme(self):
        """Test the built-in vendor option naming."""
        location = resolve("yith", "woo-wishlist")
        digest = name_digest("yith", "woo-wishlist")

        assert location.license_id_storage_name == f"yith_woo_wishlist_{digest}_license_id"
        assert location.activation_key_storage_name == f"yith_woo_wishlist_{digest}_activation_key"

    def test_names_are_key_safe(self):
        """Test names only contain lower-case letters, digits and underscores."""
        location = resolve("Acme Corp", "Ünïcode/Plugin.v2")

        assert re.fullmatch(r"[a-z0-9_]+", location.license_id_storage_name)
        assert re.fullmatch(r"[a-z0-9_]+", location.activation_key_storage_name)

    def test_provider_lookup_is_case_insensitive(self):
        """Test provider names are normalized before lookup."""
        assert resolve("YITH", "p") == resolve("yith", "p")
        assert resolve("Acme", "p") == resolve("acme", "p")

    def test_deterministic(self):
        """Test the same inputs always give the same names."""
        assert resolve("acme", "plugin") == resolve("acme", "plugin")

    @pytest.mark.parametrize(
        "first, second",
        [
            (("acme", "one"), ("acme", "two")),
            (("acme", "acme-plugin"), ("acme", "acme_plugin")),
            (("acme", "acme-plugin"), ("acme", "Acme-Plugin")),
            (("acme", "acme.plugin"), ("acme", "acme plugin")),
            (("acme", "x_y"), ("acme_x", "y")),
            (("yith", "woo-wishlist"), ("yith", "woo_wishlist")),
        ],
    )
    def test_distinct_plugins_get_distinct_names(self, first, second):
        """Test two distinct (provider, plugin) pairs never share storage names."""
        a = resolve(*first)
        b = resolve(*second)

        names_a = {a.license_id_storage_name, a.activation_key_storage_name}
        names_b = {b.license_id_storage_name, b.activation_key_storage_name}
        assert not names_a & names_b

    def test_empty_inputs_rejected(self):
        """Test empty provider or plugin is refused."""
        with pytest.raises(ValueError, match="Provider"):
            resolve("", "plugin")
        with pytest.raises(ValueError, match="Plugin"):
            resolve("acme", " ")

    def test_register_custom_strategy(self):
        """Test registering a strategy for a new provider."""

        class FixedStrategy(StorageLocationStrategy):
            def resolve(self, provider, plugin):
                return StorageLocation("fixed_id", "fixed_key", "option")

        registry = StorageLocationRegistry()
        registry.register("Custom", FixedStrategy())

        assert registry.resolve("custom", "x").storage_method == "option"
        assert registry.resolve("other", "x").storage_method == STORAGE_METHOD_KEY_VALUE


class TestStorageLocationService:
    """Tests for StorageLocationService."""

    @pytest.fixture
    def service(self):
        return StorageLocationService(build_default_registry(), "default")

    def test_entry_with_names(self, service):
        """Test recorded names are used as is."""
        entry = StorageMapEntry(
            provider="acme",
            license_id_storage_name="my_id",
            activation_key_storage_name="my_key",
            storage_method="key_value",
        )

        location = service.location_for_entry("plugin", entry)

        assert location == StorageLocation("my_id", "my_key", "key_value")

    def test_legacy_entry_recomputes_names(self, service):
        """Test names missing from an old entry come from the resolver."""
        entry = StorageMapEntry(provider="yith", download_url="https://cdn/x.zip")

        location = service.location_for_entry("wishlist", entry)

        assert location == resolve("yith", "wishlist")

    def test_legacy_entry_without_provider(self, service):
        """Test entries without a provider fall back to the default provider."""
        entry = StorageMapEntry(provider="")

        assert service.location_for_entry("plugin", entry) == resolve("default", "plugin")

    def test_provisioning_overrides_win(self, service):
        """Test names supplied by the authority take precedence."""
        existing = StorageMapEntry(
            provider="acme",
            license_id_storage_name="old_id",
            activation_key_storage_name="old_key",
            storage_method="key_value",
        )

        location = service.location_for_provisioning(
            "plugin", "acme", existing, {"license_id_storage_name": "new_id"}
        )

        assert location.license_id_storage_name == "new_id"
        assert location.activation_key_storage_name == "old_key"

    def test_provisioning_keeps_existing_names(self, service):
        """Test re-provisioning does not move stored values."""
        existing = StorageMapEntry(
            provider="acme",
            license_id_storage_name="old_id",
            activation_key_storage_name="old_key",
            storage_method="key_value",
        )

        location = service.location_for_provisioning("plugin", "acme", existing)

        assert location.license_id_storage_name == "old_id"
