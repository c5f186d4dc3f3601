"""
Unit tests for the license command and query handlers.
"""
import pytest

from core.domain.exceptions import NotFound
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.provision_license import ProvisionLicenseCommand
from licenses.application.handlers.activate_license_handler import ActivateLicenseHandler
from licenses.application.handlers.check_license_status_handler import (
    CheckLicenseStatusHandler,
)
from licenses.application.handlers.get_license_status_handler import GetLicenseStatusHandler
from licenses.application.handlers.provision_license_handler import ProvisionLicenseHandler
from licenses.application.queries.check_license_status import CheckLicenseStatusQuery
from licenses.application.queries.get_license_status import GetLicenseStatusQuery


class TestProvisionLicenseHandler:
    """Tests for ProvisionLicenseHandler."""

    def test_provision_license_success(self, manager):
        """Test successful license provisioning."""
        result = ProvisionLicenseHandler(manager).handle(
            ProvisionLicenseCommand(plugin_slug="acme-plugin")
        )

        assert result.plugin_slug == "acme-plugin"
        assert result.provider == "default"
        assert result.license_id == "L1"
        assert result.to_dict()["download_url"] == "https://cdn/x.zip"

    def test_provision_license_empty_slug(self, manager, fake_api):
        """Test provisioning with an empty slug."""
        with pytest.raises(ValueError):
            ProvisionLicenseHandler(manager).handle(ProvisionLicenseCommand(plugin_slug=""))

        assert fake_api.calls == []

    def test_provision_license_explicit_provider(self, manager, fake_api):
        """Test the provider is passed through."""
        ProvisionLicenseHandler(manager).handle(
            ProvisionLicenseCommand(plugin_slug="wishlist", provider="yith")
        )

        assert fake_api.calls == [("provision", "wishlist", "yith")]


class TestActivateLicenseHandler:
    """Tests for ActivateLicenseHandler."""

    def test_activate_license_success(self, manager):
        """Test successful activation."""
        manager.provision("acme-plugin")

        result = ActivateLicenseHandler(manager).handle(
            ActivateLicenseCommand(plugin_slug="acme-plugin")
        )

        assert result.to_dict() == {"plugin_slug": "acme-plugin", "activation_key": "AK1"}

    def test_activate_license_not_found(self, manager):
        """Test activating an unknown plugin."""
        with pytest.raises(NotFound):
            ActivateLicenseHandler(manager).handle(ActivateLicenseCommand(plugin_slug="unknown"))


class TestLicenseStatusHandlers:
    """Tests for the status query handlers."""

    def test_get_status(self, manager):
        """Test the status DTO of an activated license."""
        manager.provision("acme-plugin")
        manager.activate("acme-plugin")

        result = GetLicenseStatusHandler(manager).handle(
            GetLicenseStatusQuery(plugin_slug="acme-plugin")
        )

        assert result.status == "active"
        assert result.is_valid is True

    def test_check_status(self, manager):
        """Test the boolean check."""
        handler = CheckLicenseStatusHandler(manager)

        assert handler.handle(CheckLicenseStatusQuery(plugin_slug="acme-plugin")) is False

        manager.provision("acme-plugin")
        manager.activate("acme-plugin")

        assert handler.handle(CheckLicenseStatusQuery(plugin_slug="acme-plugin")) is True
