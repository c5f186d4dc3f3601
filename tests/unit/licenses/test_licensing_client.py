"""
Unit tests for HiiveLicensingClient.
"""
import json
from unittest.mock import Mock

import pytest
import requests

from core.domain.exceptions import RemoteRejected, TransportError, UnexpectedResponseFormat
from core.domain.value_objects import LicenseStatus
from licenses.infrastructure.clients.hiive_licensing_client import HiiveLicensingClient


def make_response(status_code, body):
    """Build a requests.Response with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body if isinstance(body, bytes) else json.dumps(body).encode()
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(licensing_config, session):
    return HiiveLicensingClient(licensing_config, session=session)


class TestProvision:
    """Tests for the provision call."""

    def test_provision_success(self, client, session):
        """Test a well-formed provision response."""
        session.request.return_value = make_response(
            200,
            {
                "license_id": "L1",
                "download_url": "https://cdn/x.zip",
                "basename": "acme-plugin/acme-plugin.php",
            },
        )

        result = client.provision("acme-plugin", "default")

        assert result.license_id == "L1"
        assert result.download_url == "https://cdn/x.zip"
        assert result.basename == "acme-plugin/acme-plugin.php"
        assert result.storage_map_overrides == {}

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert method == "POST"
        assert url == "https://licensing.test/api/sites/v2/pls/license"
        assert kwargs["json"] == {"pluginSlug": "acme-plugin", "providerName": "default"}
        assert kwargs["timeout"] == 5
        assert kwargs["headers"]["Authorization"] == "Bearer test-token"

    def test_provision_storage_overrides(self, client, session):
        """Test storage names supplied by the authority are returned."""
        session.request.return_value = make_response(
            200,
            {
                "license_id": "L1",
                "download_url": "https://cdn/x.zip",
                "storage_map": {"license_id_storage_name": "custom_id", "unknown": "x"},
            },
        )

        result = client.provision("acme-plugin", "default")

        assert result.storage_map_overrides == {"license_id_storage_name": "custom_id"}

    def test_provision_missing_fields(self, client, session):
        """Test a response without license_id is a format error."""
        session.request.return_value = make_response(200, {"download_url": "https://cdn/x.zip"})

        with pytest.raises(UnexpectedResponseFormat):
            client.provision("acme-plugin", "default")

    def test_provision_rejected(self, client, session):
        """Test a non-2xx answer raises RemoteRejected with the status."""
        session.request.return_value = make_response(403, {"message": "forbidden"})

        with pytest.raises(RemoteRejected) as exc_info:
            client.provision("acme-plugin", "default")

        assert exc_info.value.status_code == 403

    def test_provision_transport_error(self, client, session):
        """Test connection failures raise TransportError."""
        session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(TransportError):
            client.provision("acme-plugin", "default")

    def test_provision_timeout(self, client, session):
        """Test timeouts raise TransportError."""
        session.request.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(TransportError):
            client.provision("acme-plugin", "default")

    def test_provision_non_json(self, client, session):
        """Test an HTML body is a format error."""
        session.request.return_value = make_response(200, b"<html>oops</html>")

        with pytest.raises(UnexpectedResponseFormat):
            client.provision("acme-plugin", "default")


class TestActivate:
    """Tests for the activate call."""

    def test_activate_success(self, client, session):
        """Test the activation key is read from data.activation_key."""
        session.request.return_value = make_response(200, {"data": {"activation_key": "AK1"}})

        assert client.activate("L1", "example.com", "admin@example.com") == "AK1"

        method, url = session.request.call_args.args
        assert method == "POST"
        assert url == "https://licensing.test/api/license/L1/activate"
        assert session.request.call_args.kwargs["json"] == {
            "domain_name": "example.com",
            "email": "admin@example.com",
        }

    def test_activate_quotes_license_id(self, client, session):
        """Test license ids are escaped in the path."""
        session.request.return_value = make_response(200, {"data": {"activation_key": "AK1"}})

        client.activate("L1/../x", "example.com", "admin@example.com")

        _, url = session.request.call_args.args
        assert url == "https://licensing.test/api/license/L1%2F..%2Fx/activate"

    def test_activate_missing_key(self, client, session):
        """Test a response without activation key is a format error."""
        session.request.return_value = make_response(200, {"data": {}})

        with pytest.raises(UnexpectedResponseFormat):
            client.activate("L1", "example.com", "admin@example.com")

    def test_activate_rejected(self, client, session):
        """Test activation refusals raise RemoteRejected."""
        session.request.return_value = make_response(409, {"message": "already active"})

        with pytest.raises(RemoteRejected):
            client.activate("L1", "example.com", "admin@example.com")


class TestStatus:
    """Tests for the status call."""

    def test_status_valid_flag(self, client, session):
        """Test a boolean validity answer."""
        session.request.return_value = make_response(200, {"data": {"valid": True}})

        result = client.status("AK1")

        assert result.is_valid is True
        assert result.as_status() is LicenseStatus.ACTIVE
        method, url = session.request.call_args.args
        assert method == "GET"
        assert url == "https://licensing.test/api/license/AK1/status"

    def test_status_invalid_flag(self, client, session):
        """Test a negative validity answer maps to expired."""
        session.request.return_value = make_response(200, {"data": {"valid": False}})

        result = client.status("AK1")

        assert result.is_valid is False
        assert result.as_status() is LicenseStatus.EXPIRED

    def test_status_value(self, client, session):
        """Test a status value answer."""
        session.request.return_value = make_response(200, {"status": "new"})

        result = client.status("L1")

        assert result.as_status() is LicenseStatus.NEW
        assert result.is_valid is False

    def test_status_unknown_value(self, client, session):
        """Test an unknown status value is a format error."""
        session.request.return_value = make_response(200, {"status": "suspended"})

        with pytest.raises(UnexpectedResponseFormat):
            client.status("L1")

    def test_status_empty_body(self, client, session):
        """Test a body with neither shape is a format error."""
        session.request.return_value = make_response(200, {})

        with pytest.raises(UnexpectedResponseFormat):
            client.status("L1")

    def test_status_non_object_body(self, client, session):
        """Test a JSON array body is a format error."""
        session.request.return_value = make_response(200, [True])

        with pytest.raises(UnexpectedResponseFormat):
            client.status("L1")

    def test_status_server_error(self, client, session):
        """Test a 5xx answer raises RemoteRejected."""
        session.request.return_value = make_response(500, {"message": "boom"})

        with pytest.raises(RemoteRejected) as exc_info:
            client.status("L1")

        assert exc_info.value.status_code == 500
