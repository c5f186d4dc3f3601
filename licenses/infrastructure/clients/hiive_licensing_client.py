"""
HTTP client for the remote licensing API.

Sends provision, activate and status requests and normalizes their
responses. Calls block up to a fixed timeout and are not retried; retry
policy belongs to the caller.
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from core.domain.exceptions import RemoteRejected, TransportError, UnexpectedResponseFormat
from core.domain.value_objects import LicenseStatus
from core.metrics import licensing_api_errors_total, licensing_api_request_duration_seconds
from licenses.application.config import LicensingConfig
from licenses.ports.licensing_api import LicensingAPI, LicenseStatusResult, ProvisionedLicense

logger = logging.getLogger(__name__)

PROVISION_PATH = "/sites/v2/pls/license"
ACTIVATE_PATH = "/license/{license_id}/activate"
STATUS_PATH = "/license/{license_ref}/status"

OVERRIDE_FIELDS = (
    "license_id_storage_name",
    "activation_key_storage_name",
    "storage_method",
)


def _mask(value: str) -> str:
    return f"{value[:8]}..." if value and len(value) > 8 else value


class HiiveLicensingClient(LicensingAPI):
    """requests-based implementation of LicensingAPI."""

    def __init__(self, config: LicensingConfig, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            config: Licensing configuration (base URL, token, timeout)
            session: Optional requests session (one is created if omitted)
        """
        self.base_url = config.api_base_url.rstrip("/")
        self.timeout = config.api_timeout
        self.session = session or requests.Session()
        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": "Plugin-License-Service/1.0",
        }
        if config.api_token:
            self.headers["Authorization"] = f"Bearer {config.api_token}"

    def provision(self, plugin: str, provider: str) -> ProvisionedLicense:
        data = self._request(
            "provision",
            "POST",
            PROVISION_PATH,
            json={"pluginSlug": plugin, "providerName": provider},
        )

        license_id = data.get("license_id")
        download_url = data.get("download_url")
        if not license_id or not download_url:
            raise UnexpectedResponseFormat(
                "Provision response is missing license_id or download_url"
            )

        overrides = {}
        storage_map = data.get("storage_map")
        if isinstance(storage_map, dict):
            overrides = {
                name: storage_map[name]
                for name in OVERRIDE_FIELDS
                if isinstance(storage_map.get(name), str) and storage_map[name]
            }

        logger.info("License provisioned remotely for %s (%s)", plugin, provider)
        return ProvisionedLicense(
            license_id=str(license_id),
            download_url=str(download_url),
            basename=data.get("basename"),
            storage_map_overrides=overrides,
        )

    def activate(self, license_id: str, domain_name: str, email: str) -> str:
        data = self._request(
            "activate",
            "POST",
            ACTIVATE_PATH.format(license_id=quote(license_id, safe="")),
            json={"domain_name": domain_name, "email": email},
        )

        payload = data.get("data")
        activation_key = payload.get("activation_key") if isinstance(payload, dict) else None
        if not activation_key:
            raise UnexpectedResponseFormat("Activation response is missing data.activation_key")

        logger.info("License %s activated for %s", _mask(license_id), domain_name)
        return str(activation_key)

    def status(self, activation_key_or_license_id: str) -> LicenseStatusResult:
        data = self._request(
            "status",
            "GET",
            STATUS_PATH.format(license_ref=quote(activation_key_or_license_id, safe="")),
        )

        payload = data.get("data")
        if isinstance(payload, dict) and isinstance(payload.get("valid"), bool):
            return LicenseStatusResult(valid=payload["valid"])

        if "status" in data:
            try:
                return LicenseStatusResult(status=LicenseStatus(data["status"]))
            except ValueError as e:
                raise UnexpectedResponseFormat(
                    f"Unknown license status: {data['status']!r}"
                ) from e

        raise UnexpectedResponseFormat("Status response has neither data.valid nor status")

    def _request(
        self, operation: str, method: str, path: str, json: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Send a request and return the decoded JSON object.

        Raises:
            TransportError: On connection errors and timeouts
            RemoteRejected: On non-2xx responses
            UnexpectedResponseFormat: If the body is not a JSON object
        """
        url = f"{self.base_url}{path}"
        logger.debug("Licensing API %s %s", method, url)

        try:
            with licensing_api_request_duration_seconds.labels(operation=operation).time():
                response = self.session.request(
                    method, url, json=json, headers=self.headers, timeout=self.timeout
                )
        except requests.exceptions.RequestException as e:
            licensing_api_errors_total.labels(operation=operation, error_type="transport").inc()
            logger.warning("Licensing API %s failed: %s", operation, e)
            raise TransportError(f"Licensing API {operation} request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            licensing_api_errors_total.labels(operation=operation, error_type="rejected").inc()
            logger.warning("Licensing API %s rejected: HTTP %s", operation, response.status_code)
            raise RemoteRejected(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            licensing_api_errors_total.labels(operation=operation, error_type="format").inc()
            raise UnexpectedResponseFormat(
                f"Licensing API {operation} response is not JSON"
            ) from e

        if not isinstance(data, dict):
            licensing_api_errors_total.labels(operation=operation, error_type="format").inc()
            raise UnexpectedResponseFormat(
                f"Licensing API {operation} response is not a JSON object"
            )
        return data
