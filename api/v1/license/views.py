"""
License API views.

These endpoints are used by the host application to:
- Provision a license for a plugin
- Activate the license for this installation
- Report the license status
- Run the fail-closed validity check
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import APIError
from api.v1.license.serializers import (
    ActivateLicenseRequestSerializer,
    ActivateLicenseResponseSerializer,
    LicenseCheckResponseSerializer,
    LicenseEntryResponseSerializer,
    LicenseStatusRequestSerializer,
    LicenseStatusResponseSerializer,
    ProvisionLicenseRequestSerializer,
)
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
from licenses.infrastructure.factory import build_lifecycle_manager


def _validated(serializer_class, request: Request) -> dict:
    serializer = serializer_class(data=request.data)
    if not serializer.is_valid():
        raise APIError(detail=serializer.errors, code="validation_error")
    return serializer.validated_data


def _invalid_argument(exc: ValueError) -> APIError:
    return APIError(detail=str(exc), code="validation_error")


class ProvisionLicenseView(APIView):
    """View for provisioning licenses."""

    @extend_schema(
        operation_id="provision_license",
        summary="Provision License",
        description=(
            "Provision a license for a plugin. An existing license that the "
            "licensing authority still reports valid is returned unchanged."
        ),
        tags=["License API"],
        request=ProvisionLicenseRequestSerializer,
        responses={
            200: LicenseEntryResponseSerializer,
            400: {"description": "Bad Request"},
            502: {"description": "Licensing API rejected the request"},
            503: {"description": "Licensing API unreachable"},
        },
    )
    def post(self, request: Request) -> Response:
        """Provision a license for a plugin."""
        data = _validated(ProvisionLicenseRequestSerializer, request)
        handler = ProvisionLicenseHandler(build_lifecycle_manager())
        command = ProvisionLicenseCommand(
            plugin_slug=data["plugin_slug"],
            provider=data.get("provider") or None,
        )
        try:
            result = handler.handle(command)
        except ValueError as e:
            raise _invalid_argument(e) from e

        return Response(LicenseEntryResponseSerializer(result).data, status=status.HTTP_200_OK)


class ActivateLicenseView(APIView):
    """View for activating licenses."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Activate the plugin's license for this installation. A stored "
            "activation key that is still valid is returned without a new "
            "activation request."
        ),
        tags=["License API"],
        request=ActivateLicenseRequestSerializer,
        responses={
            200: ActivateLicenseResponseSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "License not provisioned"},
            502: {"description": "Licensing API rejected the request"},
            503: {"description": "Licensing API unreachable"},
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a plugin's license."""
        data = _validated(ActivateLicenseRequestSerializer, request)
        handler = ActivateLicenseHandler(build_lifecycle_manager())
        command = ActivateLicenseCommand(
            plugin_slug=data["plugin_slug"],
            domain_name=data.get("domain_name") or None,
            email=data.get("email") or None,
        )
        try:
            result = handler.handle(command)
        except ValueError as e:
            raise _invalid_argument(e) from e

        return Response(ActivateLicenseResponseSerializer(result).data, status=status.HTTP_200_OK)


class LicenseStatusView(APIView):
    """View for reporting license status."""

    @extend_schema(
        operation_id="get_license_status",
        summary="License Status",
        description="Report the license status of a plugin as given by the licensing authority.",
        tags=["License API"],
        request=LicenseStatusRequestSerializer,
        responses={
            200: LicenseStatusResponseSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "License not provisioned"},
            502: {"description": "Licensing API rejected the request"},
            503: {"description": "Licensing API unreachable"},
        },
    )
    def post(self, request: Request) -> Response:
        """Get the license status of a plugin."""
        data = _validated(LicenseStatusRequestSerializer, request)
        handler = GetLicenseStatusHandler(build_lifecycle_manager())
        try:
            result = handler.handle(GetLicenseStatusQuery(plugin_slug=data["plugin_slug"]))
        except ValueError as e:
            raise _invalid_argument(e) from e

        return Response(LicenseStatusResponseSerializer(result).data, status=status.HTTP_200_OK)


class CheckLicenseView(APIView):
    """View for the fail-closed license check."""

    @extend_schema(
        operation_id="check_license",
        summary="Check License",
        description=(
            "Return whether the plugin's license is currently valid. Any error "
            "reaching or reading the licensing authority reports invalid."
        ),
        tags=["License API"],
        request=LicenseStatusRequestSerializer,
        responses={200: LicenseCheckResponseSerializer, 400: {"description": "Bad Request"}},
    )
    def post(self, request: Request) -> Response:
        """Check whether a plugin's license is valid."""
        data = _validated(LicenseStatusRequestSerializer, request)
        handler = CheckLicenseStatusHandler(build_lifecycle_manager())
        is_valid = handler.handle(CheckLicenseStatusQuery(plugin_slug=data["plugin_slug"]))

        response_serializer = LicenseCheckResponseSerializer(
            {"plugin_slug": data["plugin_slug"], "is_valid": is_valid}
        )
        return Response(response_serializer.data, status=status.HTTP_200_OK)
