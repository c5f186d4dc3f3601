"""
Django management command for the plugin license lifecycle.

Usage:
    python manage.py pls provision <plugin_slug> [--provider NAME]
    python manage.py pls activate <plugin_slug> [--domain-name D] [--email E]
    python manage.py pls status <plugin_slug>
    python manage.py pls check <plugin_slug>
"""

import json
import logging

from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DomainException
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

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to provision, activate and inspect plugin licenses."""

    help = "Manage plugin licenses (provision, activate, status, check)"

    def add_arguments(self, parser):
        """Add command arguments."""
        subparsers = parser.add_subparsers(dest="action", required=True)

        provision = subparsers.add_parser("provision", help="Provision a license for a plugin")
        provision.add_argument("plugin_slug", help="Slug of the plugin to license")
        provision.add_argument("--provider", default=None, help="Licensing provider name")

        activate = subparsers.add_parser("activate", help="Activate a plugin's license")
        activate.add_argument("plugin_slug", help="Slug of the plugin to activate")
        activate.add_argument("--domain-name", default=None, help="Installation domain name")
        activate.add_argument("--email", default=None, help="Administrator email")

        status = subparsers.add_parser("status", help="Show the license status of a plugin")
        status.add_argument("plugin_slug", help="Slug of the plugin")

        check = subparsers.add_parser("check", help="Check whether a plugin's license is valid")
        check.add_argument("plugin_slug", help="Slug of the plugin")

    def handle(self, *args, **options):
        """Execute the command."""
        action = options["action"]
        manager = build_lifecycle_manager()

        try:
            if action == "provision":
                result = ProvisionLicenseHandler(manager).handle(
                    ProvisionLicenseCommand(
                        plugin_slug=options["plugin_slug"], provider=options["provider"]
                    )
                )
                self._success("License provisioned: " + json.dumps(result.to_dict()))
            elif action == "activate":
                result = ActivateLicenseHandler(manager).handle(
                    ActivateLicenseCommand(
                        plugin_slug=options["plugin_slug"],
                        domain_name=options["domain_name"],
                        email=options["email"],
                    )
                )
                self._success("License activated: " + json.dumps(result.to_dict()))
            elif action == "status":
                result = GetLicenseStatusHandler(manager).handle(
                    GetLicenseStatusQuery(plugin_slug=options["plugin_slug"])
                )
                self._success(f"License status: {result.status}")
            else:
                is_valid = CheckLicenseStatusHandler(manager).handle(
                    CheckLicenseStatusQuery(plugin_slug=options["plugin_slug"])
                )
                if not is_valid:
                    raise CommandError("License is not valid")
                self._success("License is valid")
        except (DomainException, ValueError) as e:
            logger.warning("pls %s failed: %s", action, e)
            raise CommandError(str(e)) from e

    def _success(self, message: str) -> None:
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(message))
