"""
Core views for health checks and system status.
"""

from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from core.infrastructure.cache_adapters import DjangoCacheStore


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": "plugin-license-service"})


@method_decorator(csrf_exempt, name="dispatch")
class HealthStoreView(View):
    """Key-value store health check endpoint."""

    def get(self, _request):
        """Check key-value store connectivity."""
        try:
            if _store_round_trip("health_check"):
                return JsonResponse({"status": "healthy", "store": "connected"})
            return JsonResponse(
                {"status": "unhealthy", "store": "disconnected"},
                status=503,
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            return JsonResponse(
                {"status": "unhealthy", "store": "disconnected", "error": str(e)},
                status=503,
            )


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """Check if service is ready to accept traffic."""
        checks = {"store": self._check_store()}

        all_healthy = all(checks.values())
        status_code = 200 if all_healthy else 503

        return JsonResponse(
            {
                "status": "ready" if all_healthy else "not_ready",
                "checks": checks,
            },
            status=status_code,
        )

    def _check_store(self) -> bool:
        """Check key-value store connectivity."""
        try:
            return _store_round_trip("ready_check")
        except Exception:  # pylint: disable=broad-exception-caught
            return False


class MetricsView(View):
    """Prometheus scrape endpoint."""

    def get(self, _request):
        """Return metrics in the Prometheus text format."""
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)


def _store_round_trip(key: str) -> bool:
    store = DjangoCacheStore()
    store.set(key, b"ok")
    try:
        return store.get(key) == b"ok"
    finally:
        store.delete(key)
