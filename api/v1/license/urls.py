"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.license import views

app_name = "license"

urlpatterns = [
    path(
        "",
        views.ProvisionLicenseView.as_view(),
        name="provision-license",
    ),
    path(
        "activate",
        views.ActivateLicenseView.as_view(),
        name="activate-license",
    ),
    path(
        "status",
        views.LicenseStatusView.as_view(),
        name="license-status",
    ),
    path(
        "check",
        views.CheckLicenseView.as_view(),
        name="check-license",
    ),
]
