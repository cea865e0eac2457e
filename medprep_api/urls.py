"""Root URL configuration for the NextGen MedPrep API."""

from django.contrib import admin
from django.urls import include, path

from core.views import LivenessCheckView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health", LivenessCheckView.as_view(), name="health"),
    path("api/v1/prometheus/", include("prometheus.urls")),
    path("api/v1/", include("core.urls")),
    path("django-rq/", include("django_rq.urls")),
]
