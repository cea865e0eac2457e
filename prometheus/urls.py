"""URL routing configuration for the prometheus app."""

from django.urls import path

from .views import GenerateView, PrometheusHealthView, SessionDetailView

urlpatterns = [
    path("health", PrometheusHealthView.as_view(), name="prometheus-health"),
    path("generate", GenerateView.as_view(), name="prometheus-generate"),
    path(
        "sessions/<str:session_id>",
        SessionDetailView.as_view(),
        name="prometheus-session-detail",
    ),
]
