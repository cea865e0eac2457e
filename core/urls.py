"""URL routing configuration for core application."""

from django.urls import path

from .views import (
    AdminResourceDetailView,
    AdminResourceListView,
    BookingUniversityView,
    CustomEmailView,
    EmailConfigTestView,
    EmailDeliveryStatsView,
    EmailStatsView,
    LivenessCheckView,
    NewJoinerByAvailabilityView,
    NewJoinerByEmailView,
    NewJoinerBySubjectView,
    NewJoinerDetailView,
    NewJoinerListView,
    NewsletterView,
    PackageEmailView,
    PersonalStatementByEmailView,
    PersonalStatementByStatusView,
    PersonalStatementDetailView,
    PersonalStatementDownloadView,
    PersonalStatementFeedbackView,
    PersonalStatementListView,
    PersonalStatementSubmitView,
    ReadinessCheckView,
    ResourceDownloadView,
    ResubscribeView,
    StripeWebhookView,
    StudentAvailabilityView,
    StudentDashboardView,
    StudentProfileView,
    SubscriberResourcesView,
    SubscriptionAccessView,
    SubscriptionDetailView,
    SubscriptionListView,
    TutorAvailabilityDeleteView,
    TutorAvailabilityView,
    TutorBulkAvailabilityView,
    TutorDetailView,
    TutorListView,
    TutorLookupView,
    TutorSessionStatsView,
    TutorsWithAvailabilityView,
    TutorUpcomingSessionsView,
    UnsubscribeView,
    WelcomeEmailView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Email campaign endpoints
    path("emails/newsletter", NewsletterView.as_view(), name="email-newsletter"),
    path("emails/custom", CustomEmailView.as_view(), name="email-custom"),
    path("emails/by-package", PackageEmailView.as_view(), name="email-by-package"),
    path("emails/event-update", PackageEmailView.as_view(), name="email-event-update"),
    path("emails/welcome", WelcomeEmailView.as_view(), name="email-welcome"),
    path("emails/test-config", EmailConfigTestView.as_view(), name="email-test-config"),
    path("emails/stats", EmailStatsView.as_view(), name="email-stats"),
    path(
        "emails/delivery-stats",
        EmailDeliveryStatsView.as_view(),
        name="email-delivery-stats",
    ),
    # Subscription endpoints
    path("subscriptions", SubscriptionListView.as_view(), name="subscription-list"),
    path(
        "subscriptions/<str:email>/unsubscribe",
        UnsubscribeView.as_view(),
        name="subscription-unsubscribe",
    ),
    path(
        "subscriptions/<str:email>/resubscribe",
        ResubscribeView.as_view(),
        name="subscription-resubscribe",
    ),
    path(
        "subscriptions/<str:email>/access",
        SubscriptionAccessView.as_view(),
        name="subscription-access",
    ),
    path(
        "subscriptions/<str:email>",
        SubscriptionDetailView.as_view(),
        name="subscription-detail",
    ),
    # Resource endpoints
    path(
        "resources/<str:email>/<str:resource_id>/download",
        ResourceDownloadView.as_view(),
        name="resource-download",
    ),
    path(
        "resources/<str:email>",
        SubscriberResourcesView.as_view(),
        name="subscriber-resources",
    ),
    path("admin/resources", AdminResourceListView.as_view(), name="admin-resource-list"),
    path(
        "admin/resources/<str:resource_id>",
        AdminResourceDetailView.as_view(),
        name="admin-resource-detail",
    ),
    # Tutor application endpoints
    path("new-joiners", NewJoinerListView.as_view(), name="new-joiner-list"),
    path(
        "new-joiners/subject/<str:subject>",
        NewJoinerBySubjectView.as_view(),
        name="new-joiner-by-subject",
    ),
    path(
        "new-joiners/availability/<str:slot>",
        NewJoinerByAvailabilityView.as_view(),
        name="new-joiner-by-availability",
    ),
    path(
        "new-joiners/email/<str:email>",
        NewJoinerByEmailView.as_view(),
        name="new-joiner-by-email",
    ),
    path(
        "new-joiners/<str:new_joiner_id>",
        NewJoinerDetailView.as_view(),
        name="new-joiner-detail",
    ),
    # Personal statement endpoints
    path(
        "personal-statements",
        PersonalStatementListView.as_view(),
        name="personal-statement-list",
    ),
    path(
        "personal-statements/submit",
        PersonalStatementSubmitView.as_view(),
        name="personal-statement-submit",
    ),
    path(
        "personal-statements/status/<str:statement_status>",
        PersonalStatementByStatusView.as_view(),
        name="personal-statement-by-status",
    ),
    path(
        "personal-statements/email/<str:email>",
        PersonalStatementByEmailView.as_view(),
        name="personal-statement-by-email",
    ),
    path(
        "personal-statements/<str:statement_id>/download",
        PersonalStatementDownloadView.as_view(),
        name="personal-statement-download",
    ),
    path(
        "personal-statements/<str:statement_id>/feedback",
        PersonalStatementFeedbackView.as_view(),
        name="personal-statement-feedback",
    ),
    path(
        "personal-statements/<str:statement_id>",
        PersonalStatementDetailView.as_view(),
        name="personal-statement-detail",
    ),
    path("payments/stripe/webhook", StripeWebhookView.as_view(), name="stripe-webhook"),
    # Student endpoints
    path(
        "students/email/<str:email>/dashboard",
        StudentDashboardView.as_view(),
        name="student-dashboard",
    ),
    path(
        "students/bookings/<str:booking_id>/university",
        BookingUniversityView.as_view(),
        name="booking-university",
    ),
    path(
        "students/<str:student_id>/availability",
        StudentAvailabilityView.as_view(),
        name="student-availability",
    ),
    path(
        "students/<str:user_id>/profile",
        StudentProfileView.as_view(),
        name="student-profile",
    ),
    # Tutor endpoints
    path("tutors", TutorListView.as_view(), name="tutor-list"),
    path("tutor", TutorLookupView.as_view(), name="tutor-lookup"),
    path(
        "tutors/with-availability",
        TutorsWithAvailabilityView.as_view(),
        name="tutors-with-availability",
    ),
    path(
        "tutors/availability/<str:availability_id>",
        TutorAvailabilityDeleteView.as_view(),
        name="tutor-availability-delete",
    ),
    path(
        "tutors/<str:tutor_id>/availability/bulk",
        TutorBulkAvailabilityView.as_view(),
        name="tutor-availability-bulk",
    ),
    path(
        "tutors/<str:tutor_id>/availability",
        TutorAvailabilityView.as_view(),
        name="tutor-availability",
    ),
    path(
        "tutors/<str:tutor_id>/upcoming-sessions",
        TutorUpcomingSessionsView.as_view(),
        name="tutor-upcoming-sessions",
    ),
    path(
        "tutors/<str:tutor_id>/session-stats",
        TutorSessionStatsView.as_view(),
        name="tutor-session-stats",
    ),
    path("tutors/<str:tutor_id>", TutorDetailView.as_view(), name="tutor-detail"),
]
