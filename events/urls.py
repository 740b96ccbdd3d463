from django.urls import path

from events.handlers import (
    EventCreateView,
    EventDeleteView,
    EventDetailView,
    EventMediaDeleteView,
    EventMediaUploadView,
    EventUpdateView,
    PastEventsView,
    UpcomingEventsView,
)

urlpatterns = [
    path("events/create", EventCreateView.as_view(), name="event-create"),
    path("events/upcoming", UpcomingEventsView.as_view(), name="event-upcoming"),
    path("events/past", PastEventsView.as_view(), name="event-past"),
    path("events/get/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/update/<str:event_id>",
        EventUpdateView.as_view(),
        name="event-update",
    ),
    path(
        "events/<str:event_id>/upload-media",
        EventMediaUploadView.as_view(),
        name="event-upload-media",
    ),
    path(
        "events/<str:event_id>/delete-media",
        EventMediaDeleteView.as_view(),
        name="event-delete-media",
    ),
    path("events/<str:event_id>", EventDeleteView.as_view(), name="event-delete"),
]
