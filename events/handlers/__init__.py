from events.handlers.views import (
    EventCreateView,
    EventDeleteView,
    EventDetailView,
    EventMediaDeleteView,
    EventMediaUploadView,
    EventUpdateView,
    PastEventsView,
    UpcomingEventsView,
)

__all__ = [
    "EventCreateView",
    "EventDeleteView",
    "EventDetailView",
    "EventMediaDeleteView",
    "EventMediaUploadView",
    "EventUpdateView",
    "PastEventsView",
    "UpcomingEventsView",
]
