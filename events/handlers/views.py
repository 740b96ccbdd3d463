"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Decode requests into intents and call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from django.core.cache import cache
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.cache import cache_key, cache_timeout
from events.domain import EventFields, MediaCollection, MediaUpload
from events.domain.dates import day_key, utc_now
from events.domain.errors import DomainError, ErrorCode, ValidationError
from events.domain.intents import (
    AppendMedia,
    CreateEvent,
    DeleteEvent,
    DeleteSelectedMedia,
    OverwriteMedia,
    UpdateEventDetails,
)
from events.handlers.serializers import (
    DeleteMediaSerializer,
    EventFieldsSerializer,
    EventNeighborSerializer,
    EventSerializer,
    MediaActionSerializer,
    PastEventsQuerySerializer,
)
from events.services import (
    UploadValidator,
    build_event_service,
    build_media_service,
    build_upload_validator,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONCURRENT_MODIFICATION: status.HTTP_409_CONFLICT,
    ErrorCode.STORAGE_IO: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.PERSISTENCE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def _validated(serializer) -> dict:
    if not serializer.is_valid():
        field, problems = next(iter(serializer.errors.items()))
        if isinstance(problems, list) and problems:
            problems = problems[0]
        raise ValidationError(f"{field}: {problems}")
    return serializer.validated_data


def _uploads(
    request: Request, collection: MediaCollection, validator: UploadValidator
) -> tuple[MediaUpload, ...]:
    """Read the uploads for one collection once their count and sizes pass."""
    files = request.FILES.getlist(collection.value)
    validator.check_sizes(collection, [(f.name, f.size) for f in files])
    return tuple(
        MediaUpload(
            filename=upload.name,
            content=upload.read(),
            content_type=upload.content_type or "application/octet-stream",
        )
        for upload in files
    )


def _media_uploads(
    request: Request,
) -> tuple[tuple[MediaUpload, ...], tuple[MediaUpload, ...]]:
    validator = build_upload_validator()
    return (
        _uploads(request, MediaCollection.FLYERS, validator),
        _uploads(request, MediaCollection.PHOTOS, validator),
    )


class DomainAPIView(APIView):
    """APIView that renders domain errors with their mapped status."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            if exc.code in (ErrorCode.STORAGE_IO, ErrorCode.PERSISTENCE_FAILED):
                logger.error("Request failed: %s", exc)
            return error_response(exc)
        return super().handle_exception(exc)


class MutatingAPIView(DomainAPIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]


class EventCreateView(MutatingAPIView):
    """Handler for POST /api/events/create"""

    def post(self, request: Request) -> Response:
        data = _validated(EventFieldsSerializer(data=request.data))
        flyers, photos = _media_uploads(request)
        intent = CreateEvent(fields=EventFields(**data), flyers=flyers, photos=photos)
        result = build_media_service().handle(intent)
        return Response(
            EventSerializer(result.event).data, status=status.HTTP_201_CREATED
        )


class EventMediaUploadView(MutatingAPIView):
    """Handler for PATCH /api/events/{event_id}/upload-media"""

    def patch(self, request: Request, event_id: str) -> Response:
        action = _validated(MediaActionSerializer(data=request.data))["action"]
        intent_type = OverwriteMedia if action == "overwrite" else AppendMedia
        flyers, photos = _media_uploads(request)
        intent = intent_type(event_id=event_id, flyers=flyers, photos=photos)
        result = build_media_service().handle(intent)
        return Response(
            {"message": result.message, "event": EventSerializer(result.event).data}
        )


class EventMediaDeleteView(MutatingAPIView):
    """Handler for PATCH /api/events/{event_id}/delete-media"""

    def patch(self, request: Request, event_id: str) -> Response:
        data = _validated(DeleteMediaSerializer(data=request.data))
        intent = DeleteSelectedMedia(
            event_id=event_id,
            flyers_to_delete=frozenset(data["flyersToDelete"]),
            photos_to_delete=frozenset(data["photosToDelete"]),
        )
        result = build_media_service().handle(intent)
        return Response(
            {"message": result.message, "event": EventSerializer(result.event).data}
        )


class EventUpdateView(MutatingAPIView):
    """Handler for PATCH /api/events/update/{event_id}"""

    def patch(self, request: Request, event_id: str) -> Response:
        changes = _validated(EventFieldsSerializer(data=request.data, partial=True))
        flyers, photos = _media_uploads(request)
        intent = UpdateEventDetails(
            event_id=event_id, changes=dict(changes), flyers=flyers, photos=photos
        )
        result = build_media_service().handle(intent)
        return Response(
            {"message": result.message, "event": EventSerializer(result.event).data}
        )


class EventDeleteView(MutatingAPIView):
    """Handler for DELETE /api/events/{event_id}"""

    def delete(self, request: Request, event_id: str) -> Response:
        result = build_media_service().handle(DeleteEvent(event_id=event_id))
        return Response({"message": result.message})


class EventDetailView(DomainAPIView):
    """Handler for GET /api/events/get/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        key = cache_key("detail", event_id)
        data = cache.get(key)
        if data is None:
            detail = build_event_service().get_event(event_id)
            data = {
                "event": EventSerializer(detail.event).data,
                "previousEvent": (
                    EventNeighborSerializer(detail.previous).data
                    if detail.previous
                    else None
                ),
                "nextEvent": (
                    EventNeighborSerializer(detail.next).data if detail.next else None
                ),
            }
            cache.set(key, data, cache_timeout())
        return Response(data)


class UpcomingEventsView(DomainAPIView):
    """Handler for GET /api/events/upcoming"""

    def get(self, request: Request) -> Response:
        now = utc_now()
        key = cache_key("upcoming", day_key(now))
        data = cache.get(key)
        if data is None:
            events = build_event_service().list_upcoming(now)
            data = list(EventSerializer(events, many=True).data)
            cache.set(key, data, cache_timeout())
        return Response(data)


class PastEventsView(DomainAPIView):
    """Handler for GET /api/events/past?year=YYYY"""

    def get(self, request: Request) -> Response:
        query = _validated(PastEventsQuerySerializer(data=request.query_params))
        now = utc_now()
        year = query.get("year", now.year)
        key = cache_key("past", year, day_key(now))
        data = cache.get(key)
        if data is None:
            events = build_event_service().list_past(year, now)
            data = list(EventSerializer(events, many=True).data)
            cache.set(key, data, cache_timeout())
        return Response(data)
