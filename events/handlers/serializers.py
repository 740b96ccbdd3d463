"""Serializers for request decoding and domain model responses.

Wire field names are camelCase to match the website client.
"""

from rest_framework import serializers


class EventSerializer(serializers.Serializer):
    """Serializer for the Event domain model."""

    id = serializers.CharField()
    title = serializers.CharField()
    date = serializers.DateTimeField()
    description = serializers.CharField()
    location = serializers.CharField()
    registrationLink = serializers.CharField(source="registration_link")
    type = serializers.CharField()
    flyers = serializers.ListField(child=serializers.CharField())
    photos = serializers.ListField(child=serializers.CharField())
    version = serializers.IntegerField()
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class EventNeighborSerializer(serializers.Serializer):
    """Just enough of an Event to link to it."""

    id = serializers.CharField()
    title = serializers.CharField()
    date = serializers.DateTimeField()


class EventFieldsSerializer(serializers.Serializer):
    """Input for creating an event, or with partial=True, updating one."""

    title = serializers.CharField(max_length=255)
    date = serializers.DateTimeField()
    description = serializers.CharField(required=False, allow_blank=True, default="")
    location = serializers.CharField(
        required=False, allow_blank=True, max_length=255, default=""
    )
    registrationLink = serializers.CharField(
        source="registration_link",
        required=False,
        allow_blank=True,
        max_length=500,
        default="",
    )
    type = serializers.CharField(
        required=False, allow_blank=True, max_length=100, default=""
    )


class MediaActionSerializer(serializers.Serializer):
    action = serializers.ChoiceField(
        choices=["append", "overwrite"], required=False, default="append"
    )


class DeleteMediaSerializer(serializers.Serializer):
    flyersToDelete = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )
    photosToDelete = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )


class PastEventsQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(required=False, min_value=1, max_value=9998)
