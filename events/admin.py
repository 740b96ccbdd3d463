from django.contrib import admin

from events.models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "date", "location", "type", "updated_at"]
    list_filter = ["type"]
    search_fields = ["title", "location"]
    date_hierarchy = "date"
    readonly_fields = ["flyers", "photos", "version", "created_at", "updated_at"]
