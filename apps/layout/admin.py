from django.contrib import admin
from .models import LayoutState


@admin.register(LayoutState)
class LayoutStateAdmin(admin.ModelAdmin):
    list_display = ("user_id", "context_key", "updated_at")
    search_fields = ("user_id", "context_key")
    readonly_fields = ("id", "user_id", "context_key", "created_at", "updated_at")
    ordering = ("-updated_at",)
