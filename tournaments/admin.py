# Django Imports
from django.contrib import admin
from django.db.models import Count

# 3rd-party Imports
from import_export import resources
from import_export.admin import ImportExportModelAdmin
from unfold.admin import ModelAdmin, TabularInline

# Local Imports
from .models import Participant, Tournament

# --- Resources for django-import-export ---

class TournamentResource(resources.ModelResource):
    class Meta:
        model = Tournament
        fields = ('id', 'title', 'game', 'game_type', 'date', 'time', 'entry_fee', 'max_players', 'prize_pool')
        export_order = fields


# --- Inlines ---
# The roster is written only by the join flow, so it is shown read-only.

class ParticipantInline(TabularInline):
    model = Participant
    extra = 0
    can_delete = False
    fields = ("username", "phone_number", "joined_at")
    readonly_fields = fields
    classes = ["collapse"]

    def has_add_permission(self, request, obj=None):
        return False


# --- ModelAdmins ---

@admin.register(Tournament)
class TournamentAdmin(ImportExportModelAdmin, ModelAdmin):
    resource_class = TournamentResource
    list_display = ("title", "game", "game_type", "date", "entry_fee", "max_players", "player_count", "prize_pool")
    list_filter = ("game_type", "game", "date")
    search_fields = ("title", "game")
    readonly_fields = ("created_at", "updated_at")
    inlines = [ParticipantInline]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(joined_count=Count("players"))

    fieldsets = (
        (None, {"fields": ("title", "description", "game", "game_type", "image"), "classes": ("tab",)}),
        ("Schedule", {"fields": ("date", "time"), "classes": ("tab",)}),
        ("Entry & Prize", {"fields": ("entry_fee", "max_players", "prize_pool", "rules"), "classes": ("tab",)}),
        ("Room", {"fields": ("room_id", "room_password"), "classes": ("tab",)}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("tab",)}),
    )


@admin.register(Participant)
class ParticipantAdmin(ModelAdmin):
    list_display = ("username", "phone_number", "tournament", "joined_at")
    list_filter = ("tournament",)
    search_fields = ("username", "phone_number", "tournament__title")
    readonly_fields = ("tournament", "user", "username", "phone_number", "joined_at")

    def has_add_permission(self, request):
        return False
