# Django Imports
from django.contrib import admin, messages

# 3rd-party Imports
from import_export import resources
from import_export.admin import ExportMixin
from unfold.admin import ModelAdmin

# Local Imports
from common.exceptions import ApplicationError

from .models import Result
from .services import verify_result


class ResultResource(resources.ModelResource):
    class Meta:
        model = Result
        fields = ("id", "user__username", "tournament__title", "kills", "rank", "prize", "status", "submitted_at", "verified_at")
        export_order = fields


@admin.register(Result)
class ResultAdmin(ExportMixin, ModelAdmin):
    resource_class = ResultResource
    list_display = ("user", "tournament", "kills", "rank", "prize", "status", "submitted_at")
    list_filter = ("status", "tournament")
    search_fields = ("user__username", "user__phone_number", "tournament__title")
    readonly_fields = ("status", "submitted_at", "verified_at")
    actions = ["approve_results", "reject_results"]

    def _verify(self, request, queryset, status):
        done = 0
        for result in queryset:
            try:
                verify_result(result.pk, status)
                done += 1
            except ApplicationError as e:
                self.message_user(request, f"{result}: {e.message}", messages.ERROR)
        if done:
            self.message_user(request, f"{done} results {status}.", messages.SUCCESS)

    def approve_results(self, request, queryset):
        self._verify(request, queryset, Result.APPROVED)
    approve_results.short_description = "Approve selected results and pay prizes"

    def reject_results(self, request, queryset):
        self._verify(request, queryset, Result.REJECTED)
    reject_results.short_description = "Reject selected results"
