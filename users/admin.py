# Django Imports
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

# 3rd-party Imports
from import_export import resources
from import_export.admin import ImportExportModelAdmin
from unfold.admin import ModelAdmin

# Local Imports
from .models import OTP, User


class UserResource(resources.ModelResource):
    class Meta:
        model = User
        fields = ("id", "username", "phone_number", "email", "is_verified", "date_joined")


@admin.register(User)
class UserAdmin(ImportExportModelAdmin, BaseUserAdmin, ModelAdmin):
    resource_class = UserResource
    list_display = ("username", "phone_number", "email", "wallet_balance", "is_verified", "is_staff")
    search_fields = ("username", "email", "phone_number")
    list_filter = ("is_staff", "is_superuser", "is_active", "is_verified")
    readonly_fields = ("last_login", "date_joined")

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        ("Contact", {"fields": ("phone_number", "email", "is_verified"), "classes": ("tab",)}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions"), "classes": ("tab",)}),
        ("Important dates", {"fields": ("last_login", "date_joined"), "classes": ("tab",)}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("username", "phone_number", "email", "password1", "password2")}),
    )


@admin.register(OTP)
class OTPAdmin(ModelAdmin):
    list_display = ("email", "phone_number", "code", "is_used", "expires_at", "created_at")
    list_filter = ("is_used",)
    search_fields = ("email", "phone_number")
    readonly_fields = ("password", "created_at")
