# Django Imports
from django.contrib import admin

# 3rd-party Imports
from import_export import resources
from import_export.admin import ExportMixin
from unfold.admin import ModelAdmin, TabularInline

# Local Imports
from .models import Transaction, Wallet

# --- Resources for django-import-export ---

class WalletResource(resources.ModelResource):
    class Meta:
        model = Wallet
        fields = ("id", "user__username", "user__phone_number", "balance", "updated_at")


class TransactionResource(resources.ModelResource):
    class Meta:
        model = Transaction
        fields = ("id", "wallet__user__username", "transaction_type", "amount", "balance_after", "description", "timestamp")


# --- Inlines ---

class TransactionInline(TabularInline):
    model = Transaction
    extra = 0
    can_delete = False
    fields = ("transaction_type", "amount", "balance_after", "description", "timestamp")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


# --- ModelAdmins ---
# Balances and ledger rows only change through WalletService; both admins are export-only and read-only.

@admin.register(Wallet)
class WalletAdmin(ExportMixin, ModelAdmin):
    resource_class = WalletResource
    list_display = ("user", "balance", "updated_at")
    search_fields = ("user__username", "user__phone_number")
    readonly_fields = ("user", "balance", "updated_at")
    inlines = [TransactionInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Transaction)
class TransactionAdmin(ExportMixin, ModelAdmin):
    resource_class = TransactionResource
    list_display = ("wallet", "transaction_type", "amount", "balance_after", "timestamp")
    list_filter = ("transaction_type", "timestamp")
    search_fields = ("wallet__user__username", "wallet__user__phone_number", "description")
    readonly_fields = ("wallet", "transaction_type", "amount", "balance_after", "description", "timestamp")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
