# accounting/admin.py

from django.contrib import admin

from accounting.models.account import Account
from accounting.models.ledger import LedgerEntry

# ============================================================
# ACCOUNT (balance is ledger-owned)
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = (
        "display_name",
        "kind",
        "phone_number",
        "partner_type",
        "current_balance",
        "created_at",
    )
    list_filter = ("kind", "partner_type")
    search_fields = ("display_name", "phone_number")
    ordering = ("display_name",)
    readonly_fields = ("current_balance", "created_at")

    fieldsets = (
        (
            "Party",
            {
                "fields": ("kind", "display_name", "phone_number", "partner_type"),
            },
        ),
        (
            "Contact",
            {
                "fields": ("address", "notes"),
            },
        ),
        (
            "Ledger",
            {
                "fields": ("current_balance", "created_at"),
            },
        ),
    )

    def get_readonly_fields(self, request, obj=None):
        # kind decides the sign rule; fixed after registration
        if obj is not None:
            return self.readonly_fields + ("kind",)
        return self.readonly_fields


# ============================================================
# LEDGER ENTRY (STRICTLY IMMUTABLE)
# ============================================================


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "account",
        "posted_at",
        "description",
        "debit",
        "credit",
        "balance",
        "reference_type",
        "reference_id",
    )
    list_filter = ("reference_type", "account__kind")
    search_fields = ("description", "account__display_name", "reference_id")
    ordering = ("id",)

    readonly_fields = (
        "account",
        "posted_at",
        "description",
        "debit",
        "credit",
        "balance",
        "reference_type",
        "reference_id",
        "recorded_by",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
