# installments/admin.py

from django.contrib import admin

from installments.models import (
    CheckInstrument,
    InstallmentPayment,
    InstallmentSale,
    InstallmentTransaction,
)


class InstallmentPaymentInline(admin.TabularInline):
    model = InstallmentPayment
    extra = 0
    can_delete = False
    fields = ("number", "due_date", "amount_due", "status", "paid_on")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


class CheckInstrumentInline(admin.TabularInline):
    model = CheckInstrument
    extra = 0
    can_delete = False
    fields = ("check_number", "bank_name", "due_date", "amount", "status")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


# ======================================================
# INSTALLMENT SALE (schedule is service-owned)
# ======================================================


@admin.register(InstallmentSale)
class InstallmentSaleAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "customer",
        "phone",
        "sale_price",
        "down_payment",
        "installment_count",
        "installment_amount",
        "start_date",
    )
    search_fields = ("customer__display_name", "phone__imei", "phone__model")
    list_filter = ("start_date",)
    inlines = [InstallmentPaymentInline, CheckInstrumentInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(InstallmentTransaction)
class InstallmentTransactionAdmin(admin.ModelAdmin):
    list_display = ("id", "payment", "amount_paid", "payment_date", "received_by")
    list_filter = ("payment_date",)
    ordering = ("-id",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
