# sales/admin.py

from django.contrib import admin

from sales.models import SaleRecord, SalesOrder, SalesOrderLine


# ======================================================
# SALE RECORD ADMIN (READ-ONLY)
# ======================================================


@admin.register(SaleRecord)
class SaleRecordAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "transaction_date",
        "item_kind",
        "item_name",
        "quantity",
        "net_total",
        "payment_method",
        "customer",
    )
    list_filter = ("payment_method", "item_kind", "transaction_date")
    search_fields = ("item_name", "customer__display_name")
    ordering = ("-transaction_date", "-id")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ======================================================
# SALES ORDER ADMIN (READ-ONLY)
# ======================================================


class SalesOrderLineInline(admin.TabularInline):
    model = SalesOrderLine
    extra = 0
    can_delete = False
    readonly_fields = ("item_kind", "item_id", "item_name", "quantity", "unit_price", "discount", "line_total")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(SalesOrder)
class SalesOrderAdmin(admin.ModelAdmin):
    list_display = ("id", "transaction_date", "grand_total", "payment_method", "customer")
    list_filter = ("payment_method", "transaction_date")
    search_fields = ("customer__display_name", "lines__item_name")
    ordering = ("-transaction_date", "-id")
    inlines = [SalesOrderLineInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
