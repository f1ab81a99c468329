# repairs/admin.py

from django.contrib import admin

from repairs.models import Repair, RepairPart


class RepairPartInline(admin.TabularInline):
    model = RepairPart
    extra = 0
    can_delete = False
    fields = ("product", "quantity_used")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Repair)
class RepairAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "customer",
        "device_model",
        "status",
        "estimated_cost",
        "final_cost",
        "technician",
        "date_received",
    )
    list_filter = ("status",)
    search_fields = ("device_model", "serial_number", "customer__display_name")
    inlines = [RepairPartInline]
    # finalization posts to the ledgers; only the service may do it
    readonly_fields = ("status", "final_cost", "labor_fee", "technician", "date_completed")
