# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules (audit-safe inventory):

- Catalog fields (names, prices, specs) are editable.
- Stock counts and phone status are read-only here; they move only through
  products.services (sales, installment sales, repairs, purchase intake) so
  the supplier ledger and sale records stay in step with them.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Phone, Product, Service


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "selling_price",
        "purchase_price",
        "stock_quantity",
        "sale_count",
        "supplier",
    )
    search_fields = ("name",)
    list_filter = ("supplier",)
    ordering = ("name",)
    readonly_fields = ("stock_quantity", "sale_count", "created_at", "updated_at")


@admin.register(Phone)
class PhoneAdmin(admin.ModelAdmin):
    list_display = (
        "model",
        "imei",
        "color",
        "storage",
        "status",
        "purchase_price",
        "sale_price",
        "supplier",
        "registered_at",
    )
    list_filter = ("status", "supplier")
    search_fields = ("model", "imei")
    ordering = ("-registered_at",)
    readonly_fields = ("status", "sale_date", "registered_at")


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("name", "price")
    search_fields = ("name",)
    ordering = ("name",)
