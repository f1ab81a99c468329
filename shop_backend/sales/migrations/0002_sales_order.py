"""
======================================================
PATH: sales/migrations/0002_sales_order.py
======================================================
MIGRATION: CREATE SalesOrder + SalesOrderLine (multi-line counter sales)
"""

from __future__ import annotations

from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("accounting", "0001_initial"),
        ("sales", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="SalesOrder",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "payment_method",
                    models.CharField(choices=[("cash", "Cash"), ("credit", "Credit")], max_length=16),
                ),
                ("subtotal", models.DecimalField(decimal_places=2, max_digits=16)),
                ("items_discount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
                (
                    "discount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Order-level discount on top of the line discounts",
                        max_digits=16,
                    ),
                ),
                ("grand_total", models.DecimalField(decimal_places=2, max_digits=16)),
                ("transaction_date", models.DateField()),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_orders",
                        to="accounting.account",
                    ),
                ),
                (
                    "recorded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sales_orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-transaction_date", "-id"],
                "indexes": [
                    models.Index(fields=["transaction_date"], name="idx_sales_order_date"),
                    models.Index(fields=["customer"], name="idx_sales_order_customer"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("grand_total__gte", 0)),
                        name="chk_sales_order_total_not_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SalesOrderLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "item_kind",
                    models.CharField(
                        choices=[("product", "Product"), ("phone", "Phone"), ("service", "Service")],
                        max_length=16,
                    ),
                ),
                ("item_id", models.PositiveBigIntegerField()),
                ("item_name", models.CharField(help_text="Name snapshot at sale time", max_length=255)),
                ("quantity", models.PositiveIntegerField()),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=16)),
                ("discount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
                ("line_total", models.DecimalField(decimal_places=2, max_digits=16)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="lines",
                        to="sales.salesorder",
                    ),
                ),
            ],
            options={
                "ordering": ["order", "id"],
                "indexes": [
                    models.Index(fields=["item_kind", "item_id"], name="idx_sales_order_line_item"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1)),
                        name="chk_sales_order_line_qty_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("line_total__gte", 0)),
                        name="chk_sales_order_line_not_negative",
                    ),
                ],
            },
        ),
    ]
