"""
======================================================
PATH: sales/migrations/0001_initial.py
======================================================
MIGRATION: CREATE SaleRecord (immutable single-item sale snapshot)
"""

from __future__ import annotations

from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("accounting", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="SaleRecord",
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
                ("net_total", models.DecimalField(decimal_places=2, max_digits=16)),
                (
                    "payment_method",
                    models.CharField(choices=[("cash", "Cash"), ("credit", "Credit")], max_length=16),
                ),
                ("transaction_date", models.DateField()),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sale_records",
                        to="accounting.account",
                    ),
                ),
                (
                    "recorded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sale_records",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-transaction_date", "-id"],
                "indexes": [
                    models.Index(fields=["item_kind", "item_id"], name="idx_sale_record_item"),
                    models.Index(fields=["transaction_date"], name="idx_sale_record_date"),
                    models.Index(fields=["customer"], name="idx_sale_record_customer"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1)),
                        name="chk_sale_record_quantity_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("net_total__gte", 0)),
                        name="chk_sale_record_net_not_negative",
                    ),
                ],
            },
        ),
    ]
