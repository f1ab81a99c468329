"""
======================================================
PATH: products/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Product + Phone + Service (inventory catalog)
"""

from __future__ import annotations

from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("accounting", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("purchase_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
                ("selling_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
                ("stock_quantity", models.PositiveIntegerField(default=0)),
                ("sale_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        limit_choices_to={"kind": "partner"},
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="supplied_products",
                        to="accounting.account",
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Phone",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("model", models.CharField(max_length=255)),
                ("color", models.CharField(blank=True, default="", max_length=64)),
                ("storage", models.CharField(blank=True, default="", max_length=32)),
                ("ram", models.CharField(blank=True, default="", max_length=32)),
                ("imei", models.CharField(max_length=32, unique=True)),
                ("battery_health", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("condition", models.CharField(blank=True, default="", max_length=64)),
                ("purchase_price", models.DecimalField(decimal_places=2, max_digits=16)),
                (
                    "sale_price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Unset until priced; an unpriced phone cannot be sold.",
                        max_digits=16,
                        null=True,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("in_stock", "موجود در انبار"),
                            ("sold", "فروخته شده"),
                            ("sold_installment", "فروخته شده (قسطی)"),
                            ("returned", "مرجوعی"),
                        ],
                        db_index=True,
                        default="in_stock",
                        max_length=32,
                    ),
                ),
                ("purchase_date", models.DateField(blank=True, null=True)),
                ("sale_date", models.DateField(blank=True, null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("registered_at", models.DateTimeField(auto_now_add=True)),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        limit_choices_to={"kind": "partner"},
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="supplied_phones",
                        to="accounting.account",
                    ),
                ),
            ],
            options={
                "ordering": ["-registered_at"],
            },
        ),
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, unique=True)),
                ("description", models.TextField(blank=True, default="")),
                ("price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
    ]
