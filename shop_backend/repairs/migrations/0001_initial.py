"""
======================================================
PATH: repairs/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Repair + RepairPart (repair center)
"""

from __future__ import annotations

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("accounting", "0001_initial"),
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Repair",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("device_model", models.CharField(max_length=255)),
                ("device_color", models.CharField(blank=True, default="", max_length=64)),
                ("serial_number", models.CharField(blank=True, default="", max_length=64)),
                ("problem_description", models.TextField()),
                ("technician_notes", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("received", "پذیرش شده"),
                            ("repairing", "در حال تعمیر"),
                            ("waiting_parts", "منتظر قطعه"),
                            ("ready", "آماده تحویل"),
                            ("delivered", "تحویل داده شده"),
                            ("cancelled", "لغو شده"),
                        ],
                        db_index=True,
                        default="received",
                        max_length=16,
                    ),
                ),
                ("estimated_cost", models.DecimalField(blank=True, decimal_places=2, max_digits=16, null=True)),
                ("final_cost", models.DecimalField(blank=True, decimal_places=2, max_digits=16, null=True)),
                ("labor_fee", models.DecimalField(blank=True, decimal_places=2, max_digits=16, null=True)),
                ("date_received", models.DateTimeField(auto_now_add=True)),
                ("date_completed", models.DateTimeField(blank=True, null=True)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="repairs",
                        to="accounting.account",
                    ),
                ),
                (
                    "technician",
                    models.ForeignKey(
                        blank=True,
                        limit_choices_to={"kind": "partner"},
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="assigned_repairs",
                        to="accounting.account",
                    ),
                ),
            ],
            options={
                "ordering": ["-date_received", "-id"],
            },
        ),
        migrations.CreateModel(
            name="RepairPart",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity_used", models.PositiveIntegerField()),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="repair_usages",
                        to="products.product",
                    ),
                ),
                (
                    "repair",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="parts",
                        to="repairs.repair",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity_used__gte", 1)),
                        name="chk_repair_part_quantity_positive",
                    ),
                ],
            },
        ),
    ]
