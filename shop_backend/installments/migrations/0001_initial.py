"""
======================================================
PATH: installments/migrations/0001_initial.py
======================================================
MIGRATION: CREATE InstallmentSale, InstallmentPayment,
InstallmentTransaction, CheckInstrument
"""

from __future__ import annotations

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("accounting", "0001_initial"),
        ("products", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="InstallmentSale",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sale_price", models.DecimalField(decimal_places=2, max_digits=16)),
                ("down_payment", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
                ("installment_count", models.PositiveIntegerField()),
                ("installment_amount", models.DecimalField(decimal_places=2, max_digits=16)),
                ("start_date", models.DateField()),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="installment_sales",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="installment_sales",
                        to="accounting.account",
                    ),
                ),
                (
                    "phone",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="installment_sales",
                        to="products.phone",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["customer"], name="idx_inst_sale_customer"),
                    models.Index(fields=["start_date"], name="idx_inst_sale_start"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("installment_count__gte", 1)),
                        name="chk_installment_sale_count_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("down_payment__gte", 0)),
                        name="chk_installment_sale_down_payment_not_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="InstallmentPayment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("number", models.PositiveIntegerField(help_text="1-based position in the schedule")),
                ("due_date", models.DateField()),
                ("amount_due", models.DecimalField(decimal_places=2, max_digits=16)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("unpaid", "پرداخت نشده"),
                            ("partial", "پرداخت جزئی"),
                            ("paid", "پرداخت شده"),
                        ],
                        default="unpaid",
                        max_length=16,
                    ),
                ),
                ("paid_on", models.DateField(blank=True, null=True)),
                (
                    "sale",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="installments.installmentsale",
                    ),
                ),
            ],
            options={
                "ordering": ["sale", "number"],
                "indexes": [
                    models.Index(fields=["status", "due_date"], name="idx_inst_payment_open"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("sale", "number"),
                        name="uniq_installment_payment_sale_number",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("amount_due__gt", 0)),
                        name="chk_installment_payment_amount_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="InstallmentTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "amount_paid",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                ("payment_date", models.DateField()),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "payment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transactions",
                        to="installments.installmentpayment",
                    ),
                ),
                (
                    "received_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="installment_transactions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="CheckInstrument",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("check_number", models.CharField(max_length=64)),
                ("bank_name", models.CharField(max_length=128)),
                ("due_date", models.DateField()),
                ("amount", models.DecimalField(decimal_places=2, max_digits=16)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("held", "نزد مشتری"),
                            ("in_collection", "در جریان وصول"),
                            ("cleared", "وصول شده"),
                            ("bounced", "برگشت خورده"),
                            ("voided", "باطل شده"),
                        ],
                        default="held",
                        max_length=16,
                    ),
                ),
                ("status_changed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "sale",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="checks",
                        to="installments.installmentsale",
                    ),
                ),
            ],
            options={
                "ordering": ["due_date", "id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount__gt", 0)),
                        name="chk_check_instrument_amount_positive",
                    ),
                ],
            },
        ),
    ]
