"""
======================================================
PATH: accounting/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Account + LedgerEntry

- Account: customer / partner ledger subject with denormalized balance
- LedgerEntry: append-only running-balance postings (id = sequence)
"""

from __future__ import annotations

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "kind",
                    models.CharField(
                        choices=[("customer", "Customer"), ("partner", "Partner")],
                        max_length=16,
                    ),
                ),
                ("display_name", models.CharField(db_index=True, max_length=255)),
                ("phone_number", models.CharField(blank=True, max_length=32, null=True, unique=True)),
                (
                    "partner_type",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Free text for partners, e.g. supplier / technician.",
                        max_length=64,
                    ),
                ),
                ("address", models.CharField(blank=True, default="", max_length=255)),
                ("notes", models.TextField(blank=True, default="")),
                (
                    "current_balance",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=16),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Account",
                "verbose_name_plural": "Accounts",
                "ordering": ["display_name"],
                "indexes": [
                    models.Index(fields=["kind"], name="idx_account_kind"),
                    models.Index(fields=["kind", "display_name"], name="idx_account_kind_name"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("display_name", ""), _negated=True),
                        name="chk_account_display_name_not_blank",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("posted_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("description", models.CharField(max_length=500)),
                (
                    "debit",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "credit",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "balance",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Account balance right after this entry",
                        max_digits=16,
                    ),
                ),
                ("reference_type", models.CharField(blank=True, default="", max_length=64)),
                ("reference_id", models.CharField(blank=True, default="", max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="accounting.account",
                    ),
                ),
                (
                    "recorded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="ledger_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Ledger Entry",
                "verbose_name_plural": "Ledger Entries",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["account", "id"], name="idx_ledger_account_seq"),
                    models.Index(fields=["reference_type", "reference_id"], name="idx_ledger_reference"),
                    models.Index(fields=["posted_at"], name="idx_ledger_posted_at"),
                ],
            },
        ),
    ]
