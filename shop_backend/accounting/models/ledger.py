# accounting/models/ledger.py

"""
======================================================
PATH: accounting/models/ledger.py
======================================================
LEDGER ENTRY MODEL

Append-only, per-account posting with a running balance snapshot.

Guarantees:
- Immutable once created (no updates, no deletes)
- debit and credit are both >= 0
- Insertion order (id) is the accounting sequence. posted_at may be
  backdated and is NEVER used to derive balances.
- balance[n] = balance[n-1] + delta(entry[n]); the delta sign depends on
  the owning account's kind (see ledger_service.signed_delta)
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from accounting.models.account import Account


class LedgerEntry(models.Model):
    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="ledger_entries",
    )

    posted_at = models.DateTimeField(default=timezone.now)

    description = models.CharField(max_length=500)

    debit = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    credit = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    balance = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        help_text="Account balance right after this entry",
    )

    reference_type = models.CharField(max_length=64, blank=True, default="")
    reference_id = models.CharField(max_length=64, blank=True, default="")

    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="ledger_entries",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Ledger Entry"
        verbose_name_plural = "Ledger Entries"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["account", "id"], name="idx_ledger_account_seq"),
            models.Index(fields=["reference_type", "reference_id"], name="idx_ledger_reference"),
            models.Index(fields=["posted_at"], name="idx_ledger_posted_at"),
        ]

    def __str__(self):
        return f"#{self.pk} {self.account_id} D{self.debit} C{self.credit} = {self.balance}"

    def clean(self):
        if not (self.description or "").strip():
            raise ValidationError("Ledger description is required")

        if self.debit is None or self.credit is None:
            raise ValidationError("Debit and credit are required")

        if self.debit < 0 or self.credit < 0:
            raise ValidationError("Debit and credit cannot be negative")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("LedgerEntry records are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("LedgerEntry records are immutable and cannot be deleted")
