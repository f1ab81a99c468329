# accounting/models/account.py

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class Account(models.Model):
    """
    Running-balance ledger subject: one per customer or partner.

    Guarantees:
    - kind is fixed at registration (it decides the ledger sign rule)
    - current_balance is denormalized and only written by the ledger service;
      it always equals the balance of the latest LedgerEntry (0 if none)
    - Accounts with ledger entries cannot be deleted (PROTECT)
    """

    class Kind(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        PARTNER = "partner", "Partner"

    kind = models.CharField(max_length=16, choices=Kind.choices)

    display_name = models.CharField(max_length=255, db_index=True)

    phone_number = models.CharField(
        max_length=32,
        unique=True,
        null=True,
        blank=True,
    )

    partner_type = models.CharField(
        max_length=64,
        blank=True,
        default="",
        help_text="Free text for partners, e.g. supplier / technician.",
    )

    address = models.CharField(max_length=255, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    current_balance = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["display_name"]
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        indexes = [
            models.Index(fields=["kind"], name="idx_account_kind"),
            models.Index(fields=["kind", "display_name"], name="idx_account_kind_name"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(display_name=""),
                name="chk_account_display_name_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.display_name} ({self.kind})"

    def clean(self):
        self.display_name = (self.display_name or "").strip()
        self.phone_number = (self.phone_number or "").strip() or None

        if not self.display_name:
            raise ValidationError("Account name is required")

        if self.kind not in self.Kind.values:
            raise ValidationError("Invalid account kind")

    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            previous = Account.objects.filter(pk=self.pk).only("kind").first()
            if previous is not None and previous.kind != self.kind:
                raise ValidationError("Account kind cannot be changed once registered")

        self.full_clean()
        return super().save(*args, **kwargs)
