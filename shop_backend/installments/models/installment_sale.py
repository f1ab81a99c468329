# installments/models/installment_sale.py

"""
INSTALLMENT SALE

One financed sale of a unique-unit phone, repaid through a fixed schedule
of monthly InstallmentPayment rows.

GUARANTEES:
- Created once, atomically, together with its schedule, checks, the phone
  status flip and the customer ledger posting
- Never deleted; the phone it references cannot be deleted while it exists
  (on_delete=PROTECT)
- Aggregate status / remaining balance are NOT stored here; they are derived
  on every read (installments.services.status)
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class InstallmentSale(models.Model):
    customer = models.ForeignKey(
        "accounting.Account",
        on_delete=models.PROTECT,
        related_name="installment_sales",
    )

    phone = models.ForeignKey(
        "products.Phone",
        on_delete=models.PROTECT,
        related_name="installment_sales",
    )

    sale_price = models.DecimalField(max_digits=16, decimal_places=2)
    down_payment = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))

    installment_count = models.PositiveIntegerField()
    installment_amount = models.DecimalField(max_digits=16, decimal_places=2)

    start_date = models.DateField()
    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="installment_sales",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["customer"], name="idx_inst_sale_customer"),
            models.Index(fields=["start_date"], name="idx_inst_sale_start"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(installment_count__gte=1),
                name="chk_installment_sale_count_positive",
            ),
            models.CheckConstraint(
                condition=Q(down_payment__gte=0),
                name="chk_installment_sale_down_payment_not_negative",
            ),
        ]

    def __str__(self):
        return f"Installment sale #{self.pk} ({self.installment_count} x {self.installment_amount})"

    @property
    def total_installment_price(self) -> Decimal:
        """Schedule total plus down payment."""
        return (self.installment_amount * self.installment_count) + self.down_payment

    def clean(self):
        if self.sale_price is None or self.sale_price <= 0:
            raise ValidationError("sale_price must be greater than zero")
        if self.installment_amount is None or self.installment_amount <= 0:
            raise ValidationError("installment_amount must be greater than zero")

    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            raise ValidationError("Installment sales are immutable once created")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Installment sales cannot be deleted")
