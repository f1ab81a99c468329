# installments/models/installment_transaction.py

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from .installment_payment import InstallmentPayment


class InstallmentTransaction(models.Model):
    """
    One money-received event against an obligation. Append-only.
    """

    payment = models.ForeignKey(
        InstallmentPayment,
        on_delete=models.CASCADE,
        related_name="transactions",
    )

    amount_paid = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    payment_date = models.DateField()
    notes = models.TextField(blank=True, default="")

    received_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="installment_transactions",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.amount_paid} on {self.payment_date} -> payment #{self.payment_id}"

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("Installment transactions are append-only")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Installment transactions cannot be deleted")
