# installments/models/check_instrument.py

from __future__ import annotations

from django.db import models
from django.db.models import Q

from .installment_sale import InstallmentSale


class CheckInstrument(models.Model):
    """
    Post-dated check attached to an installment sale.

    status changes ONLY through installments.services.check_lifecycle.
    """

    class Status(models.TextChoices):
        HELD = "held", "نزد مشتری"
        IN_COLLECTION = "in_collection", "در جریان وصول"
        CLEARED = "cleared", "وصول شده"
        BOUNCED = "bounced", "برگشت خورده"
        VOIDED = "voided", "باطل شده"

    sale = models.ForeignKey(
        InstallmentSale,
        on_delete=models.CASCADE,
        related_name="checks",
    )

    check_number = models.CharField(max_length=64)
    bank_name = models.CharField(max_length=128)
    due_date = models.DateField()
    amount = models.DecimalField(max_digits=16, decimal_places=2)

    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.HELD,
    )

    status_changed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["due_date", "id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="chk_check_instrument_amount_positive",
            ),
        ]

    def __str__(self):
        return f"Check {self.check_number} ({self.bank_name}) {self.amount} [{self.status}]"
