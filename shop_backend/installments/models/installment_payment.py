# installments/models/installment_payment.py

from __future__ import annotations

from django.db import models
from django.db.models import Q

from .installment_sale import InstallmentSale


class InstallmentPayment(models.Model):
    """
    One scheduled obligation of an installment sale.

    status / paid_on are written ONLY by the payment applicator and always
    agree with the sum of this obligation's transactions.
    """

    class Status(models.TextChoices):
        UNPAID = "unpaid", "پرداخت نشده"
        PARTIAL = "partial", "پرداخت جزئی"
        PAID = "paid", "پرداخت شده"

    sale = models.ForeignKey(
        InstallmentSale,
        on_delete=models.CASCADE,
        related_name="payments",
    )

    number = models.PositiveIntegerField(help_text="1-based position in the schedule")
    due_date = models.DateField()
    amount_due = models.DecimalField(max_digits=16, decimal_places=2)

    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.UNPAID,
    )

    paid_on = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ["sale", "number"]
        indexes = [
            models.Index(fields=["status", "due_date"], name="idx_inst_payment_open"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["sale", "number"],
                name="uniq_installment_payment_sale_number",
            ),
            models.CheckConstraint(
                condition=Q(amount_due__gt=0),
                name="chk_installment_payment_amount_positive",
            ),
        ]

    def __str__(self):
        return f"Sale #{self.sale_id} installment {self.number} ({self.status})"

    @property
    def is_paid(self) -> bool:
        return self.status == self.Status.PAID
