# sales/models/sale_record.py

"""
SALE RECORD (IMMUTABLE SNAPSHOT)

One row per single-item cash/credit sale.

GUARANTEES:
- Created once, in the same atomic unit as its inventory mutation and (credit
  sales) its customer ledger posting
- Immutable afterwards: no update path, no delete path
- net_total = quantity * unit_price - discount, never negative
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class SaleRecord(models.Model):
    ITEM_PRODUCT = "product"
    ITEM_PHONE = "phone"
    ITEM_SERVICE = "service"

    ITEM_KIND_CHOICES = [
        (ITEM_PRODUCT, "Product"),
        (ITEM_PHONE, "Phone"),
        (ITEM_SERVICE, "Service"),
    ]

    PAYMENT_CASH = "cash"
    PAYMENT_CREDIT = "credit"

    PAYMENT_METHOD_CHOICES = [
        (PAYMENT_CASH, "Cash"),
        (PAYMENT_CREDIT, "Credit"),
    ]

    item_kind = models.CharField(max_length=16, choices=ITEM_KIND_CHOICES)
    item_id = models.PositiveBigIntegerField()
    item_name = models.CharField(max_length=255, help_text="Name snapshot at sale time")

    quantity = models.PositiveIntegerField()

    unit_price = models.DecimalField(max_digits=16, decimal_places=2)
    discount = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))
    net_total = models.DecimalField(max_digits=16, decimal_places=2)

    payment_method = models.CharField(max_length=16, choices=PAYMENT_METHOD_CHOICES)

    customer = models.ForeignKey(
        "accounting.Account",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="sale_records",
    )

    transaction_date = models.DateField()
    notes = models.TextField(blank=True, default="")

    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sale_records",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-transaction_date", "-id"]
        indexes = [
            models.Index(fields=["item_kind", "item_id"], name="idx_sale_record_item"),
            models.Index(fields=["transaction_date"], name="idx_sale_record_date"),
            models.Index(fields=["customer"], name="idx_sale_record_customer"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gte=1),
                name="chk_sale_record_quantity_positive",
            ),
            models.CheckConstraint(
                condition=Q(net_total__gte=0),
                name="chk_sale_record_net_not_negative",
            ),
        ]

    def __str__(self):
        return f"Sale #{self.pk} {self.item_name} x{self.quantity} = {self.net_total}"

    def clean(self):
        if self.unit_price is None or self.unit_price <= 0:
            raise ValidationError("unit_price must be greater than zero")

        if self.discount is None or self.discount < 0:
            raise ValidationError("discount cannot be negative")

        expected = (Decimal(self.quantity) * self.unit_price) - self.discount
        if self.net_total != expected:
            raise ValidationError(
                f"net_total({self.net_total}) != quantity*unit_price - discount ({expected})"
            )

    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            raise ValidationError("SaleRecord rows are immutable once recorded")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("SaleRecord rows cannot be deleted")
