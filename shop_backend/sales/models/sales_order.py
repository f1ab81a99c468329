# sales/models/sales_order.py

"""
SALES ORDER (IMMUTABLE MULTI-LINE SNAPSHOT)

One cart checked out at the counter: a header row plus one line per item.

GUARANTEES:
- Header, lines, every inventory mutation and (credit orders) the single
  customer debit of grand_total commit together or not at all
- line_total   = quantity * unit_price - line discount
- grand_total  = subtotal - items_discount - discount, never negative
- Immutable afterwards: no update path, no delete path
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from sales.models.sale_record import SaleRecord


class SalesOrder(models.Model):
    payment_method = models.CharField(max_length=16, choices=SaleRecord.PAYMENT_METHOD_CHOICES)

    customer = models.ForeignKey(
        "accounting.Account",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="sales_orders",
    )

    subtotal = models.DecimalField(max_digits=16, decimal_places=2)
    items_discount = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))
    discount = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Order-level discount on top of the line discounts",
    )
    grand_total = models.DecimalField(max_digits=16, decimal_places=2)

    transaction_date = models.DateField()
    notes = models.TextField(blank=True, default="")

    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sales_orders",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-transaction_date", "-id"]
        indexes = [
            models.Index(fields=["transaction_date"], name="idx_sales_order_date"),
            models.Index(fields=["customer"], name="idx_sales_order_customer"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(grand_total__gte=0),
                name="chk_sales_order_total_not_negative",
            ),
        ]

    def __str__(self):
        return f"Order #{self.pk} = {self.grand_total}"

    def clean(self):
        if self.discount is None or self.discount < 0:
            raise ValidationError("discount cannot be negative")

        expected = self.subtotal - self.items_discount - self.discount
        if self.grand_total != expected:
            raise ValidationError(
                f"grand_total({self.grand_total}) != subtotal - items_discount - discount ({expected})"
            )

    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            raise ValidationError("SalesOrder rows are immutable once recorded")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("SalesOrder rows cannot be deleted")


class SalesOrderLine(models.Model):
    order = models.ForeignKey(SalesOrder, on_delete=models.PROTECT, related_name="lines")

    item_kind = models.CharField(max_length=16, choices=SaleRecord.ITEM_KIND_CHOICES)
    item_id = models.PositiveBigIntegerField()
    item_name = models.CharField(max_length=255, help_text="Name snapshot at sale time")

    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=16, decimal_places=2)
    discount = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))
    line_total = models.DecimalField(max_digits=16, decimal_places=2)

    class Meta:
        ordering = ["order", "id"]
        indexes = [
            models.Index(fields=["item_kind", "item_id"], name="idx_sales_order_line_item"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gte=1),
                name="chk_sales_order_line_qty_positive",
            ),
            models.CheckConstraint(
                condition=Q(line_total__gte=0),
                name="chk_sales_order_line_not_negative",
            ),
        ]

    def __str__(self):
        return f"{self.item_name} x{self.quantity} = {self.line_total}"

    def clean(self):
        if self.unit_price is None or self.unit_price <= 0:
            raise ValidationError("unit_price must be greater than zero")

        expected = (Decimal(self.quantity) * self.unit_price) - self.discount
        if self.line_total != expected:
            raise ValidationError(
                f"line_total({self.line_total}) != quantity*unit_price - discount ({expected})"
            )

    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            raise ValidationError("SalesOrderLine rows are immutable once recorded")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("SalesOrderLine rows cannot be deleted")
