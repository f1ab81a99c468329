# products/models/product.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Product(models.Model):
    """
    Bulk inventory good (accessories, parts).

    STOCK MODEL:
    - stock_quantity is the authoritative on-hand count
    - it is written ONLY by products.services.inventory (sale, repair parts,
      purchase intake); never below zero
    - selling_price may be left at 0 while the item is being priced; such an
      item cannot be sold (PriceNotConfigured)
    """

    name = models.CharField(max_length=255, db_index=True)

    purchase_price = models.DecimalField(
        max_digits=16, decimal_places=2, default=Decimal("0.00")
    )
    selling_price = models.DecimalField(
        max_digits=16, decimal_places=2, default=Decimal("0.00")
    )

    stock_quantity = models.PositiveIntegerField(default=0)
    sale_count = models.PositiveIntegerField(default=0)

    supplier = models.ForeignKey(
        "accounting.Account",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="supplied_products",
        limit_choices_to={"kind": "partner"},
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.stock_quantity})"

    def clean(self):
        if self.purchase_price is None or Decimal(self.purchase_price) < 0:
            raise ValidationError("purchase_price cannot be negative")

        if self.selling_price is None or Decimal(self.selling_price) < 0:
            raise ValidationError("selling_price cannot be negative")
