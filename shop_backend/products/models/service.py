# products/models/service.py

from decimal import Decimal

from django.db import models


class Service(models.Model):
    """Sellable service (no stock; always sold one at a time)."""

    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
