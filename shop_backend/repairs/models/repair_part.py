# repairs/models/repair_part.py

from django.db import models
from django.db.models import Q

from .repair import Repair


class RepairPart(models.Model):
    """A bulk product consumed by a repair (stock already taken out)."""

    repair = models.ForeignKey(
        Repair,
        on_delete=models.CASCADE,
        related_name="parts",
    )

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="repair_usages",
    )

    quantity_used = models.PositiveIntegerField()

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity_used__gte=1),
                name="chk_repair_part_quantity_positive",
            ),
        ]

    def __str__(self):
        return f"{self.product} x{self.quantity_used} (repair #{self.repair_id})"
