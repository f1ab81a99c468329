# products/models/phone.py

from django.core.exceptions import ValidationError
from django.db import models


class Phone(models.Model):
    """
    Unique-unit tradable device, identified by IMEI.

    Lifecycle:
    - in_stock -> sold              (cash/credit sale)
    - in_stock -> sold_installment  (financed sale)
    Status flips happen only through products.services.inventory.
    """

    class Status(models.TextChoices):
        IN_STOCK = "in_stock", "موجود در انبار"
        SOLD = "sold", "فروخته شده"
        SOLD_INSTALLMENT = "sold_installment", "فروخته شده (قسطی)"
        RETURNED = "returned", "مرجوعی"

    model = models.CharField(max_length=255)
    color = models.CharField(max_length=64, blank=True, default="")
    storage = models.CharField(max_length=32, blank=True, default="")
    ram = models.CharField(max_length=32, blank=True, default="")
    imei = models.CharField(max_length=32, unique=True)
    battery_health = models.PositiveSmallIntegerField(null=True, blank=True)
    condition = models.CharField(max_length=64, blank=True, default="")

    purchase_price = models.DecimalField(max_digits=16, decimal_places=2)
    sale_price = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Unset until priced; an unpriced phone cannot be sold.",
    )

    status = models.CharField(
        max_length=32,
        choices=Status.choices,
        default=Status.IN_STOCK,
        db_index=True,
    )

    purchase_date = models.DateField(null=True, blank=True)
    sale_date = models.DateField(null=True, blank=True)

    supplier = models.ForeignKey(
        "accounting.Account",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="supplied_phones",
        limit_choices_to={"kind": "partner"},
    )

    notes = models.TextField(blank=True, default="")
    registered_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-registered_at"]

    def __str__(self):
        return f"{self.model} (IMEI: {self.imei})"

    @property
    def is_available(self) -> bool:
        return self.status == self.Status.IN_STOCK

    def clean(self):
        self.imei = (self.imei or "").strip()
        if not self.imei:
            raise ValidationError("IMEI is required")

        if self.purchase_price is None or self.purchase_price < 0:
            raise ValidationError("purchase_price cannot be negative")
