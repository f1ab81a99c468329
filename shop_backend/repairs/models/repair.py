# repairs/models/repair.py

from __future__ import annotations

from django.db import models


class Repair(models.Model):
    """
    A device taken in for repair.

    Financial effects happen once, in repairs.services.repair_service.finalize_repair.
    """

    class Status(models.TextChoices):
        RECEIVED = "received", "پذیرش شده"
        REPAIRING = "repairing", "در حال تعمیر"
        WAITING_PARTS = "waiting_parts", "منتظر قطعه"
        READY = "ready", "آماده تحویل"
        DELIVERED = "delivered", "تحویل داده شده"
        CANCELLED = "cancelled", "لغو شده"

    customer = models.ForeignKey(
        "accounting.Account",
        on_delete=models.PROTECT,
        related_name="repairs",
    )

    device_model = models.CharField(max_length=255)
    device_color = models.CharField(max_length=64, blank=True, default="")
    serial_number = models.CharField(max_length=64, blank=True, default="")
    problem_description = models.TextField()
    technician_notes = models.TextField(blank=True, default="")

    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.RECEIVED,
        db_index=True,
    )

    estimated_cost = models.DecimalField(max_digits=16, decimal_places=2, null=True, blank=True)
    final_cost = models.DecimalField(max_digits=16, decimal_places=2, null=True, blank=True)
    labor_fee = models.DecimalField(max_digits=16, decimal_places=2, null=True, blank=True)

    technician = models.ForeignKey(
        "accounting.Account",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_repairs",
        limit_choices_to={"kind": "partner"},
    )

    date_received = models.DateTimeField(auto_now_add=True)
    date_completed = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-date_received", "-id"]

    def __str__(self):
        return f"Repair #{self.pk} {self.device_model} ({self.status})"

    @property
    def is_closed(self) -> bool:
        return self.status in (self.Status.DELIVERED, self.Status.CANCELLED)
