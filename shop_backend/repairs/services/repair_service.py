# repairs/services/repair_service.py

"""
======================================================
PATH: repairs/services/repair_service.py
======================================================
REPAIR CENTER SERVICE

Responsibilities:
- Intake of a repair (status received)
- Parts: stock is taken out when a part is attached and put back when it
  is removed, in the same atomic unit as the RepairPart row
- Finalization: status delivered + customer debit (final_cost, reference
  "repair") + technician credit (labor_fee, reference "repair_fee")

RULES:
- A delivered or cancelled repair is closed: no finalize, no part changes.
- Workflow status moves (repairing, ready, ...) live in repair_lifecycle.
- Finalization requires a technician partner account.
"""

from __future__ import annotations

import logging

from django.utils import timezone

from accounting.models import Account
from accounting.services.ledger_service import post_entry
from accounting.services.party_service import get_account
from common.exceptions import CommerceValidationError, ConflictError, NotFoundError
from common.money import ZERO, non_negative, whole_quantity
from common.notifications import notify_after_commit
from common.transactions import atomic_unit
from products.services import inventory
from repairs.models import Repair, RepairPart

logger = logging.getLogger("repairs")


def _lock_repair(repair_id) -> Repair:
    try:
        return Repair.objects.select_for_update().get(pk=repair_id)
    except (Repair.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError("Repair not found", repair_id=repair_id) from exc


def _ensure_open(repair: Repair) -> None:
    if repair.status == Repair.Status.DELIVERED:
        raise ConflictError("This repair has already been finalized", repair_id=repair.pk)
    if repair.is_closed:
        raise ConflictError("This repair was cancelled", repair_id=repair.pk)


def create_repair(
    *,
    customer,
    device_model: str,
    problem_description: str,
    device_color: str = "",
    serial_number: str = "",
    estimated_cost=None,
) -> Repair:
    device_model = (device_model or "").strip()
    problem_description = (problem_description or "").strip()

    if not device_model:
        raise CommerceValidationError("device_model is required")
    if not problem_description:
        raise CommerceValidationError("problem_description is required")

    estimate = None
    if estimated_cost not in (None, ""):
        estimate = non_negative(estimated_cost, field="estimated_cost")

    account = get_account(getattr(customer, "pk", customer), kind=Account.Kind.CUSTOMER)

    repair = Repair.objects.create(
        customer=account,
        device_model=device_model,
        device_color=(device_color or "").strip(),
        serial_number=(serial_number or "").strip(),
        problem_description=problem_description,
        estimated_cost=estimate,
        status=Repair.Status.RECEIVED,
    )

    logger.info("Repair received", extra={"repair_id": repair.pk, "customer_id": account.pk})
    return repair


def add_part(*, repair_id, product_id, quantity) -> RepairPart:
    qty = whole_quantity(quantity)
    if qty <= 0:
        raise CommerceValidationError("Quantity must be greater than zero")

    with atomic_unit("repairs.add_part", repair_id=repair_id, product_id=product_id):
        repair = _lock_repair(repair_id)
        _ensure_open(repair)

        product = inventory.consume_stock(product_id=product_id, quantity=qty)
        part = RepairPart.objects.create(repair=repair, product=product, quantity_used=qty)

    logger.info(
        "Repair part attached",
        extra={"repair_id": repair.pk, "product_id": product.pk, "quantity": qty},
    )
    return part


def remove_part(*, part_id) -> None:
    with atomic_unit("repairs.remove_part", part_id=part_id):
        try:
            part = RepairPart.objects.select_for_update().get(pk=part_id)
        except (RepairPart.DoesNotExist, ValueError, TypeError) as exc:
            raise NotFoundError("Repair part not found", part_id=part_id) from exc

        repair = _lock_repair(part.repair_id)
        _ensure_open(repair)

        inventory.restore_stock(product_id=part.product_id, quantity=part.quantity_used)
        part.delete()

    logger.info("Repair part removed", extra={"part_id": part_id, "repair_id": repair.pk})


def finalize_repair(*, repair_id, final_cost, labor_fee=0, technician_id=None, user=None) -> Repair:
    cost = non_negative(final_cost, field="final_cost")
    fee = non_negative(labor_fee, field="labor_fee")

    if technician_id in (None, ""):
        raise CommerceValidationError("A technician must be assigned before the repair is finalized")

    technician = get_account(technician_id, kind=Account.Kind.PARTNER)

    with atomic_unit("repairs.finalize", repair_id=repair_id):
        repair = _lock_repair(repair_id)
        _ensure_open(repair)

        repair.status = Repair.Status.DELIVERED
        repair.final_cost = cost
        repair.labor_fee = fee
        repair.technician = technician
        repair.date_completed = repair.date_completed or timezone.now()
        repair.save(update_fields=["status", "final_cost", "labor_fee", "technician", "date_completed"])

        if cost > ZERO:
            post_entry(
                account=repair.customer_id,
                description=f"Repair charge: {repair.device_model} (repair id: {repair.pk})",
                debit=cost,
                reference_type="repair",
                reference_id=repair.pk,
                user=user,
            )

        if fee > ZERO:
            post_entry(
                account=technician,
                description=f"Repair labor fee: {repair.device_model} (repair id: {repair.pk})",
                credit=fee,
                reference_type="repair_fee",
                reference_id=repair.pk,
                user=user,
            )

        notify_after_commit("repair_finalized", repair.pk)

    logger.info(
        "Repair finalized",
        extra={
            "repair_id": repair.pk,
            "final_cost": str(cost),
            "labor_fee": str(fee),
            "technician_id": technician.pk,
        },
    )
    return repair
