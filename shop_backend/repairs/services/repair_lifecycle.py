# repairs/services/repair_lifecycle.py

"""
REPAIR WORKFLOW RULES

Manual status moves at the repair desk:

    received       -> repairing | waiting_parts | ready | cancelled
    repairing      -> waiting_parts | ready | cancelled
    waiting_parts  -> repairing | ready | cancelled
    ready          -> repairing | cancelled

delivered and cancelled are terminal. delivered is reached only through
repair_service.finalize_repair, which also posts the charges.

RULES:
- Moving to ready stamps date_completed; moving back to repairing clears it.
- A repair with parts attached cannot be cancelled (detach them first so
  the stock goes back).
- Re-setting the current status only updates technician_notes.
"""

from __future__ import annotations

import logging

from django.utils import timezone

from common.exceptions import CommerceValidationError, ConflictError, InvalidRepairTransition, NotFoundError
from common.transactions import atomic_unit
from repairs.models import Repair

logger = logging.getLogger("repairs")

Status = Repair.Status

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    Status.DELIVERED,
    Status.CANCELLED,
}

ALLOWED_TRANSITIONS = {
    Status.RECEIVED: {
        Status.REPAIRING,
        Status.WAITING_PARTS,
        Status.READY,
        Status.CANCELLED,
    },
    Status.REPAIRING: {
        Status.WAITING_PARTS,
        Status.READY,
        Status.CANCELLED,
    },
    Status.WAITING_PARTS: {
        Status.REPAIRING,
        Status.READY,
        Status.CANCELLED,
    },
    Status.READY: {
        Status.REPAIRING,
        Status.CANCELLED,
    },
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def update_repair_status(repair_id, new_status: str, *, technician_notes: str | None = None) -> Repair:
    target = (new_status or "").strip()
    if target not in Status.values:
        raise CommerceValidationError(f"Invalid repair status: {new_status!r}")
    if target == Status.DELIVERED:
        raise InvalidRepairTransition(
            "A repair is delivered by finalizing it, not by a status change",
            repair_id=repair_id,
        )

    with atomic_unit("repairs.update_status", repair_id=repair_id):
        try:
            repair = Repair.objects.select_for_update().get(pk=repair_id)
        except (Repair.DoesNotExist, ValueError, TypeError) as exc:
            raise NotFoundError("Repair not found", repair_id=repair_id) from exc

        previous = repair.status
        fields = []

        if technician_notes is not None:
            repair.technician_notes = technician_notes.strip()
            fields.append("technician_notes")

        if previous != target:
            if not can_transition(from_status=previous, to_status=target):
                raise InvalidRepairTransition(
                    f"Repair #{repair.pk} cannot move from "
                    f"'{repair.get_status_display()}' to '{Status(target).label}'",
                    repair_id=repair.pk,
                )
            if target == Status.CANCELLED and repair.parts.exists():
                raise ConflictError(
                    "Detach the parts of this repair before cancelling it",
                    repair_id=repair.pk,
                )

            repair.status = target
            fields.append("status")

            if target == Status.READY:
                repair.date_completed = timezone.now()
                fields.append("date_completed")
            elif previous == Status.READY:
                repair.date_completed = None
                fields.append("date_completed")

        if fields:
            repair.save(update_fields=fields)

    logger.info(
        "Repair status updated",
        extra={"repair_id": repair.pk, "from_status": previous, "to_status": target},
    )
    return repair


def list_ready_for_pickup():
    """
    Repairs waiting at the desk for their owner, most recently finished first.
    Feed for pickup reminders.
    """
    return (
        Repair.objects.select_related("customer", "technician")
        .prefetch_related("parts__product")
        .filter(status=Status.READY)
        .order_by("-date_completed", "-id")
    )
