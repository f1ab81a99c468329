# installments/services/check_lifecycle.py

"""
CHECK LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed status transitions for post-dated
checks (CheckInstrument).

    held           -> in_collection | cleared | bounced | voided
    in_collection  -> held | cleared | bounced
    bounced        -> held | in_collection | voided

cleared and voided are terminal. Re-setting the current status is a no-op.
"""

from __future__ import annotations

import logging

from django.utils import timezone

from common.exceptions import CommerceValidationError, InvalidCheckTransition, NotFoundError
from common.transactions import atomic_unit
from installments.models import CheckInstrument

logger = logging.getLogger("installments")

Status = CheckInstrument.Status

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    Status.CLEARED,
    Status.VOIDED,
}

ALLOWED_TRANSITIONS = {
    Status.HELD: {
        Status.IN_COLLECTION,
        Status.CLEARED,
        Status.BOUNCED,
        Status.VOIDED,
    },
    Status.IN_COLLECTION: {
        Status.HELD,
        Status.CLEARED,
        Status.BOUNCED,
    },
    Status.BOUNCED: {
        Status.HELD,
        Status.IN_COLLECTION,
        Status.VOIDED,
    },
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def set_check_status(check_id, new_status: str) -> CheckInstrument:
    target = (new_status or "").strip()
    if target not in Status.values:
        raise CommerceValidationError(f"Invalid check status: {new_status!r}")

    with atomic_unit("installments.set_check_status", check_id=check_id):
        try:
            check = CheckInstrument.objects.select_for_update().get(pk=check_id)
        except (CheckInstrument.DoesNotExist, ValueError, TypeError) as exc:
            raise NotFoundError("Check not found", check_id=check_id) from exc

        if check.status == target:
            return check

        if not can_transition(from_status=check.status, to_status=target):
            raise InvalidCheckTransition(
                f"Check {check.check_number} cannot move from "
                f"'{check.get_status_display()}' to '{Status(target).label}'",
                check_id=check.pk,
            )

        previous = check.status
        check.status = target
        check.status_changed_at = timezone.now()
        check.save(update_fields=["status", "status_changed_at"])

    logger.info(
        "Check status changed",
        extra={"check_id": check.pk, "from_status": previous, "to_status": target},
    )
    return check
