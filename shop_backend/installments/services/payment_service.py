# installments/services/payment_service.py

"""
======================================================
PATH: installments/services/payment_service.py
======================================================
PAYMENT APPLICATOR

The ONLY writer of InstallmentTransaction rows and of
InstallmentPayment.status / paid_on.

RULES:
- A payment is always a transaction; status is re-derived from the sum of
  the obligation's transactions after every insert.
- paid_on is stamped only when the derived status is paid or partial.
- Collecting an installment does NOT post to the customer ledger; the
  financed amount was debited when the sale was opened.
"""

from __future__ import annotations

import logging
from datetime import date

from common.exceptions import CommerceValidationError, ConflictError, NotFoundError
from common.money import ZERO, positive
from common.notifications import notify_after_commit
from common.transactions import atomic_unit
from installments.models import InstallmentPayment, InstallmentTransaction
from installments.services.status import (
    derive_payment_status,
    payment_total_paid,
    shop_today,
)

logger = logging.getLogger("installments")


def _lock_payment(payment_id) -> InstallmentPayment:
    try:
        return InstallmentPayment.objects.select_for_update().get(pk=payment_id)
    except (InstallmentPayment.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError("Installment payment not found", payment_id=payment_id) from exc


def _record_transaction(*, payment, amount, payment_date, notes, user) -> InstallmentTransaction:
    txn = InstallmentTransaction.objects.create(
        payment=payment,
        amount_paid=amount,
        payment_date=payment_date,
        notes=notes or "",
        received_by=user,
    )

    total_paid = payment_total_paid(payment)
    payment.status = derive_payment_status(payment.amount_due, total_paid)
    if payment.status in (InstallmentPayment.Status.PAID, InstallmentPayment.Status.PARTIAL):
        payment.paid_on = payment_date
    payment.save(update_fields=["status", "paid_on"])

    notify_after_commit("installment_payment_applied", payment.pk)

    logger.info(
        "Installment payment applied",
        extra={
            "payment_id": payment.pk,
            "sale_id": payment.sale_id,
            "amount": str(amount),
            "total_paid": str(total_paid),
            "status": payment.status,
        },
    )
    return txn


def apply_partial_payment(
    *,
    payment_id,
    amount,
    payment_date: date,
    notes: str = "",
    user=None,
) -> InstallmentTransaction:
    amt = positive(amount, field="amount")
    if payment_date is None:
        raise CommerceValidationError("payment_date is required")

    with atomic_unit("installments.apply_partial_payment", payment_id=payment_id):
        payment = _lock_payment(payment_id)
        return _record_transaction(
            payment=payment,
            amount=amt,
            payment_date=payment_date,
            notes=notes,
            user=user,
        )


def set_payment_paid(
    *,
    payment_id,
    paid: bool,
    payment_date: date | None = None,
    user=None,
) -> InstallmentTransaction | None:
    """
    Flag-style entry point kept for the "mark as paid" button.

    paid=True  -> one transaction for whatever is still owed (None if nothing is)
    paid=False -> only valid while no money was recorded; transactions are
                  append-only, so a paid obligation cannot be "unpaid"
    """
    with atomic_unit("installments.set_payment_paid", payment_id=payment_id):
        payment = _lock_payment(payment_id)
        already_paid = payment_total_paid(payment)

        if not paid:
            if already_paid > ZERO:
                raise ConflictError(
                    "Installment already has recorded payments and cannot be marked unpaid",
                    payment_id=payment.pk,
                )
            return None

        outstanding = payment.amount_due - already_paid
        if outstanding <= ZERO:
            return None

        return _record_transaction(
            payment=payment,
            amount=outstanding,
            payment_date=payment_date or shop_today(),
            notes="Marked as paid",
            user=user,
        )
