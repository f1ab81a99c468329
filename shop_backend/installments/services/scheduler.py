# installments/services/scheduler.py

"""
======================================================
PATH: installments/services/scheduler.py
======================================================
INSTALLMENT SCHEDULER

SINGLE SOURCE OF TRUTH for opening an installment (financed) sale.

ONE ATOMIC UNIT:
1. InstallmentSale row
2. installment_count InstallmentPayment rows (unpaid), obligation k due on
   start_date + k months in the shop calendar
3. One CheckInstrument per supplied descriptor (held unless stated)
4. Phone: in_stock -> sold_installment, sale_date = start_date
5. Customer ledger:
   - remaining = sale_price - down_payment > 0 -> debit remaining
   - otherwise, when a down payment exists and
     INSTALLMENT_RECORD_PREPAID_PAIR is on -> one entry with
     debit = credit = sale_price (net zero)

RULES:
- Every input is validated before the first write.
- Any failure rolls back the whole batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.conf import settings

from accounting.models import Account
from accounting.services.ledger_service import post_entry
from accounting.services.party_service import get_account
from common.exceptions import CommerceValidationError
from common.money import ZERO, non_negative, positive, whole_quantity
from common.notifications import notify_after_commit
from common.shop_calendar import due_dates
from common.transactions import atomic_unit
from installments.models import CheckInstrument, InstallmentPayment, InstallmentSale
from products.models import Phone
from products.services import inventory

logger = logging.getLogger("installments")

LEDGER_REFERENCE = "installment_sale"

# Ten years of monthly obligations.
MAX_INSTALLMENT_COUNT = 120


@dataclass(frozen=True)
class CheckDescriptor:
    check_number: str
    bank_name: str
    due_date: date
    amount: Decimal
    status: str | None = None


def _clean_check(descriptor) -> dict:
    if isinstance(descriptor, dict):
        descriptor = CheckDescriptor(**descriptor)

    number = (descriptor.check_number or "").strip()
    bank = (descriptor.bank_name or "").strip()

    if not number:
        raise CommerceValidationError("check_number is required")
    if not bank:
        raise CommerceValidationError("bank_name is required")
    if descriptor.due_date is None:
        raise CommerceValidationError(f"Check {number}: due_date is required")

    status = descriptor.status or CheckInstrument.Status.HELD
    if status not in CheckInstrument.Status.values:
        raise CommerceValidationError(f"Check {number}: invalid status {status!r}")

    return {
        "check_number": number,
        "bank_name": bank,
        "due_date": descriptor.due_date,
        "amount": positive(descriptor.amount, field="check amount"),
        "status": status,
    }


def _record_prepaid_pair() -> bool:
    return bool(getattr(settings, "INSTALLMENT_RECORD_PREPAID_PAIR", True))


def create_installment_sale(
    *,
    customer,
    phone_id,
    sale_price,
    down_payment=0,
    installment_count,
    installment_amount,
    start_date: date,
    checks=(),
    notes: str = "",
    user=None,
) -> InstallmentSale:
    # ===== VALIDATION (no writes) =====
    if start_date is None:
        raise CommerceValidationError("start_date is required")

    count = whole_quantity(installment_count, field="installment_count")
    if count < 1:
        raise CommerceValidationError("installment_count must be at least 1")
    if count > MAX_INSTALLMENT_COUNT:
        raise CommerceValidationError(f"installment_count cannot exceed {MAX_INSTALLMENT_COUNT}")

    price = positive(sale_price, field="sale_price")
    down = non_negative(down_payment, field="down_payment")
    per_installment = positive(installment_amount, field="installment_amount")

    customer_id = getattr(customer, "pk", customer)
    account = get_account(customer_id, kind=Account.Kind.CUSTOMER)

    cleaned_checks = [_clean_check(c) for c in (checks or ())]
    schedule = due_dates(start_date, count)

    with atomic_unit("installments.create_sale", customer_id=account.pk, phone_id=phone_id):
        phone = inventory.lock_item(inventory.ITEM_PHONE, phone_id)
        inventory.ensure_available(phone, 1)

        sale = InstallmentSale.objects.create(
            customer=account,
            phone=phone,
            sale_price=price,
            down_payment=down,
            installment_count=count,
            installment_amount=per_installment,
            start_date=start_date,
            notes=notes or "",
            created_by=user,
        )

        InstallmentPayment.objects.bulk_create(
            [
                InstallmentPayment(
                    sale=sale,
                    number=k + 1,
                    due_date=due,
                    amount_due=per_installment,
                    status=InstallmentPayment.Status.UNPAID,
                )
                for k, due in enumerate(schedule)
            ]
        )

        if cleaned_checks:
            CheckInstrument.objects.bulk_create(
                [CheckInstrument(sale=sale, **c) for c in cleaned_checks]
            )

        inventory.mutate_on_sale(
            item=phone,
            quantity=1,
            sold_on=start_date,
            status=Phone.Status.SOLD_INSTALLMENT,
        )

        remaining = price - down
        description = f"Installment purchase: {inventory.item_label(phone)} (sale id: {sale.pk})"

        if remaining > ZERO:
            post_entry(
                account=account,
                description=description,
                debit=remaining,
                reference_type=LEDGER_REFERENCE,
                reference_id=sale.pk,
                user=user,
            )
        elif down > ZERO and _record_prepaid_pair():
            post_entry(
                account=account,
                description=f"{description} - paid in full up front",
                debit=price,
                credit=price,
                reference_type=LEDGER_REFERENCE,
                reference_id=sale.pk,
                user=user,
            )

        notify_after_commit("installment_sale_created", sale.pk)

    logger.info(
        "Installment sale created",
        extra={
            "sale_id": sale.pk,
            "customer_id": account.pk,
            "phone_id": phone.pk,
            "sale_price": str(price),
            "down_payment": str(down),
            "installment_count": count,
        },
    )
    return sale
