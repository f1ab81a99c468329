# installments/services/status.py

"""
AGGREGATE STATUS DERIVER

Read-only. Every value here is recomputed from the rows on each call;
nothing is cached or written back.

Sale status:
- completed   every obligation is paid
- overdue     some unpaid/partial obligation was due before today
- in_progress otherwise

remaining = N * A + D - D - sum(all transactions), floored at zero for
display; floor=False returns the raw figure (reconciliation).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db.models import Sum
from django.utils import timezone

from common.money import ZERO, money
from installments.models import InstallmentPayment, InstallmentSale, InstallmentTransaction

SALE_IN_PROGRESS = "in_progress"
SALE_OVERDUE = "overdue"
SALE_COMPLETED = "completed"

PaymentStatus = InstallmentPayment.Status


def shop_today() -> date:
    return timezone.localdate()


def _sum_paid(queryset) -> Decimal:
    total = queryset.aggregate(total=Sum("amount_paid"))["total"]
    return money(total or ZERO)


def payment_total_paid(payment: InstallmentPayment) -> Decimal:
    return _sum_paid(InstallmentTransaction.objects.filter(payment_id=payment.pk))


def sale_total_paid(sale: InstallmentSale) -> Decimal:
    return _sum_paid(InstallmentTransaction.objects.filter(payment__sale_id=sale.pk))


def collected_on(payment: InstallmentPayment) -> Decimal:
    """Sum of payment.transactions.all(); served from a prefetch when present."""
    return money(sum((t.amount_paid for t in payment.transactions.all()), ZERO))


def derive_payment_status(amount_due, total_paid) -> str:
    if total_paid >= amount_due:
        return PaymentStatus.PAID
    if total_paid > ZERO:
        return PaymentStatus.PARTIAL
    return PaymentStatus.UNPAID


def _status_of(payments, today: date) -> str:
    open_payments = [p for p in payments if not p.is_paid]
    if not open_payments:
        return SALE_COMPLETED

    if any(p.due_date < today for p in open_payments):
        return SALE_OVERDUE

    return SALE_IN_PROGRESS


def _remaining_of(sale: InstallmentSale, total_paid: Decimal, floor: bool) -> Decimal:
    remaining = money(sale.total_installment_price - sale.down_payment - total_paid)

    if floor and remaining < ZERO:
        return ZERO
    return remaining


def derive_sale_status(sale: InstallmentSale, today: date | None = None) -> str:
    return _status_of(sale.payments.all(), today or shop_today())


def remaining_balance(sale: InstallmentSale, floor: bool = True) -> Decimal:
    return _remaining_of(sale, sale_total_paid(sale), floor)


def next_due_date(sale: InstallmentSale) -> date | None:
    return next((p.due_date for p in sale.payments.all() if not p.is_paid), None)


@dataclass(frozen=True)
class SaleSummary:
    sale_id: int
    status: str
    total_paid: Decimal
    remaining_balance: Decimal
    paid_installments: int
    installment_count: int
    next_due_date: date | None


def summarize_sale(sale: InstallmentSale, today: date | None = None) -> SaleSummary:
    """
    All derived figures from one pass over payments and their transactions.
    Listings prefetch payments__transactions so no row adds queries.
    """
    payments = list(sale.payments.all())
    total_paid = money(sum((collected_on(p) for p in payments), ZERO))

    return SaleSummary(
        sale_id=sale.pk,
        status=_status_of(payments, today or shop_today()),
        total_paid=total_paid,
        remaining_balance=_remaining_of(sale, total_paid, floor=True),
        paid_installments=sum(1 for p in payments if p.is_paid),
        installment_count=sale.installment_count,
        next_due_date=next((p.due_date for p in payments if not p.is_paid), None),
    )


def list_overdue_payments(today: date | None = None):
    """
    Open obligations due strictly before today, oldest first.
    Feed for payment reminders.
    """
    today = today or shop_today()
    return (
        InstallmentPayment.objects.select_related("sale", "sale__customer", "sale__phone")
        .exclude(status=PaymentStatus.PAID)
        .filter(due_date__lt=today)
        .order_by("due_date", "id")
    )
