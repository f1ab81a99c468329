# accounting/services/ledger_service.py

"""
======================================================
PATH: accounting/services/ledger_service.py
======================================================
LEDGER STORE (ACCOUNTING ENGINE)

This module is the ONLY place allowed to:
- Create LedgerEntry rows
- Compute running balances
- Write Account.current_balance

Everything else (sales, installment sales, repairs, purchase intake, manual
adjustments) must pass through post_entry().

SIGN RULE:
- customer: delta = debit - credit   (they owe the shop; debit increases it)
- partner:  delta = credit - debit   (the shop owes them; credit increases it)

ORDERING RULE:
- The previous balance is the balance of the most recently INSERTED entry
  (highest id), never the latest posted_at. Entries may be backdated.

CONCURRENCY:
- The account row is locked (select_for_update) for the duration of the
  caller's atomic unit, so two writers on one account are serialized.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterator

from django.utils import timezone

from accounting.models.account import Account
from accounting.models.ledger import LedgerEntry
from common.exceptions import (
    CommerceValidationError,
    ConsistencyError,
    NotFoundError,
)
from common.money import ZERO, money, non_negative
from common.transactions import atomic_unit

logger = logging.getLogger("ledger")


def signed_delta(kind: str, debit, credit) -> Decimal:
    debit = money(debit)
    credit = money(credit)

    if kind == Account.Kind.CUSTOMER:
        return debit - credit
    if kind == Account.Kind.PARTNER:
        return credit - debit

    raise ConsistencyError(f"Unknown account kind: {kind!r}", kind=kind)


def _as_aware_dt(dt: datetime | None) -> datetime:
    if dt is None:
        return timezone.now()
    if timezone.is_naive(dt):
        return timezone.make_aware(dt, timezone.get_current_timezone())
    return dt


def _account_id(account) -> int:
    return getattr(account, "pk", account)


def _lock_account(account) -> Account:
    try:
        return Account.objects.select_for_update().get(pk=_account_id(account))
    except Account.DoesNotExist as exc:
        raise NotFoundError("Account not found", account_id=_account_id(account)) from exc


def _latest_entry(account_id: int) -> LedgerEntry | None:
    return LedgerEntry.objects.filter(account_id=account_id).order_by("-id").first()


def post_entry(
    *,
    account,
    description: str,
    debit=0,
    credit=0,
    posted_at: datetime | None = None,
    reference_type: str | None = None,
    reference_id=None,
    user=None,
) -> LedgerEntry:
    """
    Append one entry to the account's ledger and return it.

    Joins the caller's atomic unit when there is one (sale, installment
    schedule, repair finalization); otherwise it is its own unit.
    """
    description = (description or "").strip()
    if not description:
        raise CommerceValidationError("Ledger description is required")

    debit = non_negative(debit, field="debit")
    credit = non_negative(credit, field="credit")

    if debit == ZERO and credit == ZERO:
        raise CommerceValidationError("A ledger entry must carry a debit or a credit")

    with atomic_unit("ledger.post_entry", account_id=_account_id(account)):
        locked = _lock_account(account)

        previous = _latest_entry(locked.pk)
        previous_balance = previous.balance if previous is not None else ZERO

        if money(locked.current_balance) != money(previous_balance):
            logger.error(
                "Denormalized balance drifted from ledger",
                extra={
                    "account_id": locked.pk,
                    "current_balance": str(locked.current_balance),
                    "ledger_balance": str(previous_balance),
                },
            )
            raise ConsistencyError(
                "Account balance does not match its ledger",
                account_id=locked.pk,
            )

        delta = signed_delta(locked.kind, debit, credit)
        new_balance = money(previous_balance + delta)

        if new_balance - previous_balance != delta:
            raise ConsistencyError(
                "Computed balance breaks the running-balance rule",
                account_id=locked.pk,
            )

        entry = LedgerEntry.objects.create(
            account=locked,
            posted_at=_as_aware_dt(posted_at),
            description=description,
            debit=debit,
            credit=credit,
            balance=new_balance,
            reference_type=(reference_type or "").strip(),
            reference_id=str(reference_id) if reference_id is not None else "",
            recorded_by=user,
        )

        Account.objects.filter(pk=locked.pk).update(current_balance=new_balance)

    logger.info(
        "Ledger entry posted",
        extra={
            "account_id": locked.pk,
            "entry_id": entry.pk,
            "debit": str(debit),
            "credit": str(credit),
            "balance": str(new_balance),
            "reference": f"{entry.reference_type}:{entry.reference_id}",
        },
    )

    if isinstance(account, Account):
        account.current_balance = new_balance

    return entry


def current_balance(account) -> Decimal:
    latest = _latest_entry(_account_id(account))
    return money(latest.balance) if latest is not None else ZERO


def history(account) -> Iterator[LedgerEntry]:
    """
    Entries oldest first, by insertion order.
    Each call returns a fresh iterator over the rows as they are now.
    """
    return LedgerEntry.objects.filter(account_id=_account_id(account)).order_by("id").iterator()


def verify_recurrence(account) -> Decimal:
    """
    Reconciliation walk over an account's ledger.

    Raises ConsistencyError at the first entry that breaks the running
    balance rule, or if Account.current_balance drifted. Returns the
    verified balance.
    """
    try:
        acc = Account.objects.get(pk=_account_id(account))
    except Account.DoesNotExist as exc:
        raise NotFoundError("Account not found", account_id=_account_id(account)) from exc

    running = ZERO
    for entry in history(acc):
        running = money(running + signed_delta(acc.kind, entry.debit, entry.credit))
        if money(entry.balance) != running:
            raise ConsistencyError(
                f"Ledger entry {entry.pk} balance {entry.balance} != expected {running}",
                account_id=acc.pk,
                entry_id=entry.pk,
            )

    if money(acc.current_balance) != running:
        raise ConsistencyError(
            f"Account balance {acc.current_balance} != ledger balance {running}",
            account_id=acc.pk,
        )

    return running
