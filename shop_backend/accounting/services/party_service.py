# accounting/services/party_service.py

"""
PARTY REGISTRATION

Customers and partners (suppliers, technicians) get their ledger Account
the moment they are registered. There is no other way to create one.
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError

from accounting.models.account import Account
from common.exceptions import CommerceValidationError, ConflictError, NotFoundError

logger = logging.getLogger("ledger")


def _register(*, kind: str, display_name: str, phone_number=None, **fields) -> Account:
    phone = (phone_number or "").strip() or None

    if phone and Account.objects.filter(phone_number=phone).exists():
        raise ConflictError("This phone number is already registered to another party")

    account = Account(kind=kind, display_name=display_name, phone_number=phone, **fields)
    try:
        account.save()
    except ValidationError as exc:
        raise CommerceValidationError("; ".join(exc.messages)) from exc

    logger.info("Party registered", extra={"account_id": account.pk, "kind": kind})
    return account


def register_customer(*, display_name: str, phone_number=None, address: str = "", notes: str = "") -> Account:
    return _register(
        kind=Account.Kind.CUSTOMER,
        display_name=display_name,
        phone_number=phone_number,
        address=address or "",
        notes=notes or "",
    )


def register_partner(
    *,
    display_name: str,
    partner_type: str = "",
    phone_number=None,
    address: str = "",
    notes: str = "",
) -> Account:
    return _register(
        kind=Account.Kind.PARTNER,
        display_name=display_name,
        phone_number=phone_number,
        partner_type=partner_type or "",
        address=address or "",
        notes=notes or "",
    )


def get_account(account_id, *, kind: str | None = None) -> Account:
    """
    Fetch an account, optionally asserting its kind.
    """
    try:
        account = Account.objects.get(pk=account_id)
    except (Account.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError("Account not found", account_id=account_id) from exc

    if kind is not None and account.kind != kind:
        raise CommerceValidationError(f"Account {account.pk} is not a {kind} account")

    return account
