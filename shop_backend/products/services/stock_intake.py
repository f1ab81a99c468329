# products/services/stock_intake.py

"""
STOCK INTAKE / PURCHASE RECEIPT (APPLICATION SERVICE)

Purpose:
- Register purchased stock (a phone, or a quantity of a bulk product).
- When bought from a supplier partner, credit the partner's ledger with the
  purchase cost (the shop now owes them), in the same atomic unit.

Ledger references:
- phone_purchase   -> Phone.id
- product_purchase -> Product.id
"""

from __future__ import annotations

import logging
from datetime import date

from django.db import IntegrityError
from django.utils import timezone

from accounting.models import Account
from accounting.services.ledger_service import post_entry
from accounting.services.party_service import get_account
from common.exceptions import CommerceValidationError, ConflictError
from common.money import ZERO, money, non_negative, whole_quantity
from common.transactions import atomic_unit
from products.models import Phone, Product

logger = logging.getLogger("inventory")


def _supplier_or_none(supplier_id):
    if supplier_id in (None, ""):
        return None
    return get_account(supplier_id, kind=Account.Kind.PARTNER)


def receive_phone(
    *,
    model: str,
    imei: str,
    purchase_price,
    sale_price=None,
    supplier_id=None,
    purchase_date: date | None = None,
    user=None,
    **details,
) -> Phone:
    cost = non_negative(purchase_price, field="purchase_price")
    price = money(sale_price, field="sale_price") if sale_price not in (None, "") else None
    supplier = _supplier_or_none(supplier_id)
    bought_on = purchase_date or timezone.localdate()

    imei = (imei or "").strip()
    if imei and Phone.objects.filter(imei=imei).exists():
        raise ConflictError(f"A phone with IMEI {imei} is already registered")

    with atomic_unit("inventory.receive_phone", imei=imei):
        try:
            phone = Phone(
                model=model,
                imei=imei,
                purchase_price=cost,
                sale_price=price,
                supplier=supplier,
                purchase_date=bought_on,
                **details,
            )
            phone.full_clean()
            phone.save()
        except IntegrityError as exc:
            raise ConflictError(f"A phone with IMEI {imei} is already registered") from exc

        if supplier is not None and cost > ZERO:
            post_entry(
                account=supplier,
                description=f"Phone purchase: {phone.model} (IMEI: {phone.imei}, id: {phone.pk})",
                credit=cost,
                reference_type="phone_purchase",
                reference_id=phone.pk,
                user=user,
            )

    logger.info("Phone received", extra={"phone_id": phone.pk, "supplier_id": getattr(supplier, "pk", None)})
    return phone


def receive_product(
    *,
    name: str,
    quantity,
    purchase_price,
    selling_price=0,
    supplier_id=None,
    user=None,
) -> Product:
    qty = whole_quantity(quantity)
    if qty < 0:
        raise CommerceValidationError("quantity cannot be negative")

    cost = non_negative(purchase_price, field="purchase_price")
    price = non_negative(selling_price, field="selling_price")
    supplier = _supplier_or_none(supplier_id)

    with atomic_unit("inventory.receive_product", product_name=name):
        product = Product(
            name=name,
            purchase_price=cost,
            selling_price=price,
            stock_quantity=qty,
            supplier=supplier,
        )
        product.full_clean()
        product.save()

        total_cost = money(cost * qty)
        if supplier is not None and total_cost > ZERO:
            post_entry(
                account=supplier,
                description=f"Product purchase: {product.name} x{qty} (id: {product.pk})",
                credit=total_cost,
                reference_type="product_purchase",
                reference_id=product.pk,
                user=user,
            )

    logger.info("Product received", extra={"product_id": product.pk, "quantity": qty})
    return product
