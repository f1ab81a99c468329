# sales/services/sale_service.py

"""
CORE SALES DOMAIN SERVICE

SINGLE SOURCE OF TRUTH for:
- Single-item cash/credit sale recording
- Multi-line sales orders (one cart, one header, one line per item)
- Price resolution (catalog or explicit override)
- Inventory mutation for the sold item
- Customer debit for credit sales (one debit per sale or per order)

GUARANTEES:
- Every validation runs before the first write
- Fully atomic: inventory mutation, SaleRecord and ledger entry commit
  together or not at all
- Orders: if any line fails no line, no header, no stock change and no
  ledger entry survives
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from accounting.models import Account
from accounting.services.ledger_service import post_entry
from accounting.services.party_service import get_account
from common.exceptions import CommerceValidationError, InvalidDiscount
from common.money import ZERO, money, non_negative, positive, whole_quantity
from common.notifications import notify_after_commit
from common.transactions import atomic_unit
from products.services import inventory
from sales.models import SaleRecord, SalesOrder, SalesOrderLine

logger = logging.getLogger("sales")

PAYMENT_METHODS = (SaleRecord.PAYMENT_CASH, SaleRecord.PAYMENT_CREDIT)


def _normalize_payment_method(payment_method: str) -> str:
    method = (payment_method or "").strip().lower()
    if method not in PAYMENT_METHODS:
        raise CommerceValidationError("Invalid payment_method. Use 'cash' or 'credit'.")
    return method


def _resolve_customer(customer):
    if customer is None or customer == "":
        return None
    if isinstance(customer, Account):
        customer = customer.pk
    return get_account(customer, kind=Account.Kind.CUSTOMER)


def compute_net(*, quantity: int, unit_price, discount):
    """
    net = quantity * unit_price - discount; discount may not exceed the gross.
    """
    gross = money(unit_price * quantity)
    if discount > gross:
        raise InvalidDiscount(f"Discount ({discount}) cannot exceed the line total ({gross})")
    return money(gross - discount)


def record_sale(
    *,
    item_kind: str,
    item_id,
    quantity=1,
    unit_price_override=None,
    customer=None,
    discount=0,
    payment_method: str,
    transaction_date: date,
    notes: str = "",
    user=None,
) -> SaleRecord:
    if transaction_date is None:
        raise CommerceValidationError("transaction_date is required")

    qty = whole_quantity(quantity)
    method = _normalize_payment_method(payment_method)
    discount_amt = non_negative(discount, field="discount")
    customer_account = _resolve_customer(customer)

    with atomic_unit("sales.record_sale", item_kind=item_kind, item_id=item_id):
        item = inventory.lock_item(item_kind, item_id)
        inventory.ensure_available(item, qty)

        if unit_price_override not in (None, ""):
            unit_price = positive(unit_price_override, field="unit_price")
        else:
            unit_price = inventory.price_of(item)

        net = compute_net(quantity=qty, unit_price=unit_price, discount=discount_amt)

        inventory.mutate_on_sale(item=item, quantity=qty, sold_on=transaction_date)

        sale = SaleRecord.objects.create(
            item_kind=item_kind,
            item_id=item.pk,
            item_name=inventory.item_label(item),
            quantity=qty,
            unit_price=unit_price,
            discount=discount_amt,
            net_total=net,
            payment_method=method,
            customer=customer_account,
            transaction_date=transaction_date,
            notes=notes or "",
            recorded_by=user,
        )

        if method == SaleRecord.PAYMENT_CREDIT and customer_account is not None and net > ZERO:
            post_entry(
                account=customer_account,
                description=f"Credit purchase: {sale.item_name} (sale id: {sale.pk})",
                debit=net,
                reference_type="sale",
                reference_id=sale.pk,
                user=user,
            )

        notify_after_commit("sale_recorded", sale.pk)

    logger.info(
        "Sale recorded",
        extra={
            "sale_id": sale.pk,
            "item_kind": item_kind,
            "item_id": sale.item_id,
            "net_total": str(net),
            "payment_method": method,
        },
    )
    return sale


# ============================================================
# MULTI-LINE ORDERS
# ============================================================

ORDER_LEDGER_REFERENCE = "sales_order"


@dataclass(frozen=True)
class OrderLine:
    item_kind: str
    item_id: int
    quantity: int = 1
    unit_price: Decimal | None = None
    discount: Decimal = ZERO


def _clean_line(raw, position: int) -> OrderLine:
    if isinstance(raw, dict):
        raw = OrderLine(**raw)

    if raw.item_kind not in inventory.ITEM_KINDS:
        raise CommerceValidationError(f"Line {position}: invalid item kind {raw.item_kind!r}")

    price = None
    if raw.unit_price not in (None, ""):
        price = positive(raw.unit_price, field=f"line {position} unit_price")

    quantity = whole_quantity(raw.quantity, field=f"line {position} quantity")
    if quantity <= 0:
        raise CommerceValidationError(f"Line {position}: quantity must be greater than zero")

    return OrderLine(
        item_kind=raw.item_kind,
        item_id=raw.item_id,
        quantity=quantity,
        unit_price=price,
        discount=non_negative(raw.discount, field=f"line {position} discount"),
    )


def record_sales_order(
    *,
    items,
    customer=None,
    discount=0,
    payment_method: str,
    transaction_date: date,
    notes: str = "",
    user=None,
) -> SalesOrder:
    if transaction_date is None:
        raise CommerceValidationError("transaction_date is required")

    lines = [_clean_line(raw, position) for position, raw in enumerate(items or (), start=1)]
    if not lines:
        raise CommerceValidationError("The cart is empty")

    method = _normalize_payment_method(payment_method)
    order_discount = non_negative(discount, field="discount")
    customer_account = _resolve_customer(customer)

    with atomic_unit("sales.record_order", customer_id=getattr(customer_account, "pk", None), lines=len(lines)):
        snapshots = []
        for line in lines:
            item = inventory.lock_item(line.item_kind, line.item_id)
            inventory.ensure_available(item, line.quantity)

            unit_price = line.unit_price if line.unit_price is not None else inventory.price_of(item)
            line_total = compute_net(quantity=line.quantity, unit_price=unit_price, discount=line.discount)

            inventory.mutate_on_sale(item=item, quantity=line.quantity, sold_on=transaction_date)

            snapshots.append(
                {
                    "item_kind": line.item_kind,
                    "item_id": item.pk,
                    "item_name": inventory.item_label(item),
                    "quantity": line.quantity,
                    "unit_price": unit_price,
                    "discount": line.discount,
                    "line_total": line_total,
                }
            )

        subtotal = money(sum((s["unit_price"] * s["quantity"] for s in snapshots), ZERO))
        items_discount = money(sum((s["discount"] for s in snapshots), ZERO))
        after_lines = subtotal - items_discount
        if order_discount > after_lines:
            raise InvalidDiscount(f"Order discount ({order_discount}) cannot exceed the order total ({after_lines})")
        grand_total = money(after_lines - order_discount)

        order = SalesOrder.objects.create(
            payment_method=method,
            customer=customer_account,
            subtotal=subtotal,
            items_discount=items_discount,
            discount=order_discount,
            grand_total=grand_total,
            transaction_date=transaction_date,
            notes=notes or "",
            recorded_by=user,
        )
        for snapshot in snapshots:
            SalesOrderLine.objects.create(order=order, **snapshot)

        if method == SaleRecord.PAYMENT_CREDIT and customer_account is not None and grand_total > ZERO:
            post_entry(
                account=customer_account,
                description=f"Credit sales invoice #{order.pk} ({len(snapshots)} items)",
                debit=grand_total,
                reference_type=ORDER_LEDGER_REFERENCE,
                reference_id=order.pk,
                user=user,
            )

        notify_after_commit("sales_order_recorded", order.pk)

    logger.info(
        "Sales order recorded",
        extra={
            "order_id": order.pk,
            "lines": len(snapshots),
            "grand_total": str(grand_total),
            "payment_method": method,
        },
    )
    return order
