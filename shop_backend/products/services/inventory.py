# products/services/inventory.py

"""
======================================================
PATH: products/services/inventory.py
======================================================
INVENTORY CATALOG + MUTATOR

The narrow interface the commerce engine uses to read prices/stock and to
apply stock/status mutations. Every call here joins the caller's atomic unit.

Item kinds:
- product: bulk good, stock_quantity decremented by quantity
- phone:   unique unit, status flipped in_stock -> sold / sold_installment
- service: no stock; nothing to mutate

Rules:
- Quantities are whole units.
- Mutations are conditional updates (stock >= qty / status == in_stock), so a
  stale read discovered at write time fails with ItemNotAvailable instead of
  overselling.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from django.db.models import F

from common.exceptions import (
    CommerceValidationError,
    ItemNotAvailable,
    ItemNotFound,
    PriceNotConfigured,
)
from common.money import ZERO, money, whole_quantity
from products.models import Phone, Product, Service

logger = logging.getLogger("inventory")

ITEM_PRODUCT = "product"
ITEM_PHONE = "phone"
ITEM_SERVICE = "service"

ITEM_KINDS = (ITEM_PRODUCT, ITEM_PHONE, ITEM_SERVICE)

# Sold strictly one at a time.
UNIQUE_UNIT_KINDS = frozenset({ITEM_PHONE, ITEM_SERVICE})

# Width of the item_name snapshot columns on sale rows.
LABEL_MAX_LENGTH = 255

_MODELS = {
    ITEM_PRODUCT: Product,
    ITEM_PHONE: Phone,
    ITEM_SERVICE: Service,
}


def _model_for(item_kind: str):
    try:
        return _MODELS[item_kind]
    except KeyError as exc:
        raise CommerceValidationError(f"Invalid item kind: {item_kind!r}") from exc


def get_item(item_kind: str, item_id):
    model = _model_for(item_kind)
    try:
        return model.objects.get(pk=item_id)
    except (model.DoesNotExist, ValueError, TypeError) as exc:
        raise ItemNotFound(f"{item_kind} {item_id} not found", item_kind=item_kind, item_id=item_id) from exc


def lock_item(item_kind: str, item_id):
    """Row-locked fetch; only meaningful inside an atomic unit."""
    model = _model_for(item_kind)
    try:
        return model.objects.select_for_update().get(pk=item_id)
    except (model.DoesNotExist, ValueError, TypeError) as exc:
        raise ItemNotFound(f"{item_kind} {item_id} not found", item_kind=item_kind, item_id=item_id) from exc


def item_kind_of(item) -> str:
    for kind, model in _MODELS.items():
        if isinstance(item, model):
            return kind
    raise CommerceValidationError(f"Not a catalog item: {item!r}")


def item_label(item) -> str:
    """
    Snapshot name for sale rows. Phones keep their IMEI; a long model name is
    cut so the label still fits LABEL_MAX_LENGTH.
    """
    if isinstance(item, Phone):
        suffix = f" (IMEI: {item.imei})"
        return f"{item.model[: LABEL_MAX_LENGTH - len(suffix)]}{suffix}"
    return item.name[:LABEL_MAX_LENGTH]


def _catalog_price(item):
    if isinstance(item, Product):
        return item.selling_price
    if isinstance(item, Phone):
        return item.sale_price
    return item.price


def price_of(item) -> Decimal:
    raw = _catalog_price(item)
    if raw is None or money(raw) <= ZERO:
        raise PriceNotConfigured(
            f"Selling price for {item_label(item)} is not configured",
            item_id=item.pk,
        )
    return money(raw)


def get_price(item_kind: str, item_id) -> Decimal:
    return price_of(get_item(item_kind, item_id))


def get_stock(item_kind: str, item_id):
    """
    product -> on-hand quantity, phone -> status, service -> None
    """
    item = get_item(item_kind, item_id)
    if isinstance(item, Product):
        return item.stock_quantity
    if isinstance(item, Phone):
        return item.status
    return None


def ensure_available(item, quantity: int) -> None:
    """
    Read-side availability check (runs before any write).
    """
    kind = item_kind_of(item)

    if kind in UNIQUE_UNIT_KINDS and quantity != 1:
        raise CommerceValidationError(f"Quantity for a {kind} sale must be 1")

    if quantity <= 0:
        raise CommerceValidationError("Quantity must be greater than zero")

    if isinstance(item, Phone) and not item.is_available:
        raise ItemNotAvailable(
            f'Phone "{item_label(item)}" is "{item.get_status_display()}" and cannot be sold',
            item_id=item.pk,
        )

    if isinstance(item, Product) and item.stock_quantity < quantity:
        raise ItemNotAvailable(
            f"Insufficient stock for {item.name}: {item.stock_quantity} available, {quantity} requested",
            item_id=item.pk,
        )


def mutate_on_sale(*, item, quantity: int, sold_on: date, status: str = Phone.Status.SOLD) -> None:
    """
    Apply the sale-side inventory mutation for one line.
    """
    qty = whole_quantity(quantity)

    if isinstance(item, Product):
        updated = Product.objects.filter(pk=item.pk, stock_quantity__gte=qty).update(
            stock_quantity=F("stock_quantity") - qty,
            sale_count=F("sale_count") + qty,
        )
        if updated != 1:
            raise ItemNotAvailable(f"Insufficient stock for {item.name}", item_id=item.pk)
        item.refresh_from_db(fields=["stock_quantity", "sale_count"])

    elif isinstance(item, Phone):
        updated = Phone.objects.filter(pk=item.pk, status=Phone.Status.IN_STOCK).update(
            status=status,
            sale_date=sold_on,
        )
        if updated != 1:
            raise ItemNotAvailable(f'Phone "{item_label(item)}" is no longer available', item_id=item.pk)
        item.status = status
        item.sale_date = sold_on

    logger.info(
        "Inventory mutated for sale",
        extra={"item_kind": item_kind_of(item), "item_id": item.pk, "quantity": qty},
    )


def consume_stock(*, product_id, quantity) -> Product:
    """Take parts out of stock (repairs). Not a sale: sale_count is untouched."""
    qty = whole_quantity(quantity)
    if qty <= 0:
        raise CommerceValidationError("Quantity must be greater than zero")

    product = lock_item(ITEM_PRODUCT, product_id)
    if product.stock_quantity < qty:
        raise ItemNotAvailable(
            f"Insufficient stock for {product.name}: {product.stock_quantity} available, {qty} requested",
            item_id=product.pk,
        )

    Product.objects.filter(pk=product.pk).update(stock_quantity=F("stock_quantity") - qty)
    product.refresh_from_db(fields=["stock_quantity"])
    return product


def restore_stock(*, product_id, quantity) -> Product:
    qty = whole_quantity(quantity)
    if qty <= 0:
        raise CommerceValidationError("Quantity must be greater than zero")

    product = lock_item(ITEM_PRODUCT, product_id)
    Product.objects.filter(pk=product.pk).update(stock_quantity=F("stock_quantity") + qty)
    product.refresh_from_db(fields=["stock_quantity"])
    return product
